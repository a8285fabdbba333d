"""
SARSA(lambda) Agent with Eligibility Traces.

On-policy control: the TD target uses the action the behaviour policy
will actually take next, and the trace is never cut.

SARSA(lambda) update rule (backward view):
- delta = r + gamma * Q(s', a') - Q(s, a), a' ~ behaviour policy at s'
- e <- gamma * lambda * e + phi(s)
- W[:, a] += alpha * delta * e

The sampled a' is remembered together with s' and returned by the next
sample_behaviour(s') call, so the action executed is the one the update
assumed. A query for any other state discards it and samples afresh.
"""

import logging
from typing import Any, Optional, Union

import torch
from torch import Tensor

from algorithms.base import Algorithm
from algorithms.shared.control import ValueBasedController
from core.parameter import Parameter
from core.shared import Shared
from core.trace import Trace
from domains.base import Transition
from policies.base import Policy
from representations.base import Projection


logger = logging.getLogger(__name__)


class SARSALambda(ValueBasedController, Algorithm):
    """SARSA(lambda) with a shared linear action-value function.

    Lambda controls the trace decay:
    - lambda=0: one-step SARSA
    - lambda=1: Monte Carlo-like full-episode credit
    """

    def __init__(
        self,
        q_func: Shared,
        policy: Policy,
        trace: Trace,
        alpha: Union[Parameter, float],
        gamma: Union[Parameter, float],
    ):
        """Initialize SARSA(lambda).

        Args:
            q_func: Shared VectorLFA over the domain's actions
            policy: Behaviour policy, also the policy being evaluated
            trace: Eligibility trace; its lambda_ sets the decay
            alpha: Learning rate
            gamma: Discount factor
        """
        super().__init__(q_func, policy)
        self.trace = self._bind_trace(trace)
        self.alpha = Parameter.coerce(alpha)
        self.gamma = Parameter.coerce(gamma)

        self._next_action: Optional[int] = None
        self._next_state: Optional[Tensor] = None

    def handle_sample(self, transition: Transition) -> None:
        s = transition.from_.state
        a = transition.action

        with self.q_func.borrow() as q:
            phi_s = q.project(s)
            qs = q.evaluate_phi(phi_s)
            nqs = self._next_values(q, transition)
            dim = q.projector.dim()

        if transition.to.is_terminal:
            self._clear_next()
            nq = 0.0
        else:
            self._next_action = self.policy.sample_qs(nqs)
            self._next_state = transition.to.state
            nq = nqs[self._next_action].item()

        td_error = transition.reward + self.gamma * nq - qs[a].item()

        self.trace.decay(self.trace.lambda_.value() * self.gamma.value())
        self.trace.update(phi_s.expanded(dim))

        with self.q_func.borrow_mut() as q:
            q.update_action_phi(
                Projection.dense(self.trace.get()), a, self.alpha * td_error
            )

    def handle_terminal(self, transition: Transition) -> None:
        self.alpha = self.alpha.step()
        self.gamma = self.gamma.step()
        self.trace.step()

        self.trace.reset()
        self._clear_next()

        self._forward_terminal(transition)

        logger.debug(
            f"{type(self).__name__} episode end: alpha={self.alpha.value():.4g} "
            f"gamma={self.gamma.value():.4g} lambda={self.trace.lambda_.value():.4g}"
        )

    def sample_behaviour(self, state: Any) -> int:
        action, cached_state = self._next_action, self._next_state
        self._clear_next()

        if action is not None and _same_state(state, cached_state):
            return action
        return self.policy.sample(state)

    def _clear_next(self) -> None:
        self._next_action = None
        self._next_state = None


def _same_state(a: Any, b: Any) -> bool:
    return torch.equal(
        torch.as_tensor(a, dtype=torch.float64),
        torch.as_tensor(b, dtype=torch.float64),
    )
