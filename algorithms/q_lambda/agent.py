"""
Watkins' Q(lambda) Agent.

Off-policy Q-learning with eligibility traces over linear features.

Per step, with phi = phi(s):
1. delta = r + gamma * max_a' Q(s', a') - Q(s, a)
2. If a is greedy at s: e <- lambda * gamma * e; otherwise cut: e <- 0
3. e <- e + phi
4. W[:, a] += alpha * delta * e

Cutting the trace on an exploratory action stops credit flowing through
steps the greedy target policy would not have taken.

References:
- Watkins, C. J. C. H. (1989). Learning from Delayed Rewards. Ph.D. thesis,
  Cambridge University.
- Watkins, C. J. C. H., Dayan, P. (1992). Q-learning. Machine Learning,
  8:279-292.
"""

import logging
from typing import Union

from algorithms.base import Algorithm
from algorithms.shared.control import ValueBasedController
from core.parameter import Parameter
from core.shared import Shared
from core.trace import Trace
from domains.base import Transition
from policies.base import Policy
from representations.base import Projection


logger = logging.getLogger(__name__)


class QLambda(ValueBasedController, Algorithm):
    """Watkins' Q(lambda) with a shared linear action-value function.

    Attributes:
        trace: Eligibility trace, exclusively owned
        alpha: Learning rate Parameter
        gamma: Discount Parameter
    """

    def __init__(
        self,
        q_func: Shared,
        policy: Policy,
        trace: Trace,
        alpha: Union[Parameter, float],
        gamma: Union[Parameter, float],
    ):
        """Initialize Q(lambda).

        Args:
            q_func: Shared VectorLFA over the domain's actions
            policy: Behaviour policy (usually EpsilonGreedy over q_func)
            trace: Eligibility trace; its lambda_ sets the decay
            alpha: Learning rate
            gamma: Discount factor
        """
        super().__init__(q_func, policy)
        self.trace = self._bind_trace(trace)
        self.alpha = Parameter.coerce(alpha)
        self.gamma = Parameter.coerce(gamma)

    def handle_sample(self, transition: Transition) -> None:
        s = transition.from_.state
        a = transition.action

        with self.q_func.borrow() as q:
            phi_s = q.project(s)
            qs = q.evaluate_phi(phi_s)
            nqs = self._next_values(q, transition)
            dim = q.projector.dim()

        na = self.target.sample_qs(nqs)
        td_error = transition.reward + self.gamma * nqs[na].item() - qs[a].item()

        if a == self.target.sample_qs(qs):
            self.trace.decay(self.trace.lambda_.value() * self.gamma.value())
        else:
            self.trace.decay(0.0)

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

        self._forward_terminal(transition)

        logger.debug(
            f"{type(self).__name__} episode end: alpha={self.alpha.value():.4g} "
            f"gamma={self.gamma.value():.4g} lambda={self.trace.lambda_.value():.4g}"
        )
