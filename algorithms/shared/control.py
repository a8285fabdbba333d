"""
Base class for value-based controllers.

Holds what every action-value control rule shares: one Shared
action-value approximator, the behaviour policy that explores with it,
and a Greedy target policy over the same approximator. Provides the
Controller, Predictor and Parameterised capabilities; subclasses supply
handle_sample / handle_terminal.
"""

from typing import Any

import torch
from torch import Tensor

from algorithms.base import Controller, Parameterised, Predictor
from core.errors import DimensionMismatchError
from core.shared import Shared
from core.trace import Trace
from domains.base import Transition
from policies.base import Policy
from policies.fixed import Greedy


class ValueBasedController(Controller, Predictor, Parameterised):
    """Shared plumbing for QLambda, SARSALambda and GreedyGQ.

    Attributes:
        q_func: Shared VectorLFA, also read by the policies
        policy: Behaviour policy
        target: Greedy policy over q_func
    """

    def __init__(self, q_func: Shared, policy: Policy):
        self.q_func = q_func
        self.policy = policy
        self.target = Greedy(q_func)

        if policy.n_actions != self.target.n_actions:
            raise DimensionMismatchError(
                self.target.n_actions, policy.n_actions, "policy action set"
            )

    def _feature_dim(self) -> int:
        with self.q_func.borrow() as q:
            return q.projector.dim()

    def _bind_trace(self, trace: Trace) -> Trace:
        """Size a trace to the approximator's feature space.

        Raises:
            DimensionMismatchError: If the trace was built for another dimension
        """
        dim = self._feature_dim()
        if trace.dim is not None and trace.dim != dim:
            raise DimensionMismatchError(dim, trace.dim, "trace")
        trace.resize(dim)
        return trace

    @staticmethod
    def _next_values(q, transition: Transition) -> Tensor:
        """Action values at transition.to; zero beyond a terminal state."""
        if transition.to.is_terminal:
            return torch.zeros(q.n_outputs, dtype=torch.float64)
        return q.evaluate(transition.to.state)

    def sample_target(self, state: Any) -> int:
        return self.target.sample(state)

    def sample_behaviour(self, state: Any) -> int:
        return self.policy.sample(state)

    def predict_v(self, state: Any) -> float:
        return self.predict_qsa(state, self.sample_target(state))

    def predict_qs(self, state: Any) -> Tensor:
        with self.q_func.borrow() as q:
            return q.evaluate(state)

    def predict_qsa(self, state: Any, action: int) -> float:
        with self.q_func.borrow() as q:
            return q.evaluate_action(state, action)

    def weights(self) -> Tensor:
        with self.q_func.borrow() as q:
            return q.weights()

    def _forward_terminal(self, transition: Transition) -> None:
        self.target.handle_terminal(transition)
        self.policy.handle_terminal(transition)
