"""
Greedy-GQ Agent.

Gradient-correction off-policy control with linear function
approximation (GQ(0) with a greedy target policy). Unlike plain
off-policy TD, it converges under off-policy sampling.

Two coupled approximators share the same feature space:
- Q: primary action-value weights theta
- v: auxiliary weights w estimating E[delta | phi]

Per step, with phi = phi(s), phi' = phi(s'), a* = argmax_a Q(s', a):
1. delta = r + gamma * Q(s', a*) - Q(s, a)
2. theta_a  += alpha * delta * phi
   theta_a* -= alpha * gamma * (w . phi) * phi'
3. w += beta * (delta - w . phi) * phi

References:
- Maei, H. R., Szepesvari, C., Bhatnagar, S., Sutton, R. S. (2010).
  Toward off-policy learning control with function approximation. ICML.
"""

import logging
from typing import Any, Union

from torch import Tensor

from algorithms.base import Algorithm
from algorithms.shared.control import ValueBasedController
from core.errors import DimensionMismatchError
from core.parameter import Parameter
from core.shared import Shared
from domains.base import Transition
from policies.base import Policy


logger = logging.getLogger(__name__)


class GreedyGQ(ValueBasedController, Algorithm):
    """Greedy-GQ with a shared action-value and an auxiliary value function.

    Attributes:
        v_func: Shared ScalarLFA holding the correction weights
        alpha: Learning rate for Q
        beta: Learning rate for v, usually smaller than alpha
        gamma: Discount
    """

    def __init__(
        self,
        q_func: Shared,
        v_func: Shared,
        policy: Policy,
        alpha: Union[Parameter, float],
        beta: Union[Parameter, float],
        gamma: Union[Parameter, float],
    ):
        """Initialize Greedy-GQ.

        Args:
            q_func: Shared VectorLFA over the domain's actions
            v_func: Shared ScalarLFA over the same features
            policy: Behaviour policy
            alpha: Learning rate for the action-value weights
            beta: Learning rate for the correction weights
            gamma: Discount factor

        Raises:
            DimensionMismatchError: If q_func and v_func use different feature sizes
        """
        super().__init__(q_func, policy)
        self.v_func = v_func

        with v_func.borrow() as v:
            v_dim = v.projector.dim()
        if v_dim != self._feature_dim():
            raise DimensionMismatchError(self._feature_dim(), v_dim, "correction features")

        self.alpha = Parameter.coerce(alpha)
        self.beta = Parameter.coerce(beta)
        self.gamma = Parameter.coerce(gamma)

    def handle_sample(self, transition: Transition) -> None:
        s = transition.from_.state
        a = transition.action

        with self.q_func.borrow() as q:
            phi_s = q.project(s)
            qsa = q.evaluate_action_phi(phi_s, a)

            if transition.to.is_terminal:
                phi_ns, na, nq = None, None, 0.0
            else:
                phi_ns = q.project(transition.to.state)
                nqs = q.evaluate_phi(phi_ns)
                na = self.target.sample_qs(nqs)
                nq = nqs[na].item()

        td_error = transition.reward + self.gamma * nq - qsa

        with self.v_func.borrow() as v:
            td_estimate = v.evaluate_phi(phi_s)

        with self.q_func.borrow_mut() as q:
            q.update_action_phi(phi_s, a, self.alpha * td_error)
            if phi_ns is not None:
                q.update_action_phi(
                    phi_ns, na, -self.alpha.value() * self.gamma.value() * td_estimate
                )

        with self.v_func.borrow_mut() as v:
            v.update_phi(phi_s, self.beta * (td_error - td_estimate))

    def handle_terminal(self, transition: Transition) -> None:
        self.alpha = self.alpha.step()
        self.beta = self.beta.step()
        self.gamma = self.gamma.step()

        self._forward_terminal(transition)

        logger.debug(
            f"GreedyGQ episode end: alpha={self.alpha.value():.4g} "
            f"beta={self.beta.value():.4g} gamma={self.gamma.value():.4g}"
        )

    def correction_weights(self) -> Tensor:
        """Return a copy of the auxiliary weights w."""
        with self.v_func.borrow() as v:
            return v.weights()

    def predict_correction(self, state: Any) -> float:
        with self.v_func.borrow() as v:
            return v.evaluate(state)
