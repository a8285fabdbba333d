"""
Gradient Monte-Carlo Agent.

Batch state-value prediction from complete episodes. Returns are
accumulated backwards from the end of the batch:

    G_T = 0
    G_t = r_{t+1} + gamma * G_{t+1}
    v(s_t) += alpha * (G_t - v(s_t))

Unbiased but higher variance than the TD methods; needs no trace and no
bootstrapping, so it only implements BatchLearner.
"""

import logging
from typing import Any, Sequence, Union

from torch import Tensor

from algorithms.base import BatchLearner, Parameterised, ValuePredictor
from core.parameter import Parameter
from core.shared import Shared
from domains.base import Transition


logger = logging.getLogger(__name__)


class GradientMC(BatchLearner, ValuePredictor, Parameterised):
    """Gradient Monte-Carlo over a shared linear state-value function."""

    def __init__(
        self,
        v_func: Shared,
        alpha: Union[Parameter, float],
        gamma: Union[Parameter, float],
    ):
        """Initialize gradient MC.

        Args:
            v_func: Shared ScalarLFA
            alpha: Learning rate
            gamma: Discount factor for returns
        """
        self.v_func = v_func
        self.alpha = Parameter.coerce(alpha)
        self.gamma = Parameter.coerce(gamma)

    def handle_batch(self, batch: Sequence[Transition]) -> None:
        """Update towards the discounted return of every visited state.

        Args:
            batch: Transitions in temporal order, usually one full episode
        """
        ret = 0.0

        for t in reversed(batch):
            ret = t.reward + self.gamma * ret

            s = t.from_.state
            with self.v_func.borrow() as v:
                v_est = v.evaluate(s)
            with self.v_func.borrow_mut() as v:
                v.update(s, self.alpha * (ret - v_est))

        logger.debug(f"GradientMC batch of {len(batch)} transitions, G_0={ret:.4g}")

    def handle_terminal(self, transition: Transition) -> None:
        self.alpha = self.alpha.step()
        self.gamma = self.gamma.step()

    def predict_v(self, state: Any) -> float:
        with self.v_func.borrow() as v:
            return v.evaluate(state)

    def weights(self) -> Tensor:
        with self.v_func.borrow() as v:
            return v.weights()
