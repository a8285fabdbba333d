"""
Value-based policies.

- Greedy: arg-max over a shared action-value function
- Random: uniform over actions
- EpsilonGreedy: Random with probability epsilon, else Greedy; epsilon
  is a Parameter stepped once per episode
"""

import logging
from typing import Any, Optional, Union

import torch
from torch import Tensor

from core.parameter import Parameter
from core.shared import Shared
from policies.base import Policy


logger = logging.getLogger(__name__)


class Greedy(Policy):
    """Greedy policy over a shared action-value approximator.

    Ties are broken toward the lowest action index.
    """

    def __init__(self, q_func: Shared, generator: Optional[torch.Generator] = None):
        with q_func.borrow() as q:
            n_actions = q.n_outputs
        super().__init__(n_actions, generator)
        self.q_func = q_func

    def sample(self, state: Any) -> int:
        with self.q_func.borrow() as q:
            qs = q.evaluate(state)
        return self.sample_qs(qs)

    def sample_qs(self, qs: Tensor) -> int:
        return int(torch.argmax(qs).item())

    def probabilities(self, state: Any) -> Tensor:
        probs = torch.zeros(self.n_actions, dtype=torch.float64)
        probs[self.sample(state)] = 1.0
        return probs


class Random(Policy):
    """Uniformly random policy."""

    def sample(self, state: Any) -> int:
        return self._uniform()

    def sample_qs(self, qs: Tensor) -> int:
        return self._uniform()

    def probabilities(self, state: Any) -> Tensor:
        return torch.full((self.n_actions,), 1.0 / self.n_actions, dtype=torch.float64)


class EpsilonGreedy(Policy):
    """Epsilon-greedy mixture of a greedy and a random policy.

    Attributes:
        greedy: Exploitation policy
        random: Exploration policy
        epsilon: Exploration probability, stepped in handle_terminal
    """

    def __init__(
        self,
        greedy: Greedy,
        random: Random,
        epsilon: Union[Parameter, float],
        generator: Optional[torch.Generator] = None,
    ):
        if greedy.n_actions != random.n_actions:
            raise ValueError(
                f"Greedy and random policies disagree on n_actions "
                f"({greedy.n_actions} vs {random.n_actions})"
            )
        super().__init__(greedy.n_actions, generator)
        self.greedy = greedy
        self.random = random
        self.epsilon = Parameter.coerce(epsilon)

    def sample(self, state: Any) -> int:
        if self._rand() < self.epsilon.value():
            return self.random.sample(state)
        return self.greedy.sample(state)

    def sample_qs(self, qs: Tensor) -> int:
        if self._rand() < self.epsilon.value():
            return self.random.sample_qs(qs)
        return self.greedy.sample_qs(qs)

    def probabilities(self, state: Any) -> Tensor:
        eps = self.epsilon.value()
        return eps * self.random.probabilities(state) + (1.0 - eps) * self.greedy.probabilities(state)

    def handle_terminal(self, transition) -> None:
        self.epsilon = self.epsilon.step()
        logger.debug(f"epsilon stepped to {self.epsilon.value():.4f}")

        self.greedy.handle_terminal(transition)
        self.random.handle_terminal(transition)
