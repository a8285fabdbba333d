"""
Base Policy Interface.

A policy picks actions either from a state (evaluating its own value
function through a Shared handle) or directly from a vector of action
values. Policies with schedules (e.g. a decaying epsilon) advance them in
handle_terminal.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import torch
from torch import Tensor


class Policy(ABC):
    """Abstract base class for action-selection policies.

    Attributes:
        n_actions: Size of the discrete action set
        generator: Optional torch.Generator for reproducible sampling
    """

    def __init__(self, n_actions: int, generator: Optional[torch.Generator] = None):
        if n_actions <= 0:
            raise ValueError("n_actions must be positive")
        self.n_actions = n_actions
        self.generator = generator

    @abstractmethod
    def sample(self, state: Any) -> int:
        """Select an action in the given state."""
        pass

    @abstractmethod
    def sample_qs(self, qs: Tensor) -> int:
        """Select an action given the action values of the current state."""
        pass

    @abstractmethod
    def probabilities(self, state: Any) -> Tensor:
        """Return the (n_actions,) action distribution in the given state."""
        pass

    def handle_terminal(self, transition) -> None:
        """Hook called once at the end of every episode."""
        pass

    def _uniform(self) -> int:
        return int(torch.randint(self.n_actions, (1,), generator=self.generator).item())

    def _rand(self) -> float:
        return torch.rand(1, generator=self.generator).item()
