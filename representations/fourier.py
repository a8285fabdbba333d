"""
Fourier Basis Projector.

Konidaris, Osentoski & Thomas (2011), "Value function approximation in
reinforcement learning using the Fourier basis".

Each feature is cos(pi * c . x~) where x~ is the state rescaled to
[0, 1]^d and c ranges over {0, ..., order}^d, giving (order + 1)^d dense
features.
"""

import itertools
import math
from typing import Any, Sequence

import torch

from domains.spaces import Interval
from representations.base import Projection, Projector


class Fourier(Projector):
    """Full Fourier basis of a given order over a bounded state space."""

    def __init__(self, order: int, space: Sequence[Interval]):
        """Initialize Fourier basis.

        Args:
            order: Highest frequency per state variable
            space: One Interval per state variable
        """
        if order < 0:
            raise ValueError("order must be non-negative")
        intervals = list(space)
        super().__init__(input_dim=len(intervals))

        self.order = order
        self.low = torch.tensor([d.low for d in intervals], dtype=torch.float64)
        self.width = torch.tensor([d.width for d in intervals], dtype=torch.float64)

        # (n_features, d)
        self.coefficients = torch.tensor(
            list(itertools.product(range(order + 1), repeat=len(intervals))),
            dtype=torch.float64,
        )

    @classmethod
    def from_space(cls, order: int, space: Sequence[Interval]) -> "Fourier":
        return cls(order, space)

    def project(self, state: Any) -> Projection:
        x = (self._as_input(state) - self.low) / self.width
        x = x.clamp(0.0, 1.0)
        return Projection.dense(torch.cos(math.pi * (self.coefficients @ x)))

    def dim(self) -> int:
        return self.coefficients.shape[0]
