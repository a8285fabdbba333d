"""
State and action spaces.

Just enough geometry for projectors to size themselves from a domain:
bounded intervals, finite ordinal sets and their products.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Interval:
    """Closed real interval [low, high]."""
    low: float
    high: float

    def __post_init__(self):
        if not self.high > self.low:
            raise ValueError(f"Interval requires high > low, got [{self.low}, {self.high}]")

    @property
    def width(self) -> float:
        return self.high - self.low

    def clip(self, x: float) -> float:
        return min(max(x, self.low), self.high)


@dataclass(frozen=True)
class Ordinal:
    """Finite set {0, ..., n - 1}."""
    n: int

    def __post_init__(self):
        if self.n <= 0:
            raise ValueError("Ordinal space must be non-empty")

    def card(self) -> int:
        return self.n


@dataclass(frozen=True)
class LinearSpace:
    """Product of one-dimensional spaces."""
    dims: Tuple = ()

    def __add__(self, dim) -> "LinearSpace":
        return LinearSpace(self.dims + (dim,))

    def __iter__(self) -> Iterator:
        return iter(self.dims)

    def __len__(self) -> int:
        return len(self.dims)

    def __getitem__(self, i):
        return self.dims[i]
