"""
Feature Projection Module.

Projectors map raw domain states to the feature vectors phi(s) used by
the linear approximators. Every projector implements:
- project(state) -> Projection
- dim() -> int

Available projectors:
- OneHotProjector: tabular, one feature per discrete state
- UniformPartitions: regular grid over a bounded continuous space
- Fourier: dense Fourier basis of a given order
"""

from representations.base import Projection, Projector
from representations.onehot import OneHotProjector
from representations.partitions import UniformPartitions
from representations.fourier import Fourier

__all__ = [
    "Projection",
    "Projector",
    "OneHotProjector",
    "UniformPartitions",
    "Fourier",
]
