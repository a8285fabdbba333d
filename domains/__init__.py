"""
Domains Module.

Episodic environments producing Transition records:
- MountainCar: continuous-state classic control
- TwoStateChain: tiny deterministic chain with an analytic solution
"""

from domains.base import Domain, Observation, ObservationKind, Transition
from domains.spaces import Interval, LinearSpace, Ordinal
from domains.mountain_car import MountainCar
from domains.chain import TwoStateChain

__all__ = [
    "Domain",
    "Observation",
    "ObservationKind",
    "Transition",
    "Interval",
    "LinearSpace",
    "Ordinal",
    "MountainCar",
    "TwoStateChain",
]
