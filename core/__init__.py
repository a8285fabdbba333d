"""
Core building blocks of the learning engine.

- Parameter: immutable, optionally decaying hyperparameters
- Trace: eligibility traces (accumulating / replacing)
- Shared: borrow-checked handle shared by policies and learners
- errors: DimensionMismatchError, BorrowConflictError,
  UnimplementedCapabilityError
"""

from core.errors import (
    LinearRLError,
    DimensionMismatchError,
    BorrowConflictError,
    UnimplementedCapabilityError,
)
from core.parameter import (
    Parameter,
    Fixed,
    Exponential,
    Polynomial,
    GeneralisedHarmonic,
)
from core.shared import Shared, make_shared
from core.trace import Trace

__all__ = [
    "LinearRLError",
    "DimensionMismatchError",
    "BorrowConflictError",
    "UnimplementedCapabilityError",
    "Parameter",
    "Fixed",
    "Exponential",
    "Polynomial",
    "GeneralisedHarmonic",
    "Shared",
    "make_shared",
    "Trace",
]
