"""
Error taxonomy for the learning engine.

Every failure raised by the library derives from LinearRLError so callers
can catch the whole family at the experiment boundary:
- DimensionMismatchError: feature/trace/weight sizes disagree
- BorrowConflictError: overlapping mutable access to a shared approximator
- UnimplementedCapabilityError: an agent invoked through a capability it
  does not provide
"""


class LinearRLError(Exception):
    """Base class for all library errors."""
    pass


class DimensionMismatchError(LinearRLError, ValueError):
    """Raised when two vectors that must agree in length do not.

    Never coerced: the trace, projection or weight update is rejected
    before any state is modified.
    """

    def __init__(self, expected: int, actual: int, what: str = "vector"):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Dimension mismatch for {what}: expected {expected}, got {actual}"
        )


class BorrowConflictError(LinearRLError, RuntimeError):
    """Raised when a Shared handle is borrowed in a conflicting way.

    This is a programming error in how components are composed, so it
    is raised immediately rather than deferred.
    """
    pass


class UnimplementedCapabilityError(LinearRLError, NotImplementedError):
    """Raised when an agent is driven through a capability it lacks."""

    def __init__(self, agent: object, capability: str):
        self.agent = agent
        self.capability = capability
        super().__init__(
            f"{type(agent).__name__} does not implement capability '{capability}'"
        )
