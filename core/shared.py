"""
Shared ownership handle for approximators.

A behaviour policy, a greedy target policy and a learning algorithm all
hold the same Shared handle to one approximator, so weight storage is
never duplicated. Access goes through context managers that enforce, at
runtime, the single-writer discipline:
- any number of borrow() scopes may overlap each other
- a borrow_mut() scope excludes every other scope

Violations raise BorrowConflictError immediately.
"""

from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar

from core.errors import BorrowConflictError


V = TypeVar("V")


class Shared(Generic[V]):
    """Reference-shared, borrow-checked handle to a single value."""

    def __init__(self, value: V):
        self._value = value
        self._readers = 0
        self._writing = False

    @property
    def value(self) -> V:
        """The referent, for identity checks and read-only inspection."""
        return self._value

    @property
    def is_borrowed(self) -> bool:
        return self._writing or self._readers > 0

    @contextmanager
    def borrow(self) -> Iterator[V]:
        """Borrow the value for reading.

        Raises:
            BorrowConflictError: If a mutable borrow is live
        """
        if self._writing:
            raise BorrowConflictError(
                f"Cannot borrow {type(self._value).__name__}: already mutably borrowed"
            )
        self._readers += 1
        try:
            yield self._value
        finally:
            self._readers -= 1

    @contextmanager
    def borrow_mut(self) -> Iterator[V]:
        """Borrow the value exclusively for mutation.

        Raises:
            BorrowConflictError: If any other borrow is live
        """
        if self._writing or self._readers > 0:
            raise BorrowConflictError(
                f"Cannot mutably borrow {type(self._value).__name__}: "
                f"{'mutably' if self._writing else str(self._readers) + ' time(s)'} borrowed"
            )
        self._writing = True
        try:
            yield self._value
        finally:
            self._writing = False

    def clone(self) -> "Shared[V]":
        """Return another holder of the same value (the handle itself)."""
        return self

    def __repr__(self) -> str:
        return f"Shared({self._value!r})"


def make_shared(value: V) -> Shared[V]:
    """Wrap a value in a Shared handle."""
    return Shared(value)
