"""
One-Hot (Tabular) Projector.

Maps a discrete state index to a single active feature, which turns the
linear approximators into lookup tables.
"""

from typing import Any

from representations.base import Projection, Projector


class OneHotProjector(Projector):
    """Tabular projector over n_states discrete states.

    Input: scalar state index (int, or a 1-element tensor)
    Output: sparse projection with exactly one active feature
    """

    def __init__(self, n_states: int):
        """Initialize one-hot projector.

        Args:
            n_states: Number of discrete states
        """
        if n_states <= 0:
            raise ValueError("n_states must be positive")
        super().__init__(input_dim=1)
        self.n_states = n_states

    def project(self, state: Any) -> Projection:
        index = int(self._as_input(state)[0].item())
        if not 0 <= index < self.n_states:
            raise IndexError(f"State {index} outside [0, {self.n_states})")
        return Projection.sparse([index], self.n_states)

    def dim(self) -> int:
        return self.n_states
