"""
Uniform Partition Projector.

Tiles a bounded continuous state space into a regular grid and activates
the single cell containing the state. Values outside the bounds fall into
the edge cells.
"""

from typing import Any, Sequence, Union

from domains.spaces import Interval
from representations.base import Projection, Projector


class UniformPartitions(Projector):
    """Regular grid over a product of intervals.

    The cell index is row-major with the first state variable varying
    fastest: idx = p0 + n0 * (p1 + n1 * (p2 + ...)).
    """

    def __init__(
        self,
        space: Sequence[Interval],
        n_partitions: Union[int, Sequence[int]],
    ):
        """Initialize partitions.

        Args:
            space: One Interval per state variable
            n_partitions: Cells per variable (int for uniform, list per variable)
        """
        intervals = list(space)
        super().__init__(input_dim=len(intervals))
        if isinstance(n_partitions, int):
            n_partitions = [n_partitions] * len(intervals)
        if len(n_partitions) != len(intervals):
            raise ValueError("n_partitions must have one entry per state variable")
        if any(n <= 0 for n in n_partitions):
            raise ValueError("n_partitions must be positive")

        self.intervals = intervals
        self.n_partitions = list(n_partitions)

    def _to_partition(self, i: int, v: float) -> int:
        d, n = self.intervals[i], self.n_partitions[i]
        p = int((v - d.low) / d.width * n)
        return min(max(p, 0), n - 1)

    def hash(self, state: Any) -> int:
        x = self._as_input(state).tolist()
        acc = 0
        for i in reversed(range(self.input_dim)):
            acc = self._to_partition(i, x[i]) + self.n_partitions[i] * acc
        return acc

    def project(self, state: Any) -> Projection:
        return Projection.sparse([self.hash(state)], self.dim())

    def dim(self) -> int:
        total = 1
        for n in self.n_partitions:
            total *= n
        return total
