"""
Eligibility Traces over linear features.

Eligibility traces track which features were recently active and should
receive credit for the current TD error. The owning algorithm calls
decay() then update() every step, in that order:

    e <- rate * e      (rate = gamma * lambda, or 0 to cut the trace)
    e <- e + phi       (accumulating)
    e <- clip(e + phi, -1, 1)   (replacing)

and applies theta += alpha * delta * e.

Supports:
- Accumulating traces: e += phi on visit
- Replacing traces: visited binary features saturate at 1
"""

from typing import Optional, Union

import torch
from torch import Tensor

from core.errors import DimensionMismatchError
from core.parameter import Parameter
from representations.base import Projection


VALID_TRACE_KINDS = frozenset(["accumulating", "replacing"])


class Trace:
    """Eligibility trace for a single learner.

    The trace dimension is fixed either at construction or by the first
    update(); afterwards every feature vector must match it.

    Attributes:
        lambda_: Trace decay Parameter
        kind: "accumulating" or "replacing"
    """

    def __init__(
        self,
        lambda_: Union[Parameter, float],
        dim: Optional[int] = None,
        kind: str = "accumulating",
    ):
        """Initialize the trace.

        Args:
            lambda_: Trace decay parameter (0=TD(0), 1=MC)
            dim: Feature dimensionality, or None to size on first update
            kind: "accumulating" or "replacing"
        """
        if kind not in VALID_TRACE_KINDS:
            raise ValueError(
                f"Invalid trace kind '{kind}'. "
                f"Must be one of: {sorted(VALID_TRACE_KINDS)}"
            )
        self.lambda_ = Parameter.coerce(lambda_)
        self.kind = kind
        self._e: Optional[Tensor] = None
        if dim is not None:
            self._e = torch.zeros(dim, dtype=torch.float64)

    @classmethod
    def accumulating(cls, lambda_, dim: Optional[int] = None) -> "Trace":
        return cls(lambda_, dim=dim, kind="accumulating")

    @classmethod
    def replacing(cls, lambda_, dim: Optional[int] = None) -> "Trace":
        return cls(lambda_, dim=dim, kind="replacing")

    @property
    def dim(self) -> Optional[int]:
        return None if self._e is None else self._e.shape[0]

    def decay(self, rate: float) -> None:
        """Scale every component by rate; rate 0 clears the trace."""
        if self._e is None:
            return
        if rate == 0.0:
            self._e.zero_()
        else:
            self._e.mul_(rate)

    def update(self, phi: Union[Tensor, Projection]) -> None:
        """Add a feature vector on top of the decayed trace.

        Sparse projections are expanded to the trace dimension first.

        Raises:
            DimensionMismatchError: If phi disagrees with the trace length
        """
        if isinstance(phi, Projection):
            phi = phi.expanded(self.dim)
        phi = phi.to(torch.float64).reshape(-1)
        if self._e is None:
            self._e = torch.zeros_like(phi)
        elif phi.shape[0] != self._e.shape[0]:
            raise DimensionMismatchError(self._e.shape[0], phi.shape[0], "trace")

        self._e.add_(phi)
        if self.kind == "replacing":
            self._e.clamp_(-1.0, 1.0)

    def get(self) -> Tensor:
        """Return a snapshot of the trace vector."""
        if self._e is None:
            return torch.zeros(0, dtype=torch.float64)
        return self._e.clone()

    def reset(self) -> None:
        """Reset the trace to zero (called at episode end)."""
        self.decay(0.0)

    def resize(self, dim: int) -> None:
        """Re-validate the trace for a new feature dimension.

        A no-op when the dimension is unchanged; otherwise the trace is
        re-allocated at zero since old eligibilities have no meaning in
        the new feature space.
        """
        if self._e is not None and self._e.shape[0] == dim:
            return
        self._e = torch.zeros(dim, dtype=torch.float64)

    def step(self) -> None:
        """Advance the lambda schedule by one episode."""
        self.lambda_ = self.lambda_.step()
