"""
Base Projector Interface.

A projector maps a raw state to the feature vector phi(s) consumed by the
linear approximators in fa/. Projections are either dense (every feature
has a value) or sparse (a set of active binary features), and both forms
support the operations an approximator needs without expanding sparse
vectors unless asked.

All concrete projectors MUST inherit from Projector.
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence, Tuple, Union

import torch
from torch import Tensor

from core.errors import DimensionMismatchError


class Projection:
    """A projected feature vector.

    Attributes:
        values: Dense feature values (dim,) or active indices (k,) long
        dim: Length of the feature space
        is_sparse: True when `values` holds indices of active features
    """

    def __init__(self, values: Tensor, dim: int, is_sparse: bool):
        self.values = values
        self.dim = dim
        self.is_sparse = is_sparse

    @classmethod
    def dense(cls, values: Union[Tensor, Sequence[float]]) -> "Projection":
        values = torch.as_tensor(values, dtype=torch.float64).reshape(-1)
        return cls(values, values.shape[0], is_sparse=False)

    @classmethod
    def sparse(cls, indices: Union[Tensor, Sequence[int]], dim: int) -> "Projection":
        indices = torch.as_tensor(indices, dtype=torch.long).reshape(-1)
        if indices.numel() > 0 and (indices.min() < 0 or indices.max() >= dim):
            raise IndexError(f"Sparse feature index out of range for dimension {dim}")
        return cls(indices, dim, is_sparse=True)

    def expanded(self, dim: int = None) -> Tensor:
        """Return the dense (dim,) form of this projection.

        Raises:
            DimensionMismatchError: If dim disagrees with the projection
        """
        if dim is not None and dim != self.dim:
            raise DimensionMismatchError(dim, self.dim, "projection")
        if not self.is_sparse:
            return self.values.clone()
        out = torch.zeros(self.dim, dtype=torch.float64)
        out.index_add_(
            0, self.values, torch.ones(self.values.shape[0], dtype=torch.float64)
        )
        return out

    def dot(self, weights: Tensor) -> Tensor:
        """Contract the projection against the leading axis of weights.

        Args:
            weights: (dim,) or (dim, n_outputs)

        Returns:
            Scalar tensor for (dim,) weights, (n_outputs,) otherwise
        """
        self._check(weights)
        if self.is_sparse:
            return weights.index_select(0, self.values).sum(dim=0)
        return torch.tensordot(self.values, weights, dims=1)

    def scaled_add(self, weights: Tensor, scale: Union[float, Tensor]) -> None:
        """In place: weights += phi (outer) scale.

        For (dim,) weights scale is a float. For (dim, n_outputs) weights
        scale is an (n_outputs,) tensor.
        """
        self._check(weights)
        if weights.dim() == 1:
            scale = float(scale)
            if self.is_sparse:
                weights.index_add_(
                    0,
                    self.values,
                    torch.full((self.values.shape[0],), scale, dtype=weights.dtype),
                )
            else:
                weights.add_(self.values, alpha=scale)
            return

        scale = torch.as_tensor(scale, dtype=weights.dtype).reshape(-1)
        if scale.shape[0] != weights.shape[1]:
            raise DimensionMismatchError(weights.shape[1], scale.shape[0], "update")
        if self.is_sparse:
            weights.index_add_(
                0, self.values, scale.repeat(self.values.shape[0], 1)
            )
        else:
            weights.add_(torch.outer(self.values, scale))

    def _check(self, weights: Tensor) -> None:
        if weights.shape[0] != self.dim:
            raise DimensionMismatchError(weights.shape[0], self.dim, "weights")

    def __len__(self) -> int:
        return self.dim

    def __repr__(self) -> str:
        kind = "Sparse" if self.is_sparse else "Dense"
        return f"Projection.{kind}(dim={self.dim}, values={self.values.tolist()})"


class Projector(ABC):
    """Abstract base class for feature projectors.

    Attributes:
        input_dim: Number of state variables the projector accepts
    """

    def __init__(self, input_dim: int):
        self.input_dim = input_dim

    @abstractmethod
    def project(self, state: Any) -> Projection:
        """Map a raw state to its feature projection."""
        pass

    @abstractmethod
    def dim(self) -> int:
        """Return the number of features produced."""
        pass

    def output_shape(self) -> Tuple[int, ...]:
        """Return the feature shape, (dim,)."""
        return (self.dim(),)

    def project_expanded(self, state: Any) -> Tensor:
        return self.project(state).expanded()

    def _as_input(self, state: Any) -> Tensor:
        """Flatten a state to a float64 vector and check its size.

        Raises:
            DimensionMismatchError: If the state has the wrong length
        """
        x = torch.as_tensor(state, dtype=torch.float64).reshape(-1)
        if x.shape[0] != self.input_dim:
            raise DimensionMismatchError(self.input_dim, x.shape[0], "state")
        return x
