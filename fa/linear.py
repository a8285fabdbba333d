"""
Linear Function Approximators.

Value estimates are linear in the projected features:
- ScalarLFA: v(s) = w . phi(s), weights (dim,)
- VectorLFA: q(s, .) = W^T phi(s), weights (dim, n_actions)

Every method has a state form (projects first) and a `_phi` form taking
an already-projected Projection, so learners can project once per step
and reuse the features for evaluation, trace accumulation and updates.
Weights start at zero, so unseen states evaluate to 0.
"""

from pathlib import Path
from typing import Any, Union

import torch
from torch import Tensor

from core.errors import DimensionMismatchError
from representations.base import Projection, Projector


class LFA:
    """Shared weight storage and persistence for linear approximators."""

    def __init__(self, projector: Projector, shape: tuple):
        self.projector = projector
        self._weights = torch.zeros(shape, dtype=torch.float64)

    def weights(self) -> Tensor:
        """Return a copy of the weight tensor."""
        return self._weights.clone()

    def set_weights(self, weights: Tensor) -> None:
        weights = torch.as_tensor(weights, dtype=torch.float64)
        if weights.shape != self._weights.shape:
            raise DimensionMismatchError(
                self._weights.numel(), weights.numel(), "weights"
            )
        self._weights = weights.clone()

    def project(self, state: Any) -> Projection:
        return self.projector.project(state)

    def save(self, path: Union[str, Path]) -> None:
        """Save weights to a checkpoint file."""
        torch.save({
            "weights": self._weights,
            "class": type(self).__name__,
        }, path)

    def load(self, path: Union[str, Path]) -> None:
        """Load weights from a checkpoint file.

        Raises:
            DimensionMismatchError: If the stored weights have another shape
        """
        checkpoint = torch.load(path, map_location="cpu")
        self.set_weights(checkpoint["weights"])


class ScalarLFA(LFA):
    """Linear state-value function."""

    def __init__(self, projector: Projector):
        super().__init__(projector, (projector.dim(),))

    def evaluate(self, state: Any) -> float:
        return self.evaluate_phi(self.project(state))

    def evaluate_phi(self, phi: Projection) -> float:
        return phi.dot(self._weights).item()

    def update(self, state: Any, error: float) -> None:
        self.update_phi(self.project(state), error)

    def update_phi(self, phi: Projection, error: float) -> None:
        """In place: w += error * phi."""
        phi.scaled_add(self._weights, float(error))


class VectorLFA(LFA):
    """Linear action-value function with one weight column per action."""

    def __init__(self, projector: Projector, n_outputs: int):
        if n_outputs <= 0:
            raise ValueError("n_outputs must be positive")
        super().__init__(projector, (projector.dim(), n_outputs))
        self.n_outputs = n_outputs

    def evaluate(self, state: Any) -> Tensor:
        return self.evaluate_phi(self.project(state))

    def evaluate_phi(self, phi: Projection) -> Tensor:
        return phi.dot(self._weights)

    def evaluate_action(self, state: Any, action: int) -> float:
        return self.evaluate_action_phi(self.project(state), action)

    def evaluate_action_phi(self, phi: Projection, action: int) -> float:
        return phi.dot(self._column(action)).item()

    def update(self, state: Any, errors: Tensor) -> None:
        self.update_phi(self.project(state), errors)

    def update_phi(self, phi: Projection, errors: Tensor) -> None:
        """In place: W += phi (outer) errors, errors of shape (n_outputs,)."""
        errors = torch.as_tensor(errors, dtype=torch.float64).reshape(-1)
        if errors.shape[0] != self.n_outputs:
            raise DimensionMismatchError(self.n_outputs, errors.shape[0], "errors")
        phi.scaled_add(self._weights, errors)

    def update_action(self, state: Any, action: int, error: float) -> None:
        self.update_action_phi(self.project(state), action, error)

    def update_action_phi(self, phi: Projection, action: int, error: float) -> None:
        """In place: W[:, action] += error * phi."""
        self._check_action(action)
        errors = torch.zeros(self.n_outputs, dtype=torch.float64)
        errors[action] = float(error)
        phi.scaled_add(self._weights, errors)

    def _check_action(self, action: int) -> None:
        if not 0 <= action < self.n_outputs:
            raise IndexError(f"Action {action} outside [0, {self.n_outputs})")

    def _column(self, action: int) -> Tensor:
        self._check_action(action)
        return self._weights[:, action]
