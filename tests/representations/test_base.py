"""Tests for Projection and the Projector interface."""

import pytest
import torch

from core.errors import DimensionMismatchError
from representations.base import Projection, Projector


class TestDenseProjection:
    """Dense feature vectors."""

    def test_expanded_is_copy(self):
        phi = Projection.dense([1.0, 2.0])
        out = phi.expanded()
        out += 1.0
        assert phi.values.tolist() == [1.0, 2.0]

    def test_dot_vector(self):
        phi = Projection.dense([1.0, 2.0, 3.0])
        w = torch.tensor([1.0, 0.5, 2.0], dtype=torch.float64)
        assert phi.dot(w).item() == pytest.approx(8.0)

    def test_dot_matrix(self):
        phi = Projection.dense([1.0, 2.0])
        w = torch.tensor([[1.0, 0.0], [0.0, 1.0]], dtype=torch.float64)
        assert phi.dot(w).tolist() == [1.0, 2.0]

    def test_scaled_add_vector(self):
        phi = Projection.dense([1.0, 2.0])
        w = torch.zeros(2, dtype=torch.float64)
        phi.scaled_add(w, 0.5)
        assert w.tolist() == [0.5, 1.0]

    def test_scaled_add_matrix(self):
        phi = Projection.dense([1.0, 2.0])
        w = torch.zeros(2, 2, dtype=torch.float64)
        phi.scaled_add(w, torch.tensor([1.0, -1.0], dtype=torch.float64))
        assert w.tolist() == [[1.0, -1.0], [2.0, -2.0]]

    def test_weight_length_mismatch(self):
        phi = Projection.dense([1.0, 2.0])
        with pytest.raises(DimensionMismatchError):
            phi.dot(torch.zeros(3, dtype=torch.float64))


class TestSparseProjection:
    """Active-index feature vectors."""

    def test_expanded(self):
        phi = Projection.sparse([0, 2], 4)
        assert phi.expanded().tolist() == [1.0, 0.0, 1.0, 0.0]
        assert len(phi) == 4

    def test_expanded_dim_mismatch(self):
        phi = Projection.sparse([0], 4)
        with pytest.raises(DimensionMismatchError):
            phi.expanded(5)

    def test_index_out_of_range(self):
        with pytest.raises(IndexError):
            Projection.sparse([4], 4)

    def test_dot_matches_dense(self):
        sparse = Projection.sparse([1, 3], 4)
        dense = Projection.dense(sparse.expanded())
        w = torch.arange(8, dtype=torch.float64).reshape(4, 2)
        assert torch.allclose(sparse.dot(w), dense.dot(w))

    def test_scaled_add_matches_dense(self):
        sparse = Projection.sparse([0, 2], 3)
        dense = Projection.dense(sparse.expanded())
        scale = torch.tensor([0.5, 2.0], dtype=torch.float64)

        w_sparse = torch.zeros(3, 2, dtype=torch.float64)
        w_dense = torch.zeros(3, 2, dtype=torch.float64)
        sparse.scaled_add(w_sparse, scale)
        dense.scaled_add(w_dense, scale)

        assert torch.allclose(w_sparse, w_dense)

    def test_scaled_add_vector(self):
        phi = Projection.sparse([1], 3)
        w = torch.zeros(3, dtype=torch.float64)
        phi.scaled_add(w, 2.0)
        assert w.tolist() == [0.0, 2.0, 0.0]

    def test_scale_length_mismatch(self):
        phi = Projection.sparse([1], 3)
        w = torch.zeros(3, 2, dtype=torch.float64)
        with pytest.raises(DimensionMismatchError):
            phi.scaled_add(w, torch.zeros(3, dtype=torch.float64))


class TestProjectorInterface:
    """Projector is abstract."""

    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            Projector(1)

    def test_concrete_subclass(self):
        class Identity(Projector):
            def project(self, state):
                return Projection.dense(self._as_input(state))

            def dim(self):
                return self.input_dim

        proj = Identity(2)
        assert proj.output_shape() == (2,)
        assert proj.project_expanded([1.0, 2.0]).tolist() == [1.0, 2.0]
        with pytest.raises(DimensionMismatchError):
            proj.project([1.0, 2.0, 3.0])
