"""Tests for eligibility traces."""

import pytest
import torch

from core.errors import DimensionMismatchError
from core.parameter import Parameter
from core.trace import Trace
from representations.base import Projection


def _vec(*values):
    return torch.tensor(values, dtype=torch.float64)


class TestTraceConstruction:
    """Construction and sizing."""

    def test_lazy_dimension(self):
        trace = Trace.accumulating(0.9)
        assert trace.dim is None
        assert trace.get().numel() == 0

    def test_explicit_dimension_starts_at_zero(self):
        trace = Trace.accumulating(0.9, dim=3)
        assert trace.dim == 3
        assert torch.equal(trace.get(), torch.zeros(3, dtype=torch.float64))

    def test_invalid_kind_raises(self):
        with pytest.raises(ValueError) as exc_info:
            Trace(0.9, kind="dutch")
        assert "Invalid trace kind" in str(exc_info.value)

    def test_lambda_is_coerced(self):
        trace = Trace.replacing(0.5)
        assert trace.lambda_.value() == 0.5
        assert trace.kind == "replacing"


class TestAccumulatingTrace:
    """Decay then accumulate."""

    def test_decay_then_update(self):
        trace = Trace.accumulating(0.5)
        phi = _vec(1.0, 0.0, 2.0)
        trace.update(phi)

        trace.decay(0.5)
        trace.update(phi)

        assert torch.allclose(trace.get(), 0.5 * phi + phi)

    def test_zero_rate_cuts_trace(self):
        trace = Trace.accumulating(0.9)
        trace.update(_vec(1.0, 1.0))
        trace.decay(0.0)
        assert torch.equal(trace.get(), torch.zeros(2, dtype=torch.float64))

    def test_get_returns_copy(self):
        trace = Trace.accumulating(0.9)
        trace.update(_vec(1.0))
        snapshot = trace.get()
        snapshot += 10.0
        assert trace.get().item() == 1.0


class TestReplacingTrace:
    """Components saturate at one."""

    def test_clamped_to_unit_interval(self):
        trace = Trace.replacing(1.0)
        phi = _vec(1.0, 0.0)
        for _ in range(5):
            trace.decay(1.0)
            trace.update(phi)
        assert torch.equal(trace.get(), _vec(1.0, 0.0))

    def test_negative_components_clamped(self):
        trace = Trace.replacing(1.0)
        trace.update(_vec(-3.0))
        assert trace.get().item() == -1.0


class TestTraceDimensions:
    """Dimension checking, reset and resize."""

    def test_mismatch_raises_and_leaves_trace(self):
        trace = Trace.accumulating(0.9)
        trace.update(_vec(1.0, 2.0))
        with pytest.raises(DimensionMismatchError) as exc_info:
            trace.update(_vec(1.0, 2.0, 3.0))
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 3
        assert torch.equal(trace.get(), _vec(1.0, 2.0))

    def test_mismatch_is_value_error(self):
        trace = Trace.accumulating(0.9, dim=1)
        with pytest.raises(ValueError):
            trace.update(_vec(1.0, 2.0))

    def test_reset_zeroes(self):
        trace = Trace.accumulating(0.9)
        trace.update(_vec(1.0, 2.0))
        trace.reset()
        assert torch.equal(trace.get(), torch.zeros(2, dtype=torch.float64))
        assert trace.dim == 2

    def test_resize_same_dim_keeps_values(self):
        trace = Trace.accumulating(0.9)
        trace.update(_vec(1.0, 2.0))
        trace.resize(2)
        assert torch.equal(trace.get(), _vec(1.0, 2.0))

    def test_resize_new_dim_reallocates(self):
        trace = Trace.accumulating(0.9)
        trace.update(_vec(1.0, 2.0))
        trace.resize(4)
        assert trace.dim == 4
        assert torch.equal(trace.get(), torch.zeros(4, dtype=torch.float64))

    def test_step_advances_lambda(self):
        trace = Trace.accumulating(Parameter.exponential(1.0, 0.0, 0.5))
        trace.step()
        assert trace.lambda_.value() == pytest.approx(0.5)


class TestProjectionInput:
    """Dense and sparse projections are accepted directly."""

    def test_sparse_projection_is_expanded(self):
        trace = Trace.accumulating(0.5, dim=4)
        trace.update(Projection.sparse([1, 3], 4))
        trace.decay(0.5)
        trace.update(Projection.sparse([3], 4))
        assert torch.equal(trace.get(), _vec(0.0, 0.5, 0.0, 1.5))

    def test_dense_projection_sizes_lazy_trace(self):
        trace = Trace.replacing(0.9)
        trace.update(Projection.dense([0.5, 2.0]))
        assert trace.dim == 2
        assert torch.equal(trace.get(), _vec(0.5, 1.0))

    def test_projection_of_wrong_dim_raises(self):
        trace = Trace.accumulating(0.9, dim=3)
        with pytest.raises(DimensionMismatchError):
            trace.update(Projection.sparse([0], 2))
        assert torch.equal(trace.get(), torch.zeros(3, dtype=torch.float64))
