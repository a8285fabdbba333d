"""Tests for hyperparameter schedules."""

import pytest

from core.parameter import (
    Exponential,
    Fixed,
    GeneralisedHarmonic,
    Parameter,
    Polynomial,
)


def _walk(param: Parameter, n: int):
    values = [param.value()]
    for _ in range(n):
        param = param.step()
        values.append(param.value())
    return values


class TestFixed:
    """Tests for the constant schedule."""

    def test_value_never_changes(self):
        assert _walk(Parameter.fixed(0.3), 10) == [0.3] * 11

    def test_step_returns_new_instance(self):
        """Stepping leaves the original untouched."""
        p = Parameter.fixed(0.5)
        q = p.step()
        assert p.count == 0
        assert q.count == 1
        assert q is not p


class TestDecayingSchedules:
    """Monotonic movement toward `final` without overshoot."""

    @pytest.mark.parametrize("param", [
        Parameter.exponential(1.0, 0.1, 0.9),
        Parameter.polynomial(1.0, 0.1, 1.0),
        Parameter.harmonic(1.0, 0.1, 10.0),
    ])
    def test_monotone_decreasing_and_bounded(self, param):
        values = _walk(param, 200)
        assert values[0] == pytest.approx(1.0)
        for a, b in zip(values, values[1:]):
            assert b <= a
            assert b >= 0.1

    @pytest.mark.parametrize("param", [
        Parameter.exponential(0.0, 1.0, 0.5),
        Parameter.polynomial(0.0, 1.0, 2.0),
        Parameter.harmonic(0.0, 1.0, 1.0),
    ])
    def test_monotone_increasing_toward_larger_final(self, param):
        values = _walk(param, 50)
        for a, b in zip(values, values[1:]):
            assert b >= a
            assert b <= 1.0

    def test_exponential_converges(self):
        values = _walk(Parameter.exponential(1.0, 0.0, 0.5), 60)
        assert values[-1] == pytest.approx(0.0, abs=1e-12)

    def test_exponential_formula(self):
        p = Exponential(init=1.0, final=0.2, decay=0.5, count=3)
        assert p.value() == pytest.approx(0.2 + 0.8 * 0.125)

    def test_exponential_shrinks_gap_not_value(self):
        """The gap to final decays, so final is approached but not reached."""
        p = Parameter.exponential(1.0, 0.5, 0.5).step()
        assert p.value() == pytest.approx(0.75)
        assert p.value() > max(1.0 * 0.5, 0.5)

    def test_polynomial_formula(self):
        p = Polynomial(init=1.0, final=0.0, exponent=1.0, count=3)
        assert p.value() == pytest.approx(0.25)

    def test_harmonic_formula(self):
        p = GeneralisedHarmonic(init=1.0, final=0.0, scale=2.0, count=2)
        assert p.value() == pytest.approx(0.5)

    def test_invalid_decay_raises(self):
        with pytest.raises(ValueError):
            Parameter.exponential(1.0, 0.0, 1.5)
        with pytest.raises(ValueError):
            Parameter.exponential(1.0, 0.0, 0.0)

    def test_invalid_polynomial_and_harmonic_raise(self):
        with pytest.raises(ValueError):
            Parameter.polynomial(1.0, 0.0, 0.0)
        with pytest.raises(ValueError):
            Parameter.harmonic(1.0, 0.0, -1.0)


class TestCoercion:
    """Plain numbers become Fixed parameters."""

    def test_number_becomes_fixed(self):
        p = Parameter.coerce(0.25)
        assert isinstance(p, Fixed)
        assert p.value() == 0.25

    def test_int_becomes_fixed(self):
        assert Parameter.coerce(1).value() == 1.0

    def test_parameter_passes_through(self):
        p = Parameter.exponential(1.0, 0.0, 0.9)
        assert Parameter.coerce(p) is p

    @pytest.mark.parametrize("bad", [True, "0.1", None, [0.1]])
    def test_invalid_types_raise(self, bad):
        with pytest.raises(TypeError):
            Parameter.coerce(bad)

    def test_arithmetic(self):
        p = Parameter.fixed(0.5)
        assert float(p) == 0.5
        assert p * 4 == 2.0
        assert 4 * p == 2.0


class TestParameterBase:
    """Parameter itself is abstract."""

    def test_cannot_instantiate_base(self):
        with pytest.raises(TypeError):
            Parameter()

    def test_subclass_without_value_is_abstract(self):
        class NoValue(Parameter):
            pass

        with pytest.raises(TypeError):
            NoValue()
