"""
Hyperparameter Schedules.

A Parameter is an immutable scalar (learning rate, discount, trace decay,
exploration rate) that optionally follows a schedule across episodes.
Stepping never mutates: step() returns the next Parameter and the owner
replaces its stored value.

Schedules move monotonically from `init` toward `final` and are clamped
so they never overshoot it:
- Fixed: constant
- Exponential: final + (init - final) * decay^n
- Polynomial: final + (init - final) / (n + 1)^exponent
- GeneralisedHarmonic: final + (init - final) * scale / (scale + n)
"""

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union


Number = Union[int, float]


def _clamp_toward(value: float, init: float, final: float) -> float:
    """Clamp a scheduled value to the closed interval between init and final."""
    lo, hi = min(init, final), max(init, final)
    return min(max(value, lo), hi)


class Parameter(ABC):
    """Base class for all schedules.

    Subclasses are frozen dataclasses implementing value().
    """

    count: int = 0

    @abstractmethod
    def value(self) -> float:
        """Return the current value of the schedule."""
        pass

    def step(self) -> "Parameter":
        """Return the parameter one episode further along its schedule."""
        return dataclasses.replace(self, count=self.count + 1)

    @staticmethod
    def fixed(value: Number) -> "Fixed":
        return Fixed(float(value))

    @staticmethod
    def exponential(init: Number, final: Number, decay: Number) -> "Exponential":
        return Exponential(float(init), float(final), float(decay))

    @staticmethod
    def polynomial(init: Number, final: Number, exponent: Number) -> "Polynomial":
        return Polynomial(float(init), float(final), float(exponent))

    @staticmethod
    def harmonic(init: Number, final: Number, scale: Number) -> "GeneralisedHarmonic":
        return GeneralisedHarmonic(float(init), float(final), float(scale))

    @staticmethod
    def coerce(value: Union["Parameter", Number]) -> "Parameter":
        """Turn a plain number into a Fixed parameter; pass schedules through.

        Args:
            value: A Parameter or a number

        Returns:
            A Parameter instance

        Raises:
            TypeError: If value is neither a Parameter nor a number
        """
        if isinstance(value, Parameter):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return Fixed(float(value))
        raise TypeError(f"Cannot build a Parameter from {type(value).__name__}")

    def __float__(self) -> float:
        return self.value()

    def __mul__(self, other: Number) -> float:
        return self.value() * float(other)

    def __rmul__(self, other: Number) -> float:
        return float(other) * self.value()


@dataclass(frozen=True)
class Fixed(Parameter):
    """Constant parameter; stepping only advances the counter."""

    constant: float
    count: int = 0

    def value(self) -> float:
        return self.constant


@dataclass(frozen=True)
class Exponential(Parameter):
    """Exponential decay from init toward final.

    The gap to final shrinks geometrically, final + (init - final) * decay^n,
    rather than the multiplicative init * decay^n floored at final. The value
    approaches final smoothly instead of reaching it after finitely many
    steps, and it also schedules toward a final of 0 or above init.

    Attributes:
        init: Value at count 0
        final: Asymptote, never overshot
        decay: Per-step rate in (0, 1]
    """

    init: float
    final: float
    decay: float
    count: int = 0

    def __post_init__(self):
        if not 0.0 < self.decay <= 1.0:
            raise ValueError(f"decay must be in (0, 1], got {self.decay}")

    def value(self) -> float:
        v = self.final + (self.init - self.final) * self.decay ** self.count
        return _clamp_toward(v, self.init, self.final)


@dataclass(frozen=True)
class Polynomial(Parameter):
    """Polynomial decay: the gap to final shrinks as (n + 1)^-exponent."""

    init: float
    final: float
    exponent: float
    count: int = 0

    def __post_init__(self):
        if self.exponent <= 0.0:
            raise ValueError(f"exponent must be positive, got {self.exponent}")

    def value(self) -> float:
        v = self.final + (self.init - self.final) / (self.count + 1) ** self.exponent
        return _clamp_toward(v, self.init, self.final)


@dataclass(frozen=True)
class GeneralisedHarmonic(Parameter):
    """Harmonic decay: the gap to final shrinks as scale / (scale + n)."""

    init: float
    final: float
    scale: float
    count: int = 0

    def __post_init__(self):
        if self.scale <= 0.0:
            raise ValueError(f"scale must be positive, got {self.scale}")

    def value(self) -> float:
        v = self.final + (self.init - self.final) * self.scale / (self.scale + self.count)
        return _clamp_toward(v, self.init, self.final)
