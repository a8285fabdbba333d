"""
Domain Interface.

A domain is an episodic environment that emits observations and produces
one Transition per step. Transitions are immutable and are handed to a
learner exactly once.

Key invariants:
- Observation.terminal marks the end of an episode
- Transition.to is terminal iff the domain is terminal after the step
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ObservationKind(Enum):
    FULL = "full"
    PARTIAL = "partial"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class Observation:
    """A state emitted by a domain, tagged with its observability.

    Attributes:
        state: The raw state (tensor or scalar)
        kind: FULL, PARTIAL or TERMINAL
    """
    state: Any
    kind: ObservationKind = ObservationKind.FULL

    @classmethod
    def full(cls, state: Any) -> "Observation":
        return cls(state, ObservationKind.FULL)

    @classmethod
    def partial(cls, state: Any) -> "Observation":
        return cls(state, ObservationKind.PARTIAL)

    @classmethod
    def terminal(cls, state: Any) -> "Observation":
        return cls(state, ObservationKind.TERMINAL)

    @property
    def is_terminal(self) -> bool:
        return self.kind is ObservationKind.TERMINAL


@dataclass(frozen=True)
class Transition:
    """Result of a step in a domain.

    Attributes:
        from_: Observation before the action
        action: Action taken
        reward: Scalar reward received
        to: Observation after the action
    """
    from_: Observation
    action: int
    reward: float
    to: Observation

    @property
    def terminated(self) -> bool:
        return self.to.is_terminal


class Domain(ABC):
    """Abstract base class for episodic domains."""

    @abstractmethod
    def emit(self) -> Observation:
        """Return the current observation."""
        pass

    @abstractmethod
    def set_state(self, state: Any) -> None:
        pass

    @abstractmethod
    def is_terminal(self) -> bool:
        pass

    @abstractmethod
    def reward(self, from_: Observation, to: Observation) -> float:
        pass

    @abstractmethod
    def state_space(self):
        pass

    @abstractmethod
    def action_space(self):
        pass

    @abstractmethod
    def _update_state(self, action: int) -> None:
        """Apply the dynamics for one action."""
        pass

    def step(self, action: int) -> Transition:
        """Take an action and return the resulting transition."""
        from_ = self.emit()

        self._update_state(action)
        to = self.emit()
        reward = self.reward(from_, to)

        return Transition(from_=from_, action=action, reward=reward, to=to)
