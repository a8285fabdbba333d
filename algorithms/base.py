"""
Algorithm capability interfaces.

Agents implement any subset of these orthogonal capabilities:
- Algorithm: online learning from one transition at a time
- BatchLearner: learning from a whole episode (or any ordered batch)
- Controller: separate target and behaviour action selection
- ValuePredictor / ActionValuePredictor: read-only value queries
- Parameterised: access to learned weights

Callers look up what an agent supports with capabilities(agent) and
branch on it; require() raises UnimplementedCapabilityError for a
capability the agent lacks.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, FrozenSet, Sequence

from torch import Tensor

from core.errors import UnimplementedCapabilityError
from domains.base import Transition


class Algorithm(ABC):
    """Online learner updated once per environment step."""

    @abstractmethod
    def handle_sample(self, transition: Transition) -> None:
        """Perform one online update from a single transition."""
        pass

    @abstractmethod
    def handle_terminal(self, transition: Transition) -> None:
        """End-of-episode bookkeeping: step schedules, reset traces."""
        pass


class BatchLearner(ABC):
    """Learner that needs a full, temporally ordered batch of transitions."""

    @abstractmethod
    def handle_batch(self, batch: Sequence[Transition]) -> None:
        pass

    @abstractmethod
    def handle_terminal(self, transition: Transition) -> None:
        pass


class Controller(ABC):
    """Agent that selects actions."""

    @abstractmethod
    def sample_target(self, state: Any) -> int:
        """Action of the policy being learned about."""
        pass

    @abstractmethod
    def sample_behaviour(self, state: Any) -> int:
        """Action to execute in the environment."""
        pass


class ValuePredictor(ABC):

    @abstractmethod
    def predict_v(self, state: Any) -> float:
        pass


class ActionValuePredictor(ABC):

    @abstractmethod
    def predict_qs(self, state: Any) -> Tensor:
        pass

    @abstractmethod
    def predict_qsa(self, state: Any, action: int) -> float:
        pass


class Predictor(ValuePredictor, ActionValuePredictor):
    """Both state-value and action-value queries."""
    pass


class Parameterised(ABC):

    @abstractmethod
    def weights(self) -> Tensor:
        pass


class Capability(Enum):
    ONLINE = "online"
    BATCH = "batch"
    CONTROL = "control"
    VALUE_PREDICTION = "value_prediction"
    ACTION_VALUE_PREDICTION = "action_value_prediction"
    PARAMETERISED = "parameterised"


_CAPABILITY_TYPES = {
    Capability.ONLINE: Algorithm,
    Capability.BATCH: BatchLearner,
    Capability.CONTROL: Controller,
    Capability.VALUE_PREDICTION: ValuePredictor,
    Capability.ACTION_VALUE_PREDICTION: ActionValuePredictor,
    Capability.PARAMETERISED: Parameterised,
}


def capabilities(agent: object) -> FrozenSet[Capability]:
    """Return the set of capabilities an agent implements."""
    return frozenset(
        cap for cap, iface in _CAPABILITY_TYPES.items() if isinstance(agent, iface)
    )


def require(agent: object, capability: Capability) -> None:
    """Raise UnimplementedCapabilityError unless agent has the capability."""
    if capability not in capabilities(agent):
        raise UnimplementedCapabilityError(agent, capability.value)
