"""
Two-State Chain Domain.

Smallest episodic control problem with a known answer:
- state 0, action 0: move to state 1, reward 1, episode ends
- state 0, action 1: stay in state 0, reward 0

so Q(0, 0) = 1 for any discount, and Q(0, 1) = gamma.
"""

from typing import Any

import torch

from domains.base import Domain, Observation
from domains.spaces import Ordinal


GOAL_STATE = 1
GOAL_REWARD = 1.0
STAY_REWARD = 0.0


class TwoStateChain(Domain):
    """Deterministic two-state chain; states are 1-element tensors."""

    def __init__(self, state: int = 0):
        self.state = state

    def _update_state(self, action: int) -> None:
        if not 0 <= action < 2:
            raise IndexError(f"Action {action} outside [0, 2)")
        if self.state == 0 and action == 0:
            self.state = GOAL_STATE

    def emit(self) -> Observation:
        s = torch.tensor([float(self.state)], dtype=torch.float64)

        if self.is_terminal():
            return Observation.terminal(s)
        return Observation.full(s)

    def set_state(self, state: Any) -> None:
        self.state = int(torch.as_tensor(state).reshape(-1)[0].item())

    def is_terminal(self) -> bool:
        return self.state == GOAL_STATE

    def reward(self, from_: Observation, to: Observation) -> float:
        return GOAL_REWARD if to.is_terminal and not from_.is_terminal else STAY_REWARD

    def state_space(self) -> Ordinal:
        return Ordinal(2)

    def action_space(self) -> Ordinal:
        return Ordinal(2)
