"""
Mountain Car Domain.

An under-powered car must reach the top of the right-hand hill; gravity
beats the engine, so it first has to drive up the opposite slope to build
momentum.

State: tensor [position, velocity]

| Index | Name     | Min   | Max   |
| ----- | -------- | ----- | ----- |
| 0     | Position | -1.2  | 0.6   |
| 1     | Velocity | -0.07 | 0.07  |

Actions: 0 = reverse, 1 = coast, 2 = forward.
Reward: -1 per step, 0 on reaching the goal.

References:
- Moore, A. W. (1990). Efficient memory-based learning for robot control.
- Singh, S. P., & Sutton, R. S. (1996). Reinforcement learning with
  replacing eligibility traces.
"""

import math
from typing import Any

import torch

from domains.base import Domain, Observation
from domains.spaces import Interval, LinearSpace, Ordinal


X_MIN = -1.2
X_MAX = 0.6

V_MIN = -0.07
V_MAX = 0.07

FORCE_G = -0.0025
FORCE_CAR = 0.001

HILL_FREQ = 3.0

REWARD_STEP = -1.0
REWARD_GOAL = 0.0

ALL_ACTIONS = (-1.0, 0.0, 1.0)


def _clip(lo: float, x: float, hi: float) -> float:
    return min(max(x, lo), hi)


class MountainCar(Domain):
    """Classic mountain car testing domain."""

    def __init__(self, x: float = -0.5, v: float = 0.0):
        self.x = x
        self.v = v

    @staticmethod
    def dv(x: float, a: float) -> float:
        return FORCE_CAR * a + FORCE_G * math.cos(HILL_FREQ * x)

    def _update_state(self, action: int) -> None:
        a = ALL_ACTIONS[action]

        self.v = _clip(V_MIN, self.v + self.dv(self.x, a), V_MAX)
        self.x = _clip(X_MIN, self.x + self.v, X_MAX)

    def emit(self) -> Observation:
        s = torch.tensor([self.x, self.v], dtype=torch.float64)

        if self.is_terminal():
            return Observation.terminal(s)
        return Observation.full(s)

    def set_state(self, state: Any) -> None:
        state = torch.as_tensor(state, dtype=torch.float64)
        self.x = float(state[0])
        self.v = float(state[1])

    def is_terminal(self) -> bool:
        return self.x >= X_MAX

    def reward(self, from_: Observation, to: Observation) -> float:
        return REWARD_GOAL if to.is_terminal else REWARD_STEP

    def state_space(self) -> LinearSpace:
        return LinearSpace() + Interval(X_MIN, X_MAX) + Interval(V_MIN, V_MAX)

    def action_space(self) -> Ordinal:
        return Ordinal(len(ALL_ACTIONS))
