"""
Root pytest configuration for the linear RL project tests.

This module provides shared markers and fixtures for all tests.
"""

import pytest
import torch

from core.shared import make_shared
from domains.base import Observation, Transition
from fa.linear import ScalarLFA, VectorLFA
from representations.onehot import OneHotProjector


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow-running"
    )


@pytest.fixture
def make_transition():
    """Build a Transition between discrete states.

    Usage: make_transition(from_state, action, reward, to_state, terminal=False)
    """

    def _make(s, a, r, ns, terminal=False):
        to_state = torch.tensor([float(ns)], dtype=torch.float64)
        to = Observation.terminal(to_state) if terminal else Observation.full(to_state)
        return Transition(
            from_=Observation.full(torch.tensor([float(s)], dtype=torch.float64)),
            action=a,
            reward=r,
            to=to,
        )

    return _make


@pytest.fixture
def tabular_q():
    """Shared tabular action-value function: 2 states, 2 actions."""
    return make_shared(VectorLFA(OneHotProjector(2), 2))


@pytest.fixture
def tabular_v():
    """Shared tabular state-value function over 2 states."""
    return make_shared(ScalarLFA(OneHotProjector(2)))
