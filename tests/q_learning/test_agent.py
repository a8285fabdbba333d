"""Tests for the Q-learning agent."""

import pytest
import torch

from algorithms.base import Capability, capabilities
from algorithms.q_learning import QLearning
from core.errors import BorrowConflictError
from core.shared import make_shared
from domains.chain import TwoStateChain
from fa.linear import VectorLFA
from orchestrator.experiment import SerialExperiment, run
from policies.fixed import EpsilonGreedy, Greedy, Random
from representations.onehot import OneHotProjector


class TestQLearningUpdate:
    """One-step update arithmetic."""

    def test_hand_computed_update(self, tabular_q, make_transition):
        with tabular_q.borrow_mut() as q:
            q.update_action(1, 0, 0.5)
            q.update_action(1, 1, 2.0)

        agent = QLearning(tabular_q, Random(2), alpha=0.1, gamma=0.9)
        agent.handle_sample(make_transition(0, 1, 1.0, 1))

        # delta = 1 + 0.9 * max(0.5, 2.0) - 0 = 2.8
        assert agent.predict_qsa(torch.tensor([0.0]), 1) == pytest.approx(0.28)
        assert agent.predict_qsa(torch.tensor([0.0]), 0) == 0.0
        assert agent.predict_qs(torch.tensor([1.0])).tolist() == [0.5, 2.0]

    def test_terminal_next_value_is_zero(self, tabular_q, make_transition):
        with tabular_q.borrow_mut() as q:
            q.update_action(1, 0, 10.0)

        agent = QLearning(tabular_q, Random(2), alpha=0.5, gamma=0.9)
        agent.handle_sample(make_transition(0, 0, 1.0, 1, terminal=True))

        assert agent.predict_qsa(torch.tensor([0.0]), 0) == pytest.approx(0.5)

    def test_handle_returns_next_action(self, tabular_q, make_transition):
        agent = QLearning(tabular_q, Greedy(tabular_q))
        action = agent.handle(make_transition(0, 1, 0.0, 0))
        assert action in (0, 1)

    def test_update_rejected_while_borrowed(self, tabular_q, make_transition):
        agent = QLearning(tabular_q, Random(2))
        with tabular_q.borrow():
            with pytest.raises(BorrowConflictError):
                agent.handle_sample(make_transition(0, 0, 1.0, 1))

    def test_capabilities(self, tabular_q):
        caps = capabilities(QLearning(tabular_q, Random(2)))
        assert caps == {
            Capability.ONLINE,
            Capability.CONTROL,
            Capability.VALUE_PREDICTION,
            Capability.ACTION_VALUE_PREDICTION,
            Capability.PARAMETERISED,
        }


class TestQLearningControl:
    """End-to-end learning on the two-state chain."""

    def test_learns_goal_value(self):
        q_func = make_shared(VectorLFA(OneHotProjector(2), 2))
        gen = torch.Generator().manual_seed(7)
        policy = EpsilonGreedy(Greedy(q_func), Random(2, gen), 0.1, gen)
        agent = QLearning(q_func, policy, alpha=0.1, gamma=0.9)

        experiment = SerialExperiment(agent, TwoStateChain, step_limit=1000)
        episodes = run(experiment, 50)

        assert all(e.terminated for e in episodes)
        assert agent.predict_qsa(torch.tensor([0.0]), 0) == pytest.approx(1.0, abs=0.05)
        assert agent.sample_target(torch.tensor([0.0])) == 0
