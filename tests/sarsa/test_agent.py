"""Tests for the SARSA agent."""

import pytest
import torch

from algorithms.sarsa import SARSA
from policies.fixed import Greedy, Random


class TestSARSA:
    """On-policy one-step update."""

    def test_target_uses_sampled_action(self, tabular_q, make_transition):
        with tabular_q.borrow_mut() as q:
            q.update_action(1, 0, 0.5)
            q.update_action(1, 1, 2.0)

        gen = torch.Generator().manual_seed(1)
        agent = SARSA(tabular_q, Random(2, gen), alpha=0.1, gamma=0.9)
        agent.handle_sample(make_transition(0, 1, 1.0, 1))

        na = agent.sample_behaviour(torch.tensor([1.0]))
        nq = [0.5, 2.0][na]
        expected = 0.1 * (1.0 + 0.9 * nq)
        assert agent.predict_qsa(torch.tensor([0.0]), 1) == pytest.approx(expected)

    def test_next_action_cached_once(self, tabular_q, make_transition):
        agent = SARSA(tabular_q, Random(2, torch.Generator().manual_seed(0)))
        agent.handle_sample(make_transition(0, 1, 0.0, 0))

        cached = agent._next_action
        assert cached is not None
        assert agent.sample_behaviour(torch.tensor([0.0])) == cached
        assert agent._next_action is None

    def test_no_cache_after_terminal(self, tabular_q, make_transition):
        agent = SARSA(tabular_q, Greedy(tabular_q))
        t = make_transition(0, 0, 1.0, 1, terminal=True)
        agent.handle_sample(t)
        assert agent._next_action is None

        agent.handle_terminal(t)
        assert agent.sample_behaviour(torch.tensor([0.0])) == 0

    def test_handle_returns_cached_action(self, tabular_q, make_transition):
        agent = SARSA(tabular_q, Random(2, torch.Generator().manual_seed(4)))
        t = make_transition(0, 1, 0.0, 0)
        agent.handle_sample(t)
        cached = agent._next_action

        agent2 = SARSA(tabular_q, Random(2, torch.Generator().manual_seed(4)))
        assert agent2.handle(t) == cached

    def test_other_state_is_sampled_afresh(self, tabular_q, make_transition):
        """The cached a' only answers a query for the successor state."""
        with tabular_q.borrow_mut() as q:
            q.update_action(0, 0, 5.0)
            q.update_action(1, 1, 5.0)

        agent = SARSA(tabular_q, Greedy(tabular_q))
        agent.handle_sample(make_transition(0, 0, 0.0, 1))
        assert agent._next_action == 1

        assert agent.sample_behaviour(torch.tensor([0.0])) == 0
        assert agent._next_action is None

    def test_mismatched_query_drops_cache(self, tabular_q, make_transition):
        with tabular_q.borrow_mut() as q:
            q.update_action(1, 1, 5.0)

        agent = SARSA(tabular_q, Greedy(tabular_q))
        agent.handle_sample(make_transition(0, 0, 0.0, 1))

        agent.sample_behaviour(torch.tensor([0.0]))
        assert agent._next_state is None
        assert agent.sample_behaviour(torch.tensor([1.0])) == 1
