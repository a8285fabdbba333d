"""Tests for the Watkins' Q(lambda) agent."""

import pytest
import torch

from algorithms.q_lambda import QLambda
from core.errors import DimensionMismatchError
from core.parameter import Parameter
from core.trace import Trace
from policies.fixed import Random


class TestQLambdaTrace:
    """Trace decay, cutting and reset."""

    def test_greedy_action_decays_trace(self, tabular_q, make_transition):
        agent = QLambda(tabular_q, Random(2), Trace.accumulating(0.5), alpha=0.1, gamma=1.0)

        # Zero rewards over zero weights: action 0 stays greedy everywhere
        agent.handle_sample(make_transition(0, 0, 0.0, 1))
        agent.handle_sample(make_transition(1, 0, 0.0, 0))

        assert agent.trace.get().tolist() == pytest.approx([0.5, 1.0])

    def test_exploratory_action_cuts_trace(self, tabular_q, make_transition):
        agent = QLambda(tabular_q, Random(2), Trace.accumulating(0.9), alpha=0.1, gamma=1.0)

        agent.handle_sample(make_transition(0, 0, 0.0, 1))
        agent.handle_sample(make_transition(1, 1, 0.0, 0))

        # The trace equals phi(s) of the exploratory step alone
        assert agent.trace.get().tolist() == [0.0, 1.0]

    def test_credit_flows_back_along_trace(self, tabular_q, make_transition):
        agent = QLambda(tabular_q, Random(2), Trace.accumulating(1.0), alpha=1.0, gamma=1.0)

        agent.handle_sample(make_transition(0, 0, 0.0, 1))
        agent.handle_sample(make_transition(1, 0, 1.0, 0, terminal=True))

        # delta = 1 on the final step; the trace still holds state 0
        assert agent.predict_qsa(torch.tensor([0.0]), 0) == pytest.approx(1.0)
        assert agent.predict_qsa(torch.tensor([1.0]), 0) == pytest.approx(1.0)

    def test_terminal_resets_trace_and_steps_schedules(self, tabular_q, make_transition):
        agent = QLambda(
            tabular_q,
            Random(2),
            Trace.accumulating(Parameter.exponential(1.0, 0.0, 0.5)),
            alpha=Parameter.exponential(1.0, 0.0, 0.5),
            gamma=0.9,
        )
        t = make_transition(0, 0, 0.0, 1, terminal=True)
        agent.handle_sample(t)
        agent.handle_terminal(t)

        assert agent.trace.get().tolist() == [0.0, 0.0]
        assert agent.trace.lambda_.value() == pytest.approx(0.5)
        assert agent.alpha.value() == pytest.approx(0.5)

    def test_trace_dimension_checked(self, tabular_q):
        with pytest.raises(DimensionMismatchError):
            QLambda(tabular_q, Random(2), Trace.accumulating(0.5, dim=5), 0.1, 0.9)

    def test_policy_action_count_checked(self, tabular_q):
        with pytest.raises(DimensionMismatchError):
            QLambda(tabular_q, Random(3), Trace.accumulating(0.5), 0.1, 0.9)
