"""Tests for the serial experiment driver."""

import pytest
import torch

from algorithms.base import Algorithm
from core.errors import UnimplementedCapabilityError
from core.shared import make_shared
from domains.chain import TwoStateChain
from domains.mountain_car import MountainCar
from fa.linear import ScalarLFA, VectorLFA
from orchestrator.experiment import Evaluation, SerialExperiment, run
from algorithms.gradient_mc import GradientMC
from algorithms.q_learning import QLearning
from policies.fixed import Greedy, Random
from representations.onehot import OneHotProjector


class RecordingLearner(Algorithm):
    """Online learner that records the calls it receives."""

    def __init__(self):
        self.samples = []
        self.terminals = []

    def handle_sample(self, transition):
        self.samples.append(transition)

    def handle_terminal(self, transition):
        self.terminals.append(transition)


class TestSerialExperiment:
    """Episode realisation."""

    def test_online_learner_sees_every_transition(self):
        learner = RecordingLearner()
        policy = Random(2, torch.Generator().manual_seed(0))
        experiment = SerialExperiment(learner, TwoStateChain, step_limit=100, policy=policy)

        episode = next(experiment)

        assert len(learner.samples) == episode.steps
        assert len(learner.terminals) == 1
        assert learner.terminals[0] is learner.samples[-1]
        assert episode.terminated
        assert episode.reward == 1.0

    def test_step_limit_truncates_and_still_ends_episode(self):
        learner = RecordingLearner()
        experiment = SerialExperiment(learner, MountainCar, step_limit=5, policy=Random(3))

        episode = next(experiment)

        assert episode.steps == 5
        assert not episode.terminated
        assert episode.reward == -5.0
        assert len(learner.terminals) == 1

    def test_batch_learner_gets_whole_episode(self):
        v_func = make_shared(ScalarLFA(OneHotProjector(2)))
        agent = GradientMC(v_func, alpha=1.0, gamma=1.0)
        # Random policy always eventually takes action 0 and scores 1
        experiment = SerialExperiment(
            agent, TwoStateChain, step_limit=1000,
            policy=Random(2, torch.Generator().manual_seed(2)),
        )

        episode = next(experiment)

        assert episode.terminated
        assert agent.predict_v(torch.tensor([0.0])) == pytest.approx(1.0)

    def test_prediction_agent_needs_policy(self):
        agent = GradientMC(make_shared(ScalarLFA(OneHotProjector(2))), 0.1, 1.0)
        with pytest.raises(UnimplementedCapabilityError):
            SerialExperiment(agent, TwoStateChain, step_limit=10)

    def test_non_learner_rejected(self):
        with pytest.raises(UnimplementedCapabilityError):
            SerialExperiment(object(), TwoStateChain, step_limit=10, policy=Random(2))

    def test_invalid_step_limit(self):
        with pytest.raises(ValueError):
            SerialExperiment(RecordingLearner(), TwoStateChain, step_limit=0, policy=Random(2))

    def test_run_collects_episodes(self):
        experiment = SerialExperiment(
            RecordingLearner(), TwoStateChain, step_limit=50, policy=Random(2)
        )
        episodes = run(experiment, 4, log_every=2)
        assert len(episodes) == 4


class TestEvaluation:
    """Target-policy rollouts without learning."""

    def test_controller_uses_target_policy(self):
        q_func = make_shared(VectorLFA(OneHotProjector(2), 2))
        with q_func.borrow_mut() as q:
            q.update_action(0, 0, 1.0)
        agent = QLearning(q_func, Random(2))

        episodes = run(Evaluation(agent, TwoStateChain, step_limit=10), 3)

        assert [e.steps for e in episodes] == [1, 1, 1]
        with q_func.borrow() as q:
            assert q.weights().tolist() == [[1.0, 0.0], [0.0, 0.0]]

    def test_explicit_policy(self):
        q_func = make_shared(VectorLFA(OneHotProjector(2), 2))
        with q_func.borrow_mut() as q:
            q.update_action(0, 1, 1.0)
        evaluation = Evaluation(object(), TwoStateChain, step_limit=7, policy=Greedy(q_func))

        episode = next(evaluation)

        assert episode.steps == 7
        assert not episode.terminated

    def test_needs_policy_or_controller(self):
        with pytest.raises(UnimplementedCapabilityError):
            Evaluation(object(), TwoStateChain, step_limit=10)
