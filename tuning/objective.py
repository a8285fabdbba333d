"""
Optuna Objective Function.

Implements the training objective for linear agent hyperparameter tuning.
Training is split into epochs; the mean evaluation return after each
epoch is reported to optuna so the pruner can stop weak trials early.
"""

import logging
import statistics
from typing import Callable

import optuna
from optuna import Trial

from orchestrator.config import ExperimentConfig
from orchestrator.experiment import Evaluation, SerialExperiment, run
from orchestrator.factory import AgentSetup, build_agent
from tuning.search_spaces import suggest_hyperparams
from tuning.study_config import StudyConfig


logger = logging.getLogger(__name__)


def create_objective(config: StudyConfig) -> Callable[[Trial], float]:
    """Create Optuna objective function for a study.

    Args:
        config: Study configuration

    Returns:
        Objective function that takes a Trial and returns float (avg return)
    """

    def objective(trial: Trial) -> float:
        params = suggest_hyperparams(trial, config.algorithm, config.representation)

        exp = ExperimentConfig(
            name=f"{config.study_name}_trial_{trial.number}",
            algorithm=config.algorithm,
            domain=config.domain,
            representation=config.representation,
            episodes=config.episodes_per_epoch,
            eval_episodes=config.eval_episodes_per_epoch,
            step_limit=config.step_limit,
            hyperparameters=params,
            seed=config.seed + trial.number,
        )
        setup = build_agent(exp)

        experiment = SerialExperiment(
            setup.agent, setup.domain_factory, config.step_limit, policy=setup.policy
        )

        score = 0.0
        for epoch in range(config.epochs_per_trial):
            run(experiment, config.episodes_per_epoch)

            score = _quick_eval(setup, config.step_limit, config.eval_episodes_per_epoch)
            logger.debug(f"trial {trial.number} epoch {epoch}: eval return {score:.2f}")

            # Report to Optuna for pruning
            trial.report(score, epoch)

            if trial.should_prune():
                raise optuna.TrialPruned()

        return score

    return objective


def _quick_eval(setup: AgentSetup, step_limit: int, num_episodes: int) -> float:
    """Average return of the agent's target policy over num_episodes."""
    if num_episodes <= 0:
        return 0.0

    evaluation = Evaluation(
        setup.agent, setup.domain_factory, step_limit, policy=setup.policy
    )
    returns = [e.reward for e in run(evaluation, num_episodes)]
    return statistics.mean(returns)
