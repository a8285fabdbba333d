"""
Experiment Runner.

Builds, trains, evaluates and checkpoints the agents of an
OrchestratorConfig, one experiment after another. A failing experiment
is recorded with its diagnostic and does not stop the others.
"""

import logging
import time
import traceback
from pathlib import Path
from typing import List

from orchestrator.config import ExperimentConfig, OrchestratorConfig
from orchestrator.experiment import Evaluation, SerialExperiment, run
from orchestrator.factory import build_agent
from orchestrator.metrics import (
    EvaluationMetrics,
    ExperimentResult,
    MetricsCollector,
    TrainingMetrics,
)


logger = logging.getLogger(__name__)


class ExperimentRunner:
    """Runs and manages training experiments.

    Attributes:
        config: Orchestrator configuration
        metrics_collector: Collector for experiment results
    """

    def __init__(self, config: OrchestratorConfig):
        self.config = config
        self.metrics_collector = MetricsCollector(config.results_dir)

        Path(config.results_dir).mkdir(parents=True, exist_ok=True)

    def _train_and_evaluate(self, exp: ExperimentConfig) -> ExperimentResult:
        setup = build_agent(exp)

        experiment = SerialExperiment(
            setup.agent, setup.domain_factory, exp.step_limit, policy=setup.policy
        )

        start_time = time.time()
        episodes = run(experiment, exp.episodes, log_every=self.config.log_every)
        training_time = time.time() - start_time

        training_metrics = TrainingMetrics.from_episodes(
            experiment_name=exp.name,
            algorithm=exp.algorithm,
            domain=exp.domain,
            episodes=episodes,
            training_time_seconds=training_time,
        )

        evaluation_metrics = None
        if exp.eval_episodes > 0:
            evaluation = Evaluation(
                setup.agent, setup.domain_factory, exp.step_limit, policy=setup.policy
            )
            eval_episodes = run(evaluation, exp.eval_episodes)
            evaluation_metrics = EvaluationMetrics.from_returns(
                experiment_name=exp.name,
                returns=[e.reward for e in eval_episodes],
            )

        checkpoint_dir = exp.get_checkpoint_dir(self.config.results_path)
        checkpoint_dir.mkdir(parents=True, exist_ok=True)
        checkpoint_path = checkpoint_dir / "weights_final.pt"
        with setup.approximator.borrow() as fa:
            fa.save(checkpoint_path)

        return ExperimentResult(
            experiment_name=exp.name,
            status="success",
            training_metrics=training_metrics,
            evaluation_metrics=evaluation_metrics,
            checkpoint_path=str(checkpoint_path),
        )

    def run_experiment(self, exp: ExperimentConfig) -> ExperimentResult:
        """Run a single experiment.

        Args:
            exp: Experiment configuration

        Returns:
            ExperimentResult with training and evaluation metrics
        """
        logger.info(
            f"Starting experiment {exp.name}: algorithm={exp.algorithm} "
            f"domain={exp.domain} representation={exp.representation}"
        )

        try:
            result = self._train_and_evaluate(exp)
        except Exception as e:
            logger.error(f"Experiment {exp.name} failed: {type(e).__name__}: {e}")
            result = ExperimentResult(
                experiment_name=exp.name,
                status="failed",
                error_message=f"{type(e).__name__}: {e}\n{traceback.format_exc()}",
            )

        self.metrics_collector.add_result(result)

        if result.status == "success" and result.evaluation_metrics:
            logger.info(
                f"Experiment {exp.name} completed: "
                f"avg return {result.evaluation_metrics.avg_return:.2f}, "
                f"max return {result.evaluation_metrics.max_return:.2f}"
            )

        return result

    def run_all(self) -> List[ExperimentResult]:
        """Run all experiments in configuration sequentially."""
        experiments = self.config.experiments
        logger.info(
            f"Starting orchestrator run with {len(experiments)} experiments "
            f"(results in {self.config.results_dir})"
        )

        results = [self.run_experiment(exp) for exp in experiments]

        successful = sum(1 for r in results if r.status == "success")
        logger.info(
            f"Orchestrator run complete: {successful} successful, "
            f"{len(results) - successful} failed"
        )

        return results

    def get_results(self) -> List[ExperimentResult]:
        return list(self.metrics_collector.results.values())
