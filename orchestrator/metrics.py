"""
Metrics Collection and Aggregation.

Collects and stores per-episode results and aggregate statistics from
training and evaluation runs. Results are written as JSON per
experiment plus one JSONL line per experiment in all_results.jsonl.
"""

import json
import logging
import statistics
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, List, Optional


logger = logging.getLogger(__name__)


@dataclass
class Episode:
    """Outcome of a single episode.

    Attributes:
        steps: Number of transitions taken
        reward: Undiscounted sum of rewards
        terminated: True if the domain reached a terminal state,
                    False if the step limit cut the episode short
    """
    steps: int
    reward: float
    terminated: bool = True


@dataclass
class TrainingMetrics:
    """Metrics collected during training.

    Attributes:
        experiment_name: Name of the experiment
        algorithm: Algorithm used
        domain: Domain trained on
        total_episodes: Episodes completed
        total_steps: Transitions processed
        episode_returns: Return of every training episode
        episode_lengths: Length of every training episode
        training_time_seconds: Wall-clock training time
        timestamp: When training completed
    """
    experiment_name: str
    algorithm: str
    domain: str
    total_episodes: int = 0
    total_steps: int = 0
    episode_returns: List[float] = field(default_factory=list)
    episode_lengths: List[int] = field(default_factory=list)
    training_time_seconds: float = 0.0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @classmethod
    def from_episodes(
        cls,
        experiment_name: str,
        algorithm: str,
        domain: str,
        episodes: List[Episode],
        training_time_seconds: float = 0.0,
    ) -> "TrainingMetrics":
        return cls(
            experiment_name=experiment_name,
            algorithm=algorithm,
            domain=domain,
            total_episodes=len(episodes),
            total_steps=sum(e.steps for e in episodes),
            episode_returns=[e.reward for e in episodes],
            episode_lengths=[e.steps for e in episodes],
            training_time_seconds=training_time_seconds,
        )


@dataclass
class EvaluationMetrics:
    """Metrics from final evaluation.

    Attributes:
        experiment_name: Name of the experiment
        num_episodes: Number of evaluation episodes
        returns: Return of every episode
        avg_return: Mean return
        max_return: Maximum return
        min_return: Minimum return
        std_return: Standard deviation of returns
        median_return: Median return
        timestamp: When evaluation completed
    """
    experiment_name: str
    num_episodes: int
    returns: List[float]
    avg_return: float
    max_return: float
    min_return: float
    std_return: float
    median_return: float
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @classmethod
    def from_returns(cls, experiment_name: str, returns: List[float]) -> "EvaluationMetrics":
        """Create EvaluationMetrics from a list of episode returns.

        Args:
            experiment_name: Name of the experiment
            returns: List of episode returns

        Returns:
            EvaluationMetrics with computed statistics
        """
        if not returns:
            return cls(
                experiment_name=experiment_name,
                num_episodes=0,
                returns=[],
                avg_return=0.0,
                max_return=0.0,
                min_return=0.0,
                std_return=0.0,
                median_return=0.0,
            )

        return cls(
            experiment_name=experiment_name,
            num_episodes=len(returns),
            returns=list(returns),
            avg_return=statistics.mean(returns),
            max_return=max(returns),
            min_return=min(returns),
            std_return=statistics.stdev(returns) if len(returns) > 1 else 0.0,
            median_return=statistics.median(returns),
        )


@dataclass
class ExperimentResult:
    """Complete result of an experiment.

    Attributes:
        experiment_name: Name of the experiment
        status: "success" or "failed"
        training_metrics: Metrics from training (if successful)
        evaluation_metrics: Metrics from evaluation (if successful)
        error_message: Error message (if failed)
        checkpoint_path: Path to saved weights (if successful)
    """
    experiment_name: str
    status: str
    training_metrics: Optional[TrainingMetrics] = None
    evaluation_metrics: Optional[EvaluationMetrics] = None
    error_message: Optional[str] = None
    checkpoint_path: Optional[str] = None


class MetricsCollector:
    """Collects experiment results and saves them under results_dir.

    Attributes:
        results_dir: Base directory for storing results
        results: Dict mapping experiment names to results
    """

    def __init__(self, results_dir: str):
        self.results_dir = Path(results_dir)
        self.results: Dict[str, ExperimentResult] = {}

    def add_result(self, result: ExperimentResult) -> None:
        self.results[result.experiment_name] = result
        self._save_result(result)

    def _save_result(self, result: ExperimentResult) -> None:
        """Save a single result to its experiment directory."""
        exp_dir = self.results_dir / result.experiment_name
        exp_dir.mkdir(parents=True, exist_ok=True)

        if result.training_metrics:
            with open(exp_dir / "training_metrics.json", 'w') as f:
                json.dump(asdict(result.training_metrics), f, indent=2)

        if result.evaluation_metrics:
            with open(exp_dir / "evaluation_metrics.json", 'w') as f:
                json.dump(asdict(result.evaluation_metrics), f, indent=2)

        results_file = self.results_dir / "all_results.jsonl"
        with open(results_file, 'a') as f:
            record: Dict[str, Any] = {
                "experiment_name": result.experiment_name,
                "status": result.status,
                "error_message": result.error_message,
                "checkpoint_path": result.checkpoint_path,
                "timestamp": datetime.now().isoformat(),
            }
            if result.evaluation_metrics:
                record["avg_return"] = result.evaluation_metrics.avg_return
                record["max_return"] = result.evaluation_metrics.max_return
            f.write(json.dumps(record) + "\n")

        logger.debug(f"Saved results for {result.experiment_name} to {exp_dir}")

    def get_result(self, experiment_name: str) -> Optional[ExperimentResult]:
        return self.results.get(experiment_name)

    def get_successful_results(self) -> List[ExperimentResult]:
        return [r for r in self.results.values() if r.status == "success"]

    def get_failed_results(self) -> List[ExperimentResult]:
        return [r for r in self.results.values() if r.status == "failed"]

    def summary(self) -> str:
        """Get a human-readable summary of all results."""
        lines = ["Metrics Summary", "=" * 40]

        successful = self.get_successful_results()
        failed = self.get_failed_results()

        lines.append(f"Total experiments: {len(self.results)}")
        lines.append(f"Successful: {len(successful)}")
        lines.append(f"Failed: {len(failed)}")

        ranked = [r for r in successful if r.evaluation_metrics]
        if ranked:
            lines.append("")
            lines.append("Top performers by avg return:")
            ranked.sort(key=lambda r: r.evaluation_metrics.avg_return, reverse=True)
            for i, result in enumerate(ranked[:5], 1):
                lines.append(
                    f"  {i}. {result.experiment_name}: "
                    f"avg={result.evaluation_metrics.avg_return:.2f}, "
                    f"max={result.evaluation_metrics.max_return:.2f}"
                )

        return "\n".join(lines)
