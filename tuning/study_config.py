"""
Study Configuration.

Defines the configuration dataclass and the predefined studies for
tuning the linear agents. Each (Algorithm, Domain, Representation)
combination gets its own study.
"""

from dataclasses import dataclass
from typing import Dict

from orchestrator.config import VALID_ALGORITHMS, VALID_DOMAINS, VALID_REPRESENTATIONS


@dataclass
class StudyConfig:
    """Configuration for a single Optuna study.

    Attributes:
        study_name: Unique name for the study
        algorithm: Algorithm under tuning
        domain: Domain to train on
        representation: Feature projector type
        n_trials: Number of trials per study (default 50)
        epochs_per_trial: Reporting epochs per trial (default 20)
        episodes_per_epoch: Training episodes per epoch (default 10)
        eval_episodes_per_epoch: Evaluation episodes per epoch (default 5)
        step_limit: Maximum steps per episode (default 1000)
        n_parallel_trials: Parallel trial count (default 1)
        seed: Seed for the policies' random generator
        storage_path: SQLite storage path
    """
    study_name: str
    algorithm: str
    domain: str
    representation: str
    n_trials: int = 50
    epochs_per_trial: int = 20
    episodes_per_epoch: int = 10
    eval_episodes_per_epoch: int = 5
    step_limit: int = 1000
    n_parallel_trials: int = 1
    seed: int = 0
    storage_path: str = "sqlite:///data/optuna/linear_tuning.db"

    def __post_init__(self):
        if self.algorithm not in VALID_ALGORITHMS:
            raise ValueError(
                f"Invalid algorithm '{self.algorithm}'. "
                f"Must be one of: {sorted(VALID_ALGORITHMS)}"
            )
        if self.domain not in VALID_DOMAINS:
            raise ValueError(
                f"Invalid domain '{self.domain}'. "
                f"Must be one of: {sorted(VALID_DOMAINS)}"
            )
        if self.representation not in VALID_REPRESENTATIONS:
            raise ValueError(
                f"Invalid representation '{self.representation}'. "
                f"Must be one of: {sorted(VALID_REPRESENTATIONS)}"
            )
        if self.epochs_per_trial <= 0 or self.episodes_per_epoch <= 0:
            raise ValueError("epochs_per_trial and episodes_per_epoch must be positive")


# Mountain car with every controller on Fourier features
STUDY_CONFIGS: Dict[str, StudyConfig] = {
    f"{algo}_mountain_car_fourier": StudyConfig(
        study_name=f"{algo}_mountain_car_fourier",
        algorithm=algo,
        domain="mountain_car",
        representation="fourier",
    )
    for algo in ("q_learning", "sarsa", "q_lambda", "sarsa_lambda", "greedy_gq")
}

STUDY_CONFIGS["sarsa_lambda_mountain_car_partitions"] = StudyConfig(
    study_name="sarsa_lambda_mountain_car_partitions",
    algorithm="sarsa_lambda",
    domain="mountain_car",
    representation="partitions",
)
