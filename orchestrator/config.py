"""
Experiment Configuration.

Defines configuration dataclasses for orchestrator experiments and their
YAML round-trip. An experiment is an (Algorithm, Domain, Representation)
combination plus hyperparameters.

Hyperparameters that may decay (alpha, beta, gamma, lambda, epsilon) are
either plain numbers or schedule mappings, e.g.

    epsilon: {schedule: exponential, init: 0.3, final: 0.001, decay: 0.99}
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

import yaml

from core.parameter import Parameter


VALID_ALGORITHMS = frozenset([
    "q_learning",
    "sarsa",
    "q_lambda",
    "sarsa_lambda",
    "greedy_gq",
    "gradient_mc",
])

VALID_DOMAINS = frozenset(["mountain_car", "two_state_chain"])

VALID_REPRESENTATIONS = frozenset(["onehot", "partitions", "fourier"])

VALID_SCHEDULES = frozenset(["fixed", "exponential", "polynomial", "harmonic"])


@dataclass
class ExperimentConfig:
    """Configuration for a single training experiment.

    Attributes:
        name: Unique experiment identifier
        algorithm: Algorithm name (maps to algorithms/<name>/)
        domain: Domain name
        representation: Feature projector type
        episodes: Number of training episodes
        eval_episodes: Number of evaluation episodes after training
        step_limit: Maximum steps per episode
        hyperparameters: Optional override for algorithm hyperparameters
        seed: Optional seed for the policies' random generator
        checkpoint_dir: Where to save weights (relative to results_dir)
    """
    name: str
    algorithm: str
    domain: str
    representation: str
    episodes: int = 100
    eval_episodes: int = 10
    step_limit: int = 1000
    hyperparameters: Optional[Dict[str, Any]] = None
    seed: Optional[int] = None
    checkpoint_dir: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
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
        if self.episodes <= 0:
            raise ValueError("episodes must be positive")
        if self.eval_episodes < 0:
            raise ValueError("eval_episodes must be non-negative")
        if self.step_limit <= 0:
            raise ValueError("step_limit must be positive")

    def get_checkpoint_dir(self, results_dir: Path) -> Path:
        """Get the full checkpoint directory path."""
        if self.checkpoint_dir:
            return results_dir / self.checkpoint_dir
        return results_dir / self.name / "checkpoints"

    def to_dict(self) -> Dict[str, Any]:
        exp_dict: Dict[str, Any] = {
            "name": self.name,
            "algorithm": self.algorithm,
            "domain": self.domain,
            "representation": self.representation,
            "episodes": self.episodes,
            "eval_episodes": self.eval_episodes,
            "step_limit": self.step_limit,
        }
        if self.hyperparameters:
            exp_dict["hyperparameters"] = self.hyperparameters
        if self.seed is not None:
            exp_dict["seed"] = self.seed
        if self.checkpoint_dir:
            exp_dict["checkpoint_dir"] = self.checkpoint_dir
        return exp_dict


@dataclass
class OrchestratorConfig:
    """Configuration for the experiment orchestrator.

    Attributes:
        experiments: List of experiment configurations
        results_dir: Base directory for all results
        log_every: Log training progress every N episodes (0 = never)
    """
    experiments: List[ExperimentConfig]
    results_dir: str = "results"
    log_every: int = 0

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.experiments:
            raise ValueError("At least one experiment must be defined")
        if self.log_every < 0:
            raise ValueError("log_every must be non-negative")

        names = [exp.name for exp in self.experiments]
        if len(names) != len(set(names)):
            raise ValueError("Experiment names must be unique")

    @property
    def results_path(self) -> Path:
        return Path(self.results_dir)


def parse_parameter(value: Union[Dict[str, Any], float, int]) -> Parameter:
    """Build a Parameter from a config value.

    Args:
        value: A number, or a mapping with a `schedule` key and its arguments

    Returns:
        Parameter instance

    Raises:
        ValueError: If the schedule is unknown or its arguments are missing
    """
    if not isinstance(value, dict):
        return Parameter.coerce(value)

    schedule = value.get("schedule", "fixed")
    if schedule not in VALID_SCHEDULES:
        raise ValueError(
            f"Invalid schedule '{schedule}'. Must be one of: {sorted(VALID_SCHEDULES)}"
        )

    try:
        if schedule == "fixed":
            return Parameter.fixed(value["value"])
        elif schedule == "exponential":
            return Parameter.exponential(value["init"], value["final"], value["decay"])
        elif schedule == "polynomial":
            return Parameter.polynomial(value["init"], value["final"], value["exponent"])
        else:
            return Parameter.harmonic(value["init"], value["final"], value["scale"])
    except KeyError as e:
        raise ValueError(f"Schedule '{schedule}' is missing argument {e}") from e


def load_config(config_path: str) -> OrchestratorConfig:
    """Load orchestrator configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        OrchestratorConfig with all experiment definitions

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        raw = yaml.safe_load(f)

    if raw is None:
        raise ValueError("Config file is empty")

    raw_experiments = raw.get("experiments", [])
    if not raw_experiments:
        raise ValueError("No experiments defined in config")

    experiments = []
    for exp_dict in raw_experiments:
        try:
            exp = ExperimentConfig(
                name=exp_dict["name"],
                algorithm=exp_dict["algorithm"],
                domain=exp_dict["domain"],
                representation=exp_dict["representation"],
                episodes=exp_dict.get("episodes", 100),
                eval_episodes=exp_dict.get("eval_episodes", 10),
                step_limit=exp_dict.get("step_limit", 1000),
                hyperparameters=exp_dict.get("hyperparameters"),
                seed=exp_dict.get("seed"),
                checkpoint_dir=exp_dict.get("checkpoint_dir"),
            )
        except KeyError as e:
            raise ValueError(f"Experiment is missing required field {e}") from e
        experiments.append(exp)

    orch_settings = raw.get("orchestrator", {})

    return OrchestratorConfig(
        experiments=experiments,
        results_dir=orch_settings.get("results_dir", "results"),
        log_every=orch_settings.get("log_every", 0),
    )


def save_config(config: OrchestratorConfig, config_path: str) -> None:
    """Save orchestrator configuration to YAML file."""
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    output = {
        "orchestrator": {
            "results_dir": config.results_dir,
            "log_every": config.log_every,
        },
        "experiments": [exp.to_dict() for exp in config.experiments],
    }

    with open(path, 'w') as f:
        yaml.dump(output, f, default_flow_style=False, sort_keys=False)


def create_quick_config(
    algorithms: List[str],
    domains: List[str],
    representations: List[str],
    episodes: int = 100,
    eval_episodes: int = 10,
    results_dir: str = "results",
) -> OrchestratorConfig:
    """Create a configuration covering every combination of the inputs."""
    experiments = []
    for algo in algorithms:
        for domain in domains:
            for repr_type in representations:
                experiments.append(ExperimentConfig(
                    name=f"{algo}_{domain}_{repr_type}",
                    algorithm=algo,
                    domain=domain,
                    representation=repr_type,
                    episodes=episodes,
                    eval_episodes=eval_episodes,
                ))

    return OrchestratorConfig(experiments=experiments, results_dir=results_dir)
