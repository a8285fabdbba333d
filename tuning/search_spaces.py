"""
Hyperparameter Search Spaces.

Defines search spaces for the tunable parameters of the linear agents.
Values are emitted in the hyperparameter format ExperimentConfig accepts,
so a suggested set can be handed straight to the agent factory.
"""

from optuna import Trial
from typing import Dict, Any, Optional


TRACE_ALGORITHMS = frozenset(["q_lambda", "sarsa_lambda"])
CONTROL_ALGORITHMS = frozenset([
    "q_learning", "sarsa", "q_lambda", "sarsa_lambda", "greedy_gq",
])


def suggest_hyperparams(
    trial: Trial,
    algorithm: str,
    representation: Optional[str] = None,
) -> Dict[str, Any]:
    """Suggest all hyperparameters for a trial.

    Args:
        trial: Optuna trial object
        algorithm: Algorithm name (q_learning, sarsa, q_lambda, ...)
        representation: Representation type, for projector-specific parameters

    Returns:
        Dictionary of hyperparameter values
    """
    params: Dict[str, Any] = {}

    # ===================
    # Learning Rates
    # ===================
    params["alpha"] = trial.suggest_float("alpha", 1e-3, 0.5, log=True)
    params["gamma"] = trial.suggest_float("gamma", 0.9, 0.999)

    if algorithm == "greedy_gq":
        params["beta"] = trial.suggest_float("beta", 1e-4, 0.1, log=True)

    # ===================
    # Exploration Schedule
    # ===================
    if algorithm in CONTROL_ALGORITHMS:
        params["epsilon"] = {
            "schedule": "exponential",
            "init": trial.suggest_float("epsilon_init", 0.05, 1.0),
            "final": trial.suggest_float("epsilon_final", 1e-3, 0.05, log=True),
            "decay": trial.suggest_float("epsilon_decay", 0.9, 0.999),
        }

    # ===================
    # Eligibility Traces
    # ===================
    if algorithm in TRACE_ALGORITHMS:
        params["lambda"] = trial.suggest_float("lambda", 0.0, 1.0)
        params["trace"] = trial.suggest_categorical(
            "trace", ["accumulating", "replacing"]
        )

    # ===================
    # Representation-Specific Hyperparameters
    # ===================
    if representation == "fourier":
        params["order"] = trial.suggest_int("order", 1, 7)
    elif representation == "partitions":
        params["n_partitions"] = trial.suggest_int("n_partitions", 4, 20)

    return params


def get_default_params(algorithm: str) -> Dict[str, Any]:
    """Get default hyperparameters for testing.

    Args:
        algorithm: Algorithm name

    Returns:
        Dictionary of default hyperparameter values
    """
    params: Dict[str, Any] = {
        "alpha": 0.1,
        "gamma": 0.99,
    }

    if algorithm == "greedy_gq":
        params["beta"] = 0.01

    if algorithm in CONTROL_ALGORITHMS:
        params["epsilon"] = {
            "schedule": "exponential",
            "init": 0.3,
            "final": 0.01,
            "decay": 0.99,
        }

    if algorithm in TRACE_ALGORITHMS:
        params["lambda"] = 0.9
        params["trace"] = "replacing"

    return params
