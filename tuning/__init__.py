"""
Hyperparameter Tuning Module.

Optuna integration for tuning the linear agents. Each
(Algorithm, Domain, Representation) combination gets its own study,
stored in SQLite.
"""

from tuning.study_config import StudyConfig, STUDY_CONFIGS
from tuning.search_spaces import suggest_hyperparams, get_default_params
from tuning.objective import create_objective

__all__ = [
    "StudyConfig",
    "STUDY_CONFIGS",
    "suggest_hyperparams",
    "get_default_params",
    "create_objective",
]
