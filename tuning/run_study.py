"""
CLI to Run a Single Optuna Study.

Usage:
    python -m tuning.run_study --study sarsa_lambda_mountain_car_fourier
    python -m tuning.run_study --study q_learning_mountain_car_fourier --trials 10 --n-jobs 2
"""

import argparse
import logging
from pathlib import Path

import optuna
from optuna.samplers import TPESampler

from tuning.study_config import STUDY_CONFIGS
from tuning.objective import create_objective


logger = logging.getLogger("tuning")


def main():
    """Run a single Optuna study."""
    parser = argparse.ArgumentParser(description="Run a single linear agent tuning study")
    parser.add_argument(
        "--study",
        required=True,
        choices=list(STUDY_CONFIGS.keys()),
        help="Name of the study to run"
    )
    parser.add_argument(
        "--trials",
        type=int,
        default=None,
        help="Number of trials (default: from config)"
    )
    parser.add_argument(
        "--n-jobs",
        type=int,
        default=None,
        help="Number of parallel trials (default: from config)"
    )
    parser.add_argument(
        "--storage",
        type=str,
        default=None,
        help="SQLite storage path (default: from config)"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = STUDY_CONFIGS[args.study]

    n_trials = args.trials if args.trials is not None else config.n_trials
    n_jobs = args.n_jobs if args.n_jobs is not None else config.n_parallel_trials
    storage_path = args.storage if args.storage is not None else config.storage_path

    if storage_path.startswith("sqlite:///"):
        db_path = storage_path.replace("sqlite:///", "")
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    logger.info(
        f"Study {config.study_name}: algorithm={config.algorithm} "
        f"domain={config.domain} representation={config.representation} "
        f"trials={n_trials} jobs={n_jobs} storage={storage_path}"
    )

    pruner = optuna.pruners.MedianPruner(
        n_startup_trials=5,
        n_warmup_steps=5,
        interval_steps=1
    )

    study = optuna.create_study(
        study_name=config.study_name,
        storage=storage_path,
        direction="maximize",
        pruner=pruner,
        sampler=TPESampler(seed=42),
        load_if_exists=True
    )

    logger.info(f"Loaded study with {len(study.trials)} existing trials")

    study.optimize(
        create_objective(config),
        n_trials=n_trials,
        n_jobs=n_jobs,
    )

    print(f"Study Complete: {config.study_name}")
    print(f"Number of finished trials: {len(study.trials)}")
    print(f"Best trial: {study.best_trial.number}")
    print(f"Best value (avg return): {study.best_value:.2f}")
    print("\nBest hyperparameters:")
    for key, value in study.best_params.items():
        print(f"  {key}: {value}")

    results_dir = Path("data/optuna/results")
    results_dir.mkdir(parents=True, exist_ok=True)
    results_file = results_dir / f"{config.study_name}_best.txt"
    with open(results_file, "w") as f:
        f.write(f"Study: {config.study_name}\n")
        f.write(f"Best trial: {study.best_trial.number}\n")
        f.write(f"Best value: {study.best_value:.2f}\n")
        f.write("\nBest hyperparameters:\n")
        for key, value in study.best_params.items():
            f.write(f"  {key}: {value}\n")
    logger.info(f"Results saved to: {results_file}")


if __name__ == "__main__":
    main()
