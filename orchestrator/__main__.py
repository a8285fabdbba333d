"""
Command-line interface for the Training Orchestrator.

Usage:
    python -m orchestrator run config.yaml
    python -m orchestrator quick -a q_learning,sarsa -d two_state_chain -r onehot
    python -m orchestrator list config.yaml
"""

import argparse
import logging
import sys
from pathlib import Path

from orchestrator.config import create_quick_config, load_config, save_config
from orchestrator.runner import ExperimentRunner


logger = logging.getLogger("orchestrator")


def cmd_run(args):
    """Run experiments from a config file.

    Args:
        args: Parsed command line arguments
    """
    config_path = args.config

    if not Path(config_path).exists():
        logger.error(f"Config file not found: {config_path}")
        sys.exit(1)

    config = load_config(config_path)

    if args.results_dir:
        config.results_dir = args.results_dir
    if args.log_every is not None:
        config.log_every = args.log_every

    runner = ExperimentRunner(config)
    results = runner.run_all()

    print(runner.metrics_collector.summary())

    if any(r.status == "failed" for r in results):
        sys.exit(1)


def cmd_quick(args):
    """Generate a quick comparison config."""
    config = create_quick_config(
        algorithms=args.algorithms.split(","),
        domains=args.domains.split(","),
        representations=args.representations.split(","),
        episodes=args.episodes,
        eval_episodes=args.eval_episodes,
        results_dir=args.results_dir,
    )

    save_config(config, args.output)

    print(f"Generated config with {len(config.experiments)} experiments:")
    for exp in config.experiments:
        print(f"  - {exp.name}")
    print(f"\nSaved to: {args.output}")


def cmd_list(args):
    """List experiments in a config file."""
    config_path = args.config

    if not Path(config_path).exists():
        logger.error(f"Config file not found: {config_path}")
        sys.exit(1)

    config = load_config(config_path)

    print(f"Configuration: {config_path}")
    print(f"  Results dir: {config.results_dir}")
    print(f"\nExperiments ({len(config.experiments)}):")

    for exp in config.experiments:
        print(f"  - {exp.name}")
        print(f"      Algorithm: {exp.algorithm}")
        print(f"      Domain: {exp.domain}")
        print(f"      Representation: {exp.representation}")
        print(f"      Episodes: {exp.episodes}")
        print(f"      Eval episodes: {exp.eval_episodes}")


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="orchestrator",
        description="Training Orchestrator for linear RL experiments",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run experiments from config file",
    )
    run_parser.add_argument(
        "config",
        help="Path to YAML configuration file",
    )
    run_parser.add_argument(
        "--results-dir",
        help="Override results directory",
    )
    run_parser.add_argument(
        "--log-every",
        type=int,
        help="Override training progress logging interval",
    )
    run_parser.set_defaults(func=cmd_run)

    # quick command
    quick_parser = subparsers.add_parser(
        "quick",
        help="Generate a quick comparison config",
    )
    quick_parser.add_argument(
        "--algorithms", "-a",
        required=True,
        help="Comma-separated list of algorithms",
    )
    quick_parser.add_argument(
        "--domains", "-d",
        required=True,
        help="Comma-separated list of domains",
    )
    quick_parser.add_argument(
        "--representations", "-r",
        required=True,
        help="Comma-separated list of representations",
    )
    quick_parser.add_argument(
        "--episodes", "-n",
        type=int,
        default=100,
        help="Training episodes per experiment (default: 100)",
    )
    quick_parser.add_argument(
        "--eval-episodes", "-e",
        type=int,
        default=10,
        help="Evaluation episodes per experiment (default: 10)",
    )
    quick_parser.add_argument(
        "--results-dir",
        default="results",
        help="Results directory (default: results)",
    )
    quick_parser.add_argument(
        "--output", "-o",
        default="quick_config.yaml",
        help="Output config file (default: quick_config.yaml)",
    )
    quick_parser.set_defaults(func=cmd_quick)

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List experiments in a config file",
    )
    list_parser.add_argument(
        "config",
        help="Path to YAML configuration file",
    )
    list_parser.set_defaults(func=cmd_list)

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
