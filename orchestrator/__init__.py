"""
Training Orchestrator Package.

The orchestrator trains and evaluates agents across
algorithm/domain/representation combinations and collects metrics.

Key modules:
- config: Experiment and orchestrator configuration dataclasses
- factory: Builds agents, policies and approximators from a config
- experiment: Serial episode driver and evaluation loop
- runner: ExperimentRunner for launching and managing training runs
- metrics: MetricsCollector for aggregating and storing metrics
"""

from orchestrator.config import ExperimentConfig, OrchestratorConfig
from orchestrator.experiment import Evaluation, SerialExperiment, run
from orchestrator.factory import AgentSetup, build_agent
from orchestrator.metrics import MetricsCollector
from orchestrator.runner import ExperimentRunner

__all__ = [
    "ExperimentConfig",
    "OrchestratorConfig",
    "Evaluation",
    "SerialExperiment",
    "run",
    "AgentSetup",
    "build_agent",
    "ExperimentRunner",
    "MetricsCollector",
]
