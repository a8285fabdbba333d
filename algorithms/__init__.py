"""
RL Algorithm Modules.

Each algorithm is self-contained in algorithms/<name>/ with agent.py
holding the agent class; algorithms/base.py defines the capability
interfaces they implement.
"""

from algorithms.base import (
    Algorithm,
    BatchLearner,
    Controller,
    ValuePredictor,
    ActionValuePredictor,
    Predictor,
    Parameterised,
    Capability,
    capabilities,
    require,
)
from algorithms.q_lambda import QLambda
from algorithms.q_learning import QLearning
from algorithms.sarsa_lambda import SARSALambda
from algorithms.sarsa import SARSA
from algorithms.greedy_gq import GreedyGQ
from algorithms.gradient_mc import GradientMC

__all__ = [
    "Algorithm",
    "BatchLearner",
    "Controller",
    "ValuePredictor",
    "ActionValuePredictor",
    "Predictor",
    "Parameterised",
    "Capability",
    "capabilities",
    "require",
    "QLambda",
    "QLearning",
    "SARSALambda",
    "SARSA",
    "GreedyGQ",
    "GradientMC",
]
