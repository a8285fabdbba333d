"""
Shared Utilities for RL Algorithms.

Contains common infrastructure used by multiple value-based control
algorithms (QLambda, SARSALambda, GreedyGQ).
"""

from algorithms.shared.control import ValueBasedController

__all__ = ['ValueBasedController']
