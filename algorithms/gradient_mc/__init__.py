"""
Gradient Monte-Carlo Prediction Module.

Batch learner updating a linear state-value function towards full
discounted episode returns.
"""

from algorithms.gradient_mc.agent import GradientMC

__all__ = ["GradientMC"]
