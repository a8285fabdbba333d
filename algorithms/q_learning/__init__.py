"""
Q-Learning Algorithm Module.

One-step off-policy control; the lambda=0 case of Q(lambda).
"""

from algorithms.q_learning.agent import QLearning

__all__ = ["QLearning"]
