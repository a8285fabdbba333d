"""
SARSA Algorithm Module.

One-step on-policy control; the lambda=0 case of SARSA(lambda).
"""

from algorithms.sarsa.agent import SARSA

__all__ = ["SARSA"]
