"""
Q(lambda) Algorithm Module.

Watkins' Q(lambda): off-policy control with eligibility traces that are
cut whenever the behaviour policy takes a non-greedy action.
"""

from algorithms.q_lambda.agent import QLambda

__all__ = ["QLambda"]
