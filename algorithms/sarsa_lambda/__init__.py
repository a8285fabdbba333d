"""
SARSA(lambda) Algorithm Module with Eligibility Traces.

SARSA(lambda) uses eligibility traces for multi-step credit assignment,
bridging the gap between TD(0) and Monte Carlo methods. Lambda controls
the decay rate of traces:
- lambda=0: TD(0), single-step updates
- lambda=1: Monte Carlo, full episode returns
"""

from algorithms.sarsa_lambda.agent import SARSALambda

__all__ = ["SARSALambda"]
