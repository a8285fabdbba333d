"""
Greedy-GQ Algorithm Module.

Gradient-TD off-policy control with an auxiliary correction value
function; converges with linear features where off-policy TD may not.
"""

from algorithms.greedy_gq.agent import GreedyGQ

__all__ = ["GreedyGQ"]
