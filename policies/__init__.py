"""
Policy Module.

Action-selection policies consumed by the control algorithms:
- Greedy: target policy for off-policy control
- Random / EpsilonGreedy: behaviour policies
"""

from policies.base import Policy
from policies.fixed import Greedy, Random, EpsilonGreedy

__all__ = ["Policy", "Greedy", "Random", "EpsilonGreedy"]
