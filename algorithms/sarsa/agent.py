"""
SARSA Agent.

SARSA is a TD(0) on-policy algorithm that learns the value of the policy
it is actually following (including exploration):

    Q(s,a) := Q(s,a) + alpha * [r + gamma * Q(s',a') - Q(s,a)]

where a' is the action the behaviour policy selects at s'. Implemented as
SARSA(lambda) with lambda fixed at 0.
"""

from typing import Union

from algorithms.sarsa_lambda.agent import SARSALambda
from core.parameter import Parameter
from core.shared import Shared
from core.trace import Trace
from domains.base import Transition
from policies.base import Policy


class SARSA(SARSALambda):
    """One-step SARSA over a shared linear action-value function."""

    def __init__(
        self,
        q_func: Shared,
        policy: Policy,
        alpha: Union[Parameter, float] = 0.1,
        gamma: Union[Parameter, float] = 0.95,
    ):
        super().__init__(q_func, policy, Trace.accumulating(0.0), alpha, gamma)

    def handle(self, transition: Transition) -> int:
        """Learn from a transition and return a', the action used in the target."""
        self.handle_sample(transition)

        return self.sample_behaviour(transition.to.state)
