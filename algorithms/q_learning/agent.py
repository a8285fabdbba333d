"""
Q-Learning Agent.

One-step off-policy TD control:

    Q(s,a) := Q(s,a) + alpha * [r + gamma * max_a' Q(s',a') - Q(s,a)]

Implemented as Q(lambda) with lambda fixed at 0: the trace then always
equals phi(s), so the traced update reduces to the one-step rule above.
"""

from typing import Union

from algorithms.q_lambda.agent import QLambda
from core.parameter import Parameter
from core.shared import Shared
from core.trace import Trace
from domains.base import Transition
from policies.base import Policy


class QLearning(QLambda):
    """Q-learning over a shared linear action-value function.

    The target action is always greedy, whatever the behaviour policy did.
    """

    def __init__(
        self,
        q_func: Shared,
        policy: Policy,
        alpha: Union[Parameter, float] = 0.1,
        gamma: Union[Parameter, float] = 0.95,
    ):
        super().__init__(q_func, policy, Trace.accumulating(0.0), alpha, gamma)

    def handle(self, transition: Transition) -> int:
        """Learn from a transition and return the next action to execute."""
        self.handle_sample(transition)

        return self.sample_behaviour(transition.to.state)
