"""
Serial experiment driver.

Steps a domain with an agent, one transition at a time, in temporal
order. The agent's capability set decides how transitions are delivered:
- ONLINE agents receive handle_sample() after every step
- BATCH agents receive the whole episode through handle_batch()
Either way handle_terminal() is called once when the episode ends, be it
at a terminal state or at the step limit.

Actions come from the agent's behaviour policy when it is a Controller,
otherwise from an explicitly supplied policy (prediction agents).
"""

import logging
from typing import Callable, Iterator, List, Optional

from algorithms.base import Capability, capabilities
from core.errors import UnimplementedCapabilityError
from domains.base import Domain, Transition
from orchestrator.metrics import Episode
from policies.base import Policy


logger = logging.getLogger(__name__)

DomainFactory = Callable[[], Domain]


class SerialExperiment:
    """Iterator over training episodes.

    Attributes:
        agent: Learner being trained
        domain_factory: Builds a fresh domain for every episode
        step_limit: Maximum transitions per episode
        policy: Behaviour policy for agents that are not Controllers
    """

    def __init__(
        self,
        agent,
        domain_factory: DomainFactory,
        step_limit: int,
        policy: Optional[Policy] = None,
    ):
        """Initialize the experiment.

        Raises:
            ValueError: If step_limit is not positive
            UnimplementedCapabilityError: If the agent can neither learn online
                nor from batches, or has no way to pick actions
        """
        if step_limit <= 0:
            raise ValueError("step_limit must be positive")

        caps = capabilities(agent)
        if Capability.ONLINE in caps:
            self.mode = Capability.ONLINE
        elif Capability.BATCH in caps:
            self.mode = Capability.BATCH
        else:
            raise UnimplementedCapabilityError(agent, "online or batch learning")

        if Capability.CONTROL not in caps and policy is None:
            raise UnimplementedCapabilityError(agent, Capability.CONTROL.value)

        self.agent = agent
        self.domain_factory = domain_factory
        self.step_limit = step_limit
        self.policy = policy

    def _act(self, state) -> int:
        if self.policy is not None:
            return self.policy.sample(state)
        return self.agent.sample_behaviour(state)

    def run_episode(self) -> Episode:
        domain = self.domain_factory()
        obs = domain.emit()

        batch: List[Transition] = []
        t: Optional[Transition] = None
        steps, total = 0, 0.0

        while steps < self.step_limit and not obs.is_terminal:
            t = domain.step(self._act(obs.state))
            steps += 1
            total += t.reward

            if self.mode is Capability.ONLINE:
                self.agent.handle_sample(t)
            else:
                batch.append(t)

            obs = t.to

        if self.mode is Capability.BATCH and batch:
            self.agent.handle_batch(batch)

        if t is not None:
            self.agent.handle_terminal(t)
            if self.policy is not None:
                self.policy.handle_terminal(t)

        return Episode(steps=steps, reward=total, terminated=obs.is_terminal)

    def __iter__(self) -> Iterator[Episode]:
        return self

    def __next__(self) -> Episode:
        return self.run_episode()


class Evaluation:
    """Iterator over evaluation episodes; no learning takes place.

    Controllers act with their target policy; other agents need a policy.
    """

    def __init__(
        self,
        agent,
        domain_factory: DomainFactory,
        step_limit: int,
        policy: Optional[Policy] = None,
    ):
        if step_limit <= 0:
            raise ValueError("step_limit must be positive")
        if Capability.CONTROL not in capabilities(agent) and policy is None:
            raise UnimplementedCapabilityError(agent, Capability.CONTROL.value)

        self.agent = agent
        self.domain_factory = domain_factory
        self.step_limit = step_limit
        self.policy = policy

    def run_episode(self) -> Episode:
        domain = self.domain_factory()
        obs = domain.emit()
        steps, total = 0, 0.0

        while steps < self.step_limit and not obs.is_terminal:
            if self.policy is not None:
                action = self.policy.sample(obs.state)
            else:
                action = self.agent.sample_target(obs.state)

            t = domain.step(action)
            steps += 1
            total += t.reward
            obs = t.to

        return Episode(steps=steps, reward=total, terminated=obs.is_terminal)

    def __iter__(self) -> Iterator[Episode]:
        return self

    def __next__(self) -> Episode:
        return self.run_episode()


def run(experiment, n_episodes: int, log_every: int = 0) -> List[Episode]:
    """Realise n_episodes of an experiment.

    Args:
        experiment: SerialExperiment or Evaluation
        n_episodes: Number of episodes to run
        log_every: Log progress every this many episodes (0 = never)

    Returns:
        List of Episode results in order
    """
    episodes: List[Episode] = []

    for i in range(n_episodes):
        episode = next(experiment)
        episodes.append(episode)

        if log_every and (i + 1) % log_every == 0:
            logger.info(
                f"episode {i + 1}/{n_episodes}: steps={episode.steps} "
                f"reward={episode.reward:.2f} terminated={episode.terminated}"
            )

    return episodes
