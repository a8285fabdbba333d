"""
Agent Factory.

Builds the domain, feature projector, shared approximators, policies and
agent described by an ExperimentConfig. The behaviour policy and the
learner hold the same Shared approximator handle.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import torch

from algorithms.gradient_mc import GradientMC
from algorithms.greedy_gq import GreedyGQ
from algorithms.q_lambda import QLambda
from algorithms.q_learning import QLearning
from algorithms.sarsa import SARSA
from algorithms.sarsa_lambda import SARSALambda
from core.shared import Shared, make_shared
from core.trace import Trace
from domains.base import Domain
from domains.chain import TwoStateChain
from domains.mountain_car import MountainCar
from domains.spaces import LinearSpace, Ordinal
from fa.linear import ScalarLFA, VectorLFA
from orchestrator.config import ExperimentConfig, parse_parameter
from policies.base import Policy
from policies.fixed import EpsilonGreedy, Greedy, Random
from representations.base import Projector
from representations.fourier import Fourier
from representations.onehot import OneHotProjector
from representations.partitions import UniformPartitions


DEFAULT_HYPERPARAMETERS: Dict[str, Any] = {
    "alpha": 0.1,
    "beta": 0.01,
    "gamma": 0.99,
    "lambda": 0.9,
    "epsilon": 0.1,
    "trace": "replacing",
    "order": 3,
    "n_partitions": 10,
}

DOMAIN_FACTORIES: Dict[str, Callable[[], Domain]] = {
    "mountain_car": MountainCar,
    "two_state_chain": TwoStateChain,
}


@dataclass
class AgentSetup:
    """Everything needed to train and evaluate one agent.

    Attributes:
        agent: The learner
        domain_factory: Builds a fresh domain per episode
        q_func: Shared action-value approximator, if any
        v_func: Shared state-value approximator, if any
        policy: Behaviour policy the driver must use for non-controllers
    """
    agent: Any
    domain_factory: Callable[[], Domain]
    q_func: Optional[Shared] = None
    v_func: Optional[Shared] = None
    policy: Optional[Policy] = None

    @property
    def approximator(self) -> Shared:
        """The handle whose weights define the learned solution."""
        return self.q_func if self.q_func is not None else self.v_func


def build_projector(representation: str, domain: Domain, params: Dict[str, Any]) -> Projector:
    """Create a feature projector for a domain's state space.

    Raises:
        ValueError: If the representation does not fit the state space
    """
    space = domain.state_space()

    if representation == "onehot":
        if not isinstance(space, Ordinal):
            raise ValueError("onehot representation requires a discrete state space")
        return OneHotProjector(space.card())

    if not isinstance(space, LinearSpace):
        raise ValueError(f"{representation} representation requires a continuous state space")

    if representation == "partitions":
        return UniformPartitions(list(space), params["n_partitions"])
    elif representation == "fourier":
        return Fourier.from_space(params["order"], list(space))

    raise ValueError(f"Unknown representation: {representation}")


def build_agent(exp: ExperimentConfig) -> AgentSetup:
    """Create the agent for an experiment configuration.

    Args:
        exp: Experiment configuration

    Returns:
        AgentSetup with the agent and its collaborators
    """
    params = dict(DEFAULT_HYPERPARAMETERS)
    params.update(exp.hyperparameters or {})

    generator = None
    if exp.seed is not None:
        generator = torch.Generator().manual_seed(exp.seed)

    domain_factory = DOMAIN_FACTORIES[exp.domain]
    domain = domain_factory()
    n_actions = domain.action_space().card()
    projector = build_projector(exp.representation, domain, params)

    alpha = parse_parameter(params["alpha"])
    gamma = parse_parameter(params["gamma"])

    if exp.algorithm == "gradient_mc":
        v_func = make_shared(ScalarLFA(projector))
        return AgentSetup(
            agent=GradientMC(v_func, alpha, gamma),
            domain_factory=domain_factory,
            v_func=v_func,
            policy=Random(n_actions, generator),
        )

    q_func = make_shared(VectorLFA(projector, n_actions))
    policy = EpsilonGreedy(
        Greedy(q_func),
        Random(n_actions, generator),
        parse_parameter(params["epsilon"]),
        generator,
    )

    v_func = None
    if exp.algorithm == "q_learning":
        agent = QLearning(q_func, policy, alpha, gamma)
    elif exp.algorithm == "sarsa":
        agent = SARSA(q_func, policy, alpha, gamma)
    elif exp.algorithm in ("q_lambda", "sarsa_lambda"):
        trace = Trace(parse_parameter(params["lambda"]), kind=params["trace"])
        cls = QLambda if exp.algorithm == "q_lambda" else SARSALambda
        agent = cls(q_func, policy, trace, alpha, gamma)
    elif exp.algorithm == "greedy_gq":
        v_func = make_shared(ScalarLFA(projector))
        agent = GreedyGQ(q_func, v_func, policy, alpha, parse_parameter(params["beta"]), gamma)
    else:
        raise ValueError(f"Unknown algorithm: {exp.algorithm}")

    return AgentSetup(
        agent=agent,
        domain_factory=domain_factory,
        q_func=q_func,
        v_func=v_func,
    )
