"""Driver-facing environments: ``reset()`` and ``step(state, action)``.

Environments apply the generative model with their own injected random
source and report terminal status; they do not accumulate rewards.
"""

from __future__ import annotations

from dataclasses import dataclass
from random import Random

from gridlife.config.types import LifeConfig
from gridlife.domain.actions import Action
from gridlife.domain.mdp import FullyObservableModel
from gridlife.domain.pomdp import PartiallyObservableModel
from gridlife.domain.state import (
    LifeState,
    Observation,
    TerminationReason,
    is_terminal,
    termination_reason,
)


@dataclass(frozen=True)
class StepOutcome:
    """Result of one real environment step."""

    next_state: LifeState
    observation: Observation | None
    reward: float
    terminal: bool
    termination_reason: TerminationReason | None


class FullyObservableEnvironment:
    """Steps the fully observable model; the reward is scored on the pre-step state."""

    def __init__(self, config: LifeConfig, initial_state: LifeState, rng: Random) -> None:
        self.config = config
        self.model = FullyObservableModel(config)
        self.initial_state = initial_state
        self.rng = rng

    def reset(self) -> LifeState:
        return self.initial_state

    def step(self, state: LifeState, action: Action) -> StepOutcome:
        reward = self.model.reward(state, action)
        next_state = self.model.sample(state, action, self.rng)
        return StepOutcome(
            next_state=next_state,
            observation=None,
            reward=reward,
            terminal=is_terminal(next_state, self.config.world),
            termination_reason=termination_reason(next_state, self.config.world),
        )


class PartiallyObservableEnvironment:
    """Steps the generative model; the reward is scored on the successor state."""

    def __init__(self, config: LifeConfig, initial_state: LifeState, rng: Random) -> None:
        self.config = config
        self.model = PartiallyObservableModel(config)
        self.initial_state = initial_state
        self.rng = rng

    def reset(self) -> LifeState:
        return self.initial_state

    def step(self, state: LifeState, action: Action) -> StepOutcome:
        transition = self.model.generate(state, action, self.rng)
        return StepOutcome(
            next_state=transition.next_state,
            observation=transition.observation,
            reward=transition.reward,
            terminal=is_terminal(transition.next_state, self.config.world),
            termination_reason=termination_reason(transition.next_state, self.config.world),
        )
