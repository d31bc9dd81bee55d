"""Partially observable generative model used by the particle filter and planner.

Food location is hidden; the agent perceives its own position, energy and age
exactly and learns about a corner only by looking at it. Moves get frail with
age and cost extra energy whether or not they succeed.
"""

from __future__ import annotations

from dataclasses import dataclass
from random import Random

from gridlife.config.types import LifeConfig
from gridlife.domain.actions import Action, Eat, Look, Move, Reproduce, build_action_space
from gridlife.domain.dynamics import apply_action, move_attempt_succeeds, regrow
from gridlife.domain.state import LifeState, LookResult, Observation, corner_at, is_terminal
from gridlife.errors import InvalidAction


@dataclass(frozen=True)
class Transition:
    """One sampled step of the generative model."""

    next_state: LifeState
    observation: Observation
    reward: float


class PartiallyObservableModel:
    """Sampled transition, observation and reward for the hidden-food variant."""

    def __init__(self, config: LifeConfig) -> None:
        self.config = config
        self.world = config.world
        self.rewards = config.rewards
        self.actions: tuple[Action, ...] = build_action_space(
            config.world.grid_size, include_look=True
        )

    def _check_look(self, action: Look) -> None:
        if corner_at(action.x, action.y, self.world.grid_size) is None:
            raise InvalidAction(f"look target ({action.x}, {action.y}) is not a corner")

    def transition(self, state: LifeState, action: Action, rng: Random) -> LifeState:
        """Sample a successor, including the frailty draw and food regrowth."""
        move_succeeds = True
        if isinstance(action, Move):
            move_succeeds = move_attempt_succeeds(state.age, self.world.old_age, rng)
        elif isinstance(action, Look):
            self._check_look(action)
        next_state = apply_action(
            state,
            action,
            self.world,
            move_succeeds=move_succeeds,
            move_cost=self.world.move_cost,
        )
        return regrow(next_state, rng)

    def observe(self, next_state: LifeState, action: Action) -> Observation:
        """Percept after arriving in ``next_state`` via ``action``."""
        look: LookResult | None = None
        if isinstance(action, Look):
            self._check_look(action)
            look = LookResult(
                x=action.x,
                y=action.y,
                food_present=next_state.has_food_at(action.x, action.y, self.world.grid_size),
            )
        return Observation(
            look=look,
            x=next_state.x,
            y=next_state.y,
            energy=next_state.energy,
            age=next_state.age,
        )

    def reward(self, state: LifeState, action: Action, next_state: LifeState) -> float:
        """Death penalty on a terminal successor, else shaped life-like bonuses."""
        if is_terminal(next_state, self.world):
            return -self.rewards.death_penalty
        reward = self.rewards.survival_bonus
        if isinstance(action, Move):
            reward -= self.rewards.move_penalty
        elif isinstance(action, Reproduce):
            reward += self.rewards.reproduce_bonus
        elif isinstance(action, Eat):
            if state.has_food_at(state.x, state.y, self.world.grid_size):
                reward += self.rewards.eat_bonus
            else:
                reward -= self.rewards.failed_eat_penalty
        elif isinstance(action, Look):
            pass
        else:
            raise InvalidAction(f"unrecognized action: {action!r}")
        return reward

    def generate(self, state: LifeState, action: Action, rng: Random) -> Transition:
        """Sample ``(next_state, observation, reward)`` in one call."""
        next_state = self.transition(state, action, rng)
        return Transition(
            next_state=next_state,
            observation=self.observe(next_state, action),
            reward=self.reward(state, action, next_state),
        )

    def is_terminal(self, state: LifeState) -> bool:
        return is_terminal(state, self.world)
