"""Fully observable model used by the exact solver.

Regrowth is represented as an explicit chance node: ``outcomes`` returns a
short tuple of ``(successor, probability)`` pairs instead of a single sampled
successor. Moves never fail and carry no extra energy cost in this variant.
"""

from __future__ import annotations

from random import Random

from gridlife.config.types import LifeConfig
from gridlife.domain.actions import Action, Look, build_action_space
from gridlife.domain.dynamics import apply_action, regrowth_outcomes
from gridlife.domain.state import LifeState, is_terminal
from gridlife.errors import InvalidAction

Outcome = tuple[LifeState, float]


class FullyObservableModel:
    """Transition relation and reward for the fully observable variant."""

    def __init__(self, config: LifeConfig) -> None:
        self.config = config
        self.world = config.world
        self.actions: tuple[Action, ...] = build_action_space(
            config.world.grid_size, include_look=False
        )

    def outcomes(self, state: LifeState, action: Action) -> tuple[Outcome, ...]:
        """Return every successor of ``(state, action)`` with its probability."""
        if isinstance(action, Look):
            raise InvalidAction("look actions are not available when food is observable")
        successors = regrowth_outcomes(apply_action(state, action, self.world))
        probability = 1.0 / len(successors)
        return tuple((successor, probability) for successor in successors)

    def transition_probability(
        self, state: LifeState, action: Action, successor: LifeState
    ) -> float:
        """Probability of landing in ``successor``; 0.0 for any unlisted state."""
        for candidate, probability in self.outcomes(state, action):
            if candidate == successor:
                return probability
        return 0.0

    def reward(self, state: LifeState, action: Action) -> float:
        """Death penalty for an already-terminal state, otherwise its energy level."""
        if is_terminal(state, self.world):
            return -self.config.rewards.death_penalty
        return float(state.energy)

    def sample(self, state: LifeState, action: Action, rng: Random) -> LifeState:
        """Draw one successor by inverse-CDF over ``outcomes``."""
        outcomes = self.outcomes(state, action)
        draw = rng.random()
        cumulative = 0.0
        for successor, probability in outcomes:
            cumulative += probability
            if draw < cumulative:
                return successor
        return outcomes[-1][0]

    def is_terminal(self, state: LifeState) -> bool:
        return is_terminal(state, self.world)
