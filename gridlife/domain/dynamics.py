"""Deterministic transition core shared by both model variants.

Every transition applies the action-specific effect, then metabolism, then
aging. Food regrowth is kept separate so the exact solver can enumerate its
outcomes while the generative model samples one.
"""

from __future__ import annotations

from random import Random

from gridlife.config.types import WorldConfig
from gridlife.domain.actions import Action, Eat, Look, Move, Reproduce
from gridlife.domain.state import CORNERS, LifeState, corner_at
from gridlife.errors import InvalidAction


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def apply_action(
    state: LifeState,
    action: Action,
    world: WorldConfig,
    *,
    move_succeeds: bool = True,
    move_cost: int = 0,
) -> LifeState:
    """Apply ``action`` plus metabolism and aging; food is not regrown here.

    ``move_succeeds`` and ``move_cost`` carry the partially observable
    variant's frailty rule: a failed move leaves the position unchanged but
    still pays ``move_cost``.
    """
    x, y, energy, age = state.x, state.y, state.energy, state.age
    food = list(state.food_flags)

    if isinstance(action, Move):
        if move_succeeds:
            x = clamp(x + action.dx, 1, world.grid_size)
            y = clamp(y + action.dy, 1, world.grid_size)
        energy -= move_cost
    elif isinstance(action, Eat):
        corner = corner_at(x, y, world.grid_size)
        if corner is not None and food[CORNERS.index(corner)]:
            food[CORNERS.index(corner)] = False
            energy = clamp(energy + world.food_energy, 0, world.max_energy)
    elif isinstance(action, Reproduce):
        age = 0
        energy -= world.reproduce_cost
    elif isinstance(action, Look):
        pass
    else:
        raise InvalidAction(f"unrecognized action: {action!r}")

    energy = clamp(energy - world.metabolism_cost, 0, world.max_energy)
    age = clamp(age + 1, 0, world.max_age)

    return LifeState(*food, x, y, energy, age)


def regrowth_outcomes(state: LifeState) -> tuple[LifeState, ...]:
    """Return the equally likely successors of the regrowth event.

    A state that still holds food has exactly one outcome (itself); an empty
    state has one outcome per corner.
    """
    if any(state.food_flags):
        return (state,)
    return tuple(state.with_single_food(corner) for corner in CORNERS)


def regrow(state: LifeState, rng: Random) -> LifeState:
    """Sample the regrowth event: grow food in one uniformly chosen corner if none has any."""
    if any(state.food_flags):
        return state
    return state.with_single_food(CORNERS[rng.randrange(len(CORNERS))])


def move_attempt_succeeds(age: int, old_age: int, rng: Random) -> bool:
    """Frailty draw: a uniform integer in ``[0, age]`` must not exceed ``old_age``."""
    return rng.randint(0, age) <= old_age
