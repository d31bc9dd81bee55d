"""Centralized domain constants for the gridworld life simulation.

Default values for both problem variants live here. Consuming modules should
import from this module rather than defining their own inline literals.
"""

from __future__ import annotations

GRID_SIZE = 3
"""Default grid side length (N) for the fully observable variant."""

FOOD_ENERGY = 10
"""Energy gained from eating one unit of food."""

ENERGY_COST_METABOLISM = 1
"""Energy lost every turn just for the agent to exist."""

ENERGY_COST_MOVE = 1
"""Extra energy charged for a move attempt (partially observable variant)."""

ENERGY_COST_REPRODUCE = 3
"""Energy charged for reproducing."""

AGENT_MAX_ENERGY = 10
"""Energy ceiling for the fully observable variant."""

AGENT_OLD_AGE = 10
"""Age draw threshold above which a move attempt fails."""

AGENT_MAX_AGE = 7
"""Age at which the agent dies (fully observable variant)."""

DEATH_PENALTY = 1_000_000.0
"""Magnitude of the reward charged for a terminal state."""

MDP_DISCOUNT = 0.99
"""Default discount for the exact solver."""

POMDP_DISCOUNT = 0.95
"""Default discount for the online planner."""

POMDP_GRID_SIZE = 5
POMDP_MAX_ENERGY = 15
POMDP_MAX_AGE = 20

NUM_CORNERS = 4
"""Number of food-bearing corners."""

MOVE_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)
"""Move deltas in the fixed action-enumeration order."""

INITIAL_POSITION: tuple[int, int] = (1, 1)
INITIAL_ENERGY = 1
INITIAL_AGE = 0

MAX_STATE_SPACE_SIZE = 500_000
"""Safety cap on enumerated states for dense tabular value iteration."""
