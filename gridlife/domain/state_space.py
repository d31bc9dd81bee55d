"""Finite state-space enumeration for tabular solvers."""

from __future__ import annotations

import itertools
import logging

from gridlife.config.constants import MAX_STATE_SPACE_SIZE, NUM_CORNERS
from gridlife.config.types import WorldConfig
from gridlife.domain.state import CORNERS, LifeState
from gridlife.errors import InvalidConfiguration

logger = logging.getLogger(__name__)


def state_space_size(world: WorldConfig, include_unfed: bool = False) -> int:
    """Number of states ``enumerate_states`` would produce for ``world``."""
    food_configs = NUM_CORNERS + (1 if include_unfed else 0)
    return food_configs * world.grid_size**2 * (world.max_energy + 1) * (world.max_age + 1)


def enumerate_states(world: WorldConfig, include_unfed: bool = False) -> frozenset[LifeState]:
    """Return every legal state.

    Each single-corner food configuration is crossed with every position,
    energy and age. ``include_unfed`` also adds the zero-food configuration,
    which the partially observable variant passes through before regrowth.
    """
    size = state_space_size(world, include_unfed)
    if size > MAX_STATE_SPACE_SIZE:
        raise InvalidConfiguration(
            f"state space of {size} states exceeds safety cap {MAX_STATE_SPACE_SIZE}"
        )

    cells = range(1, world.grid_size + 1)
    states: set[LifeState] = set()
    for x, y, energy, age in itertools.product(
        cells, cells, range(world.max_energy + 1), range(world.max_age + 1)
    ):
        bare = LifeState(False, False, False, False, x, y, energy, age)
        for corner in CORNERS:
            states.add(bare.with_single_food(corner))
        if include_unfed:
            states.add(bare)

    logger.info("Enumerated %d states (include_unfed=%s)", len(states), include_unfed)
    return frozenset(states)
