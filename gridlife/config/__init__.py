"""Configuration layer: constants and typed config dataclasses."""

from gridlife.config.constants import (
    AGENT_MAX_AGE,
    AGENT_MAX_ENERGY,
    AGENT_OLD_AGE,
    DEATH_PENALTY,
    ENERGY_COST_METABOLISM,
    ENERGY_COST_MOVE,
    ENERGY_COST_REPRODUCE,
    FOOD_ENERGY,
    GRID_SIZE,
    MAX_STATE_SPACE_SIZE,
    MOVE_DIRECTIONS,
    NUM_CORNERS,
)
from gridlife.config.types import (
    LifeConfig,
    PlannerConfig,
    RewardConfig,
    SolverConfig,
    WorldConfig,
)

__all__ = [
    "AGENT_MAX_AGE",
    "AGENT_MAX_ENERGY",
    "AGENT_OLD_AGE",
    "DEATH_PENALTY",
    "ENERGY_COST_METABOLISM",
    "ENERGY_COST_MOVE",
    "ENERGY_COST_REPRODUCE",
    "FOOD_ENERGY",
    "GRID_SIZE",
    "LifeConfig",
    "MAX_STATE_SPACE_SIZE",
    "MOVE_DIRECTIONS",
    "NUM_CORNERS",
    "PlannerConfig",
    "RewardConfig",
    "SolverConfig",
    "WorldConfig",
]
