"""Configuration dataclasses for the world, rewards, solver and planner.

All configs are frozen and validated on construction. ``LifeConfig`` composes
the four component configs and is threaded explicitly into every model,
solver, planner and driver constructor.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

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
    MDP_DISCOUNT,
    POMDP_DISCOUNT,
    POMDP_GRID_SIZE,
    POMDP_MAX_AGE,
    POMDP_MAX_ENERGY,
)
from gridlife.errors import InvalidConfiguration

__all__ = [
    "WorldConfig",
    "RewardConfig",
    "SolverConfig",
    "PlannerConfig",
    "LifeConfig",
]

# ---------------------------------------------------------------------------
# Component configs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorldConfig:
    """Grid geometry and agent physiology."""

    grid_size: int = GRID_SIZE
    food_energy: int = FOOD_ENERGY
    metabolism_cost: int = ENERGY_COST_METABOLISM
    move_cost: int = ENERGY_COST_MOVE
    reproduce_cost: int = ENERGY_COST_REPRODUCE
    max_energy: int = AGENT_MAX_ENERGY
    old_age: int = AGENT_OLD_AGE
    max_age: int = AGENT_MAX_AGE

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise InvalidConfiguration("grid_size must be >= 2")
        for name in ("food_energy", "metabolism_cost", "move_cost", "reproduce_cost", "old_age"):
            if getattr(self, name) < 0:
                raise InvalidConfiguration(f"{name} must be >= 0")
        if self.max_energy < 1:
            raise InvalidConfiguration("max_energy must be >= 1")
        if self.max_age < 1:
            raise InvalidConfiguration("max_age must be >= 1")


@dataclass(frozen=True)
class RewardConfig:
    """Reward shaping constants for both variants."""

    death_penalty: float = DEATH_PENALTY
    survival_bonus: float = 1.0
    move_penalty: float = 1.0
    reproduce_bonus: float = 10.0
    eat_bonus: float = 10.0
    failed_eat_penalty: float = 10.0

    def __post_init__(self) -> None:
        for name, value in asdict(self).items():
            if value < 0:
                raise InvalidConfiguration(f"{name} must be >= 0")


@dataclass(frozen=True)
class SolverConfig:
    """Value-iteration stopping rule."""

    discount: float = MDP_DISCOUNT
    tolerance: float = 1e-6
    max_iterations: int = 5000

    def __post_init__(self) -> None:
        if not 0.0 < self.discount < 1.0:
            raise InvalidConfiguration("solver discount must be in (0.0, 1.0)")
        if self.tolerance <= 0.0:
            raise InvalidConfiguration("tolerance must be > 0")
        if self.max_iterations < 1:
            raise InvalidConfiguration("max_iterations must be >= 1")


@dataclass(frozen=True)
class PlannerConfig:
    """Monte-Carlo tree search and particle filter budgets."""

    discount: float = POMDP_DISCOUNT
    n_rollouts: int = 1000
    max_depth: int = 20
    exploration_constant: float = 100.0
    n_particles: int = 500
    filter_attempts_factor: int = 20
    reuse_tree: bool = True

    def __post_init__(self) -> None:
        if not 0.0 < self.discount <= 1.0:
            raise InvalidConfiguration("planner discount must be in (0.0, 1.0]")
        if self.n_rollouts < 1:
            raise InvalidConfiguration("n_rollouts must be >= 1")
        if self.max_depth < 1:
            raise InvalidConfiguration("max_depth must be >= 1")
        if self.exploration_constant < 0.0:
            raise InvalidConfiguration("exploration_constant must be >= 0")
        if self.n_particles < 1:
            raise InvalidConfiguration("n_particles must be >= 1")
        if self.filter_attempts_factor < 1:
            raise InvalidConfiguration("filter_attempts_factor must be >= 1")


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LifeConfig:
    """Complete immutable configuration for one simulation setup."""

    world: WorldConfig = field(default_factory=WorldConfig)
    rewards: RewardConfig = field(default_factory=RewardConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    planner: PlannerConfig = field(default_factory=PlannerConfig)

    @classmethod
    def fully_observable(cls) -> LifeConfig:
        """Preset for the exact-solver variant (3x3 grid, short lifespan)."""
        return cls(world=WorldConfig(), solver=SolverConfig(discount=MDP_DISCOUNT))

    @classmethod
    def partially_observable(cls) -> LifeConfig:
        """Preset for the online-planner variant (5x5 grid, frailty with age)."""
        return cls(
            world=WorldConfig(
                grid_size=POMDP_GRID_SIZE,
                max_energy=POMDP_MAX_ENERGY,
                old_age=AGENT_OLD_AGE,
                max_age=POMDP_MAX_AGE,
            ),
            planner=PlannerConfig(discount=POMDP_DISCOUNT),
        )

    @classmethod
    def from_dict(cls, payload: dict[str, Any], base: LifeConfig | None = None) -> LifeConfig:
        """Build a config from a nested mapping, overriding ``base`` field by field.

        Unknown section or field names raise :exc:`InvalidConfiguration`.
        """
        base = base or cls()
        sections: dict[str, Any] = {
            "world": base.world,
            "rewards": base.rewards,
            "solver": base.solver,
            "planner": base.planner,
        }
        for key in payload:
            if key not in sections:
                raise InvalidConfiguration(f"unknown config section: {key}")
        resolved: dict[str, Any] = {}
        for key, current in sections.items():
            overrides = payload.get(key) or {}
            if not isinstance(overrides, dict):
                raise InvalidConfiguration(f"config section '{key}' must be an object")
            merged = asdict(current)
            for name, value in overrides.items():
                if name not in merged:
                    raise InvalidConfiguration(f"unknown field {key}.{name}")
                merged[name] = value
            resolved[key] = type(current)(**merged)
        return cls(**resolved)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Return the nested mapping accepted by :meth:`from_dict`."""
        return {
            "world": asdict(self.world),
            "rewards": asdict(self.rewards),
            "solver": asdict(self.solver),
            "planner": asdict(self.planner),
        }
