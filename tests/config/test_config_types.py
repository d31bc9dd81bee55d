"""Tests for gridlife.config: constants, validation, presets and dict round-trips."""

from __future__ import annotations

import pytest

from gridlife.config.constants import (
    AGENT_MAX_AGE,
    AGENT_MAX_ENERGY,
    DEATH_PENALTY,
    FOOD_ENERGY,
    GRID_SIZE,
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
from gridlife.errors import InvalidConfiguration


def test_move_directions_are_the_eight_neighbours() -> None:
    assert len(MOVE_DIRECTIONS) == 8
    assert len(set(MOVE_DIRECTIONS)) == 8
    assert (0, 0) not in MOVE_DIRECTIONS
    for dx, dy in MOVE_DIRECTIONS:
        assert dx in (-1, 0, 1) and dy in (-1, 0, 1)


def test_default_constants() -> None:
    assert GRID_SIZE == 3
    assert FOOD_ENERGY == 10
    assert AGENT_MAX_ENERGY == 10
    assert AGENT_MAX_AGE == 7
    assert NUM_CORNERS == 4
    assert DEATH_PENALTY == 1_000_000.0


class TestWorldConfig:
    def test_defaults_match_constants(self) -> None:
        world = WorldConfig()
        assert world.grid_size == GRID_SIZE
        assert world.food_energy == FOOD_ENERGY
        assert world.max_energy == AGENT_MAX_ENERGY
        assert world.max_age == AGENT_MAX_AGE

    def test_grid_too_small_rejected(self) -> None:
        with pytest.raises(InvalidConfiguration, match="grid_size"):
            WorldConfig(grid_size=1)

    @pytest.mark.parametrize(
        "field", ["food_energy", "metabolism_cost", "move_cost", "reproduce_cost", "old_age"]
    )
    def test_negative_costs_rejected(self, field: str) -> None:
        with pytest.raises(InvalidConfiguration, match=field):
            WorldConfig(**{field: -1})

    def test_zero_max_energy_rejected(self) -> None:
        with pytest.raises(InvalidConfiguration, match="max_energy"):
            WorldConfig(max_energy=0)

    def test_zero_max_age_rejected(self) -> None:
        with pytest.raises(InvalidConfiguration, match="max_age"):
            WorldConfig(max_age=0)

    def test_is_frozen(self) -> None:
        world = WorldConfig()
        with pytest.raises(AttributeError):
            world.grid_size = 4  # type: ignore[misc]


def test_reward_config_rejects_negative_values() -> None:
    with pytest.raises(InvalidConfiguration, match="death_penalty"):
        RewardConfig(death_penalty=-1.0)


@pytest.mark.parametrize("discount", [0.0, 1.0, -0.5, 1.5])
def test_solver_discount_must_be_open_interval(discount: float) -> None:
    with pytest.raises(InvalidConfiguration, match="discount"):
        SolverConfig(discount=discount)


def test_solver_rejects_bad_stopping_rule() -> None:
    with pytest.raises(InvalidConfiguration, match="tolerance"):
        SolverConfig(tolerance=0.0)
    with pytest.raises(InvalidConfiguration, match="max_iterations"):
        SolverConfig(max_iterations=0)


def test_planner_allows_undiscounted_search() -> None:
    assert PlannerConfig(discount=1.0).discount == 1.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"discount": 0.0},
        {"n_rollouts": 0},
        {"max_depth": 0},
        {"exploration_constant": -1.0},
        {"n_particles": 0},
        {"filter_attempts_factor": 0},
    ],
)
def test_planner_rejects_invalid_budgets(overrides: dict[str, float]) -> None:
    with pytest.raises(InvalidConfiguration):
        PlannerConfig(**overrides)  # type: ignore[arg-type]


class TestLifeConfigPresets:
    def test_fully_observable_preset(self) -> None:
        config = LifeConfig.fully_observable()
        assert config.world.grid_size == 3
        assert config.world.max_energy == 10
        assert config.world.max_age == 7
        assert config.solver.discount == 0.99

    def test_partially_observable_preset(self) -> None:
        config = LifeConfig.partially_observable()
        assert config.world.grid_size == 5
        assert config.world.max_energy == 15
        assert config.world.old_age == 10
        assert config.world.max_age == 20
        assert config.planner.discount == 0.95


class TestLifeConfigFromDict:
    def test_empty_payload_returns_base(self) -> None:
        base = LifeConfig.partially_observable()
        assert LifeConfig.from_dict({}, base=base) == base

    def test_overrides_single_field(self) -> None:
        config = LifeConfig.from_dict({"world": {"grid_size": 4}, "planner": {"n_rollouts": 50}})
        assert config.world.grid_size == 4
        assert config.world.max_energy == AGENT_MAX_ENERGY
        assert config.planner.n_rollouts == 50

    def test_round_trips_through_to_dict(self) -> None:
        config = LifeConfig.partially_observable()
        assert LifeConfig.from_dict(config.to_dict()) == config

    def test_unknown_section_rejected(self) -> None:
        with pytest.raises(InvalidConfiguration, match="section"):
            LifeConfig.from_dict({"physics": {}})

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(InvalidConfiguration, match="world.gravity"):
            LifeConfig.from_dict({"world": {"gravity": 9.8}})

    def test_invalid_value_propagates(self) -> None:
        with pytest.raises(InvalidConfiguration, match="grid_size"):
            LifeConfig.from_dict({"world": {"grid_size": 0}})

    @pytest.mark.parametrize("section", [[1, 2], 5, "fast"])
    def test_non_object_section_rejected(self, section: object) -> None:
        with pytest.raises(InvalidConfiguration, match="'solver' must be an object"):
            LifeConfig.from_dict({"solver": section})
