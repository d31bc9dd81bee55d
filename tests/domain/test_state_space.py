"""Tests for gridlife.domain.state_space."""

from __future__ import annotations

import pytest

from gridlife.config.types import WorldConfig
from gridlife.domain.state_space import enumerate_states, state_space_size
from gridlife.errors import InvalidConfiguration


def test_default_world_size() -> None:
    # 4 food configs * 9 cells * 11 energies * 8 ages
    assert state_space_size(WorldConfig()) == 3168


def test_enumeration_matches_size() -> None:
    world = WorldConfig()
    states = enumerate_states(world)
    assert len(states) == state_space_size(world)


def test_every_state_holds_exactly_one_food() -> None:
    states = enumerate_states(WorldConfig(grid_size=2, max_energy=2, max_age=2))
    assert all(len(s.food_corners()) == 1 for s in states)


def test_include_unfed_adds_empty_configuration() -> None:
    world = WorldConfig(grid_size=2, max_energy=2, max_age=2)
    states = enumerate_states(world, include_unfed=True)
    assert len(states) == state_space_size(world, include_unfed=True) == 5 * 4 * 3 * 3
    assert sum(1 for s in states if not s.food_corners()) == 4 * 3 * 3


def test_bounds_are_respected() -> None:
    world = WorldConfig(grid_size=3, max_energy=4, max_age=3)
    for state in enumerate_states(world):
        assert 1 <= state.x <= 3 and 1 <= state.y <= 3
        assert 0 <= state.energy <= 4
        assert 0 <= state.age <= 3


def test_oversized_world_rejected() -> None:
    world = WorldConfig(grid_size=50, max_energy=100, max_age=100)
    with pytest.raises(InvalidConfiguration, match="safety cap"):
        enumerate_states(world)
