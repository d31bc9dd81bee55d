"""Tests for the generative model in gridlife.domain.pomdp."""

from __future__ import annotations

from random import Random

import pytest

from gridlife.config.types import LifeConfig, WorldConfig
from gridlife.domain.actions import Eat, Look, Move, Reproduce
from gridlife.domain.pomdp import PartiallyObservableModel
from gridlife.domain.state import Corner, LookResult, Observation, initial_state
from gridlife.errors import InvalidAction


@pytest.fixture()
def model() -> PartiallyObservableModel:
    return PartiallyObservableModel(LifeConfig.partially_observable())


def test_action_space_includes_corner_looks(model: PartiallyObservableModel) -> None:
    looks = [a for a in model.actions if isinstance(a, Look)]
    assert looks == [Look(1, 1), Look(1, 5), Look(5, 1), Look(5, 5)]


class TestTransition:
    def test_young_move_succeeds_and_costs_two(self, model: PartiallyObservableModel) -> None:
        state = initial_state(position=(3, 3), energy=10)
        after = model.transition(state, Move(1, 0), Random(0))
        assert after.position == (4, 3)
        assert after.energy == 8
        assert after.age == 1

    def test_frail_agent_fails_some_moves(self) -> None:
        world = WorldConfig(grid_size=5, max_energy=15, old_age=0, max_age=20)
        model = PartiallyObservableModel(LifeConfig(world=world))
        rng = Random(1)
        state = initial_state(position=(3, 3), energy=10, age=15)
        successors = [model.transition(state, Move(0, 1), rng) for _ in range(300)]
        positions = {s.position for s in successors}
        assert positions == {(3, 3), (3, 4)}
        assert all(s.energy == 8 for s in successors)

    def test_eating_last_food_regrows_one_corner(self, model: PartiallyObservableModel) -> None:
        rng = Random(5)
        seen: set[Corner] = set()
        for _ in range(200):
            after = model.transition(initial_state(energy=5), Eat(), rng)
            assert len(after.food_corners()) == 1
            seen.add(after.food_corners()[0])
        assert seen == {Corner.A, Corner.B, Corner.C, Corner.D}

    def test_look_at_non_corner_rejected(self, model: PartiallyObservableModel) -> None:
        with pytest.raises(InvalidAction):
            model.transition(initial_state(energy=5), Look(2, 3), Random(0))


class TestObservation:
    def test_look_reports_food_on_successor(self, model: PartiallyObservableModel) -> None:
        state = initial_state(food=Corner.B, position=(2, 2), energy=5, age=1)
        obs = model.observe(state, Look(1, 5))
        assert obs == Observation(look=LookResult(1, 5, True), x=2, y=2, energy=5, age=1)

    def test_look_at_empty_corner(self, model: PartiallyObservableModel) -> None:
        state = initial_state(food=Corner.B, energy=5)
        assert model.observe(state, Look(5, 5)).look == LookResult(5, 5, False)

    def test_non_look_has_no_look_result(self, model: PartiallyObservableModel) -> None:
        obs = model.observe(initial_state(energy=5), Eat())
        assert obs.look is None
        assert (obs.x, obs.y, obs.energy, obs.age) == (1, 1, 5, 0)

    def test_generate_observes_successor(self, model: PartiallyObservableModel) -> None:
        step = model.generate(initial_state(energy=5), Look(1, 1), Random(0))
        assert step.observation.energy == step.next_state.energy == 4
        assert step.observation.age == 1
        assert step.observation.look == LookResult(1, 1, True)


class TestReward:
    def test_look_earns_survival_bonus(self, model: PartiallyObservableModel) -> None:
        state = initial_state(energy=5)
        after = model.transition(state, Look(1, 1), Random(0))
        assert model.reward(state, Look(1, 1), after) == 1.0

    def test_move_nets_zero(self, model: PartiallyObservableModel) -> None:
        state = initial_state(position=(2, 2), energy=5)
        after = model.transition(state, Move(1, 1), Random(0))
        assert model.reward(state, Move(1, 1), after) == 0.0

    def test_reproduce_bonus(self, model: PartiallyObservableModel) -> None:
        state = initial_state(energy=8, age=4)
        after = model.transition(state, Reproduce(), Random(0))
        assert model.reward(state, Reproduce(), after) == 11.0

    def test_successful_eat_bonus(self, model: PartiallyObservableModel) -> None:
        state = initial_state(energy=5)
        after = model.transition(state, Eat(), Random(0))
        assert model.reward(state, Eat(), after) == 11.0

    def test_failed_eat_penalty(self, model: PartiallyObservableModel) -> None:
        state = initial_state(food=Corner.D, energy=5)
        after = model.transition(state, Eat(), Random(0))
        assert model.reward(state, Eat(), after) == -9.0

    def test_death_penalty_on_terminal_successor(self, model: PartiallyObservableModel) -> None:
        state = initial_state(food=Corner.D, energy=1)
        step = model.generate(state, Look(1, 1), Random(0))
        assert model.is_terminal(step.next_state)
        assert step.reward == -1_000_000.0
