"""Tests for the fully observable model in gridlife.domain.mdp."""

from __future__ import annotations

from random import Random

import pytest

from gridlife.config.types import LifeConfig
from gridlife.domain.actions import Eat, Look, Move, Reproduce
from gridlife.domain.mdp import FullyObservableModel
from gridlife.domain.state import CORNERS, Corner, LifeState, initial_state
from gridlife.errors import InvalidAction


@pytest.fixture()
def model() -> FullyObservableModel:
    return FullyObservableModel(LifeConfig.fully_observable())


def test_action_space_has_no_looks(model: FullyObservableModel) -> None:
    assert len(model.actions) == 10
    assert not any(isinstance(a, Look) for a in model.actions)


def test_eat_with_food_branches_over_four_corners(model: FullyObservableModel) -> None:
    outcomes = model.outcomes(initial_state(), Eat())
    assert len(outcomes) == 4
    assert {s.food_corners() for s, _ in outcomes} == {(c,) for c in CORNERS}
    for successor, probability in outcomes:
        assert probability == pytest.approx(0.25)
        assert (successor.x, successor.y, successor.energy, successor.age) == (1, 1, 9, 1)


def test_move_with_food_is_deterministic(model: FullyObservableModel) -> None:
    outcomes = model.outcomes(initial_state(energy=5), Move(1, 1))
    assert len(outcomes) == 1
    successor, probability = outcomes[0]
    assert probability == 1.0
    assert successor == LifeState(True, False, False, False, 2, 2, 4, 1)


def test_moves_carry_no_extra_cost(model: FullyObservableModel) -> None:
    successor, _ = model.outcomes(initial_state(energy=5), Move(1, 0))[0]
    assert successor.energy == 4


def test_probabilities_sum_to_one(model: FullyObservableModel) -> None:
    for state in (initial_state(energy=3), initial_state(food=Corner.D, energy=6, age=2)):
        for action in model.actions:
            total = sum(p for _, p in model.outcomes(state, action))
            assert total == pytest.approx(1.0)


def test_transition_probability(model: FullyObservableModel) -> None:
    state = initial_state()
    to_b = LifeState(False, True, False, False, 1, 1, 9, 1)
    assert model.transition_probability(state, Eat(), to_b) == pytest.approx(0.25)
    assert model.transition_probability(state, Reproduce(), to_b) == 0.0


class TestReward:
    def test_live_state_rewards_energy(self, model: FullyObservableModel) -> None:
        assert model.reward(initial_state(energy=7), Eat()) == 7.0

    def test_starved_state_is_penalised(self, model: FullyObservableModel) -> None:
        assert model.reward(initial_state(energy=0), Eat()) == -1_000_000.0

    def test_old_state_is_penalised(self, model: FullyObservableModel) -> None:
        assert model.reward(initial_state(energy=5, age=7), Move(1, 0)) == -1_000_000.0

    def test_terminal_predicate_matches_penalty(self, model: FullyObservableModel) -> None:
        assert model.is_terminal(initial_state(energy=0))
        assert not model.is_terminal(initial_state(energy=1, age=6))


def test_sample_draws_from_outcomes(model: FullyObservableModel) -> None:
    rng = Random(3)
    state = initial_state()
    seen = {model.sample(state, Eat(), rng).food_corners() for _ in range(200)}
    assert seen == {(c,) for c in CORNERS}


def test_look_is_rejected(model: FullyObservableModel) -> None:
    with pytest.raises(InvalidAction, match="look"):
        model.outcomes(initial_state(), Look(1, 1))
    with pytest.raises(InvalidAction):
        model.sample(initial_state(), Look(3, 3), Random(0))
