"""Tests for gridlife.simulation.persistence and the trajectory schema."""

from __future__ import annotations

from pathlib import Path
from random import Random

import pyarrow.parquet as pq

from gridlife.config.types import LifeConfig, PlannerConfig
from gridlife.domain.actions import Look, Move, Reproduce
from gridlife.domain.state import LifeState, initial_state
from gridlife.io.paths import trajectory_path
from gridlife.io.schemas import TRAJECTORY_SCHEMA
from gridlife.simulation.engine import run_planner_episode, run_policy_episode
from gridlife.simulation.persistence import read_trajectory, trajectory_columns, write_trajectory


def _policy(state: LifeState) -> Move | Reproduce:
    return Reproduce() if state.energy >= 5 else Move(1, 1)


def test_policy_episode_round_trip(tmp_path: Path) -> None:
    result = run_policy_episode(
        LifeConfig.fully_observable(), _policy, initial_state(energy=6), 5, Random(0), run_id="r0"
    )
    path = write_trajectory(result, trajectory_path(tmp_path))
    assert path == tmp_path / "logs" / "trajectory.parquet"
    assert path.exists()

    table = pq.read_table(path)
    assert table.schema.names == TRAJECTORY_SCHEMA.names

    rows = read_trajectory(path)
    assert len(rows) == len(result.records)
    first = rows[0]
    assert first["run_id"] == "r0"
    assert first["mode"] == "mdp"
    assert first["action"] == "reproduce"
    assert (first["x"], first["y"], first["energy"], first["age"]) == (1, 1, 6, 0)
    assert first["food"] == "a"
    assert first["next_energy"] == 2
    assert first["look_x"] is None
    assert first["belief_size"] is None
    assert [row["step"] for row in rows] == list(range(len(rows)))


def test_planner_episode_records_look_and_belief(tmp_path: Path) -> None:
    base = LifeConfig.partially_observable()
    config = LifeConfig(
        world=base.world,
        rewards=base.rewards,
        solver=base.solver,
        planner=PlannerConfig(n_rollouts=20, max_depth=3, n_particles=20),
    )
    result = run_planner_episode(config, initial_state(energy=10), 3, Random(4), run_id="p0")
    rows = read_trajectory(write_trajectory(result, tmp_path / "t.parquet"))
    assert all(row["mode"] == "pomdp" for row in rows)
    assert all(row["belief_size"] >= 1 for row in rows)
    for row, record in zip(rows, result.records, strict=True):
        if isinstance(record.action, Look):
            assert row["look_x"] == record.action.x
            assert row["look_food"] is not None
        else:
            assert row["look_food"] is None


def test_columns_are_parallel() -> None:
    result = run_policy_episode(
        LifeConfig.fully_observable(), _policy, initial_state(energy=9), 4, Random(1)
    )
    columns = trajectory_columns(result)
    assert set(columns) == set(TRAJECTORY_SCHEMA.names)
    assert {len(values) for values in columns.values()} == {len(result.records)}


def test_empty_episode_writes_empty_table(tmp_path: Path) -> None:
    result = run_policy_episode(
        LifeConfig.fully_observable(), _policy, initial_state(energy=0), 4, Random(1)
    )
    rows = read_trajectory(write_trajectory(result, tmp_path / "nested" / "t.parquet"))
    assert rows == []
