"""Parquet persistence for episode trajectories."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from gridlife.domain.actions import action_label
from gridlife.domain.state import LifeState
from gridlife.io.schemas import TRAJECTORY_SCHEMA
from gridlife.simulation.engine import EpisodeResult


def _food_label(state: LifeState) -> str | None:
    corners = state.food_corners()
    return "".join(corner.value for corner in corners) if corners else None


def trajectory_columns(result: EpisodeResult) -> dict[str, list[object]]:
    """Flatten step records into column lists matching ``TRAJECTORY_SCHEMA``."""
    columns: dict[str, list[object]] = {name: [] for name in TRAJECTORY_SCHEMA.names}
    for record in result.records:
        look = record.observation.look if record.observation is not None else None
        row: dict[str, object] = {
            "run_id": result.run_id,
            "mode": result.mode,
            "step": record.step,
            "action": action_label(record.action),
            "reward": record.reward,
            "cumulative_reward": record.cumulative_reward,
            "x": record.state.x,
            "y": record.state.y,
            "energy": record.state.energy,
            "age": record.state.age,
            "food": _food_label(record.state),
            "next_x": record.next_state.x,
            "next_y": record.next_state.y,
            "next_energy": record.next_state.energy,
            "next_age": record.next_state.age,
            "next_food": _food_label(record.next_state),
            "look_x": look.x if look is not None else None,
            "look_y": look.y if look is not None else None,
            "look_food": look.food_present if look is not None else None,
            "belief_size": record.belief_size,
        }
        for name, value in row.items():
            columns[name].append(value)
    return columns


def write_trajectory(result: EpisodeResult, path: Path) -> Path:
    """Write ``result`` as one Parquet table; parent directories are created."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    table = pa.Table.from_pydict(trajectory_columns(result), schema=TRAJECTORY_SCHEMA)
    pq.write_table(table, path)
    return path


def read_trajectory(path: Path) -> list[dict[str, object]]:
    """Load a trajectory log as rows ordered by step."""
    rows = pq.read_table(Path(path)).to_pylist()
    return sorted(rows, key=lambda row: int(row["step"]))  # type: ignore[call-overload]
