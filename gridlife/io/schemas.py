"""Parquet schema definitions for simulation artifacts.

Every module that writes or reads a trajectory log works against the column
contract defined here.
"""

from __future__ import annotations

import pyarrow as pa

TRAJECTORY_SCHEMA_VERSION = 1

TRAJECTORY_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("mode", pa.string()),
        ("step", pa.int64()),
        ("action", pa.string()),
        ("reward", pa.float64()),
        ("cumulative_reward", pa.float64()),
        ("x", pa.int64()),
        ("y", pa.int64()),
        ("energy", pa.int64()),
        ("age", pa.int64()),
        ("food", pa.string()),
        ("next_x", pa.int64()),
        ("next_y", pa.int64()),
        ("next_energy", pa.int64()),
        ("next_age", pa.int64()),
        ("next_food", pa.string()),
        ("look_x", pa.int64()),
        ("look_y", pa.int64()),
        ("look_food", pa.bool_()),
        ("belief_size", pa.int64()),
    ]
)
