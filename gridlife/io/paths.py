"""Path construction helpers for simulation output directories."""

from __future__ import annotations

from pathlib import Path


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def trajectory_path(out_dir: Path) -> Path:
    """Return path to the trajectory Parquet file."""
    return logs_dir(out_dir) / "trajectory.parquet"


def episode_summary_path(out_dir: Path) -> Path:
    """Return path to the episode summary JSON file."""
    return out_dir / "episode.json"


def trajectory_plot_path(out_dir: Path) -> Path:
    """Return path to the rendered trajectory figure."""
    return out_dir / "trajectory.png"
