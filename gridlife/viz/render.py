"""Matplotlib rendering of a single episode trajectory."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from gridlife.domain.state import CORNERS
from gridlife.simulation.persistence import read_trajectory

FOOD_COLOR = "#4CAF50"
PATH_COLOR = "#2196F3"
DEATH_COLOR = "#FF5722"
GRID_LINE_COLOR = "#CCCCCC"

SERIES_STYLES: dict[str, tuple[str, str]] = {
    "energy": ("Energy", "#FFC107"),
    "age": ("Age", "#9C27B0"),
    "cumulative_reward": ("Cumulative reward", "#2196F3"),
}


def _draw_grid_path(ax: plt.Axes, rows: list[dict[str, object]], grid_size: int) -> None:
    """Draw the visited cells over an N x N board with the corners marked."""
    visits = np.zeros((grid_size, grid_size), dtype=int)
    xs = [int(rows[0]["x"])] + [int(row["next_x"]) for row in rows]  # type: ignore[call-overload]
    ys = [int(rows[0]["y"])] + [int(row["next_y"]) for row in rows]  # type: ignore[call-overload]
    for x, y in zip(xs, ys, strict=True):
        visits[x - 1, y - 1] += 1

    ax.imshow(visits, cmap="Blues", origin="upper", aspect="equal")
    for i in range(grid_size + 1):
        ax.axhline(i - 0.5, color=GRID_LINE_COLOR, linewidth=0.5)
        ax.axvline(i - 0.5, color=GRID_LINE_COLOR, linewidth=0.5)
    for corner in CORNERS:
        cx, cy = corner.position(grid_size)
        ax.text(cy - 1, cx - 1, corner.name, ha="center", va="center", color=FOOD_COLOR)
    ax.plot([y - 1 for y in ys], [x - 1 for x in xs], color=PATH_COLOR, linewidth=1.5, alpha=0.7)
    ax.set_xticks(range(grid_size), [str(i + 1) for i in range(grid_size)])
    ax.set_yticks(range(grid_size), [str(i + 1) for i in range(grid_size)])
    ax.set_xlabel("y")
    ax.set_ylabel("x")
    ax.set_title("Visited cells")


def death_step(rows: list[dict[str, object]], max_age: int | None = None) -> int | None:
    """Return the 1-based step at which the agent died, or None if it survived the log.

    Starvation is read from ``next_energy``; old age is only detected when
    ``max_age`` is given.
    """
    last = rows[-1]
    died = int(last["next_energy"]) <= 0  # type: ignore[call-overload]
    if max_age is not None:
        died = died or int(last["next_age"]) >= max_age  # type: ignore[call-overload]
    return int(last["step"]) + 1 if died else None  # type: ignore[call-overload]


def render_trajectory(
    trajectory_path: Path,
    output_path: Path,
    grid_size: int,
    title: str | None = None,
    max_age: int | None = None,
) -> Path:
    """Render energy, age and cumulative reward over time next to the agent's path.

    A dashed marker is drawn at the step where the agent starved, or reached
    ``max_age`` when it is given.
    """
    rows = read_trajectory(trajectory_path)
    if not rows:
        raise ValueError(f"trajectory is empty: {trajectory_path}")

    fig, axes = plt.subplots(1, 2, figsize=(11, 4), gridspec_kw={"width_ratios": [2, 1]})
    ax_series, ax_grid = axes
    steps = [int(row["step"]) + 1 for row in rows]  # type: ignore[call-overload]
    for column, (label, color) in SERIES_STYLES.items():
        source = "next_" + column if column in ("energy", "age") else column
        values = [float(row[source]) for row in rows]  # type: ignore[arg-type]
        axis = ax_series.twinx() if column == "cumulative_reward" else ax_series
        axis.plot(steps, values, label=label, color=color, linewidth=1.8)
        if column == "cumulative_reward":
            axis.set_ylabel(label)
    last = rows[-1]
    died_at = death_step(rows, max_age)
    if died_at is not None:
        ax_series.axvline(died_at, color=DEATH_COLOR, linestyle="--", linewidth=1.0)
    ax_series.set_xlabel("Step")
    ax_series.set_ylabel("Energy / age")
    ax_series.grid(True, alpha=0.3)
    ax_series.legend(loc="upper left")

    _draw_grid_path(ax_grid, rows, grid_size)

    fig.suptitle(title or f"Trajectory {last['run_id']}", fontsize=13)
    fig.tight_layout()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
