"""Closed action set: Move, Look, Eat and Reproduce.

The action space is enumerated once per model in a fixed order; solvers break
ties by this order, so it must never depend on set or dict iteration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from gridlife.config.constants import MOVE_DIRECTIONS
from gridlife.domain.state import CORNERS
from gridlife.errors import InvalidAction


@dataclass(frozen=True)
class Move:
    """Step by ``(dx, dy)``; both deltas in {-1, 0, 1}."""

    dx: int
    dy: int

    def __post_init__(self) -> None:
        if self.dx not in (-1, 0, 1) or self.dy not in (-1, 0, 1):
            raise InvalidAction(f"move deltas must be in {{-1, 0, 1}}, got ({self.dx}, {self.dy})")


@dataclass(frozen=True)
class Look:
    """Inspect the absolute cell ``(x, y)`` for food.

    Coordinates are 1-based. Whether the cell is a corner depends on the grid
    size, so that check belongs to the partially observable model.
    """

    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 1 or self.y < 1:
            raise InvalidAction(f"look coordinates must be >= 1, got ({self.x}, {self.y})")


@dataclass(frozen=True)
class Eat:
    """Eat the food on the agent's cell, if any."""


@dataclass(frozen=True)
class Reproduce:
    """Reset age at an energy cost."""


Action: TypeAlias = Move | Look | Eat | Reproduce


def action_label(action: Action) -> str:
    """Stable human-readable label used in logs and Parquet columns."""
    if isinstance(action, Move):
        return f"move({action.dx},{action.dy})"
    if isinstance(action, Look):
        return f"look({action.x},{action.y})"
    if isinstance(action, Eat):
        return "eat"
    if isinstance(action, Reproduce):
        return "reproduce"
    raise InvalidAction(f"unrecognized action: {action!r}")


def build_action_space(grid_size: int, include_look: bool) -> tuple[Action, ...]:
    """Return the fixed action ordering: 8 moves, optional corner looks, eat, reproduce."""
    actions: list[Action] = [Move(dx, dy) for dx, dy in MOVE_DIRECTIONS]
    if include_look:
        actions.extend(Look(*corner.position(grid_size)) for corner in CORNERS)
    actions.append(Eat())
    actions.append(Reproduce())
    return tuple(actions)
