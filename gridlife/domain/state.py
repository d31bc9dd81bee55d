"""Immutable world state, observations and the terminal predicate.

Grid coordinates are 1-based: ``1 <= x, y <= N``. Food can only grow in the
four corners::

    +------------+
    | A        B |
    |            |
    | C        D |
    +------------+

with A=(1, 1), B=(1, N), C=(N, 1), D=(N, N).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from gridlife.config.constants import INITIAL_AGE, INITIAL_ENERGY, INITIAL_POSITION
from gridlife.config.types import WorldConfig


class Corner(str, Enum):
    """Food-bearing grid corners, in flag order."""

    A = "a"
    B = "b"
    C = "c"
    D = "d"

    def position(self, grid_size: int) -> tuple[int, int]:
        """Return the 1-based ``(x, y)`` cell of this corner on an N x N grid."""
        n = grid_size
        return {
            Corner.A: (1, 1),
            Corner.B: (1, n),
            Corner.C: (n, 1),
            Corner.D: (n, n),
        }[self]


CORNERS: tuple[Corner, ...] = (Corner.A, Corner.B, Corner.C, Corner.D)


def corner_at(x: int, y: int, grid_size: int) -> Corner | None:
    """Return the corner located at ``(x, y)``, or None for interior/edge cells."""
    for corner in CORNERS:
        if corner.position(grid_size) == (x, y):
            return corner
    return None


class TerminationReason(str, Enum):
    """Death causes reported by the driver."""

    STARVATION = "starvation"
    OLD_AGE = "old_age"


@dataclass(frozen=True, order=True)
class LifeState:
    """One full world state: corner food flags plus the agent's body."""

    food_a: bool
    food_b: bool
    food_c: bool
    food_d: bool
    x: int
    y: int
    energy: int
    age: int

    @property
    def food_flags(self) -> tuple[bool, bool, bool, bool]:
        return (self.food_a, self.food_b, self.food_c, self.food_d)

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    def food_corners(self) -> tuple[Corner, ...]:
        """Return every corner currently holding food."""
        return tuple(c for c, flag in zip(CORNERS, self.food_flags, strict=True) if flag)

    def has_food(self, corner: Corner) -> bool:
        return self.food_flags[CORNERS.index(corner)]

    def has_food_at(self, x: int, y: int, grid_size: int) -> bool:
        """True when ``(x, y)`` is a corner and that corner holds food."""
        corner = corner_at(x, y, grid_size)
        return corner is not None and self.has_food(corner)

    def without_food(self) -> LifeState:
        return replace(self, food_a=False, food_b=False, food_c=False, food_d=False)

    def with_single_food(self, corner: Corner) -> LifeState:
        """Return a copy where ``corner`` is the only corner holding food."""
        return replace(
            self,
            food_a=corner is Corner.A,
            food_b=corner is Corner.B,
            food_c=corner is Corner.C,
            food_d=corner is Corner.D,
        )

    def __str__(self) -> str:
        food = "".join(c.value for c in self.food_corners()) or "-"
        return f"State(food={food}, pos=({self.x},{self.y}), energy={self.energy}, age={self.age})"


@dataclass(frozen=True)
class LookResult:
    """What a Look action revealed about one corner."""

    x: int
    y: int
    food_present: bool


@dataclass(frozen=True)
class Observation:
    """Agent percept: optional look result plus its own exact internal state."""

    look: LookResult | None
    x: int
    y: int
    energy: int
    age: int


def is_terminal(state: LifeState, world: WorldConfig) -> bool:
    """Return True when the agent has starved or reached its maximum age."""
    return state.energy <= 0 or state.age >= world.max_age


def termination_reason(state: LifeState, world: WorldConfig) -> TerminationReason | None:
    """Classify a terminal state; starvation wins when both conditions hold."""
    if state.energy <= 0:
        return TerminationReason.STARVATION
    if state.age >= world.max_age:
        return TerminationReason.OLD_AGE
    return None


def initial_state(
    food: Corner = Corner.A,
    position: tuple[int, int] = INITIAL_POSITION,
    energy: int = INITIAL_ENERGY,
    age: int = INITIAL_AGE,
) -> LifeState:
    """Build the default start state: food at A, agent at (1, 1), energy 1, age 0."""
    x, y = position
    return LifeState(False, False, False, False, x, y, energy, age).with_single_food(food)
