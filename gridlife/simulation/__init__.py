"""Simulation driver: environments, episode loops and trajectory persistence."""

from gridlife.simulation.engine import (
    EpisodeResult,
    StepRecord,
    run_planner_episode,
    run_policy_episode,
)
from gridlife.simulation.environment import (
    FullyObservableEnvironment,
    PartiallyObservableEnvironment,
    StepOutcome,
)
from gridlife.simulation.persistence import read_trajectory, write_trajectory

__all__ = [
    "EpisodeResult",
    "FullyObservableEnvironment",
    "PartiallyObservableEnvironment",
    "StepOutcome",
    "StepRecord",
    "read_trajectory",
    "run_planner_episode",
    "run_policy_episode",
    "write_trajectory",
]
