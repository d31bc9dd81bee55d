"""Offline solvers for the fully observable variant."""

from gridlife.solvers.value_iteration import (
    Policy,
    SolveResult,
    ValueIterationSolver,
    solve_life_mdp,
    value_iteration,
)

__all__ = [
    "Policy",
    "SolveResult",
    "ValueIterationSolver",
    "solve_life_mdp",
    "value_iteration",
]
