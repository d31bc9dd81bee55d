"""Dense tabular value iteration over an enumerated state space.

States are indexed once in sorted order and every ``(state, action)`` pair's
successor indices, probabilities and reward are packed into numpy arrays, so
a Bellman sweep is a handful of vectorised operations. Each sweep reads the
previous value array and writes a fresh one.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np

from gridlife.config.types import LifeConfig, SolverConfig
from gridlife.domain.actions import Action
from gridlife.domain.mdp import FullyObservableModel
from gridlife.domain.state import LifeState
from gridlife.domain.state_space import enumerate_states
from gridlife.errors import ConvergenceWarning

logger = logging.getLogger(__name__)

OutcomeFn = Callable[[LifeState, Action], Iterable[tuple[LifeState, float]]]
RewardFn = Callable[[LifeState, Action], float]


class Policy(Mapping[LifeState, Action]):
    """Immutable state-to-action table produced by a solver."""

    def __init__(self, table: Mapping[LifeState, Action]) -> None:
        self._table = MappingProxyType(dict(table))

    def __getitem__(self, state: LifeState) -> Action:
        return self._table[state]

    def __iter__(self) -> Iterator[LifeState]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __call__(self, state: LifeState) -> Action:
        return self._table[state]


@dataclass(frozen=True)
class SolveResult:
    """Greedy policy plus the value table and convergence diagnostics."""

    policy: Policy
    values: Mapping[LifeState, float]
    iterations: int
    residual: float
    converged: bool


def _pack_model(
    states: Sequence[LifeState],
    actions: Sequence[Action],
    outcomes: OutcomeFn,
    reward: RewardFn,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return successor-index, probability and reward arrays.

    Shapes are (S, A, K), (S, A, K) and (S, A); unused successor slots carry
    probability 0.
    """
    index = {state: i for i, state in enumerate(states)}
    n_states, n_actions = len(states), len(actions)
    rows: list[list[list[tuple[int, float]]]] = []
    rewards = np.empty((n_states, n_actions), dtype=float)
    width = 1
    for s_idx, state in enumerate(states):
        per_action: list[list[tuple[int, float]]] = []
        for a_idx, action in enumerate(actions):
            pairs: list[tuple[int, float]] = []
            for successor, probability in outcomes(state, action):
                if probability == 0.0:
                    continue
                try:
                    pairs.append((index[successor], probability))
                except KeyError as exc:
                    raise ValueError(
                        f"successor {successor} of {state} is outside the enumerated states"
                    ) from exc
            width = max(width, len(pairs))
            per_action.append(pairs)
            rewards[s_idx, a_idx] = reward(state, action)
        rows.append(per_action)

    successors = np.zeros((n_states, n_actions, width), dtype=np.int64)
    probabilities = np.zeros((n_states, n_actions, width), dtype=float)
    for s_idx, per_action in enumerate(rows):
        for a_idx, pairs in enumerate(per_action):
            for k, (succ_idx, probability) in enumerate(pairs):
                successors[s_idx, a_idx, k] = succ_idx
                probabilities[s_idx, a_idx, k] = probability
    return successors, probabilities, rewards


def value_iteration(
    states: Iterable[LifeState],
    actions: Sequence[Action],
    outcomes: OutcomeFn,
    reward: RewardFn,
    *,
    discount: float,
    tolerance: float,
    max_iterations: int,
) -> SolveResult:
    """Solve for the optimal stationary policy by repeated Bellman backups.

    Stops once the Bellman residual ``max |V' - V|`` drops below ``tolerance``;
    otherwise stops after ``max_iterations`` sweeps, warns with
    :class:`ConvergenceWarning`, and still returns the best-effort policy.
    Ties between actions go to the earliest one in ``actions``.
    """
    ordered = sorted(states)
    if not ordered:
        raise ValueError("states must not be empty")
    if not actions:
        raise ValueError("actions must not be empty")

    successors, probabilities, rewards = _pack_model(ordered, actions, outcomes, reward)
    values = np.zeros(len(ordered), dtype=float)
    residual = float("inf")
    iterations = 0
    converged = False

    while iterations < max_iterations:
        q_values = rewards + discount * np.sum(probabilities * values[successors], axis=2)
        next_values = q_values.max(axis=1)
        residual = float(np.max(np.abs(next_values - values)))
        values = next_values
        iterations += 1
        if residual < tolerance:
            converged = True
            break

    if converged:
        logger.info(
            "Value iteration converged after %d sweeps (residual=%.3g)", iterations, residual
        )
    else:
        logger.warning(
            "Value iteration stopped at %d sweeps without converging (residual=%.3g)",
            iterations,
            residual,
        )
        warnings.warn(
            f"value iteration did not converge within {max_iterations} iterations "
            f"(residual={residual:.3g}, tolerance={tolerance:.3g})",
            ConvergenceWarning,
            stacklevel=2,
        )

    q_values = rewards + discount * np.sum(probabilities * values[successors], axis=2)
    best = np.argmax(q_values, axis=1)
    policy = Policy({state: actions[int(best[i])] for i, state in enumerate(ordered)})
    value_table = MappingProxyType({state: float(values[i]) for i, state in enumerate(ordered)})
    return SolveResult(
        policy=policy,
        values=value_table,
        iterations=iterations,
        residual=residual,
        converged=converged,
    )


class ValueIterationSolver:
    """Config-bound wrapper around :func:`value_iteration`."""

    def __init__(self, config: SolverConfig) -> None:
        self.config = config

    def solve(self, model: FullyObservableModel, states: Iterable[LifeState]) -> SolveResult:
        return value_iteration(
            states,
            model.actions,
            model.outcomes,
            model.reward,
            discount=self.config.discount,
            tolerance=self.config.tolerance,
            max_iterations=self.config.max_iterations,
        )


def solve_life_mdp(config: LifeConfig) -> SolveResult:
    """Enumerate the fully observable state space and solve it."""
    model = FullyObservableModel(config)
    states = enumerate_states(config.world)
    return ValueIterationSolver(config.solver).solve(model, states)
