"""Episode drivers for the solved policy and the online planner."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from random import Random

from gridlife.config.types import LifeConfig
from gridlife.domain.actions import Action, action_label
from gridlife.domain.state import LifeState, Observation, is_terminal, termination_reason
from gridlife.planning.belief import ParticleFilter
from gridlife.planning.pomcp import POMCPPlanner
from gridlife.simulation.environment import (
    FullyObservableEnvironment,
    PartiallyObservableEnvironment,
)

logger = logging.getLogger(__name__)

PolicyFn = Callable[[LifeState], Action]


@dataclass(frozen=True)
class StepRecord:
    """One driver step as reported back to the caller."""

    step: int
    state: LifeState
    action: Action
    observation: Observation | None
    reward: float
    cumulative_reward: float
    next_state: LifeState
    belief_size: int | None = None


@dataclass(frozen=True)
class EpisodeResult:
    """Whole-episode trace plus its termination summary."""

    run_id: str
    mode: str
    records: tuple[StepRecord, ...]
    total_reward: float
    terminated_at: int | None
    termination_reason: str | None

    @property
    def survived(self) -> bool:
        return self.termination_reason is None

    @property
    def final_state(self) -> LifeState | None:
        return self.records[-1].next_state if self.records else None


def _check_max_steps(max_steps: int) -> None:
    if max_steps < 1:
        raise ValueError("max_steps must be >= 1")


def _start_terminated(
    run_id: str, mode: str, state: LifeState, config: LifeConfig
) -> EpisodeResult | None:
    """Short-circuit an episode whose start state is already terminal."""
    reason = termination_reason(state, config.world)
    if reason is None:
        return None
    logger.warning("Episode %s starts in a terminal state (%s); not stepping", run_id, reason.value)
    return EpisodeResult(
        run_id=run_id,
        mode=mode,
        records=(),
        total_reward=0.0,
        terminated_at=0,
        termination_reason=reason.value,
    )


def run_policy_episode(
    config: LifeConfig,
    policy: PolicyFn,
    initial_state: LifeState,
    max_steps: int,
    rng: Random,
    run_id: str = "mdp",
) -> EpisodeResult:
    """Follow a static policy in the fully observable environment until death or ``max_steps``."""
    _check_max_steps(max_steps)
    env = FullyObservableEnvironment(config, initial_state, rng)
    state = env.reset()
    early = _start_terminated(run_id, "mdp", state, config)
    if early is not None:
        return early

    records: list[StepRecord] = []
    total = 0.0
    terminated_at: int | None = None
    reason: str | None = None
    for step in range(max_steps):
        action = policy(state)
        outcome = env.step(state, action)
        total += outcome.reward
        records.append(
            StepRecord(
                step=step,
                state=state,
                action=action,
                observation=None,
                reward=outcome.reward,
                cumulative_reward=total,
                next_state=outcome.next_state,
            )
        )
        logger.debug(
            "[%s] step %d: %s -> %s (r=%.1f)",
            run_id,
            step,
            action_label(action),
            outcome.next_state,
            outcome.reward,
        )
        state = outcome.next_state
        if outcome.terminal:
            terminated_at = step
            reason = outcome.termination_reason.value if outcome.termination_reason else None
            break

    result = EpisodeResult(
        run_id=run_id,
        mode="mdp",
        records=tuple(records),
        total_reward=total,
        terminated_at=terminated_at,
        termination_reason=reason,
    )
    logger.info(
        "Episode %s finished after %d steps (reward=%.1f, termination=%s)",
        run_id,
        len(records),
        total,
        reason,
    )
    return result


def run_planner_episode(
    config: LifeConfig,
    initial_state: LifeState,
    max_steps: int,
    rng: Random,
    planner: POMCPPlanner | None = None,
    belief_filter: ParticleFilter | None = None,
    run_id: str = "pomdp",
) -> EpisodeResult:
    """Re-plan from the current belief every step in the partially observable environment.

    The environment, planner and filter draw from independent streams seeded
    from ``rng`` unless a planner or filter is supplied.
    """
    _check_max_steps(max_steps)
    env = PartiallyObservableEnvironment(config, initial_state, Random(rng.getrandbits(64)))
    if planner is None:
        planner = POMCPPlanner(env.model, config.planner, Random(rng.getrandbits(64)))
    if belief_filter is None:
        belief_filter = ParticleFilter(
            env.model,
            n_particles=config.planner.n_particles,
            rng=Random(rng.getrandbits(64)),
            attempts_factor=config.planner.filter_attempts_factor,
        )

    state = env.reset()
    early = _start_terminated(run_id, "pomdp", state, config)
    if early is not None:
        return early

    belief = belief_filter.initial_belief(state)
    planner.reset()
    records: list[StepRecord] = []
    total = 0.0
    terminated_at: int | None = None
    reason: str | None = None
    for step in range(max_steps):
        action = planner.plan(belief)
        outcome = env.step(state, action)
        total += outcome.reward
        if outcome.observation is None:
            raise RuntimeError("partially observable environment returned no observation")
        if not is_terminal(outcome.next_state, config.world):
            belief = belief_filter.update(belief, action, outcome.observation)
            planner.advance(action, outcome.observation)
        records.append(
            StepRecord(
                step=step,
                state=state,
                action=action,
                observation=outcome.observation,
                reward=outcome.reward,
                cumulative_reward=total,
                next_state=outcome.next_state,
                belief_size=len(belief),
            )
        )
        logger.debug(
            "[%s] step %d: %s -> %s (r=%.1f)",
            run_id,
            step,
            action_label(action),
            outcome.next_state,
            outcome.reward,
        )
        state = outcome.next_state
        if outcome.terminal:
            terminated_at = step
            reason = outcome.termination_reason.value if outcome.termination_reason else None
            break

    result = EpisodeResult(
        run_id=run_id,
        mode="pomdp",
        records=tuple(records),
        total_reward=total,
        terminated_at=terminated_at,
        termination_reason=reason,
    )
    logger.info(
        "Episode %s finished after %d steps (reward=%.1f, termination=%s, reseeds=%d)",
        run_id,
        len(records),
        total,
        reason,
        belief_filter.reseed_count,
    )
    return result
