"""Unweighted particle belief and a rejection-sampling particle filter."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from random import Random

from gridlife.domain.actions import Action, action_label
from gridlife.domain.pomdp import PartiallyObservableModel
from gridlife.domain.state import CORNERS, Corner, LifeState, Observation, initial_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParticleBelief:
    """Non-empty multiset of state hypotheses; duplicates carry extra weight."""

    particles: tuple[LifeState, ...]

    def __post_init__(self) -> None:
        if not self.particles:
            raise ValueError("belief must hold at least one particle")

    def __len__(self) -> int:
        return len(self.particles)

    def sample(self, rng: Random) -> LifeState:
        return self.particles[rng.randrange(len(self.particles))]

    def support(self) -> frozenset[LifeState]:
        """Distinct states with non-zero mass."""
        return frozenset(self.particles)

    def food_probabilities(self) -> dict[Corner, float]:
        """Marginal probability that each corner currently holds food."""
        counts: Counter[Corner] = Counter()
        for particle in self.particles:
            counts.update(particle.food_corners())
        total = len(self.particles)
        return {corner: counts[corner] / total for corner in CORNERS}


class ParticleFilter:
    """Tracks a belief over hidden food location from action/observation history."""

    def __init__(
        self,
        model: PartiallyObservableModel,
        n_particles: int,
        rng: Random,
        attempts_factor: int = 20,
    ) -> None:
        if n_particles < 1:
            raise ValueError("n_particles must be >= 1")
        if attempts_factor < 1:
            raise ValueError("attempts_factor must be >= 1")
        self.model = model
        self.n_particles = n_particles
        self.rng = rng
        self.attempts_factor = attempts_factor
        self.reseed_count = 0

    def initial_belief(self, state: LifeState) -> ParticleBelief:
        """Degenerate belief concentrated on a known start state."""
        return ParticleBelief((state,))

    def update(
        self, belief: ParticleBelief, action: Action, observation: Observation
    ) -> ParticleBelief:
        """Advance every hypothesis through ``action`` and keep those matching ``observation``.

        Predecessors are drawn from ``belief`` with replacement and pushed through
        the generative model; a successor survives only if the observation it
        would have produced equals ``observation`` exactly. If nothing survives
        the belief is rebuilt by :meth:`reseed`.
        """
        accepted: list[LifeState] = []
        max_attempts = self.n_particles * self.attempts_factor
        attempts = 0
        while len(accepted) < self.n_particles and attempts < max_attempts:
            attempts += 1
            predecessor = belief.sample(self.rng)
            transition = self.model.generate(predecessor, action, self.rng)
            if transition.observation == observation:
                accepted.append(transition.next_state)

        if not accepted:
            return self.reseed(observation, action)
        logger.debug(
            "Filter kept %d particles after %d attempts for %s",
            len(accepted),
            attempts,
            action_label(action),
        )
        return ParticleBelief(tuple(accepted))

    def reseed(self, observation: Observation, action: Action | None = None) -> ParticleBelief:
        """Rebuild a belief from the always-visible fields of ``observation``.

        Food is spread uniformly over every single-corner placement consistent
        with the observation's look result (all four corners when there is none).
        """
        self.reseed_count += 1
        grid_size = self.model.world.grid_size
        candidates: list[LifeState] = []
        for corner in CORNERS:
            state = initial_state(
                food=corner,
                position=(observation.x, observation.y),
                energy=observation.energy,
                age=observation.age,
            )
            look = observation.look
            if look is not None:
                if state.has_food_at(look.x, look.y, grid_size) != look.food_present:
                    continue
            candidates.append(state)
        logger.warning(
            "All particles eliminated after %s; reseeding %d food hypotheses (reseed #%d)",
            action_label(action) if action is not None else "observation",
            len(candidates),
            self.reseed_count,
        )
        return ParticleBelief(tuple(candidates))
