"""Partially observable Monte-Carlo planning (POMCP-style UCT over histories).

Each simulation samples a root state from the belief, descends the tree with
UCB1 selection, branches on sampled observations, and finishes at a new node
with a uniform-random rollout. Descent and back-propagation are iterative, so
search depth is bounded only by ``max_depth``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from random import Random

from gridlife.config.types import PlannerConfig
from gridlife.domain.actions import Action, action_label
from gridlife.domain.pomdp import PartiallyObservableModel
from gridlife.domain.state import LifeState, Observation
from gridlife.planning.belief import ParticleBelief
from gridlife.planning.tree import ROOT, SearchTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanResult:
    """Chosen root action and the root statistics behind it."""

    action: Action
    value: float
    action_values: tuple[float, ...]
    action_visits: tuple[int, ...]
    n_rollouts: int
    tree_size: int


class POMCPPlanner:
    """Online planner that never enumerates the state space."""

    def __init__(
        self,
        model: PartiallyObservableModel,
        config: PlannerConfig,
        rng: Random,
    ) -> None:
        self.model = model
        self.config = config
        self.rng = rng
        self.actions: tuple[Action, ...] = model.actions
        self._tree: SearchTree | None = None

    @property
    def tree(self) -> SearchTree | None:
        return self._tree

    def reset(self) -> None:
        """Drop any kept search tree."""
        self._tree = None

    def search(self, belief: ParticleBelief, budget: int | None = None) -> PlanResult:
        """Run ``budget`` simulations from ``belief`` and report the best root action."""
        n_rollouts = self.config.n_rollouts if budget is None else budget
        if n_rollouts < 1:
            raise ValueError("budget must be >= 1")
        tree = self._tree if self._tree is not None else SearchTree(len(self.actions))
        for _ in range(n_rollouts):
            self._simulate(tree, belief.sample(self.rng))
        self._tree = tree

        root = tree.nodes[ROOT]
        best = tree.best_action_index(ROOT)
        result = PlanResult(
            action=self.actions[best],
            value=root.action_values[best],
            action_values=tuple(root.action_values),
            action_visits=tuple(root.action_visits),
            n_rollouts=n_rollouts,
            tree_size=len(tree),
        )
        logger.debug(
            "Planned %s (value=%.3f, visits=%d, tree=%d nodes)",
            action_label(result.action),
            result.value,
            root.action_visits[best],
            result.tree_size,
        )
        return result

    def plan(self, belief: ParticleBelief, budget: int | None = None) -> Action:
        return self.search(belief, budget).action

    def advance(self, action: Action, observation: Observation) -> None:
        """Keep the subtree reached by the real ``(action, observation)``, or discard it."""
        if self._tree is None or not self.config.reuse_tree:
            self._tree = None
            return
        self._tree = self._tree.reroot(self.actions.index(action), observation)

    def _simulate(self, tree: SearchTree, state: LifeState) -> float:
        discount = self.config.discount
        path: list[tuple[int, int, float]] = []
        node_id = ROOT
        depth = 0
        leaf_value = 0.0

        while depth < self.config.max_depth and not self.model.is_terminal(state):
            action_index = tree.ucb_action_index(node_id, self.config.exploration_constant)
            transition = self.model.generate(state, self.actions[action_index], self.rng)
            path.append((node_id, action_index, transition.reward))
            depth += 1
            state = transition.next_state
            child_id = tree.child(node_id, action_index, transition.observation)
            if child_id is None:
                tree.add_child(node_id, action_index, transition.observation)
                leaf_value = self._rollout(state, depth)
                break
            node_id = child_id

        value = leaf_value
        for node_id, action_index, reward in reversed(path):
            value = reward + discount * value
            tree.update(node_id, action_index, value)
        return value

    def _rollout(self, state: LifeState, depth: int) -> float:
        """Discounted return of a uniform-random policy until the depth limit or death."""
        total = 0.0
        scale = 1.0
        while depth < self.config.max_depth and not self.model.is_terminal(state):
            action = self.actions[self.rng.randrange(len(self.actions))]
            transition = self.model.generate(state, action, self.rng)
            total += scale * transition.reward
            scale *= self.config.discount
            state = transition.next_state
            depth += 1
        return total
