"""Arena-backed search tree for Monte-Carlo planning.

Nodes live in a flat list and refer to children by integer id, so the tree
holds no reference cycles and can be re-rooted by copying the surviving
subtree into a fresh arena.
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field

from gridlife.domain.state import Observation

ROOT = 0

ChildKey = tuple[int, Observation]


@dataclass
class TreeNode:
    """History node: per-action statistics plus observation-keyed children."""

    action_visits: list[int]
    action_values: list[float]
    children: dict[ChildKey, int] = field(default_factory=dict)

    @property
    def visits(self) -> int:
        return sum(self.action_visits)


class SearchTree:
    """Flat arena of :class:`TreeNode` records rooted at id ``ROOT``."""

    def __init__(self, n_actions: int) -> None:
        if n_actions < 1:
            raise ValueError("n_actions must be >= 1")
        self.n_actions = n_actions
        self.nodes: list[TreeNode] = []
        self.add_node()

    def __len__(self) -> int:
        return len(self.nodes)

    def add_node(self) -> int:
        self.nodes.append(TreeNode([0] * self.n_actions, [0.0] * self.n_actions))
        return len(self.nodes) - 1

    def child(self, node_id: int, action_index: int, observation: Observation) -> int | None:
        return self.nodes[node_id].children.get((action_index, observation))

    def add_child(self, node_id: int, action_index: int, observation: Observation) -> int:
        child_id = self.add_node()
        self.nodes[node_id].children[(action_index, observation)] = child_id
        return child_id

    def update(self, node_id: int, action_index: int, value: float) -> None:
        """Fold one sampled return into the running mean for ``action_index``."""
        node = self.nodes[node_id]
        node.action_visits[action_index] += 1
        n = node.action_visits[action_index]
        node.action_values[action_index] += (value - node.action_values[action_index]) / n

    def ucb_action_index(self, node_id: int, exploration_constant: float) -> int:
        """UCB1 selection; untried actions are taken first in action order."""
        node = self.nodes[node_id]
        for index, visits in enumerate(node.action_visits):
            if visits == 0:
                return index
        log_total = math.log(node.visits)
        best_index = 0
        best_score = -math.inf
        for index, (visits, value) in enumerate(
            zip(node.action_visits, node.action_values, strict=True)
        ):
            score = value + exploration_constant * math.sqrt(log_total / visits)
            if score > best_score:
                best_score = score
                best_index = index
        return best_index

    def best_action_index(self, node_id: int = ROOT) -> int:
        """Highest mean value among tried actions; ties go to more visits, then lower index."""
        node = self.nodes[node_id]
        tried = [i for i, visits in enumerate(node.action_visits) if visits > 0]
        if not tried:
            return 0
        return max(
            tried,
            key=lambda i: (node.action_values[i], node.action_visits[i], -i),
        )

    def reroot(self, action_index: int, observation: Observation) -> SearchTree | None:
        """Return a new tree holding only the subtree under ``(action, observation)``."""
        old_root = self.child(ROOT, action_index, observation)
        if old_root is None:
            return None
        tree = SearchTree(self.n_actions)
        tree.nodes = []
        remap: dict[int, int] = {}
        queue: deque[int] = deque([old_root])
        remap[old_root] = 0
        order: list[int] = []
        while queue:
            old_id = queue.popleft()
            order.append(old_id)
            for child_id in self.nodes[old_id].children.values():
                remap[child_id] = len(remap)
                queue.append(child_id)
        for old_id in order:
            old = self.nodes[old_id]
            tree.nodes.append(
                TreeNode(
                    action_visits=list(old.action_visits),
                    action_values=list(old.action_values),
                    children={key: remap[child] for key, child in old.children.items()},
                )
            )
        return tree
