# statespace_lab/core/node.py
# Search nodes live in a flat arena owned by one run; parents are referenced by integer id, never by pointer.
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Optional

from .problem import Problem


class NodeStatus(str, Enum):
    ACTIVE = "active"
    PRUNED = "pruned"
    ACCEPTED = "accepted"


@dataclass
class SearchNode:
    id: int
    parent: Optional[int]
    state: Any
    action: Any = None
    depth: int = 0
    path_cost: float = 0.0
    estimate: float = 0.0
    status: NodeStatus = NodeStatus.ACTIVE

    @property
    def pruned(self) -> bool:
        return self.status is NodeStatus.PRUNED


class NodeStore:
    """Arena of every node created during one search run."""

    def __init__(self):
        self._nodes: List[SearchNode] = []

    def __len__(self):
        return len(self._nodes)

    def __iter__(self) -> Iterator[SearchNode]:
        return iter(self._nodes)

    def __getitem__(self, node_id: int) -> SearchNode:
        return self._nodes[node_id]

    def add_root(self, state, estimate: float = 0.0, depth: int = 0) -> SearchNode:
        if self._nodes:
            raise RuntimeError("root already created for this run")
        node = SearchNode(id=0, parent=None, state=state, depth=depth, estimate=float(estimate))
        self._nodes.append(node)
        return node

    def add_child(self, parent: SearchNode, state, action, step_cost: float, estimate: float) -> SearchNode:
        node = SearchNode(
            id=len(self._nodes),
            parent=parent.id,
            state=state,
            action=action,
            depth=parent.depth + 1,
            path_cost=parent.path_cost + float(step_cost),
            estimate=float(estimate),
        )
        self._nodes.append(node)
        return node

    def expand(self, problem: Problem, node: SearchNode) -> Iterator[SearchNode]:
        """Create child nodes for every successor of `node` using step_cost and estimate."""
        s = node.state
        for a, s2 in problem.successors(s):
            cost = problem.step_cost(s, a, s2)
            if cost is None:
                raise ValueError(
                    f"step_cost returned None for (s={s!r}, a={a!r}, s'={s2!r}). "
                    "Check the problem's successors/cost mapping."
                )
            yield self.add_child(node, s2, a, cost, problem.estimate(s2))
