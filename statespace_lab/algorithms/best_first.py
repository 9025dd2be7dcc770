# statespace_lab/algorithms/best_first.py
# Graph-search best-first driver: indexed min-heap frontier, closed set, hard iteration budget.
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..core.frontiers import IndexedPriorityQueue
from ..core.node import NodeStatus, NodeStore, SearchNode
from ..core.problem import Problem
from ..core.trace import TraceRecorder

logger = logging.getLogger(__name__)


@dataclass
class BestFirstOutcome:
    goal: Optional[SearchNode]
    store: NodeStore
    iterations: int
    expanded: int
    budget_exhausted: bool


def best_first_search(
    problem: Problem,
    priority: Callable[[float, float], float],   # inputs: g, h -> f
    max_iterations: int,
    recorder: Optional[TraceRecorder] = None,
    name: str = "BestFirst",
) -> BestFirstOutcome:
    """
    Pops the frontier entry with the smallest priority(g, h); ties go to the
    entry queued first. A successor is dropped when its key is closed or when
    the frontier already holds the same key at an equal or better priority;
    otherwise it replaces the queued entry.
    """
    rec = recorder if recorder is not None else TraceRecorder()
    store = NodeStore()
    start = problem.initial_state()
    root = store.add_root(start, estimate=problem.estimate(start))

    if problem.is_goal(start):
        root.status = NodeStatus.ACCEPTED
        rec.record(root.id, "goal", priority(0.0, root.estimate), g=0)
        return BestFirstOutcome(root, store, 0, 0, False)

    frontier = IndexedPriorityQueue()
    frontier.push(problem.key(start), root, priority(root.path_cost, root.estimate))
    closed = set()
    iterations = 0
    expanded = 0

    while len(frontier) and iterations < max_iterations:
        iterations += 1
        node = frontier.pop()
        f = priority(node.path_cost, node.estimate)
        if problem.is_goal(node.state):
            node.status = NodeStatus.ACCEPTED
            rec.record(node.id, "goal", f, g=node.path_cost)
            logger.info("%s reached goal after %d iterations (cost %s)", name, iterations, node.path_cost)
            return BestFirstOutcome(node, store, iterations, expanded, False)

        closed.add(problem.key(node.state))
        expanded += 1
        rec.record(node.id, "expanded", f, g=node.path_cost, h=node.estimate, state=node.state)

        for a, s2 in problem.successors(node.state):
            k2 = problem.key(s2)
            if k2 in closed:
                continue
            g2 = node.path_cost + float(problem.step_cost(node.state, a, s2))
            h2 = problem.estimate(s2)
            f2 = priority(g2, h2)
            queued = frontier.get(k2)
            if queued is not None and priority(queued.path_cost, queued.estimate) <= f2:
                continue
            child = store.add_child(node, s2, a, g2 - node.path_cost, h2)
            if queued is not None:
                queued.status = NodeStatus.PRUNED
                rec.record(child.id, "replaced", f2, replaces=queued.id)
            frontier.push(k2, child, f2)
        frontier.compact()

    exhausted = len(frontier) > 0
    if exhausted:
        logger.info("%s stopped: iteration budget %d exhausted", name, max_iterations)
    else:
        logger.info("%s stopped: frontier empty after %d iterations", name, iterations)
    return BestFirstOutcome(None, store, iterations, expanded, exhausted)
