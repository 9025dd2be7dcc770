# Defines the interface shared by the node-based searches (states, successors, goals, costs, estimates).
# statespace_lab/core/problem.py
from __future__ import annotations
from typing import Any, Iterable, Tuple, Protocol, Hashable

Action = Hashable
State = Hashable


class Problem(Protocol):
    """Implicit state graph explored by branch-and-bound and best-first search.

    States must be immutable and hashable; a transition always produces a new state.
    """
    def initial_state(self) -> State: ...
    def is_goal(self, s: State) -> bool: ...
    def successors(self, s: State) -> Iterable[Tuple[Action, State]]: ...
    def step_cost(self, s: State, a: Action, s2: State) -> float: ...
    # Bound (branch-and-bound) or heuristic (A*); lower is more promising.
    def estimate(self, s: State) -> float: ...
    # Canonical key used for closed-set and frontier membership.
    def key(self, s: State) -> Any: ...
