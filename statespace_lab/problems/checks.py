# statespace_lab/problems/checks.py
# Brute-force oracles used to cross-check the searches on small instances.
from __future__ import annotations
import itertools
from collections import deque
from typing import Dict, Hashable, Iterable, List, Mapping, Sequence, Tuple

import numpy as np

from .knapsack import Item
from .puzzle import GOAL, Board, neighbors


def brute_force_knapsack(items: Sequence[Item], capacity: float, max_items: int = 20) -> Tuple[float, List[str]]:
    """Best value over all 2^n subsets, and the ids of the first subset (in mask order) reaching it."""
    n = len(items)
    if n == 0:
        return 0.0, []
    if n > max_items:
        raise ValueError(f"refusing to enumerate 2^{n} subsets (max_items={max_items})")
    masks = (np.arange(1 << n)[:, None] >> np.arange(n)) & 1
    values = np.array([it.value for it in items], dtype=float)
    weights = np.array([it.weight for it in items], dtype=float)
    total_v = masks @ values
    total_w = masks @ weights
    total_v[total_w > capacity] = -1.0
    best = int(np.argmax(total_v))
    if total_v[best] <= 0:
        return 0.0, []
    chosen = [items[i].id for i in range(n) if masks[best, i]]
    return float(total_v[best]), chosen


def bfs_distance(start: Board, max_states: int = 2_000_000) -> int:
    """Fewest blank moves from start to the goal; -1 if not found within max_states."""
    start = tuple(start)
    if start == GOAL:
        return 0
    seen = {start}
    q = deque([(start, 0)])
    while q and len(seen) < max_states:
        s, d = q.popleft()
        for _, s2 in neighbors(s):
            if s2 in seen:
                continue
            if s2 == GOAL:
                return d + 1
            seen.add(s2)
            q.append((s2, d + 1))
    return -1


def is_proper_coloring(coloring: Mapping[Hashable, int], edges: Iterable[Tuple[Hashable, Hashable]]) -> bool:
    return all(coloring[u] != coloring[v] for u, v in edges)


def count_colorings(vertices: Sequence[Hashable], edges: Sequence[Tuple[Hashable, Hashable]], k: int) -> int:
    """Number of proper colorings with labels 1..k by plain product enumeration."""
    count = 0
    for combo in itertools.product(range(1, k + 1), repeat=len(vertices)):
        coloring: Dict[Hashable, int] = dict(zip(vertices, combo))
        if is_proper_coloring(coloring, edges):
            count += 1
    return count
