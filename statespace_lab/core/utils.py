# statespace_lab/core/utils.py
# Walks parent ids from a terminal node back to the root to recover the ordered path.
from __future__ import annotations
from typing import List
from .node import NodeStore, SearchNode


def reconstruct_path(store: NodeStore, node: SearchNode) -> List[SearchNode]:
    """Nodes from the root down to `node`, inclusive."""
    path = []
    cur = node
    seen = set()
    while True:
        if cur.id in seen:
            raise RuntimeError(f"parent chain of node {node.id} revisits node {cur.id}")
        seen.add(cur.id)
        path.append(cur)
        if cur.parent is None:
            break
        cur = store[cur.parent]
    path.reverse()
    return path
