# statespace_lab/problems/coloring.py
from __future__ import annotations
from contextlib import contextmanager
from typing import Dict, Hashable, Iterable, Iterator, List, Mapping, Sequence, Tuple

from ..core.errors import InvalidInputError

Vertex = Hashable
Edge = Tuple[Vertex, Vertex]

# Default classroom graph: triangle A-B-C plus pendant D on A
EXAMPLE_VERTICES = ["A", "B", "C", "D"]
EXAMPLE_EDGES = [("A", "B"), ("B", "C"), ("C", "A"), ("A", "D")]


class PartialAssignment:
    """
    The one mutable structure of the coloring search.

    Every commit must be undone, most recent first; `assigned()` pairs the two
    so an exit from the guarded block, normal or not, always rolls back.
    """
    def __init__(self):
        self._colors: Dict[Vertex, int] = {}
        self._stack: List[Vertex] = []

    def commit(self, vertex: Vertex, color: int) -> None:
        if vertex in self._colors:
            raise RuntimeError(f"vertex {vertex!r} is already colored")
        self._colors[vertex] = color
        self._stack.append(vertex)

    def undo(self, vertex: Vertex) -> None:
        if not self._stack or self._stack[-1] != vertex:
            raise RuntimeError(f"undo of {vertex!r} out of order; last commit was "
                               f"{self._stack[-1] if self._stack else None!r}")
        self._stack.pop()
        del self._colors[vertex]

    @contextmanager
    def assigned(self, vertex: Vertex, color: int) -> Iterator[None]:
        self.commit(vertex, color)
        try:
            yield
        finally:
            self.undo(vertex)

    def get(self, vertex: Vertex):
        return self._colors.get(vertex)

    def snapshot(self) -> Dict[Vertex, int]:
        return dict(self._colors)

    def __len__(self):
        return len(self._colors)

    @property
    def depth(self) -> int:
        return len(self._stack)


class ColoringProblem:
    """
    k-coloring of an undirected graph.

    - Vertices are visited in the order given.
    - Colors are 1..max_colors, tried in increasing order.
    - A color is consistent for v when no neighbor of v already holds it.
    """
    def __init__(self, vertices: Sequence[Vertex], edges: Iterable[Edge], max_colors: int):
        self.vertices: List[Vertex] = list(vertices)
        self.max_colors = max_colors
        self.adjacency: Dict[Vertex, List[Vertex]] = {}
        self._validate_vertices()
        for e in edges:
            try:
                u, v = e
            except (TypeError, ValueError):
                raise InvalidInputError(f"edge must be a (u, v) pair, got {e!r}") from None
            for end in (u, v):
                if end not in self.adjacency:
                    raise InvalidInputError(f"edge {e!r} references unknown vertex {end!r}")
            if u == v:
                raise InvalidInputError(f"self-loop on vertex {u!r} can never be colored")
            self.adjacency[u].append(v)
            self.adjacency[v].append(u)

    def _validate_vertices(self) -> None:
        if not self.vertices:
            raise InvalidInputError("graph must have at least one vertex")
        if isinstance(self.max_colors, bool) or not isinstance(self.max_colors, int) or self.max_colors < 1:
            raise InvalidInputError(f"max_colors must be a positive integer, got {self.max_colors!r}")
        for v in self.vertices:
            if v in self.adjacency:
                raise InvalidInputError(f"duplicate vertex {v!r}")
            self.adjacency[v] = []

    def colors(self) -> range:
        return range(1, self.max_colors + 1)

    def is_consistent(self, vertex: Vertex, color: int, assignment: PartialAssignment) -> bool:
        return all(assignment.get(n) != color for n in self.adjacency[vertex])

    def edges(self) -> List[Edge]:
        seen = set()
        out = []
        for u in self.vertices:
            for v in self.adjacency[u]:
                if (v, u) not in seen:
                    seen.add((u, v))
                    out.append((u, v))
        return out

    def is_proper(self, coloring: Mapping[Vertex, int]) -> bool:
        return all(coloring.get(u) != coloring.get(v) for u, v in self.edges())
