# statespace_lab/core/metrics.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import time, tracemalloc

from .trace import TraceEvent


class MeasuredRun:
    """
    Context manager for timing and (approximate) peak memory.
    Safe to query .elapsed and .peak_kb *inside* the with-block.
    Leaves tracemalloc running if someone else started it.
    """
    def __init__(self, trace_memory: bool = True) -> None:
        self.t0: Optional[float] = None
        self.t1: Optional[float] = None
        self._peak_kb: int = 0
        self._tracing: bool = False
        self._owns_tracer: bool = False
        self.trace_memory = trace_memory

    def __enter__(self) -> "MeasuredRun":
        if self.trace_memory:
            self._tracing = True
            if not tracemalloc.is_tracing():
                tracemalloc.start()
                self._owns_tracer = True
            else:
                tracemalloc.reset_peak()
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.t1 = time.perf_counter()
        if self._tracing:
            current, peak = tracemalloc.get_traced_memory()
            if self._owns_tracer:
                tracemalloc.stop()
            self._tracing = False
            self._peak_kb = max(self._peak_kb, peak // 1024)
        return False  # don't suppress exceptions

    @property
    def elapsed(self) -> float:
        """Seconds elapsed. Works before and after __exit__."""
        if self.t0 is None:
            return 0.0
        if self.t1 is None:
            return time.perf_counter() - self.t0
        return self.t1 - self.t0

    @property
    def peak_kb(self) -> int:
        """Approx peak KB. Works before and after __exit__."""
        if self._tracing:
            current, peak = tracemalloc.get_traced_memory()
            return max(self._peak_kb, peak // 1024)
        return self._peak_kb


# --- Result records ----------------------------------------------------------
# Every solver returns one of these, fully populated, even when input is rejected
# (then only `error` is set).

@dataclass
class TreeNodeView:
    id: int
    parent: Optional[int]
    level: int
    weight: float
    value: float
    bound: float
    included: Tuple[bool, ...]
    pruned: bool
    optimal: bool


@dataclass
class TreeEdge:
    parent: int
    child: int
    label: str  # "1" include, "0" exclude


@dataclass
class KnapsackResult:
    selected_ids: List[str] = field(default_factory=list)
    total_value: float = 0.0
    total_weight: float = 0.0
    trace_events: List[TraceEvent] = field(default_factory=list)
    tree_nodes: List[TreeNodeView] = field(default_factory=list)
    tree_edges: List[TreeEdge] = field(default_factory=list)
    nodes_expanded: int = 0
    time_s: float = 0.0
    peak_kb: int = 0
    error: Optional[str] = None


@dataclass
class PuzzleStep:
    state: Tuple[int, ...]
    move_taken: Optional[str]
    g: int
    h: int
    f: int


@dataclass
class PuzzleResult:
    solved: bool = False
    path: List[PuzzleStep] = field(default_factory=list)
    iterations_used: int = 0
    budget_exhausted: bool = False
    unreachable: bool = False
    nodes_expanded: int = 0
    trace_events: List[TraceEvent] = field(default_factory=list)
    time_s: float = 0.0
    peak_kb: int = 0
    error: Optional[str] = None

    @property
    def moves(self) -> List[str]:
        return [s.move_taken for s in self.path[1:]]


@dataclass
class ColoringResult:
    solutions: List[Dict[str, int]] = field(default_factory=list)
    trace_events: List[TraceEvent] = field(default_factory=list)
    nodes_expanded: int = 0
    time_s: float = 0.0
    peak_kb: int = 0
    error: Optional[str] = None
