# statespace_lab/algorithms/backtracking.py
# Exhaustive backtracking enumeration of graph colorings over one shared, undo-guarded assignment.
from __future__ import annotations
import logging
from typing import Dict, List, Optional

from ..core.metrics import ColoringResult, MeasuredRun
from ..core.trace import TraceRecorder
from ..problems.coloring import ColoringProblem, PartialAssignment, Vertex

logger = logging.getLogger(__name__)


class ColoringSearch:
    """
    Enumerates every proper coloring with colors 1..k.

    Color labels are significant: swapping two colors gives a different solution.
    After run() the shared assignment is empty again.
    """
    def __init__(self, problem: ColoringProblem, recorder: Optional[TraceRecorder] = None):
        self.problem = problem
        self.recorder = recorder if recorder is not None else TraceRecorder()
        self.assignment = PartialAssignment()
        self.solutions: List[Dict[Vertex, int]] = []
        self.commits = 0

    def run(self) -> List[Dict[Vertex, int]]:
        self._extend(0)
        if len(self.assignment):
            raise RuntimeError(f"{len(self.assignment)} colors leaked out of the search")
        return self.solutions

    def _extend(self, index: int) -> None:
        vertices = self.problem.vertices
        if index == len(vertices):
            coloring = self.assignment.snapshot()
            self.solutions.append(coloring)
            self.recorder.record(None, "solution", len(self.solutions), coloring=coloring)
            return

        v = vertices[index]
        for color in self.problem.colors():
            self.recorder.record(v, "trying", color)
            if not self.problem.is_consistent(v, color, self.assignment):
                self.recorder.record(v, "backtrack", color)
                continue
            self.recorder.record(v, "success", color)
            self.commits += 1
            with self.assignment.assigned(v, color):
                self._extend(index + 1)


def backtracking_coloring(problem: ColoringProblem, recorder: Optional[TraceRecorder] = None) -> ColoringResult:
    rec = recorder if recorder is not None else TraceRecorder()
    with MeasuredRun() as meter:
        search = ColoringSearch(problem, rec)
        solutions = search.run()
    logger.info("coloring with %d colors: %d solutions, %d commits",
                problem.max_colors, len(solutions), search.commits)
    return ColoringResult(
        solutions=solutions,
        trace_events=list(rec.events),
        nodes_expanded=search.commits,
        time_s=meter.elapsed,
        peak_kb=meter.peak_kb,
    )
