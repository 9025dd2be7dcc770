# statespace_lab/algorithms/astar.py
from __future__ import annotations
from typing import Optional

from .best_first import best_first_search
from ..core.metrics import MeasuredRun, PuzzleResult, PuzzleStep
from ..core.problem import Problem
from ..core.trace import TraceRecorder
from ..core.utils import reconstruct_path


def a_star_search(problem: Problem, max_iterations: int = 10_000,
                  recorder: Optional[TraceRecorder] = None) -> PuzzleResult:
    """A*: best-first on f = g + h. Optimal when the problem's estimate is admissible."""
    with MeasuredRun() as meter:
        outcome = best_first_search(problem, priority=lambda g, h: g + h,
                                    max_iterations=max_iterations, recorder=recorder, name="A*")
        result = PuzzleResult(
            iterations_used=outcome.iterations,
            nodes_expanded=outcome.expanded,
            budget_exhausted=outcome.budget_exhausted,
        )
        if outcome.goal is not None:
            result.solved = True
            result.path = [
                PuzzleStep(
                    state=n.state,
                    move_taken=n.action,
                    g=int(n.path_cost),
                    h=int(n.estimate),
                    f=int(n.path_cost + n.estimate),
                )
                for n in reconstruct_path(outcome.store, outcome.goal)
            ]
        else:
            # no path means no reachable goal, not an empty solution
            result.unreachable = not outcome.budget_exhausted
    if recorder is not None:
        result.trace_events = list(recorder.events)
    result.time_s = meter.elapsed
    result.peak_kb = meter.peak_kb
    return result
