# statespace_lab/api.py
# Entry points for the viewer. Each call returns a complete result object; rejected input
# comes back with `error` set instead of raising.
from __future__ import annotations
import logging
from typing import Hashable, Iterable, Optional, Sequence, Tuple

from .algorithms.astar import a_star_search
from .algorithms.backtracking import backtracking_coloring
from .algorithms.branch_and_bound import branch_and_bound_search
from .config import KNAPSACK_FRONTIERS, SearchSettings
from .core.errors import InvalidInputError
from .core.metrics import ColoringResult, KnapsackResult, PuzzleResult
from .core.trace import TraceRecorder
from .problems.coloring import ColoringProblem
from .problems.knapsack import ItemLike, KnapsackProblem
from .problems.puzzle import PuzzleProblem, is_solvable

logger = logging.getLogger(__name__)


def solve_knapsack_bnb(
    items: Iterable[ItemLike],
    capacity: float,
    frontier: Optional[str] = None,
    settings: Optional[SearchSettings] = None,
) -> KnapsackResult:
    """Optimal 0/1 knapsack selection plus the explored tree and trace."""
    settings = settings or SearchSettings()
    frontier = frontier or settings.knapsack_frontier
    try:
        if frontier not in KNAPSACK_FRONTIERS:
            raise InvalidInputError(f"frontier must be one of {KNAPSACK_FRONTIERS}, got {frontier!r}")
        problem = KnapsackProblem(items, capacity)
    except InvalidInputError as e:
        logger.warning("knapsack input rejected: %s", e)
        return KnapsackResult(error=str(e))
    return branch_and_bound_search(problem, frontier=frontier, recorder=TraceRecorder())


def solve_puzzle_astar(
    start_state: Sequence[int],
    max_iterations: Optional[int] = None,
    heuristic: Optional[str] = None,
    check_solvable: bool = False,
    settings: Optional[SearchSettings] = None,
) -> PuzzleResult:
    """Shortest move sequence to (1..15, 0), or solved=False once the budget runs out."""
    settings = settings or SearchSettings()
    budget = settings.puzzle_max_iterations if max_iterations is None else max_iterations
    try:
        if isinstance(budget, bool) or not isinstance(budget, int) or budget <= 0:
            raise InvalidInputError(f"max_iterations must be a positive integer, got {budget!r}")
        problem = PuzzleProblem(start_state, heuristic=heuristic or settings.puzzle_heuristic)
    except InvalidInputError as e:
        logger.warning("puzzle input rejected: %s", e)
        return PuzzleResult(error=str(e))
    if check_solvable and not is_solvable(problem.start):
        logger.info("puzzle start has the wrong permutation parity; goal unreachable")
        return PuzzleResult(unreachable=True)
    return a_star_search(problem, max_iterations=budget, recorder=TraceRecorder())


def enumerate_colorings(
    vertices: Sequence[Hashable],
    edges: Iterable[Tuple[Hashable, Hashable]],
    max_colors: int,
) -> ColoringResult:
    """Every proper coloring using colors 1..max_colors, in vertex order."""
    try:
        problem = ColoringProblem(vertices, edges, max_colors)
    except InvalidInputError as e:
        logger.warning("coloring input rejected: %s", e)
        return ColoringResult(error=str(e))
    return backtracking_coloring(problem, recorder=TraceRecorder())
