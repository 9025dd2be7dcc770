"""
Tests for the public entry points: complete results on success, failure and rejected input.
"""

import pytest

from statespace_lab import enumerate_colorings, solve_knapsack_bnb, solve_puzzle_astar
from statespace_lab.config import SearchSettings
from statespace_lab.problems.knapsack import EXAMPLE_CAPACITY, EXAMPLE_ITEMS
from statespace_lab.problems.puzzle import GOAL


# ============================================
# Knapsack
# ============================================


def test_knapsack_reference_scenario():
    """(value, weight) pairs in, ids/value/weight/tree/trace out."""
    result = solve_knapsack_bnb([(10, 2), (10, 4), (12, 6), (18, 9)], 15)

    assert result.error is None
    assert result.total_value == 38
    assert sorted(result.selected_ids) == ["1", "2", "4"]
    assert result.tree_nodes and result.tree_edges and result.trace_events


def test_knapsack_frontier_from_settings():
    """Settings pick the frontier when the caller does not."""
    fifo = solve_knapsack_bnb(EXAMPLE_ITEMS, EXAMPLE_CAPACITY, settings=SearchSettings(knapsack_frontier="fifo"))
    lc = solve_knapsack_bnb(EXAMPLE_ITEMS, EXAMPLE_CAPACITY, frontier="least_cost")

    assert fifo.total_value == lc.total_value
    assert len(fifo.tree_nodes) != len(lc.tree_nodes)


@pytest.mark.parametrize(
    "items, capacity, frontier",
    [
        ([(10, 0)], 5, None),
        ([(10, 2)], -3, None),
        ([(10, 2)], 5, "random"),
    ],
)
def test_knapsack_rejected_input_returns_error_result(items, capacity, frontier):
    """Validation failures come back as a result with only `error` set."""
    result = solve_knapsack_bnb(items, capacity, frontier=frontier)

    assert result.error
    assert result.selected_ids == []
    assert result.total_value == 0
    assert result.tree_nodes == []
    assert result.trace_events == []


# ============================================
# Puzzle
# ============================================


def test_puzzle_solved_path_fields():
    """Each path step carries state, move and g/h/f."""
    start = list(GOAL[:14]) + [0, 15]

    result = solve_puzzle_astar(start)

    assert result.solved
    assert [s.move_taken for s in result.path] == [None, "right"]
    assert [(s.g, s.h, s.f) for s in result.path] == [(0, 1, 1), (1, 0, 1)]
    assert result.iterations_used == 2


def test_puzzle_budget_from_settings():
    """A tiny configured budget ends the run unsolved."""
    start = (1, 3, 11, 4, 9, 5, 2, 7, 13, 10, 8, 12, 14, 6, 15, 0)

    result = solve_puzzle_astar(start, settings=SearchSettings(puzzle_max_iterations=3))

    assert not result.solved
    assert result.budget_exhausted
    assert result.iterations_used == 3
    assert result.error is None


def test_puzzle_unreachable_when_checked():
    """Wrong permutation parity is reported without searching."""
    start = list(range(1, 14)) + [15, 14, 0]

    result = solve_puzzle_astar(start, check_solvable=True)

    assert not result.solved
    assert result.unreachable
    assert result.iterations_used == 0


@pytest.mark.parametrize(
    "start, kwargs",
    [
        (list(range(15)), {}),
        ([0] * 16, {}),
        (list(GOAL), {"max_iterations": 0}),
        (list(GOAL), {"heuristic": "nope"}),
    ],
)
def test_puzzle_rejected_input_returns_error_result(start, kwargs):
    """Bad permutations and options never start a search."""
    result = solve_puzzle_astar(start, **kwargs)

    assert result.error
    assert not result.solved
    assert result.path == []
    assert result.iterations_used == 0


# ============================================
# Coloring
# ============================================


def test_colorings_four_cycle():
    """Public entry point enumerates the two alternating colorings."""
    result = enumerate_colorings(["A", "B", "C", "D"], [("A", "B"), ("B", "C"), ("C", "D"), ("D", "A")], 2)

    assert len(result.solutions) == 2
    assert {e.outcome for e in result.trace_events} == {"trying", "success", "backtrack", "solution"}


def test_colorings_rejected_input_returns_error_result():
    """An empty graph is a validation failure, not an empty solution set."""
    result = enumerate_colorings([], [], 3)

    assert result.error
    assert result.solutions == []
    assert result.trace_events == []
