"""
Unit tests for the knapsack adapter and the branch-and-bound driver.
"""

import random

import pytest

from statespace_lab.algorithms.branch_and_bound import branch_and_bound_search
from statespace_lab.core.errors import InvalidInputError
from statespace_lab.problems.checks import brute_force_knapsack
from statespace_lab.problems.knapsack import (
    EXAMPLE_CAPACITY,
    EXAMPLE_ITEMS,
    Item,
    KnapsackProblem,
    KnapsackState,
)


# ============================================
# Helpers
# ============================================


def _random_instance(seed: int, n: int):
    rng = random.Random(seed)
    items = [Item(str(i + 1), rng.randint(1, 30), rng.randint(1, 15)) for i in range(n)]
    capacity = rng.randint(0, 40)
    return items, capacity


def _solve(items, capacity, frontier="least_cost"):
    return branch_and_bound_search(KnapsackProblem(items, capacity), frontier=frontier)


# ============================================
# Adapter Tests
# ============================================


def test_items_sorted_by_ratio_keeping_input_order_on_ties():
    """Items are decided in non-increasing value/weight order, stable on ties."""
    problem = KnapsackProblem(EXAMPLE_ITEMS, EXAMPLE_CAPACITY)

    assert [it.id for it in problem.items] == ["1", "2", "3", "4"]


def test_root_bound_is_fractional_relaxation():
    """Root bound adds items 1-3 whole and one third of item 4."""
    problem = KnapsackProblem(EXAMPLE_ITEMS, EXAMPLE_CAPACITY)

    assert problem.estimate(problem.initial_state()) == pytest.approx(-38.0)


def test_bound_is_infinite_when_overweight():
    """An overweight node gets an unusable bound."""
    problem = KnapsackProblem(EXAMPLE_ITEMS, EXAMPLE_CAPACITY)

    assert problem.bound(1, EXAMPLE_CAPACITY + 1, 10) == float("inf")


def test_include_child_only_generated_when_item_fits():
    """A full knapsack only branches on exclusion."""
    problem = KnapsackProblem([Item("a", 5, 10)], 4)

    actions = [a for a, _ in problem.successors(problem.initial_state())]

    assert actions == ["exclude"]


def test_pairs_get_sequential_ids():
    """(value, weight) pairs are numbered from 1."""
    problem = KnapsackProblem([(10, 2), (4, 4)], 10)

    assert sorted(it.id for it in problem.items) == ["1", "2"]


@pytest.mark.parametrize(
    "items, capacity",
    [
        ([Item("1", 10, 0)], 5),
        ([Item("1", -1, 2)], 5),
        ([Item("1", 10, 2), Item("1", 3, 3)], 5),
        ([Item("1", 10, 2)], -1),
        ([(1, 2, 3, 4)], 5),
        ([Item("1", "ten", 2)], 5),
    ],
)
def test_invalid_items_rejected(items, capacity):
    """Non-positive weights/values, duplicate ids and negative capacity are rejected."""
    with pytest.raises(InvalidInputError):
        KnapsackProblem(items, capacity)


# ============================================
# Search Tests
# ============================================


def test_reference_instance():
    """Items 1, 2 and 4 fill the knapsack exactly for value 38."""
    result = _solve(EXAMPLE_ITEMS, EXAMPLE_CAPACITY)

    assert result.total_value == 38
    assert result.total_weight == 15
    assert sorted(result.selected_ids) == ["1", "2", "4"]
    assert result.error is None


def test_reference_instance_matches_brute_force():
    """The regression baseline agrees with exhaustive enumeration."""
    expected, chosen = brute_force_knapsack(EXAMPLE_ITEMS, EXAMPLE_CAPACITY)

    result = _solve(EXAMPLE_ITEMS, EXAMPLE_CAPACITY)

    assert result.total_value == expected
    assert sorted(chosen) == sorted(result.selected_ids)


@pytest.mark.parametrize("frontier", ["least_cost", "fifo"])
@pytest.mark.parametrize("seed", range(25))
def test_optimal_against_brute_force(seed, frontier):
    """Both frontier disciplines find the exhaustive optimum."""
    items, capacity = _random_instance(seed, n=1 + seed % 12)
    expected, _ = brute_force_knapsack(items, capacity)

    result = _solve(items, capacity, frontier=frontier)

    assert result.total_value == pytest.approx(expected)
    assert result.total_weight <= capacity
    by_id = {it.id: it for it in items}
    assert sum(by_id[i].value for i in result.selected_ids) == pytest.approx(result.total_value)
    assert sum(by_id[i].weight for i in result.selected_ids) == pytest.approx(result.total_weight)


def test_capacity_monotonicity():
    """Raising capacity never lowers the optimum."""
    items, _ = _random_instance(7, n=9)

    values = [_solve(items, c).total_value for c in range(0, 45)]

    assert values == sorted(values)


def test_least_cost_expands_fewer_nodes_than_fifo():
    """Bound ordering explores less of the reference tree than level order."""
    lc = _solve(EXAMPLE_ITEMS, EXAMPLE_CAPACITY, "least_cost")
    fifo = _solve(EXAMPLE_ITEMS, EXAMPLE_CAPACITY, "fifo")

    assert lc.total_value == fifo.total_value
    assert lc.nodes_expanded < fifo.nodes_expanded


def test_unknown_frontier_rejected():
    """Only the two documented disciplines exist."""
    with pytest.raises(ValueError):
        _solve(EXAMPLE_ITEMS, EXAMPLE_CAPACITY, "lifo")


# ============================================
# Edge Cases
# ============================================


def test_empty_item_list():
    """No items means value 0 and nothing selected."""
    result = _solve([], 10)

    assert result.total_value == 0
    assert result.selected_ids == []
    assert len(result.tree_nodes) == 1


def test_zero_capacity():
    """Zero capacity selects nothing."""
    result = _solve(EXAMPLE_ITEMS, 0)

    assert result.total_value == 0
    assert result.selected_ids == []


def test_all_items_too_heavy():
    """Items heavier than the knapsack are never included."""
    result = _solve([Item("a", 50, 20), Item("b", 40, 30)], 10)

    assert result.total_value == 0
    assert result.selected_ids == []
    assert result.total_weight == 0


def test_first_found_assignment_kept_on_ties():
    """An equal-value assignment found later does not replace the incumbent."""
    result = _solve([Item("1", 10, 5), Item("2", 10, 5)], 5)

    assert result.selected_ids == ["1"]


# ============================================
# Tree and Trace Tests
# ============================================


def test_tree_edges_link_levels():
    """Every child sits exactly one level below its parent."""
    result = _solve(EXAMPLE_ITEMS, EXAMPLE_CAPACITY, "fifo")
    nodes = {n.id: n for n in result.tree_nodes}

    assert len(result.tree_edges) == len(nodes) - 1
    for e in result.tree_edges:
        assert nodes[e.child].parent == e.parent
        assert nodes[e.child].level == nodes[e.parent].level + 1
        assert e.label == ("1" if nodes[e.child].included[-1] else "0")


def test_bounds_never_more_optimistic_than_parent():
    """Child bounds stay admissible: no better than the parent's, no better than own value."""
    items, capacity = _random_instance(3, n=10)
    result = _solve(items, capacity, "fifo")
    nodes = {n.id: n for n in result.tree_nodes}

    for n in nodes.values():
        assert n.bound <= -n.value + 1e-9
        if n.parent is not None:
            assert n.bound >= nodes[n.parent].bound - 1e-9


def test_optimal_flags_form_root_path():
    """Optimal nodes are exactly the chain from the root to the incumbent."""
    result = _solve(EXAMPLE_ITEMS, EXAMPLE_CAPACITY)
    nodes = {n.id: n for n in result.tree_nodes}
    optimal = [n for n in nodes.values() if n.optimal]

    leaf = max(optimal, key=lambda n: n.level)
    chain = []
    cur = leaf
    while cur is not None:
        chain.append(cur.id)
        cur = nodes[cur.parent] if cur.parent is not None else None

    assert sorted(chain) == sorted(n.id for n in optimal)
    assert leaf.value == result.total_value
    assert not any(n.pruned for n in optimal)


def test_trace_records_incumbents_and_prunes():
    """The trace ends its incumbent history at the optimal node."""
    result = _solve(EXAMPLE_ITEMS, EXAMPLE_CAPACITY)
    incumbents = [e for e in result.trace_events if e.outcome == "incumbent"]
    pruned = [e for e in result.trace_events if e.outcome == "pruned"]

    assert [e.value for e in incumbents] == sorted(e.value for e in incumbents)
    assert incumbents[-1].value == 38
    assert pruned
    assert all("reason" in e.detail for e in pruned)
    assert [e.step for e in result.trace_events] == list(range(len(result.trace_events)))


def test_states_are_immutable():
    """Search states cannot be edited in place."""
    state = KnapsackState(0, 0, 0, ())

    with pytest.raises(Exception):
        state.value = 3
