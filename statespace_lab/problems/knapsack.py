# statespace_lab/problems/knapsack.py
from __future__ import annotations
import numbers
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from ..core.errors import InvalidInputError
from ..core.problem import Problem

INCLUDE = "include"
EXCLUDE = "exclude"


@dataclass(frozen=True)
class Item:
    id: str
    value: float
    weight: float

    @property
    def ratio(self) -> float:
        return self.value / self.weight


@dataclass(frozen=True)
class KnapsackState:
    level: int                    # number of items decided so far
    weight: float
    value: float
    included: Tuple[bool, ...]    # one flag per decided item, in ratio order


ItemLike = Union[Item, Tuple[float, float], Tuple[str, float, float]]

# Reference instance (n=4, m=15)
EXAMPLE_ITEMS = [Item("1", 10, 2), Item("2", 10, 4), Item("3", 12, 6), Item("4", 18, 9)]
EXAMPLE_CAPACITY = 15


def coerce_items(items: Iterable[ItemLike]) -> List[Item]:
    """Accept Items, (value, weight) pairs (ids become "1".."n") or (id, value, weight) triples."""
    out: List[Item] = []
    for i, it in enumerate(items, start=1):
        if isinstance(it, Item):
            out.append(it)
            continue
        try:
            if len(it) == 2:
                value, weight = it
                out.append(Item(str(i), value, weight))
            elif len(it) == 3:
                item_id, value, weight = it
                out.append(Item(str(item_id), value, weight))
            else:
                raise InvalidInputError(f"item #{i} must be (value, weight) or (id, value, weight), got {it!r}")
        except TypeError:
            raise InvalidInputError(f"item #{i} is not a sequence: {it!r}") from None
    return out


def validate_items(items: Sequence[Item], capacity: float) -> None:
    if isinstance(capacity, bool) or not isinstance(capacity, numbers.Real):
        raise InvalidInputError(f"capacity must be a number, got {capacity!r}")
    if capacity < 0:
        raise InvalidInputError(f"capacity must be non-negative, got {capacity}")
    seen = set()
    for it in items:
        if not it.id:
            raise InvalidInputError("every item needs an id")
        if it.id in seen:
            raise InvalidInputError(f"duplicate item id {it.id!r}")
        seen.add(it.id)
        for name in ("value", "weight"):
            v = getattr(it, name)
            if isinstance(v, bool) or not isinstance(v, numbers.Real):
                raise InvalidInputError(f"item {it.id!r}: {name} must be a number, got {v!r}")
            if v <= 0:
                raise InvalidInputError(f"item {it.id!r}: {name} must be positive, got {v}")


class KnapsackProblem(Problem):
    """
    0/1 knapsack as a binary decision tree.

    - Items are decided in non-increasing value/weight order.
    - State: KnapsackState; level L means items[0..L-1] are decided.
    - successors(s): include items[L] (only when it fits), then exclude it.
    - step_cost: value gained, so a node's path_cost is its accumulated value.
    - estimate(s): fractional-relaxation bound, negated so that lower is better.
    """
    def __init__(self, items: Iterable[ItemLike], capacity: float):
        items = coerce_items(items)
        validate_items(items, capacity)
        self.capacity = capacity
        # sorted() with reverse=True keeps input order among equal ratios
        self.items: List[Item] = sorted(items, key=lambda it: it.ratio, reverse=True)

    @property
    def n(self) -> int:
        return len(self.items)

    def initial_state(self) -> KnapsackState:
        return KnapsackState(0, 0, 0, ())

    def is_goal(self, state: KnapsackState) -> bool:
        return state.level >= self.n

    def successors(self, state: KnapsackState) -> Iterable[Tuple[str, KnapsackState]]:
        if state.level >= self.n:
            return
        item = self.items[state.level]
        if state.weight + item.weight <= self.capacity:
            yield INCLUDE, KnapsackState(
                state.level + 1,
                state.weight + item.weight,
                state.value + item.value,
                state.included + (True,),
            )
        yield EXCLUDE, KnapsackState(state.level + 1, state.weight, state.value, state.included + (False,))

    def step_cost(self, state: KnapsackState, action: str, next_state: KnapsackState) -> float:
        return next_state.value - state.value

    def estimate(self, state: KnapsackState) -> float:
        return self.bound(state.level, state.weight, state.value)

    def key(self, state: KnapsackState):
        return state.included

    def bound(self, level: int, weight: float, value: float) -> float:
        """Negated fractional-knapsack value reachable from a node; inf when already overweight."""
        if weight > self.capacity:
            return float("inf")
        bound = -value
        total = weight
        j = level
        while j < self.n and total + self.items[j].weight <= self.capacity:
            bound -= self.items[j].value
            total += self.items[j].weight
            j += 1
        if j < self.n and total < self.capacity:
            remaining = self.capacity - total
            bound -= remaining / self.items[j].weight * self.items[j].value
        return bound

    def selected(self, state: KnapsackState) -> List[Item]:
        return [it for it, flag in zip(self.items, state.included) if flag]
