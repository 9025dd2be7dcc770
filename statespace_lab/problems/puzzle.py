# statespace_lab/problems/puzzle.py
from __future__ import annotations
import random
from typing import Iterable, Optional, Sequence, Tuple

from ..core.errors import InvalidInputError
from ..core.problem import Problem

SIZE = 4
CELLS = SIZE * SIZE
BLANK = 0
GOAL: Tuple[int, ...] = tuple(range(1, CELLS)) + (BLANK,)

Board = Tuple[int, ...]

# Direction the blank travels; order fixes successor order.
_MOVES = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}

_GOAL_POS = {tile: i for i, tile in enumerate(GOAL)}


def validate_board(values: Sequence[int]) -> Board:
    if len(values) != CELLS:
        raise InvalidInputError(f"Input must contain exactly {CELLS} numbers")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int) or v < 0 or v >= CELLS:
            raise InvalidInputError(f"Values must be between 0 and {CELLS - 1}")
    if len(set(values)) != CELLS:
        raise InvalidInputError("Each number must appear exactly once")
    return tuple(values)


def parse_board(text: str) -> Board:
    """'1,2,...,0' -> validated board."""
    try:
        values = [int(tok.strip()) for tok in text.split(",")]
    except ValueError:
        raise InvalidInputError("Invalid input format") from None
    return validate_board(values)


def misplaced_tiles(board: Board) -> int:
    return sum(1 for i, tile in enumerate(board) if tile != BLANK and tile != GOAL[i])


def manhattan_distance(board: Board) -> int:
    total = 0
    for i, tile in enumerate(board):
        if tile == BLANK:
            continue
        g = _GOAL_POS[tile]
        total += abs(i // SIZE - g // SIZE) + abs(i % SIZE - g % SIZE)
    return total


HEURISTICS = {
    "misplaced": misplaced_tiles,
    "manhattan": manhattan_distance,
}


def neighbors(board: Board) -> Iterable[Tuple[str, Board]]:
    z = board.index(BLANK)
    r, c = divmod(z, SIZE)
    for name, (dr, dc) in _MOVES.items():
        nr, nc = r + dr, c + dc
        if 0 <= nr < SIZE and 0 <= nc < SIZE:
            j = nr * SIZE + nc
            nxt = list(board)
            nxt[z], nxt[j] = nxt[j], nxt[z]
            yield name, tuple(nxt)


def is_solvable(board: Board) -> bool:
    """Inversion parity test for even-width boards (blank row counted from the bottom)."""
    tiles = [t for t in board if t != BLANK]
    inversions = sum(
        1 for i in range(len(tiles)) for j in range(i + 1, len(tiles)) if tiles[i] > tiles[j]
    )
    blank_row_from_bottom = SIZE - board.index(BLANK) // SIZE
    return (inversions + blank_row_from_bottom) % 2 == 1


def scramble(moves: Optional[int] = None, seed: Optional[int] = None) -> Board:
    """Random walk of the blank from the goal (10-19 moves unless given); always solvable."""
    rng = random.Random(seed)
    if moves is None:
        moves = rng.randrange(10, 20)
    board = GOAL
    for _ in range(moves):
        options = list(neighbors(board))
        _, board = rng.choice(options)
    return board


class PuzzleProblem(Problem):
    """
    15-puzzle on a 4x4 board with unit move costs.

    - State: 16-tuple, 0 is the blank
    - successors(s): blank moves up/down/left/right that stay on the board
    - is_goal(s): s == (1..15, 0)
    - estimate(s): misplaced tiles (default) or Manhattan distance; both admissible
    """
    def __init__(self, start: Sequence[int], heuristic: str = "misplaced"):
        self.start = validate_board(start)
        if heuristic not in HEURISTICS:
            raise InvalidInputError(f"unknown heuristic {heuristic!r}; expected one of {sorted(HEURISTICS)}")
        self.heuristic_name = heuristic
        self._h = HEURISTICS[heuristic]

    def initial_state(self) -> Board:
        return self.start

    def is_goal(self, state: Board) -> bool:
        return state == GOAL

    def successors(self, state: Board) -> Iterable[Tuple[str, Board]]:
        return neighbors(state)

    def step_cost(self, state: Board, action: str, next_state: Board) -> float:
        return 1.0

    def estimate(self, state: Board) -> float:
        return self._h(state)

    def key(self, state: Board) -> Board:
        return state
