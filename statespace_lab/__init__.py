"""State-space search core: least-cost branch-and-bound, A*, and backtracking enumeration."""
from .api import enumerate_colorings, solve_knapsack_bnb, solve_puzzle_astar
from .core.errors import InvalidInputError

__all__ = ["enumerate_colorings", "solve_knapsack_bnb", "solve_puzzle_astar", "InvalidInputError"]
__version__ = "0.1.0"
