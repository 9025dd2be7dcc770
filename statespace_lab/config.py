# statespace_lab/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

# ---- Tunables (overridable via environment variables) -----------------------
PUZZLE_MAX_ITERATIONS = int(os.getenv("PUZZLE_MAX_ITERATIONS", "10000"))   # A* pop budget
PUZZLE_HEURISTIC      = os.getenv("PUZZLE_HEURISTIC", "misplaced")         # misplaced | manhattan
KNAPSACK_FRONTIER     = os.getenv("KNAPSACK_FRONTIER", "least_cost")       # least_cost | fifo
LOG_LEVEL             = os.getenv("STATESPACE_LOG_LEVEL", "WARNING")

KNAPSACK_FRONTIERS = ("least_cost", "fifo")
PUZZLE_HEURISTICS = ("misplaced", "manhattan")


@dataclass(frozen=True)
class SearchSettings:
    puzzle_max_iterations: int = PUZZLE_MAX_ITERATIONS
    puzzle_heuristic: str = PUZZLE_HEURISTIC
    knapsack_frontier: str = KNAPSACK_FRONTIER
    log_level: str = LOG_LEVEL

    @classmethod
    def from_env(cls) -> "SearchSettings":
        """Read the environment now, not at import time."""
        settings = cls(
            puzzle_max_iterations=int(os.getenv("PUZZLE_MAX_ITERATIONS", "10000")),
            puzzle_heuristic=os.getenv("PUZZLE_HEURISTIC", "misplaced"),
            knapsack_frontier=os.getenv("KNAPSACK_FRONTIER", "least_cost"),
            log_level=os.getenv("STATESPACE_LOG_LEVEL", "WARNING"),
        )
        settings.check()
        return settings

    def check(self) -> None:
        if self.puzzle_max_iterations <= 0:
            raise ValueError(f"PUZZLE_MAX_ITERATIONS must be positive, got {self.puzzle_max_iterations}")
        if self.puzzle_heuristic not in PUZZLE_HEURISTICS:
            raise ValueError(f"PUZZLE_HEURISTIC must be one of {PUZZLE_HEURISTICS}, got {self.puzzle_heuristic!r}")
        if self.knapsack_frontier not in KNAPSACK_FRONTIERS:
            raise ValueError(f"KNAPSACK_FRONTIER must be one of {KNAPSACK_FRONTIERS}, got {self.knapsack_frontier!r}")


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
