# statespace_lab/benchmarks/run_all.py
from __future__ import annotations

import argparse
import json
import os
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple

from ..api import enumerate_colorings, solve_knapsack_bnb, solve_puzzle_astar
from ..config import SearchSettings, configure_logging
from ..problems.checks import bfs_distance, brute_force_knapsack, count_colorings
from ..problems.coloring import EXAMPLE_EDGES, EXAMPLE_VERTICES
from ..problems.knapsack import EXAMPLE_CAPACITY, EXAMPLE_ITEMS
from ..problems.puzzle import GOAL, scramble

# ---- Tunables (overridable via environment variables) -----------------------
SCRAMBLES      = int(os.getenv("BENCH_SCRAMBLES", "5"))        # random puzzles per run
SCRAMBLE_SEED  = int(os.getenv("BENCH_SEED", "0"))
SCRAMBLE_MOVES = int(os.getenv("BENCH_SCRAMBLE_MOVES", "12"))   # keeps the BFS cross-check cheap
COLORS         = int(os.getenv("BENCH_COLORS", "3"))

# ---- Helpers ----------------------------------------------------------------
def _fmt_time(x):
    try:
        return f"{float(x):.4f}"
    except (TypeError, ValueError):
        return "n/a"


def _knapsack_runs(settings: SearchSettings) -> List[Tuple[str, Callable[[], Dict[str, Any]]]]:
    expected, _ = brute_force_knapsack(EXAMPLE_ITEMS, EXAMPLE_CAPACITY)
    runs = []
    for kind in ("least_cost", "fifo"):
        def run(kind=kind):
            r = solve_knapsack_bnb(EXAMPLE_ITEMS, EXAMPLE_CAPACITY, frontier=kind, settings=settings)
            return {
                "success": r.error is None and r.total_value == expected,
                "cost": r.total_value,
                "nodes_expanded": r.nodes_expanded,
                "nodes_created": len(r.tree_nodes),
                "nodes_pruned": sum(1 for n in r.tree_nodes if n.pruned),
                "time_s": r.time_s,
                "peak_kb": r.peak_kb,
                "error": r.error,
            }
        runs.append((f"Knapsack B&B ({kind})", run))
    return runs


def _puzzle_runs(settings: SearchSettings, scrambles: int, seed: int) -> List[Tuple[str, Callable[[], Dict[str, Any]]]]:
    boards = [GOAL] + [scramble(SCRAMBLE_MOVES, seed=seed + i) for i in range(scrambles)]
    runs = []
    for i, board in enumerate(boards):
        def run(board=board):
            r = solve_puzzle_astar(board, settings=settings)
            optimum = bfs_distance(board)
            moves = len(r.path) - 1 if r.solved else None
            return {
                "success": r.solved and moves == optimum,
                "cost": moves,
                "nodes_expanded": r.nodes_expanded,
                "iterations": r.iterations_used,
                "time_s": r.time_s,
                "peak_kb": r.peak_kb,
                "error": r.error,
            }
        runs.append((f"A* puzzle #{i} ({settings.puzzle_heuristic})", run))
    return runs


def _coloring_runs(colors: int) -> List[Tuple[str, Callable[[], Dict[str, Any]]]]:
    def run():
        r = enumerate_colorings(EXAMPLE_VERTICES, EXAMPLE_EDGES, colors)
        expected = count_colorings(EXAMPLE_VERTICES, EXAMPLE_EDGES, colors)
        return {
            "success": r.error is None and len(r.solutions) == expected,
            "cost": len(r.solutions),
            "nodes_expanded": r.nodes_expanded,
            "time_s": r.time_s,
            "peak_kb": r.peak_kb,
            "error": r.error,
        }
    return [(f"Coloring k={colors}", run)]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run every search on the reference instances.")
    parser.add_argument("--scrambles", type=int, default=SCRAMBLES)
    parser.add_argument("--seed", type=int, default=SCRAMBLE_SEED)
    parser.add_argument("--colors", type=int, default=COLORS)
    parser.add_argument("--out", type=Path, default=Path(__file__).with_name("results.json"))
    args = parser.parse_args(argv)

    settings = SearchSettings.from_env()
    configure_logging(settings.log_level)

    runs = _knapsack_runs(settings) + _puzzle_runs(settings, args.scrambles, args.seed) + _coloring_runs(args.colors)

    rows = []
    for name, fn in runs:
        print(f"→ Running {name} ...")
        row = {"algo": name, **fn()}
        print(
            f"  {name}: "
            f"{'OK' if row['success'] else 'FAIL'} "
            f"cost={row['cost']} "
            f"expanded={row['nodes_expanded']}, "
            f"time={_fmt_time(row['time_s'])}s"
        )
        rows.append(row)

    out = {"results": rows, "ts": time.time()}
    print(json.dumps(out, indent=2))
    args.out.write_text(json.dumps(out, indent=2))
    print(f"Wrote {args.out}")
    return 0 if all(r["success"] for r in rows) else 1


if __name__ == "__main__":
    raise SystemExit(main())
