# statespace_lab/benchmarks/plot_results.py
from __future__ import annotations
import json
from pathlib import Path

from ..plots.plotting import fig_to_png_bytes, metric_figure

HERE = Path(__file__).parent
RESULTS_JSON = HERE / "results.json"
OUT_DIR = HERE

CHARTS = [
    ("nodes_expanded", "Nodes Expanded (lower is better)", "nodes", "nodes_expanded.png"),
    ("time_s", "Wall Time (lower is better)", "seconds", "time.png"),
    ("peak_kb", "Peak Memory (lower is better)", "KB", "peak_kb.png"),
]


def load_rows(path: Path = RESULTS_JSON):
    if not path.exists():
        raise SystemExit(f"Missing {path}. Run: python -m statespace_lab.benchmarks.run_all")
    rows = json.loads(path.read_text()).get("results", [])
    if not rows:
        raise SystemExit("No rows to plot.")
    return rows


def fmt_table(rows):
    # Markdown table
    lines = [
        "| Run | OK | Cost | Nodes Expanded | Time (s) | Peak KB |",
        "|---|:---:|---:|---:|---:|---:|",
    ]
    def fnum(x):
        if isinstance(x, bool):
            return str(x)
        if isinstance(x, (int, float)):
            return f"{x:.6f}" if isinstance(x, float) and not x.is_integer() else f"{x:g}"
        return "n/a"
    for r in rows:
        lines.append(
            f"| {r['algo']} | {'yes' if r.get('success') else 'no'} | {fnum(r.get('cost'))} | "
            f"{fnum(r.get('nodes_expanded'))} | {fnum(r.get('time_s'))} | {fnum(r.get('peak_kb'))} |"
        )
    return "\n".join(lines)


def main():
    rows = load_rows()

    md_path = OUT_DIR / "results.md"
    md_path.write_text(fmt_table(rows))
    print(f"Wrote {md_path}")

    for metric, title, ylabel, filename in CHARTS:
        fig = metric_figure(rows, metric, title, ylabel)
        (OUT_DIR / filename).write_bytes(fig_to_png_bytes(fig))
        print(f"Wrote {OUT_DIR / filename}")


if __name__ == "__main__":
    main()
