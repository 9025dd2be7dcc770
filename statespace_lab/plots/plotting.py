# statespace_lab/plots/plotting.py
# Bar charts comparing benchmark rows (one bar per run) for a single metric.
from __future__ import annotations
import io
import math

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt


def sorted_rows(rows, key):
    def key_fn(r):
        v = r.get(key)
        if v is None:
            return math.inf
        return v
    return sorted(rows, key=key_fn)


def bar(ax, rows, metric, title, ylabel):
    algos = [r["algo"] for r in rows]
    vals = [r.get(metric) for r in rows]

    x = list(range(len(algos)))
    ax.bar(x, [v or 0 for v in vals])
    ax.set_title(title)
    ax.set_ylabel(ylabel)
    ax.set_xticks(x)
    ax.set_xticklabels(algos, rotation=20, ha="right")

    top = max([v for v in vals if v is not None], default=0) or 1
    for xi, v in zip(x, vals):
        if v is None:
            label, y = "n/a", 0
        elif isinstance(v, float) and v < 0.01:
            label, y = f"{v:.4f}", v
        elif isinstance(v, float):
            label, y = f"{v:.3f}", v
        else:
            label, y = f"{v}", v
        ax.text(xi, y + 0.01 * top, label, ha="center", va="bottom", fontsize=8)


def metric_figure(rows, metric, title, ylabel):
    fig, ax = plt.subplots(figsize=(7, 4))
    bar(ax, sorted_rows(rows, metric), metric, title, ylabel)
    fig.tight_layout()
    return fig


def fig_to_png_bytes(fig) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=160)
    plt.close(fig)
    return buf.getvalue()
