"""
Assignment display helpers.

Text rendering of cost matrices and assignments for the CLI, and a
matplotlib heatmap with the assigned cells outlined.

Usage:
    from src.munkres import solve
    from src.analysis.visualizations import format_matrix, plot_assignment

    print(format_matrix("cost", cost))
    fig = plot_assignment(cost, solve(cost))
    fig.savefig("assignment.png", dpi=150, bbox_inches="tight")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
import numpy as np

if TYPE_CHECKING:
    from matplotlib.figure import Figure


# ── Styling constants ────────────────────────────────────────────

CMAP = "viridis"
FORBIDDEN_COLOR = "#d9d9d9"
ASSIGNED_EDGE_COLOR = "#e6550d"
ASSIGNED_EDGE_WIDTH = 2.5


def _cell_text(value: float) -> str:
    if np.isinf(value):
        return "inf"
    if float(value).is_integer():
        return f"{int(value)}"
    return f"{value:.4g}"


def format_matrix(name: str, matrix) -> str:
    """Right-aligned text block, one matrix row per line."""

    arr = np.atleast_2d(np.asarray(matrix, dtype=np.float64))
    cells = [[_cell_text(v) for v in row] for row in arr]
    width = max((len(c) for row in cells for c in row), default=1)
    lines = [f"{name} = "]
    lines.extend("   " + " ".join(f"{c:>{width}}" for c in row) for row in cells)
    return "\n".join(lines)


def format_assignment(pairs: list[tuple[int, int]], cost=None) -> str:
    """One `row -> col` line per pair, with the pair cost when *cost* is given."""

    if not pairs:
        return "assignments = (none)"
    arr = None if cost is None else np.asarray(cost, dtype=np.float64)
    lines = ["assignments = "]
    for row, col in pairs:
        line = f"   {row:>3} -> {col:<3}"
        if arr is not None:
            line += f"  cost {_cell_text(arr[row, col])}"
        lines.append(line)
    return "\n".join(lines)


def plot_assignment(
    cost,
    pairs: list[tuple[int, int]],
    title: str | None = None,
    figsize: tuple[float, float] | None = None,
    annotate: bool = True,
) -> Figure:
    """Heatmap of *cost* with assigned cells outlined.

    Args:
        cost: R×C cost matrix; +inf cells are drawn in grey.
        pairs: Assignment to highlight.
        title: Axes title. Defaults to the total cost.
        figsize: Figure size; scales with the matrix if None.
        annotate: Write each cell's cost inside it.

    Returns:
        The matplotlib Figure.
    """
    arr = np.asarray(cost, dtype=np.float64)
    n_rows, n_cols = arr.shape
    if figsize is None:
        figsize = (max(4.0, 0.6 * n_cols + 2.0), max(3.0, 0.6 * n_rows + 1.5))

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    masked = np.ma.masked_invalid(arr)
    cmap = matplotlib.colormaps[CMAP].copy()
    cmap.set_bad(FORBIDDEN_COLOR)
    image = ax.imshow(masked, cmap=cmap, aspect="auto")
    fig.colorbar(image, ax=ax, label="cost")

    for row, col in pairs:
        ax.add_patch(
            mpatches.Rectangle(
                (col - 0.5, row - 0.5),
                1.0,
                1.0,
                fill=False,
                edgecolor=ASSIGNED_EDGE_COLOR,
                linewidth=ASSIGNED_EDGE_WIDTH,
            )
        )

    if annotate and n_rows * n_cols <= 400:
        for (row, col), value in np.ndenumerate(arr):
            ax.text(col, row, _cell_text(value), ha="center", va="center", fontsize=8, color="white")

    total = float(sum(arr[r, c] for r, c in pairs))
    ax.set_title(title or f"Assignment ({len(pairs)} pairs, total cost {_cell_text(total)})")
    ax.set_xlabel("column")
    ax.set_ylabel("row")
    ax.set_xticks(range(n_cols))
    ax.set_yticks(range(n_rows))
    fig.tight_layout()
    return fig
