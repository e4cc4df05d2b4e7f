"""
Cost matrix supply helpers.

Random integer-valued cost matrices for demos and benchmarks, and the
evaluation of an assignment against the original (unpadded) costs.

Usage:
    cost = random_cost_matrix(4, 3, rng=np.random.default_rng(7))
    pairs = solve(cost)
    total = assignment_cost(cost, pairs)
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from src.munkres.config import GeneratorConfig

FORBIDDEN: float = float("inf")  # marks a disallowed (row, col) pairing


def random_cost_matrix(
    n_rows: int,
    n_cols: int,
    low: int = 1,
    high: int = 50,
    rng: np.random.Generator | None = None,
    forbidden_fraction: float = 0.0,
) -> np.ndarray:
    """Draw an n_rows × n_cols matrix of integer costs in [low, high].

    Args:
        n_rows: Number of rows (≥ 1).
        n_cols: Number of columns (≥ 1).
        low: Smallest cost (inclusive).
        high: Largest cost (inclusive).
        rng: Numpy generator; a fresh unseeded one if None.
        forbidden_fraction: Fraction of cells set to +inf. At least one
            cell always stays finite.

    Returns:
        float64 array of shape (n_rows, n_cols).
    """
    if n_rows < 1 or n_cols < 1:
        raise ValueError(f"matrix must be at least 1×1, got {n_rows}×{n_cols}")
    if high < low:
        raise ValueError(f"high ({high}) must be ≥ low ({low})")
    if not 0.0 <= forbidden_fraction < 1.0:
        raise ValueError(f"forbidden_fraction must be in [0, 1), got {forbidden_fraction}")

    rng = rng or np.random.default_rng()
    cost = rng.integers(low, high + 1, size=(n_rows, n_cols)).astype(np.float64)

    if forbidden_fraction > 0.0:
        n_forbidden = min(int(round(forbidden_fraction * cost.size)), cost.size - 1)
        if n_forbidden > 0:
            flat = rng.choice(cost.size, size=n_forbidden, replace=False)
            cost.flat[flat] = FORBIDDEN
    return cost


def from_generator_config(cfg: GeneratorConfig, rng: np.random.Generator | None = None) -> np.ndarray:
    """random_cost_matrix() driven by a GeneratorConfig."""

    if rng is None:
        rng = np.random.default_rng(cfg.random_seed)
    return random_cost_matrix(
        cfg.n_rows,
        cfg.n_cols,
        low=cfg.low,
        high=cfg.high,
        rng=rng,
        forbidden_fraction=cfg.forbidden_fraction,
    )


def assignment_cost(cost, pairs: Iterable[tuple[int, int]]) -> float:
    """Sum of cost[row][col] over *pairs*. +inf if any pair is forbidden."""

    arr = np.asarray(cost, dtype=np.float64)
    return float(sum(arr[r, c] for r, c in pairs))


def forbidden_pairs(cost, pairs: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    """Pairs that land on a +inf cell of *cost*."""

    arr = np.asarray(cost, dtype=np.float64)
    return [(r, c) for r, c in pairs if np.isinf(arr[r, c])]
