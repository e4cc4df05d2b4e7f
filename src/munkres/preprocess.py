"""
Preprocessing of a caller-supplied cost matrix.

Turns an R×C cost matrix into the square, finite, reduced working matrix the
step machine operates on:

  1. validate        (2-D, R, C ≥ 1, no NaN / -inf, some finite entry)
  2. pad to square   (fill = max finite entry of the original)
  3. replace +inf    (fill chosen by SolverConfig.infinity_fill)
  4. reduce          (row minimums, then column minimums)

The caller's matrix is never written to; every stage works on a fresh copy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from src.munkres.config import SolverConfig
from src.munkres.errors import InvalidInput

logger = logging.getLogger(__name__)


@dataclass
class PreparedMatrix:
    """Output of the preprocessor.

    Attributes:
        matrix: N×N reduced working matrix (float64, all finite, ≥ 0).
        rows: Row count of the original cost matrix.
        cols: Column count of the original cost matrix.
        fill_value: Value that replaced +inf cells (before reduction),
            None when the matrix had none.
    """

    matrix: np.ndarray
    rows: int
    cols: int
    fill_value: float | None = None

    @property
    def size(self) -> int:
        return self.matrix.shape[0]


def as_cost_array(cost) -> np.ndarray:
    """Validate *cost* and return it as a float64 array (a new object).

    Raises:
        InvalidInput: on any precondition violation.
    """
    try:
        arr = np.array(cost, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"cost matrix is not a numeric grid: {exc}") from exc

    if arr.ndim != 2:
        raise InvalidInput(f"cost matrix must be 2-D, got {arr.ndim}-D")
    rows, cols = arr.shape
    if rows < 1 or cols < 1:
        raise InvalidInput(f"cost matrix must be at least 1×1, got {rows}×{cols}")
    if np.isnan(arr).any():
        raise InvalidInput("cost matrix contains NaN")
    if np.isneginf(arr).any():
        raise InvalidInput("cost matrix contains -inf")
    if not np.isfinite(arr).any():
        raise InvalidInput("cost matrix has no finite entry")
    return arr


def pad_to_square(cost: np.ndarray) -> np.ndarray:
    """Copy *cost* into an N×N matrix, N = max(R, C).

    New cells hold the maximum finite entry of *cost*. Square input is
    returned as a copy.
    """
    rows, cols = cost.shape
    n = max(rows, cols)
    if rows == cols:
        return cost.copy()
    pad_value = cost[np.isfinite(cost)].max()
    out = np.full((n, n), pad_value, dtype=np.float64)
    out[:rows, :cols] = cost
    return out


def infinity_fill_value(square: np.ndarray, policy: str) -> float:
    """Finite value that stands in for +inf cells of *square*.

    "max_finite" is the largest finite entry. "dominating" exceeds the
    total of any assignment made of finite cells only:
        max_f + N * (max_f - min_f) + max(1, |max_f|)
    The margin scales with max_f so it survives float rounding. If the
    dominating value is not representable, max_f is used instead.
    """
    finite = square[np.isfinite(square)]
    max_f = float(finite.max())
    if policy == "max_finite":
        return max_f
    if policy == "dominating":
        min_f = float(finite.min())
        value = max_f + square.shape[0] * (max_f - min_f) + max(1.0, abs(max_f))
        if not np.isfinite(value) or value <= max_f:
            logger.warning(
                "Cost range too large for a dominating fill (max %.6g); forbidden cells use the max finite cost",
                max_f,
            )
            return max_f
        return value
    raise ValueError(f"Unknown infinity_fill {policy!r}. Valid options: 'dominating', 'max_finite'.")


def reduce_matrix(square: np.ndarray) -> np.ndarray:
    """Subtract row minimums, then column minimums. Returns a new array."""

    out = square - square.min(axis=1, keepdims=True)
    out -= out.min(axis=0, keepdims=True)
    return out


def preprocess(cost, config: SolverConfig | None = None) -> PreparedMatrix:
    """Run every preprocessing stage on *cost*.

    Args:
        cost: R×C array-like of floats; +inf marks forbidden pairs.
        config: Solver configuration (infinity policy).

    Returns:
        PreparedMatrix whose matrix has a zero in every row and column.

    Raises:
        InvalidInput: if *cost* violates a precondition.
    """
    config = config or SolverConfig()
    arr = as_cost_array(cost)
    rows, cols = arr.shape

    square = pad_to_square(arr)
    fill = None
    forbidden = np.isinf(square)
    if forbidden.any():
        fill = infinity_fill_value(square, config.infinity_fill)
        square[forbidden] = fill

    return PreparedMatrix(matrix=reduce_matrix(square), rows=rows, cols=cols, fill_value=fill)
