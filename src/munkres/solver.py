"""
Rectangular assignment solvers.

The Munkres solver runs three phases per call, each on fresh state:

  Preprocess  →  pad to square, replace +inf, row/column reduction
  Engine      →  star / cover / prime / augment / adjust until N stars
  Extract     →  trim to R×C, starred pairs sorted by row

Solver menu
───────────
  MunkresSolver     pure-Python/numpy Kuhn-Munkres          ← DEFAULT
  ScipyLAPSolver    scipy.optimize.linear_sum_assignment     reference
  BruteForceSolver  permutation search, N ≤ 8                tests only

All three share the same public interface: solve(cost) returns the pairs,
solve_with_diagnostics(cost) returns an AssignmentResult.
"""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

from src.munkres.config import SolverConfig
from src.munkres.cost_matrix import assignment_cost, forbidden_pairs
from src.munkres.engine import MunkresEngine
from src.munkres.extract import extract_assignment
from src.munkres.preprocess import as_cost_array, infinity_fill_value, pad_to_square, preprocess

logger = logging.getLogger(__name__)

BRUTE_FORCE_MAX_SIZE: int = 8


# ─────────────────────────────────────────────────────────────────────────────
# Public types
# ─────────────────────────────────────────────────────────────────────────────


class SolverStatus(Enum):
    """Outcome of a solve."""

    OPTIMAL = auto()  # every pair is on a finite cost
    INFEASIBLE = auto()  # no finite complete assignment; forbidden pairs used


@dataclass
class AssignmentResult:
    """Unified output returned by every solver variant."""

    pairs: list[tuple[int, int]]  # (row, col), sorted by row
    total_cost: float  # over the caller's original costs
    solver_status: SolverStatus
    solve_time_ms: float
    forbidden_pairs: list[tuple[int, int]] = field(default_factory=list)
    n_steps: int = 0  # state transitions (Munkres only)


# ─────────────────────────────────────────────────────────────────────────────
# Core operation
# ─────────────────────────────────────────────────────────────────────────────


def solve(cost, config: SolverConfig | None = None) -> list[tuple[int, int]]:
    """Minimum-cost assignment of an R×C cost matrix.

    Args:
        cost: R×C array-like of non-negative floats; +inf forbids a pairing.
            Never modified.
        config: Solver configuration.

    Returns:
        min(R, C) pairs (row, col), sorted by row, no row or column repeated.

    Raises:
        InvalidInput: empty dimension, NaN entry, or no finite entry.
        InternalInvariantViolation: the step machine misbehaved.
    """
    pairs, _ = _run_munkres(cost, config or SolverConfig())
    return pairs


def _run_munkres(cost, config: SolverConfig) -> tuple[list[tuple[int, int]], int]:
    prepared = preprocess(cost, config)
    engine = MunkresEngine(prepared.matrix, config)
    mask = engine.run()
    return extract_assignment(mask, prepared.rows, prepared.cols), engine.n_steps


def _make_result(
    cost: np.ndarray,
    pairs: list[tuple[int, int]],
    ms: float,
    n_steps: int = 0,
) -> AssignmentResult:
    bad = forbidden_pairs(cost, pairs)
    status = SolverStatus.INFEASIBLE if bad else SolverStatus.OPTIMAL
    return AssignmentResult(
        pairs=pairs,
        total_cost=assignment_cost(cost, pairs),
        solver_status=status,
        solve_time_ms=ms,
        forbidden_pairs=bad,
        n_steps=n_steps,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Solver 1 — MunkresSolver
# ─────────────────────────────────────────────────────────────────────────────


class MunkresSolver:
    """Kuhn-Munkres solver with per-call diagnostics.

    Keeps cumulative counters across calls; no state of a solve outlives it.
    """

    def __init__(self, solver_config: SolverConfig | None = None) -> None:
        self.config = solver_config or SolverConfig()
        self.total_solves: int = 0
        self.total_solve_time_ms: float = 0.0

    def solve(self, cost) -> list[tuple[int, int]]:
        """Pairs only. See solve_with_diagnostics."""

        return self.solve_with_diagnostics(cost).pairs

    def solve_with_diagnostics(self, cost) -> AssignmentResult:
        """Solve and report cost, status, timing and step count."""

        t0 = time.perf_counter()
        arr = as_cost_array(cost)
        pairs, n_steps = _run_munkres(arr, self.config)
        ms = (time.perf_counter() - t0) * 1e3

        self.total_solves += 1
        self.total_solve_time_ms += ms
        result = _make_result(arr, pairs, ms, n_steps)
        logger.info(
            "Munkres %dx%d: %d pairs, cost %.6g, %d steps, %.2f ms (%s)",
            arr.shape[0],
            arr.shape[1],
            len(pairs),
            result.total_cost,
            n_steps,
            ms,
            result.solver_status.name,
        )
        return result


# ─────────────────────────────────────────────────────────────────────────────
# Solver 2 — ScipyLAPSolver
# ─────────────────────────────────────────────────────────────────────────────


class ScipyLAPSolver:
    """Reference solver: scipy.optimize.linear_sum_assignment.

    scipy rejects matrices whose only complete assignments use +inf cells,
    so forbidden cells are given the same dominating value Munkres uses.
    """

    def __init__(self, solver_config: SolverConfig | None = None) -> None:
        self.config = solver_config or SolverConfig()
        self.total_solves: int = 0
        self.total_solve_time_ms: float = 0.0

    def solve(self, cost) -> list[tuple[int, int]]:
        """Pairs only."""

        return self.solve_with_diagnostics(cost).pairs

    def solve_with_diagnostics(self, cost) -> AssignmentResult:
        """Solve with diagnostics"""

        from scipy.optimize import linear_sum_assignment  # type: ignore # pylint: disable=import-error, import-outside-toplevel

        t0 = time.perf_counter()
        arr = as_cost_array(cost)
        work = arr.copy()
        forbidden = np.isinf(work)
        if forbidden.any():
            work[forbidden] = infinity_fill_value(pad_to_square(arr), self.config.infinity_fill)

        row_ind, col_ind = linear_sum_assignment(work)
        pairs = sorted(((int(r), int(c)) for r, c in zip(row_ind, col_ind)), key=lambda p: p[0])
        ms = (time.perf_counter() - t0) * 1e3

        self.total_solves += 1
        self.total_solve_time_ms += ms
        return _make_result(arr, pairs, ms)


# ─────────────────────────────────────────────────────────────────────────────
# Solver 3 — BruteForceSolver
# ─────────────────────────────────────────────────────────────────────────────


class BruteForceSolver:
    """Exhaustive permutation search. Exact, O(N!), small matrices only.

    Ranks assignments by the number of forbidden cells used, then by the
    sum of their finite costs. Ties go to the first permutation in
    lexicographic order.
    """

    def __init__(self, max_size: int = BRUTE_FORCE_MAX_SIZE) -> None:
        self.max_size = max_size
        self.total_solves: int = 0
        self.total_solve_time_ms: float = 0.0

    def solve(self, cost) -> list[tuple[int, int]]:
        """Pairs only."""

        return self.solve_with_diagnostics(cost).pairs

    def solve_with_diagnostics(self, cost) -> AssignmentResult:
        """Solve with diagnostics"""

        t0 = time.perf_counter()
        arr = as_cost_array(cost)
        n_r, n_c = arr.shape
        if max(n_r, n_c) > self.max_size:
            raise ValueError(f"brute force limited to {self.max_size}×{self.max_size}, got {n_r}×{n_c}")

        # Iterate over the larger side choosing one partner per smaller-side index.
        transpose = n_r > n_c
        work = arr.T if transpose else arr
        small, large = work.shape

        best_key: tuple[int, float] | None = None
        best_cols: tuple[int, ...] = ()
        for cols in itertools.permutations(range(large), small):
            values = [work[i, j] for i, j in enumerate(cols)]
            n_inf = sum(1 for v in values if np.isinf(v))
            finite_sum = float(sum(v for v in values if not np.isinf(v)))
            key = (n_inf, finite_sum)
            if best_key is None or key < best_key:
                best_key, best_cols = key, cols

        if transpose:
            pairs = sorted(((j, i) for i, j in enumerate(best_cols)), key=lambda p: p[0])
        else:
            pairs = [(i, j) for i, j in enumerate(best_cols)]
        ms = (time.perf_counter() - t0) * 1e3

        self.total_solves += 1
        self.total_solve_time_ms += ms
        return _make_result(arr, pairs, ms)


# ─────────────────────────────────────────────────────────────────────────────
# Factory
# ─────────────────────────────────────────────────────────────────────────────


def create_solver(
    strategy: str = "munkres",
    solver_config: SolverConfig | None = None,
) -> MunkresSolver | ScipyLAPSolver | BruteForceSolver:
    """Instantiate and return the requested solver.

    strategy options
    ─────────────────
    "munkres"    → MunkresSolver      default
    "scipy"      → ScipyLAPSolver     requires scipy
    "bruteforce" → BruteForceSolver   N ≤ 8
    """
    if strategy == "munkres":
        return MunkresSolver(solver_config)
    if strategy == "scipy":
        return ScipyLAPSolver(solver_config)
    if strategy == "bruteforce":
        return BruteForceSolver()
    raise ValueError(
        f"Unknown strategy {strategy!r}. Valid options: 'munkres', 'scipy', 'bruteforce'."
    )
