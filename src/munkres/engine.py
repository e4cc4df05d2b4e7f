"""
Munkres step machine.

Operates on a square, finite, row/column-reduced working matrix (see
preprocess.py) and stars an independent set of zeros of maximum size.

States per Munkres (1957), as numbered in Bourgeois & Lassalle (1971):

  INIT_STAR   : greedily star zeros, row-major scan            → CHECK_COVER
  CHECK_COVER : cover columns holding a star.
                N covered → DONE, else                         → FIND_ZERO
  FIND_ZERO   : find an uncovered zero (column-major scan), prime it.
                star in its row → cover row, uncover star's column, repeat
                no star in its row                             → AUGMENT
                no uncovered zero                              → ADJUST
  AUGMENT     : alternating prime/star sequence from the saved zero;
                unstar stars, star primes, erase primes, clear covers
                                                               → CHECK_COVER
  ADJUST      : h = min uncovered value. add h to covered rows,
                subtract h from uncovered columns              → FIND_ZERO

Scan orders only decide which of several optimal assignments is found.
"""

from __future__ import annotations

import logging
from enum import Enum, IntEnum, auto

import numpy as np

from src.munkres.config import SolverConfig
from src.munkres.errors import InternalInvariantViolation

logger = logging.getLogger(__name__)


class Mark(IntEnum):
    """Cell tags stored in the mask."""

    NORMAL = 0
    STAR = 1
    PRIME = 2


class Step(Enum):
    """States of the step machine."""

    INIT_STAR = auto()
    CHECK_COVER = auto()
    FIND_ZERO = auto()
    AUGMENT = auto()
    ADJUST = auto()
    DONE = auto()


class MunkresEngine:
    """Step machine owning the working matrix, mask, covers and saved zero.

    Args:
        matrix: N×N reduced working matrix. The engine keeps its own copy.
        config: Solver configuration (step budget).

    Usage:
        engine = MunkresEngine(prepared.matrix)
        mask = engine.run()

    or one transition at a time with engine.step() for inspection.
    """

    def __init__(self, matrix: np.ndarray, config: SolverConfig | None = None) -> None:
        matrix = np.array(matrix, dtype=np.float64)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or matrix.shape[0] == 0:
            raise InternalInvariantViolation(f"engine needs a non-empty square matrix, got {matrix.shape}")
        if not np.isfinite(matrix).all():
            raise InternalInvariantViolation("non-finite value reached the step machine")

        self.config = config or SolverConfig()
        self.size: int = matrix.shape[0]
        self.matrix = matrix
        self.mask = np.zeros((self.size, self.size), dtype=np.int8)
        self.row_cover = np.zeros(self.size, dtype=bool)
        self.col_cover = np.zeros(self.size, dtype=bool)
        self.saved_zero: tuple[int, int] | None = None

        self.state: Step = Step.INIT_STAR
        self.n_steps: int = 0
        self.budget: int = self.config.step_budget(self.size)

        self._handlers = {
            Step.INIT_STAR: self._init_star,
            Step.CHECK_COVER: self._check_cover,
            Step.FIND_ZERO: self._find_zero,
            Step.AUGMENT: self._augment,
            Step.ADJUST: self._adjust,
        }

    # ── Driving the machine ──────────────────────────────────────────────────

    @property
    def done(self) -> bool:
        return self.state is Step.DONE

    def step(self) -> Step:
        """Execute one transition and return the new state."""

        if self.done:
            return self.state
        if self.n_steps >= self.budget:
            raise InternalInvariantViolation(
                f"step machine did not finish within {self.budget} transitions (N={self.size})"
            )
        self.n_steps += 1
        self.state = self._handlers[self.state]()
        return self.state

    def run(self) -> np.ndarray:
        """Run until DONE and return a copy of the final mask."""

        while not self.done:
            self.step()
        logger.debug("Munkres finished: N=%d in %d transitions", self.size, self.n_steps)
        return self.mask.copy()

    # ── Queries ──────────────────────────────────────────────────────────────

    def starred(self) -> list[tuple[int, int]]:
        """Starred cells in row-major order."""

        rows, cols = np.nonzero(self.mask == Mark.STAR)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def _star_in_row(self, row: int) -> int | None:
        cols = np.flatnonzero(self.mask[row, :] == Mark.STAR)
        return int(cols[0]) if cols.size else None

    def _star_in_col(self, col: int) -> int | None:
        rows = np.flatnonzero(self.mask[:, col] == Mark.STAR)
        return int(rows[0]) if rows.size else None

    def _prime_in_row(self, row: int) -> int | None:
        cols = np.flatnonzero(self.mask[row, :] == Mark.PRIME)
        return int(cols[0]) if cols.size else None

    def _uncovered(self) -> np.ndarray:
        return ~self.row_cover[:, None] & ~self.col_cover[None, :]

    # ── States ───────────────────────────────────────────────────────────────

    def _init_star(self) -> Step:
        row_has_star = np.zeros(self.size, dtype=bool)
        col_has_star = np.zeros(self.size, dtype=bool)
        for row in range(self.size):
            for col in np.flatnonzero(self.matrix[row, :] == 0):
                if not row_has_star[row] and not col_has_star[col]:
                    self.mask[row, col] = Mark.STAR
                    row_has_star[row] = col_has_star[col] = True
                    break
        return Step.CHECK_COVER

    def _check_cover(self) -> Step:
        stars = self.mask == Mark.STAR
        if (stars.sum(axis=0) > 1).any() or (stars.sum(axis=1) > 1).any():
            raise InternalInvariantViolation("more than one star in a row or column")

        self.col_cover[:] = stars.any(axis=0)
        covered = int(self.col_cover.sum())
        if covered >= self.size:
            logger.debug("Final cover count: %d", covered)
            return Step.DONE
        logger.debug("Munkres matrix has %d of %d columns covered", covered, self.size)
        return Step.FIND_ZERO

    def _find_zero(self) -> Step:
        while True:
            # Transposed so the first hit is the first in column-major order.
            zeros = (self._uncovered() & (self.matrix == 0)).T
            hit_cols, hit_rows = np.nonzero(zeros)
            if hit_cols.size == 0:
                return Step.ADJUST

            row, col = int(hit_rows[0]), int(hit_cols[0])
            self.mask[row, col] = Mark.PRIME
            self.saved_zero = (row, col)

            star_col = self._star_in_row(row)
            if star_col is None:
                return Step.AUGMENT
            self.row_cover[row] = True
            self.col_cover[star_col] = False

    def _augment(self) -> Step:
        if self.saved_zero is None:
            raise InternalInvariantViolation("AUGMENT entered without a saved zero")

        sequence = [self.saved_zero]
        seen = {self.saved_zero}
        col = self.saved_zero[1]
        while True:
            row = self._star_in_col(col)
            if row is None or (row, col) in seen:
                break
            sequence.append((row, col))
            seen.add((row, col))

            col = self._prime_in_row(row)
            if col is None or (row, col) in seen:
                raise InternalInvariantViolation(f"starred zero at row {row} has no primed partner")
            sequence.append((row, col))
            seen.add((row, col))

        for row, col in sequence:
            if self.mask[row, col] == Mark.STAR:
                self.mask[row, col] = Mark.NORMAL
            elif self.mask[row, col] == Mark.PRIME:
                self.mask[row, col] = Mark.STAR

        self.mask[self.mask == Mark.PRIME] = Mark.NORMAL
        self.row_cover[:] = False
        self.col_cover[:] = False
        self.saved_zero = None
        return Step.CHECK_COVER

    def _adjust(self) -> Step:
        uncovered = self._uncovered()
        if not uncovered.any():
            raise InternalInvariantViolation("ADJUST found every cell covered")

        h = float(self.matrix[uncovered].min())
        if not np.isfinite(h) or h <= 0:
            raise InternalInvariantViolation(f"invalid adjustment value h={h}")

        self.matrix[self.row_cover, :] += h
        self.matrix[:, ~self.col_cover] -= h
        return Step.FIND_ZERO
