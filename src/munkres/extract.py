"""Read the final assignment off a finished step machine's mask."""

from __future__ import annotations

import numpy as np

from src.munkres.engine import Mark


def extract_assignment(mask: np.ndarray, rows: int, cols: int) -> list[tuple[int, int]]:
    """Starred (row, col) pairs inside the original rows × cols extent.

    Padding rows (≥ rows) and padding columns (≥ cols) are dropped; a real
    row or column starred only against padding gets no pair. The result is
    sorted by row index (stable).
    """
    trimmed = np.array(mask[:rows, :cols], copy=True)
    star_rows, star_cols = np.nonzero(trimmed == Mark.STAR)
    pairs = [(int(r), int(c)) for r, c in zip(star_rows, star_cols)]
    return sorted(pairs, key=lambda p: p[0])
