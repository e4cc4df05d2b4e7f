"""Tests for reading the assignment off the final mask."""

import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.munkres.engine import Mark
from src.munkres.extract import extract_assignment


def _mask(size: int, stars: list[tuple[int, int]]) -> np.ndarray:
    mask = np.zeros((size, size), dtype=np.int8)
    for r, c in stars:
        mask[r, c] = Mark.STAR
    return mask


class TestExtract:
    def test_square_sorted_by_row(self):
        mask = _mask(3, [(2, 0), (0, 1), (1, 2)])
        assert extract_assignment(mask, 3, 3) == [(0, 1), (1, 2), (2, 0)]

    def test_padding_columns_dropped(self):
        # 3×2 original: row 1 was matched to padding column 2.
        mask = _mask(3, [(0, 1), (1, 2), (2, 0)])
        assert extract_assignment(mask, 3, 2) == [(0, 1), (2, 0)]

    def test_padding_rows_dropped(self):
        # 1×3 original: rows 1 and 2 are padding.
        mask = _mask(3, [(0, 2), (1, 0), (2, 1)])
        assert extract_assignment(mask, 1, 3) == [(0, 2)]

    def test_primes_ignored(self):
        mask = _mask(2, [(0, 0), (1, 1)])
        mask[0, 1] = Mark.PRIME
        assert extract_assignment(mask, 2, 2) == [(0, 0), (1, 1)]

    def test_mask_untouched(self):
        mask = _mask(3, [(0, 0), (1, 1), (2, 2)])
        before = mask.copy()
        extract_assignment(mask, 2, 3)
        np.testing.assert_array_equal(mask, before)

    def test_plain_int_pairs(self):
        pairs = extract_assignment(_mask(2, [(0, 1), (1, 0)]), 2, 2)
        assert all(type(r) is int and type(c) is int for r, c in pairs)
