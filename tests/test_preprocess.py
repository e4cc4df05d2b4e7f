"""
Tests for the preprocessing phase.

Tests cover:
1. Input validation (InvalidInput on bad shapes, NaN, -inf, all-inf)
2. Padding rectangular matrices to square
3. Replacement of +inf entries (dominating and max_finite policies)
4. Row/column reduction
5. The caller's matrix is never modified

Run with: pytest tests/test_preprocess.py -v
"""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.munkres.config import SolverConfig
from src.munkres.errors import InvalidInput
from src.munkres.preprocess import (
    as_cost_array,
    infinity_fill_value,
    pad_to_square,
    preprocess,
    reduce_matrix,
)

INF = math.inf


class TestValidation:
    """InvalidInput is raised for every precondition violation."""

    @pytest.mark.parametrize(
        "cost",
        [
            np.zeros((0, 3)),
            np.zeros((3, 0)),
            [[]],
            [],
            [1.0, 2.0, 3.0],
            np.zeros((2, 2, 2)),
        ],
    )
    def test_bad_shape(self, cost):
        with pytest.raises(InvalidInput):
            as_cost_array(cost)

    def test_nan_entry(self):
        with pytest.raises(InvalidInput, match="NaN"):
            preprocess([[1.0, float("nan")], [2.0, 3.0]])

    def test_negative_infinity(self):
        with pytest.raises(InvalidInput, match="-inf"):
            preprocess([[1.0, -INF], [2.0, 3.0]])

    def test_all_infinite(self):
        with pytest.raises(InvalidInput, match="no finite"):
            preprocess([[INF, INF], [INF, INF]])

    def test_ragged_rows(self):
        with pytest.raises(InvalidInput):
            preprocess([[1.0, 2.0], [3.0]])

    def test_non_numeric(self):
        with pytest.raises(InvalidInput):
            preprocess([["a", "b"], ["c", "d"]])

    def test_invalid_input_is_value_error(self):
        """Callers catching ValueError also catch InvalidInput."""
        with pytest.raises(ValueError):
            preprocess(np.zeros((0, 0)))


class TestPadding:
    """Rectangular matrices become N×N copies."""

    def test_square_is_copied(self):
        cost = np.array([[1.0, 2.0], [3.0, 4.0]])
        out = pad_to_square(cost)
        assert out is not cost
        np.testing.assert_array_equal(out, cost)

    def test_more_rows_than_columns(self):
        cost = np.array([[1.0, 7.0], [3.0, 4.0], [5.0, 6.0]])
        out = pad_to_square(cost)
        assert out.shape == (3, 3)
        np.testing.assert_array_equal(out[:, :2], cost)
        assert (out[:, 2] == 7.0).all()

    def test_more_columns_than_rows(self):
        cost = np.array([[1.0, 2.0, 9.0]])
        out = pad_to_square(cost)
        assert out.shape == (3, 3)
        assert (out[1:, :] == 9.0).all()

    def test_pad_value_ignores_infinity(self):
        cost = np.array([[1.0, INF], [3.0, 4.0], [5.0, 2.0]])
        out = pad_to_square(cost)
        assert (out[:, 2] == 5.0).all()


class TestInfinityFill:
    """+inf cells are replaced before reduction."""

    def test_max_finite_policy(self):
        square = np.array([[1.0, INF], [3.0, 4.0]])
        assert infinity_fill_value(square, "max_finite") == 4.0

    def test_dominating_policy(self):
        square = np.array([[1.0, INF], [3.0, 4.0]])
        # max + N * (max - min) + max(1, |max|) = 4 + 2 * 3 + 4
        assert infinity_fill_value(square, "dominating") == 14.0

    def test_dominating_exceeds_any_finite_assignment(self):
        square = np.array([[2.0, 2.0, INF], [2.0, 2.0, 2.0], [2.0, 2.0, 2.0]])
        fill = infinity_fill_value(square, "dominating")
        assert fill > 3 * 2.0

    def test_unknown_policy(self):
        with pytest.raises(ValueError, match="Unknown infinity_fill"):
            infinity_fill_value(np.ones((2, 2)), "zero")

    def test_dominating_margin_survives_large_costs(self):
        square = np.array([[INF, 1e16], [1e16, 1e16]])
        assert infinity_fill_value(square, "dominating") > 1e16

    def test_dominating_overflow_falls_back_to_max_finite(self, caplog):
        square = np.array([[INF, 1e308], [0.0, 1e308]])
        with caplog.at_level("WARNING", logger="src.munkres.preprocess"):
            assert infinity_fill_value(square, "dominating") == 1e308
        assert "max finite" in caplog.text

    def test_preprocess_records_fill(self):
        prepared = preprocess([[1.0, INF], [3.0, 4.0]], SolverConfig(infinity_fill="max_finite"))
        assert prepared.fill_value == 4.0
        assert np.isfinite(prepared.matrix).all()

    def test_huge_finite_costs_need_no_fill(self):
        prepared = preprocess([[1e308, 0.0], [0.0, 1e308]])
        assert prepared.fill_value is None
        assert np.isfinite(prepared.matrix).all()
        assert (prepared.matrix == np.array([[1e308, 0.0], [0.0, 1e308]])).all()


class TestReduction:
    """Every row and column ends up with a zero."""

    def test_row_then_column_reduction(self):
        square = np.array([[4.0, 1.0, 3.0], [2.0, 0.0, 5.0], [3.0, 2.0, 2.0]])
        out = reduce_matrix(square)
        expected = np.array([[2.0, 0.0, 2.0], [1.0, 0.0, 5.0], [0.0, 0.0, 0.0]])
        np.testing.assert_array_equal(out, expected)

    def test_reduction_returns_new_array(self):
        square = np.array([[4.0, 1.0], [2.0, 3.0]])
        out = reduce_matrix(square)
        assert out is not square
        np.testing.assert_array_equal(square, [[4.0, 1.0], [2.0, 3.0]])

    def test_prepared_matrix_properties(self):
        rng = np.random.default_rng(3)
        cost = rng.integers(1, 50, size=(5, 8)).astype(float)
        prepared = preprocess(cost)
        m = prepared.matrix
        assert prepared.size == 8
        assert (prepared.rows, prepared.cols) == (5, 8)
        assert (m >= 0).all()
        assert (m == 0).any(axis=1).all()
        assert (m == 0).any(axis=0).all()

    def test_caller_matrix_untouched(self):
        cost = np.array([[5.0, INF, 3.0], [2.0, 8.0, INF]])
        before = cost.copy()
        preprocess(cost)
        np.testing.assert_array_equal(cost, before)

    def test_list_input_untouched(self):
        cost = [[5, 1], [2, 8], [4, 4]]
        preprocess(cost)
        assert cost == [[5, 1], [2, 8], [4, 4]]
