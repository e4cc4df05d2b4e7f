"""Tests for cost matrix generation and evaluation helpers."""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.munkres.config import GeneratorConfig
from src.munkres.cost_matrix import (
    assignment_cost,
    forbidden_pairs,
    from_generator_config,
    random_cost_matrix,
)


class TestRandomCostMatrix:
    def test_shape_and_range(self):
        cost = random_cost_matrix(4, 3, rng=np.random.default_rng(1))
        assert cost.shape == (4, 3)
        assert cost.dtype == np.float64
        assert cost.min() >= 1 and cost.max() <= 50
        assert (cost == np.round(cost)).all()

    def test_reproducible(self):
        a = random_cost_matrix(5, 5, rng=np.random.default_rng(42))
        b = random_cost_matrix(5, 5, rng=np.random.default_rng(42))
        np.testing.assert_array_equal(a, b)

    def test_forbidden_fraction(self):
        cost = random_cost_matrix(10, 10, rng=np.random.default_rng(0), forbidden_fraction=0.25)
        assert int(np.isinf(cost).sum()) == 25

    def test_keeps_a_finite_cell(self):
        cost = random_cost_matrix(1, 2, rng=np.random.default_rng(0), forbidden_fraction=0.99)
        assert np.isfinite(cost).sum() >= 1

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"n_rows": 0, "n_cols": 3},
            {"n_rows": 3, "n_cols": 3, "low": 10, "high": 5},
            {"n_rows": 3, "n_cols": 3, "forbidden_fraction": 1.0},
        ],
    )
    def test_bad_arguments(self, kwargs):
        with pytest.raises(ValueError):
            random_cost_matrix(**kwargs)

    def test_from_generator_config(self):
        cfg = GeneratorConfig(n_rows=2, n_cols=6, low=3, high=3, random_seed=5)
        cost = from_generator_config(cfg)
        np.testing.assert_array_equal(cost, np.full((2, 6), 3.0))


class TestEvaluation:
    def test_assignment_cost(self):
        cost = [[4, 1, 3], [2, 0, 5], [3, 2, 2]]
        assert assignment_cost(cost, [(0, 1), (1, 0), (2, 2)]) == 5.0

    def test_assignment_cost_empty(self):
        assert assignment_cost([[1.0]], []) == 0.0

    def test_forbidden(self):
        cost = [[math.inf, 1.0], [2.0, 3.0]]
        assert forbidden_pairs(cost, [(0, 0), (1, 1)]) == [(0, 0)]
        assert math.isinf(assignment_cost(cost, [(0, 0), (1, 1)]))
