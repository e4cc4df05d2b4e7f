"""Tests for configuration dataclasses and the YAML loader."""

import dataclasses
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.munkres.config import (
    BenchmarkConfig,
    GeneratorConfig,
    MunkresConfig,
    SolverConfig,
    load_config,
)

REPO_ROOT = Path(__file__).resolve().parents[1]


class TestDefaults:
    def test_defaults(self):
        cfg = MunkresConfig()
        assert cfg.solver.infinity_fill == "dominating"
        assert cfg.solver.max_steps is None
        assert (cfg.generator.n_rows, cfg.generator.n_cols) == (4, 3)
        assert (cfg.generator.low, cfg.generator.high) == (1, 50)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            SolverConfig().max_steps = 3  # type: ignore[misc]

    def test_step_budget(self):
        assert SolverConfig().step_budget(4) == 8 * 25
        assert SolverConfig(max_steps=17).step_budget(100) == 17


class TestLoadConfig:
    def test_shipped_default_file(self):
        cfg = load_config(REPO_ROOT / "config" / "default_munkres.yaml")
        assert cfg == MunkresConfig()

    def test_partial_file(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text(
            "solver:\n"
            "  infinity_fill: max_finite\n"
            "generator:\n"
            "  n_rows: 6\n"
            "  random_seed: 9\n"
            "benchmark:\n"
            "  sizes: [[3, 4], [5, 5]]\n",
            encoding="utf-8",
        )
        cfg = load_config(path)
        assert cfg.solver == SolverConfig(infinity_fill="max_finite")
        assert cfg.generator == GeneratorConfig(n_rows=6, random_seed=9)
        assert cfg.benchmark == BenchmarkConfig(sizes=((3, 4), (5, 5)))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == MunkresConfig()

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("solver:\n  tolerance: 0.1\n", encoding="utf-8")
        with pytest.raises(TypeError):
            load_config(path)
