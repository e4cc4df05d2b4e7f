"""
Solver configuration dataclasses and YAML loader.

All tunable parameters live here as typed, frozen dataclasses.
Load from YAML with `load_config()` or construct directly for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import yaml


@dataclass(frozen=True)
class SolverConfig:
    """Parameters of a single Munkres solve.

    infinity_fill decides what replaces +inf cells before reduction:
    "dominating" picks a value larger than the cost of any all-finite
    assignment, "max_finite" reuses the largest finite entry.

    max_steps bounds the number of state transitions. None derives the
    bound from the matrix size.
    """

    infinity_fill: Literal["dominating", "max_finite"] = "dominating"
    max_steps: int | None = None

    def step_budget(self, size: int) -> int:
        """Transition budget for an N×N working matrix."""

        if self.max_steps is not None:
            return self.max_steps
        return 8 * (size + 1) ** 2


@dataclass(frozen=True)
class GeneratorConfig:
    """Random cost-matrix generation for the demo driver."""

    n_rows: int = 4
    n_cols: int = 3
    low: int = 1  # inclusive
    high: int = 50  # inclusive
    forbidden_fraction: float = 0.0  # fraction of cells set to +inf
    random_seed: int | None = None


@dataclass(frozen=True)
class BenchmarkConfig:
    """Solver comparison runs."""

    n_scenarios: int = 50
    sizes: tuple[tuple[int, int], ...] = ((8, 8), (20, 15), (15, 20), (40, 40))
    seed: int = 42


@dataclass(frozen=True)
class MunkresConfig:
    """Top-level configuration aggregating all sub-configs."""

    solver: SolverConfig = field(default_factory=SolverConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)


def load_config(path: str | Path) -> MunkresConfig:
    """Load a MunkresConfig from a YAML file.

    Args:
        path: Path to a YAML config file.

    Returns:
        Fully constructed MunkresConfig; absent sections keep their defaults.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    bench_raw = dict(raw.get("benchmark", {}))
    if "sizes" in bench_raw:
        bench_raw["sizes"] = tuple(tuple(int(v) for v in shape) for shape in bench_raw["sizes"])

    return MunkresConfig(
        solver=SolverConfig(**raw.get("solver", {})),
        generator=GeneratorConfig(**raw.get("generator", {})),
        benchmark=BenchmarkConfig(**bench_raw),
    )
