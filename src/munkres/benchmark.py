"""
src/munkres/benchmark.py
──────────────────────────────────────────────────────────────────────────────
Benchmark: Munkres against the reference solvers.

Solves the same random cost matrices with every selected solver and checks
that all of them report the same optimal total cost.

Metrics per matrix shape:
  • Solve time            (wall-clock, ms; mean / P95 / max)
  • Cost mismatches       (scenarios whose optimum differs from Munkres)
  • Munkres transitions   (mean state-machine steps)

Usage:
    python -m src.munkres.benchmark                     # config defaults
    python -m src.munkres.benchmark --scenarios 200
    python -m src.munkres.benchmark --config config/default_munkres.yaml
    python -m src.munkres.benchmark --solvers munkres scipy
"""

from __future__ import annotations

import argparse
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from src.munkres.config import BenchmarkConfig, MunkresConfig, SolverConfig, load_config
from src.munkres.cost_matrix import random_cost_matrix
from src.munkres.solver import BRUTE_FORCE_MAX_SIZE, AssignmentResult, create_solver

ALL_SOLVERS = ["munkres", "scipy", "bruteforce"]


@dataclass
class ShapeStats:
    """Accumulated results for one (rows, cols) shape and one solver."""

    time_ms: list[float] = field(default_factory=list)
    n_steps: list[int] = field(default_factory=list)
    mismatches: int = 0
    skipped: int = 0


def costs_agree(a: float, b: float) -> bool:
    """Equal optimal costs, treating inf == inf."""

    if math.isinf(a) or math.isinf(b):
        return a == b
    return math.isclose(a, b, rel_tol=1e-9, abs_tol=1e-9)


def run_benchmark(
    bench: BenchmarkConfig | None = None,
    solver_config: SolverConfig | None = None,
    solver_names: list[str] | None = None,
    forbidden_fraction: float = 0.0,
) -> dict[tuple[int, int], dict[str, ShapeStats]]:
    """Run scenarios, print a comparison table and return the raw stats."""

    bench = bench or BenchmarkConfig()
    active = solver_names or ["munkres", "scipy"]
    if "munkres" not in active:
        active = ["munkres"] + list(active)

    print("=" * 80)
    print("  Munkres Assignment Benchmark")
    print("=" * 80)
    print(f"  Scenarios: {bench.n_scenarios}  |  Seed: {bench.seed}  |  Forbidden: {forbidden_fraction:.0%}")
    print(f"  Solvers:   {', '.join(active)}")
    print()

    solvers = {name: create_solver(name, solver_config) for name in active}
    rng = np.random.default_rng(bench.seed)
    stats: dict[tuple[int, int], dict[str, ShapeStats]] = {}

    for shape in bench.sizes:
        n_rows, n_cols = shape
        per_solver = {name: ShapeStats() for name in active}
        stats[shape] = per_solver

        for _ in range(bench.n_scenarios):
            cost = random_cost_matrix(n_rows, n_cols, rng=rng, forbidden_fraction=forbidden_fraction)
            results: dict[str, AssignmentResult] = {}
            for name in active:
                if name == "bruteforce" and max(n_rows, n_cols) > BRUTE_FORCE_MAX_SIZE:
                    per_solver[name].skipped += 1
                    continue
                results[name] = solvers[name].solve_with_diagnostics(cost)
                per_solver[name].time_ms.append(results[name].solve_time_ms)
                per_solver[name].n_steps.append(results[name].n_steps)

            reference = results["munkres"].total_cost
            for name, r in results.items():
                if not costs_agree(reference, r.total_cost):
                    per_solver[name].mismatches += 1

    _print_table(stats, active)
    return stats


def _print_table(stats: dict[tuple[int, int], dict[str, ShapeStats]], active: list[str]) -> None:
    col_w = 14

    def hdr(label: str) -> str:
        return f"{label:>{col_w}}"

    def val(values: list[float], fn, fmt: str = ".3f") -> str:
        if not values:
            return f"{'—':>{col_w}}"
        return f"{fn(values):{col_w}{fmt}}"

    for shape, per_solver in stats.items():
        print(f"  Shape {shape[0]}×{shape[1]}")
        print(f"  {'Metric':<28}" + "".join(hdr(n) for n in active))
        print("  " + "─" * (28 + col_w * len(active)))
        rows = [
            ("Avg solve time (ms)", lambda s: val(s.time_ms, np.mean)),
            ("P95 solve time (ms)", lambda s: val(s.time_ms, lambda v: np.percentile(v, 95))),
            ("Max solve time (ms)", lambda s: val(s.time_ms, np.max)),
            ("Avg transitions", lambda s: val(s.n_steps, np.mean, ".1f")),
            ("Cost mismatches", lambda s: f"{s.mismatches:{col_w}d}"),
            ("Skipped", lambda s: f"{s.skipped:{col_w}d}"),
        ]
        for label, fn in rows:
            print(f"  {label:<28}" + "".join(fn(per_solver[name]) for name in active))
        print()

    print("=" * 80)


# ── CLI entry point ───────────────────────────────────────────────────────────

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Benchmark Munkres against reference solvers")
    parser.add_argument("--config", type=str, default="config/default_munkres.yaml")
    parser.add_argument("--scenarios", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--forbidden-fraction", type=float, default=0.0)
    parser.add_argument(
        "--solvers",
        nargs="+",
        choices=ALL_SOLVERS,
        default=None,
        help="Solvers to compare (default: munkres scipy)",
    )
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config_path = Path(args.config)
    config = load_config(config_path) if config_path.exists() else MunkresConfig()
    bench_cfg = BenchmarkConfig(
        n_scenarios=args.scenarios if args.scenarios is not None else config.benchmark.n_scenarios,
        sizes=config.benchmark.sizes,
        seed=args.seed if args.seed is not None else config.benchmark.seed,
    )
    run_benchmark(bench_cfg, config.solver, args.solvers, args.forbidden_fraction)
