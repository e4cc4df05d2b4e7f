"""
run_munkres.py
──────────────────────────────────────────────────────────────────────────────
Quick-run script for the Munkres assignment solver.

Generates a random cost matrix, prints it, solves it and prints the
assignments.

Usage:
    python run_munkres.py                                 # 4×3, costs 1..50
    python run_munkres.py 6 9
    python run_munkres.py 5 5 --seed 7 --forbidden-fraction 0.2
    python run_munkres.py 8 8 --plot assignment.png
    python run_munkres.py --config config/default_munkres.yaml
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import numpy as np

from src.munkres.config import MunkresConfig, load_config
from src.munkres.cost_matrix import from_generator_config
from src.munkres.solver import SolverStatus, create_solver
from src.analysis.visualizations import format_assignment, format_matrix, plot_assignment


def main(argv: list[str] | None = None) -> int:
    """Main"""

    parser = argparse.ArgumentParser(description="Solve a random assignment problem")
    parser.add_argument("n_rows", type=int, nargs="?", default=None, help="Rows of the cost matrix")
    parser.add_argument("n_cols", type=int, nargs="?", default=None, help="Columns of the cost matrix")
    parser.add_argument(
        "--config",
        type=str,
        default="config/default_munkres.yaml",
        help="Path to solver config YAML",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (overrides config)")
    parser.add_argument("--low", type=int, default=None, help="Smallest cost (overrides config)")
    parser.add_argument("--high", type=int, default=None, help="Largest cost (overrides config)")
    parser.add_argument(
        "--forbidden-fraction",
        type=float,
        default=None,
        help="Fraction of cells set to +inf (overrides config)",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        default="munkres",
        choices=["munkres", "scipy", "bruteforce"],
        help="Solver to use (default: munkres)",
    )
    parser.add_argument("--plot", type=str, default=None, help="Save a heatmap of the assignment here")
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    # Load config
    config_path = Path(args.config)
    if config_path.exists():
        config = load_config(config_path)
    else:
        config = MunkresConfig()

    # Apply CLI overrides
    overrides = {
        "n_rows": args.n_rows,
        "n_cols": args.n_cols,
        "random_seed": args.seed,
        "low": args.low,
        "high": args.high,
        "forbidden_fraction": args.forbidden_fraction,
    }
    gen_cfg = replace(config.generator, **{k: v for k, v in overrides.items() if v is not None})

    try:
        cost = from_generator_config(gen_cfg)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(format_matrix("cost", cost))

    solver = create_solver(args.strategy, config.solver)
    try:
        result = solver.solve_with_diagnostics(cost)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print()
    print(format_assignment(result.pairs, cost))
    print(f"\nTotal cost: {result.total_cost:g}  ({result.solver_status.name}, {result.solve_time_ms:.2f} ms)")
    if result.solver_status == SolverStatus.INFEASIBLE:
        print(f"Forbidden pairs used: {result.forbidden_pairs}")

    if args.plot:
        fig = plot_assignment(np.asarray(cost), result.pairs)
        fig.savefig(args.plot, dpi=150, bbox_inches="tight")
        print(f"Saved plot to {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
