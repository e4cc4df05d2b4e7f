"""
Solver diagnostic tool.

Runs each phase of the Munkres solver on its own and prints PASS/FAIL for
the properties that phase must establish:
preprocess → step machine → extraction → end-to-end optimality.

This is the script you run FIRST when an assignment looks wrong. Each stage
is independent, so the first failing stage is where the bug is.

Usage:
    python scripts/verify_pipeline.py
"""

import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.munkres.config import SolverConfig  # noqa: E402
from src.munkres.cost_matrix import random_cost_matrix  # noqa: E402
from src.munkres.engine import Mark, MunkresEngine, Step  # noqa: E402
from src.munkres.extract import extract_assignment  # noqa: E402
from src.munkres.preprocess import preprocess  # noqa: E402
from src.munkres.solver import BruteForceSolver, MunkresSolver  # noqa: E402

FAILURES: list[str] = []


def section(title: str) -> None:
    """Creates a section in the CLI display"""

    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def check(label: str, condition: bool, detail: str = "") -> bool:
    """Checks if a condition is passed."""

    status = "✅ PASS" if condition else "❌ FAIL"
    msg = f"  {status}: {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)
    if not condition:
        FAILURES.append(label)
    return condition


# ─────────────────────────────────────────────────────────────
# STAGE 1: Preprocessing
# ─────────────────────────────────────────────────────────────
def verify_preprocess(cost: np.ndarray):
    """Square, finite, reduced, caller matrix untouched."""

    section("STAGE 1: Preprocess")

    before = cost.copy()
    prepared = preprocess(cost)
    m = prepared.matrix
    n = max(cost.shape)

    check("Working matrix is square", m.shape == (n, n), f"{m.shape}")
    check("Working matrix is finite", bool(np.isfinite(m).all()))
    check("No negative entries", bool((m >= 0).all()), f"min {m.min():g}")
    check("Zero in every row", bool((m == 0).any(axis=1).all()))
    check("Zero in every column", bool((m == 0).any(axis=0).all()))
    check("Caller matrix unchanged", bool(np.array_equal(before, cost, equal_nan=True)))
    return prepared


# ─────────────────────────────────────────────────────────────
# STAGE 2: Step machine
# ─────────────────────────────────────────────────────────────
def verify_engine(prepared):
    """Machine reaches DONE with one star per row and column."""

    section("STAGE 2: Step Machine")

    engine = MunkresEngine(prepared.matrix, SolverConfig())
    visited: set[Step] = set()
    while not engine.done:
        visited.add(engine.step())
    stars = engine.mask == Mark.STAR

    check("Reached DONE", engine.state is Step.DONE, f"{engine.n_steps} transitions")
    check("One star per row", bool((stars.sum(axis=1) == 1).all()))
    check("One star per column", bool((stars.sum(axis=0) == 1).all()))
    check("No primes left", not bool((engine.mask == Mark.PRIME).any()))
    check("Stars sit on zeros", bool((engine.matrix[stars] == 0).all()))
    print(f"  States visited: {', '.join(sorted(s.name for s in visited))}")
    return engine.mask


# ─────────────────────────────────────────────────────────────
# STAGE 3: Extraction
# ─────────────────────────────────────────────────────────────
def verify_extract(mask: np.ndarray, rows: int, cols: int):
    """min(R, C) pairs inside the original extent, sorted by row."""

    section("STAGE 3: Extraction")

    pairs = extract_assignment(mask, rows, cols)
    check("Pair count is min(R, C)", len(pairs) == min(rows, cols), f"{len(pairs)} pairs")
    check("Rows distinct", len({r for r, _ in pairs}) == len(pairs))
    check("Columns distinct", len({c for _, c in pairs}) == len(pairs))
    check("Inside original extent", all(r < rows and c < cols for r, c in pairs))
    check("Sorted by row", pairs == sorted(pairs))
    return pairs


# ─────────────────────────────────────────────────────────────
# STAGE 4: End-to-end optimality
# ─────────────────────────────────────────────────────────────
def verify_optimality(n_scenarios: int = 25, seed: int = 42):
    """Munkres total cost equals brute force on small random matrices."""

    section("STAGE 4: Optimality vs Brute Force")

    rng = np.random.default_rng(seed)
    munkres, brute = MunkresSolver(), BruteForceSolver()
    mismatches = 0
    for _ in range(n_scenarios):
        shape = tuple(int(v) for v in rng.integers(1, 7, size=2))
        cost = random_cost_matrix(*shape, rng=rng)
        if munkres.solve_with_diagnostics(cost).total_cost != brute.solve_with_diagnostics(cost).total_cost:
            mismatches += 1
    check("Munkres matches brute force", mismatches == 0, f"{mismatches}/{n_scenarios} mismatches")


# ─────────────────────────────────────────────────────────────
# Main
# ─────────────────────────────────────────────────────────────
if __name__ == "__main__":
    print("Munkres Solver — Pipeline Verification")
    print("=" * 60)

    demo = random_cost_matrix(5, 4, rng=np.random.default_rng(7), forbidden_fraction=0.15)
    prep = verify_preprocess(demo)
    final_mask = verify_engine(prep)
    verify_extract(final_mask, prep.rows, prep.cols)
    verify_optimality()

    section("VERIFICATION COMPLETE")
    print("  If all checks passed, every phase is working.")
    print("  If any FAIL, the stage label tells you exactly where to look.")
    sys.exit(1 if FAILURES else 0)
