"""
Rectangular linear assignment via the Hungarian (Kuhn-Munkres) algorithm.

Quick start:
    from src.munkres import solve
    pairs = solve([[4, 1, 3], [2, 0, 5], [3, 2, 2]])
    # [(0, 1), (1, 0), (2, 2)]
"""

from src.munkres.config import MunkresConfig, SolverConfig, load_config
from src.munkres.errors import InternalInvariantViolation, InvalidInput, MunkresError
from src.munkres.solver import (
    AssignmentResult,
    MunkresSolver,
    SolverStatus,
    create_solver,
    solve,
)

__all__ = [
    "solve",
    "MunkresSolver",
    "AssignmentResult",
    "SolverStatus",
    "create_solver",
    "SolverConfig",
    "MunkresConfig",
    "load_config",
    "MunkresError",
    "InvalidInput",
    "InternalInvariantViolation",
]
