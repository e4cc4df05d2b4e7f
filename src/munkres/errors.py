"""Exception types raised by the Munkres solver."""

from __future__ import annotations


class MunkresError(Exception):
    """Base class for every error raised by src.munkres."""


class InvalidInput(MunkresError, ValueError):
    """The cost matrix violates a precondition of solve().

    Raised for non-positive dimensions, NaN or -inf entries, and matrices
    with no finite entry at all. Detected during preprocessing, before any
    engine state exists.
    """


class InternalInvariantViolation(MunkresError, RuntimeError):
    """The step machine reached a state that valid input cannot produce.

    Signals a programming error (or an exhausted step budget). It is never
    caught inside the package and no partial assignment accompanies it.
    """
