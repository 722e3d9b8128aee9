"""Exception hierarchy for the exact TSP solver.

Caller mistakes derive from :class:`ValueError` so existing ``except
ValueError`` handlers keep working; engine defects derive from
:class:`RuntimeError`.
"""

from __future__ import annotations

__all__ = [
    "InputError",
    "NullMatrixError",
    "NonSquareMatrixError",
    "TooFewCitiesError",
    "NonFiniteDistanceError",
    "InternalConsistencyError",
]


class InputError(ValueError):
    """Distance matrix rejected before any DP work."""


class NullMatrixError(InputError):
    pass


class NonSquareMatrixError(InputError):
    pass


class TooFewCitiesError(InputError):
    pass


class NonFiniteDistanceError(InputError):
    pass


class InternalConsistencyError(RuntimeError):
    """The DP table is missing a predecessor that must exist."""
