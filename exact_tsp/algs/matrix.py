from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Sequence

import numpy as np

from exact_tsp.common.constants import TOL_NUM
from exact_tsp.errors import (
    InputError,
    NonFiniteDistanceError,
    NonSquareMatrixError,
    NullMatrixError,
    TooFewCitiesError,
)

VERBOSE: bool = False


def log(*args, **kwargs) -> None:  # pragma: no cover
    if VERBOSE:
        print(*args, **kwargs)


def _row_length(row: Any, idx: int) -> int:
    try:
        return len(row)
    except TypeError as exc:
        raise NonSquareMatrixError(f"row #{idx} is not a sequence") from exc


def validate_rows(rows: Any) -> np.ndarray:
    """Check the shape of ``rows`` and return a read-only float64 copy.

    Checks run in a fixed order so each malformed input maps to exactly one
    error: missing matrix, fewer than two cities, ragged rows, then
    non-numeric or non-finite entries.
    """
    if rows is None:
        raise NullMatrixError("distance matrix cannot be None")
    try:
        n = len(rows)
    except TypeError as exc:
        raise NonSquareMatrixError("distance matrix must be a sequence of rows") from exc
    if n < 2:
        raise TooFewCitiesError("at least two cities are required")
    for idx, row in enumerate(rows):
        if _row_length(row, idx) != n:
            raise NonSquareMatrixError("distance matrix must be square")

    try:
        values = np.array(rows, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InputError("distance entries must be numeric") from exc
    if values.shape != (n, n):
        raise NonSquareMatrixError("distance matrix must be square")
    if not np.isfinite(values).all():
        raise NonFiniteDistanceError("distance entries must be finite")
    # a tour sums n edges, each bounded by the largest magnitude
    if not np.isfinite(np.abs(values).max() * n):
        raise NonFiniteDistanceError("distance entries overflow a tour sum")
    values.setflags(write=False)
    return values


@dataclass(frozen=True, eq=False)
class DistanceMatrix:
    """Immutable n x n table of travel costs between cities ``0..n-1``."""

    values: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", validate_rows(self.values))

    @classmethod
    def from_rows(cls, rows: Any) -> "DistanceMatrix":
        return cls(rows)

    @property
    def n(self) -> int:
        return int(self.values.shape[0])

    def distance(self, i: int, j: int) -> float:
        return float(self.values[i, j])

    def is_symmetric(self, *, tol: float = TOL_NUM) -> bool:
        return bool(np.allclose(self.values, self.values.T, rtol=0.0, atol=tol))

    def as_lists(self) -> List[List[float]]:
        return self.values.tolist()

    def __len__(self) -> int:
        return self.n


def as_distance_matrix(matrix: Any) -> DistanceMatrix:
    if isinstance(matrix, DistanceMatrix):
        return matrix
    return DistanceMatrix.from_rows(matrix)


def tour_cost(matrix: Any, tour: Sequence[int]) -> float:
    """Return the summed edge cost of ``tour`` visited in the given order.

    The tour is evaluated as written; pass a closed sequence (first == last)
    to include the return edge.
    """
    dist = as_distance_matrix(matrix)
    if len(tour) < 2:
        return 0.0
    total = math.fsum(dist.distance(a, b) for a, b in zip(tour, tour[1:]))
    return total


__all__ = [
    "VERBOSE",
    "log",
    "validate_rows",
    "DistanceMatrix",
    "as_distance_matrix",
    "tour_cost",
]
