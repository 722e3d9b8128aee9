"""Exact TSP entry points.

``solve_tsp`` validates the matrix, runs the Held–Karp forward pass, picks
the cheapest way to close the tour and walks the predecessors back. Nothing
is cached between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from exact_tsp.algs.held_karp import (
    DPTable,
    fill_dp_table,
    reconstruct_tour,
    select_terminal,
)
from exact_tsp.algs.matrix import as_distance_matrix, log
from exact_tsp.common.constants import ANCHOR

__all__ = ["TourResult", "solve_tsp", "solve_tsp_with_table"]


@dataclass(frozen=True)
class TourResult:
    """Minimum tour cost and the closed visiting order ``(0, ..., 0)``."""

    cost: float
    tour: Tuple[int, ...]

    def __post_init__(self) -> None:
        tour = tuple(int(c) for c in self.tour)
        if len(tour) < 3:
            raise ValueError("a closed tour visits at least two cities")
        if tour[0] != ANCHOR or tour[-1] != ANCHOR:
            raise ValueError("tour must start and end at the anchor")
        object.__setattr__(self, "tour", tour)
        object.__setattr__(self, "cost", float(self.cost))

    @property
    def n(self) -> int:
        return len(self.tour) - 1

    def as_dict(self) -> Dict[str, Any]:
        return {"cost": self.cost, "tour": list(self.tour)}


def solve_tsp_with_table(
    matrix: Any,
    *,
    debug: Optional[Dict[str, Any]] = None,
) -> Tuple[TourResult, DPTable]:
    """Variant of :func:`solve_tsp` that also hands back the filled table."""
    dist = as_distance_matrix(matrix)
    log(f"solve_tsp: {dist.n} cities")
    if not dist.is_symmetric():
        log("solve_tsp: matrix is asymmetric; cost follows the directions read")

    table = fill_dp_table(dist, debug=debug)
    cost, last_city = select_terminal(table, dist)
    tour = reconstruct_tour(table, last_city)
    if debug is not None:
        debug["last_city"] = last_city
    return TourResult(cost=cost, tour=tour), table


def solve_tsp(
    matrix: Any,
    *,
    debug: Optional[Dict[str, Any]] = None,
) -> TourResult:
    """Return the minimum-cost closed tour through every city of ``matrix``.

    Parameters
    ----------
    matrix:
        ``n x n`` distances as nested sequences, a 2-D numpy array or a
        :class:`~exact_tsp.algs.matrix.DistanceMatrix`; ``n >= 2``.
    debug:
        Optional dict that receives table size and transition counters.

    Raises
    ------
    exact_tsp.errors.InputError
        The matrix is missing, ragged, too small or holds non-finite values.
    """
    result, _ = solve_tsp_with_table(matrix, debug=debug)
    return result
