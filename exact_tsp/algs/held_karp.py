"""Held–Karp dynamic program over (subset, endpoint) states."""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from exact_tsp.algs.matrix import as_distance_matrix, log
from exact_tsp.algs.state_space import StateSpace
from exact_tsp.common.constants import ANCHOR, PRACTICAL_CITY_LIMIT
from exact_tsp.errors import InternalConsistencyError

NO_PREDECESSOR = -1

__all__ = [
    "NO_PREDECESSOR",
    "DPTable",
    "fill_dp_table",
    "select_terminal",
    "reconstruct_tour",
]


# ---------------------------------------------------------------------------
#  Table
# ---------------------------------------------------------------------------
@dataclass(frozen=True, eq=False)
class DPTable:
    """Cost and predecessor arrays for every ``(mask, city)`` state.

    Both arrays have shape ``(2**(n-1), n-1)`` in C order, so the flat
    offset of a state is :meth:`StateSpace.state_index`. States that were
    never reached hold ``inf`` and :data:`NO_PREDECESSOR`.
    """

    space: StateSpace
    cost: np.ndarray
    predecessor: np.ndarray

    def __post_init__(self) -> None:
        shape = (self.space.subset_count, self.space.width)
        if self.cost.shape != shape or self.predecessor.shape != shape:
            raise ValueError("table arrays must match the state space shape")

    @property
    def n(self) -> int:
        return self.space.n

    def cost_of(self, mask: int, city: int) -> float:
        return float(self.cost[mask, self.space.column(city)])

    def predecessor_of(self, mask: int, city: int) -> int:
        return int(self.predecessor[mask, self.space.column(city)])


def _allocate(space: StateSpace) -> Tuple[np.ndarray, np.ndarray]:
    shape = (space.subset_count, space.width)
    cost = np.full(shape, np.inf, dtype=np.float64)
    pred = np.full(shape, NO_PREDECESSOR, dtype=np.int64)
    return cost, pred


# ---------------------------------------------------------------------------
#  Forward pass
# ---------------------------------------------------------------------------
def fill_dp_table(
    matrix: Any,
    *,
    debug: Optional[Dict[str, Any]] = None,
) -> DPTable:
    """Populate the Held–Karp table for ``matrix`` with city 0 as anchor.

    ``cost[mask, j - 1]`` is the cheapest path that leaves the anchor,
    visits exactly the cities in ``mask`` and stops at ``j``. Each entry is
    derived from ``mask`` with ``j`` removed, which is numerically smaller,
    so one increasing sweep over the masks finalizes every dependency
    before it is read.

    Among equally cheap predecessors the lowest city index is kept
    (``numpy.argmin`` returns the first minimum), which makes the
    reconstructed tour deterministic.
    """
    dist = as_distance_matrix(matrix)
    space = StateSpace(dist.n)
    if space.n > PRACTICAL_CITY_LIMIT:
        warnings.warn(
            f"held-karp on {space.n} cities allocates {space.state_count} states; "
            "expect very long runtimes",
            RuntimeWarning,
            stacklevel=2,
        )

    width = space.width
    d = dist.values
    # inner[k - 1, j - 1] = d(k, j) for non-anchor cities
    inner = d[1:, 1:]
    cost, pred = _allocate(space)
    log(f"held-karp: n={space.n}, table {space.subset_count} x {width}")

    for bit in range(width):
        cost[1 << bit, bit] = d[ANCHOR, bit + 1]
        pred[1 << bit, bit] = ANCHOR

    transitions = 0
    for mask in space.masks():
        bits = [b for b in range(width) if mask >> b & 1]
        if len(bits) < 2:
            # singletons were seeded above
            continue
        prev_masks = [mask ^ (1 << b) for b in bits]
        # rows: endpoint j; columns: predecessor k. Cities outside the
        # previous subset sit at inf and never win.
        candidates = cost[prev_masks] + inner[:, bits].T
        best = np.argmin(candidates, axis=1)
        cost[mask, bits] = candidates[np.arange(len(bits)), best]
        pred[mask, bits] = best + 1
        transitions += len(bits) * (len(bits) - 1)

    if debug is not None:
        debug.clear()
        debug.update(
            {
                "city_count": space.n,
                "subset_count": space.subset_count,
                "state_count": space.state_count,
                "transitions_total": transitions,
                "table_bytes": int(cost.nbytes + pred.nbytes),
            }
        )

    cost.setflags(write=False)
    pred.setflags(write=False)
    return DPTable(space=space, cost=cost, predecessor=pred)


def select_terminal(table: DPTable, matrix: Any) -> Tuple[float, int]:
    """Close the tour from every terminal state and return ``(cost, last_city)``.

    When several last cities close at exactly the same cost, the one whose
    reconstructed tour is lexicographically smallest wins. Ties use exact
    float equality. On a symmetric matrix with integral weights a tour and
    its reversal tie exactly, so this reports the orientation whose second
    city is lower. With non-integral weights the two orientations can sum
    to costs one rounding step apart; the cheaper one is then reported, so
    the orientation follows rounding but is still deterministic.
    """
    dist = as_distance_matrix(matrix)
    if dist.n != table.n:
        raise ValueError("matrix size does not match the DP table")
    closing = table.cost[table.space.full_mask] + dist.values[1:, ANCHOR]
    best = float(closing.min())
    if not np.isfinite(best):
        raise InternalConsistencyError("no terminal state carries a finite cost")
    tied = [int(idx) + 1 for idx in np.flatnonzero(closing == best)]
    if len(tied) == 1:
        last_city = tied[0]
    else:
        last_city = min(tied, key=lambda city: reconstruct_tour(table, city))
    log(f"held-karp: best terminal city {last_city} of {tied}, tour cost {best:.6f}")
    return best, last_city


# ---------------------------------------------------------------------------
#  Backward pass
# ---------------------------------------------------------------------------
def reconstruct_tour(table: DPTable, last_city: int) -> Tuple[int, ...]:
    """Follow predecessors back from ``(full_mask, last_city)`` to the anchor.

    Returns the closed tour ``(0, ..., last_city, 0)`` of length ``n + 1``.
    """
    space = table.space
    if not (ANCHOR < last_city < space.n):
        raise IndexError(f"last_city {last_city} out of range for n={space.n}")

    mask = space.full_mask
    city = last_city
    backwards = []
    while mask:
        if city == ANCHOR or not space.contains(mask, city):
            raise InternalConsistencyError(
                f"walk reached city {city} outside subset {mask:#b}"
            )
        backwards.append(city)
        prev = table.predecessor_of(mask, city)
        if prev == NO_PREDECESSOR:
            raise InternalConsistencyError(
                f"no predecessor recorded for state ({mask:#b}, {city})"
            )
        mask = space.without(mask, city)
        city = prev

    if city != ANCHOR:
        raise InternalConsistencyError("reconstruction did not terminate at the anchor")

    backwards.reverse()
    return (ANCHOR, *backwards, ANCHOR)
