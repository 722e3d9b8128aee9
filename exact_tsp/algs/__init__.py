"""Held–Karp building blocks: matrix validation, state encoding, DP passes."""

from __future__ import annotations

from exact_tsp.algs.held_karp import (
    NO_PREDECESSOR,
    DPTable,
    fill_dp_table,
    reconstruct_tour,
    select_terminal,
)
from exact_tsp.algs.matrix import DistanceMatrix, as_distance_matrix, tour_cost
from exact_tsp.algs.state_space import StateSpace, city_bit

__all__ = [
    "NO_PREDECESSOR",
    "DPTable",
    "fill_dp_table",
    "select_terminal",
    "reconstruct_tour",
    "DistanceMatrix",
    "as_distance_matrix",
    "tour_cost",
    "StateSpace",
    "city_bit",
]
