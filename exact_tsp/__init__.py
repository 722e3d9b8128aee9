# Solver entry points
from .solver import TourResult, solve_tsp, solve_tsp_with_table

# Building blocks
from .algs import (
    DPTable,
    DistanceMatrix,
    StateSpace,
    fill_dp_table,
    reconstruct_tour,
    select_terminal,
    tour_cost,
)
from .common.constants import (
    ANCHOR,
    DEFAULT_SEED,
    PRACTICAL_CITY_LIMIT,
    RNG_SEEDS,
    TOL_NUM,
    seed_everywhere,
)
from .errors import (
    InputError,
    InternalConsistencyError,
    NonFiniteDistanceError,
    NonSquareMatrixError,
    NullMatrixError,
    TooFewCitiesError,
)

__all__ = [
    # solver
    "TourResult",
    "solve_tsp",
    "solve_tsp_with_table",
    # building blocks
    "DPTable",
    "DistanceMatrix",
    "StateSpace",
    "fill_dp_table",
    "select_terminal",
    "reconstruct_tour",
    "tour_cost",
    # constants
    "ANCHOR",
    "DEFAULT_SEED",
    "PRACTICAL_CITY_LIMIT",
    "RNG_SEEDS",
    "TOL_NUM",
    "seed_everywhere",
    # errors
    "InputError",
    "NullMatrixError",
    "NonSquareMatrixError",
    "TooFewCitiesError",
    "NonFiniteDistanceError",
    "InternalConsistencyError",
]
