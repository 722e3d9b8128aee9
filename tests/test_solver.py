from __future__ import annotations

import math

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from exact_tsp import (
    InputError,
    NonFiniteDistanceError,
    NonSquareMatrixError,
    NullMatrixError,
    TooFewCitiesError,
    TourResult,
    solve_tsp,
    solve_tsp_with_table,
)
from exact_tsp.algs.matrix import DistanceMatrix, tour_cost
from tests.test_utils import (
    check_closed_tour,
    gen_euclidean,
    gen_symmetric,
    oracle_min_tour,
    permute_matrix,
    rng,
)


# ---------------------------------------------------------------------------
#  Unit tests
# ---------------------------------------------------------------------------
def test_reference_four_city_scenario(reference_matrix) -> None:
    result = solve_tsp(reference_matrix)
    assert f"{result.cost:.2f}" == "80.00"
    assert result.tour == (0, 1, 3, 2, 0)


@pytest.mark.parametrize("d", [0.0, 1.0, 7.25, 1e6])
def test_two_cities(d: float) -> None:
    result = solve_tsp([[0.0, d], [d, 0.0]])
    assert result.cost == 2.0 * d
    assert result.tour == (0, 1, 0)


def test_accepts_numpy_and_distance_matrix(reference_matrix) -> None:
    as_array = solve_tsp(np.array(reference_matrix))
    as_matrix = solve_tsp(DistanceMatrix.from_rows(reference_matrix))
    assert as_array == as_matrix == solve_tsp(reference_matrix)


def test_integer_entries(reference_matrix) -> None:
    ints = [[int(x) for x in row] for row in reference_matrix]
    assert solve_tsp(ints).cost == 80.0


def test_with_table_returns_populated_table(reference_matrix) -> None:
    debug: dict = {}
    result, table = solve_tsp_with_table(reference_matrix, debug=debug)
    assert result.tour == (0, 1, 3, 2, 0)
    assert table.n == 4
    assert debug["last_city"] == 2
    assert debug["state_count"] == 24


def test_negative_entries_are_not_rejected() -> None:
    matrix = [[0.0, -1.0, 2.0], [-1.0, 0.0, 3.0], [2.0, 3.0, 0.0]]
    result = solve_tsp(matrix)
    assert result.cost == 4.0


def test_asymmetric_input_uses_directions_read() -> None:
    # cheap one way round, expensive the other
    matrix = [
        [0.0, 1.0, 9.0],
        [9.0, 0.0, 1.0],
        [1.0, 9.0, 0.0],
    ]
    result = solve_tsp(matrix)
    assert result.cost == 3.0
    assert result.tour == (0, 1, 2, 0)


# ---------------------------------------------------------------------------
#  Validation
# ---------------------------------------------------------------------------
def test_null_matrix() -> None:
    with pytest.raises(NullMatrixError):
        solve_tsp(None)


@pytest.mark.parametrize(
    "matrix",
    [
        [[0.0, 1.0], [1.0]],
        [[0.0, 1.0, 2.0], [1.0, 0.0, 3.0]],
        [[0.0, 1.0, 2.0], [1.0, 0.0], [2.0, 3.0, 0.0]],
        [[0.0, 1.0], 5.0],
    ],
)
def test_non_square_matrix(matrix) -> None:
    with pytest.raises(NonSquareMatrixError):
        solve_tsp(matrix)


@pytest.mark.parametrize("matrix", [[], [[0.0]], np.zeros((1, 1))])
def test_too_few_cities(matrix) -> None:
    with pytest.raises(TooFewCitiesError):
        solve_tsp(matrix)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_entries(bad: float) -> None:
    with pytest.raises(NonFiniteDistanceError):
        solve_tsp([[0.0, bad], [1.0, 0.0]])


def test_entries_that_overflow_a_tour_sum() -> None:
    big = 1e308
    matrix = [[0.0, big, big], [big, 0.0, big], [big, big, 0.0]]
    with pytest.raises(NonFiniteDistanceError) as exc_info:
        solve_tsp(matrix)
    assert "overflow" in str(exc_info.value)


def test_large_entries_within_range() -> None:
    big = 1e300
    result = solve_tsp([[0.0, big, big], [big, 0.0, big], [big, big, 0.0]])
    assert math.isclose(result.cost, 3e300, rel_tol=1e-12)


def test_non_numeric_entries() -> None:
    with pytest.raises(InputError):
        solve_tsp([[0.0, "far"], [1.0, 0.0]])


def test_input_errors_are_value_errors() -> None:
    for exc in (NullMatrixError, NonSquareMatrixError, TooFewCitiesError):
        assert issubclass(exc, InputError)
        assert issubclass(exc, ValueError)
    assert NullMatrixError is not NonSquareMatrixError is not TooFewCitiesError


def test_tour_result_validation() -> None:
    with pytest.raises(ValueError):
        TourResult(cost=1.0, tour=(0, 1))
    with pytest.raises(ValueError):
        TourResult(cost=1.0, tour=(1, 0, 1))
    result = TourResult(cost=3, tour=[0, 2, 1, 0])
    assert result.tour == (0, 2, 1, 0)
    assert result.n == 3
    assert result.as_dict() == {"cost": 3.0, "tour": [0, 2, 1, 0]}


# ---------------------------------------------------------------------------
#  Exactness against brute force
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("n", [2, 3, 4, 5, 6, 7, 8])
def test_matches_brute_force(n: int, tol: float) -> None:
    for seed in range(3):
        matrix = gen_symmetric(rng(1000 * n + seed), n)
        result = solve_tsp(matrix)
        best, _ = oracle_min_tour(matrix)
        assert math.isclose(result.cost, best, rel_tol=tol)
        check_closed_tour(matrix, result.tour, result.cost, tol=tol)


@pytest.mark.parametrize("n", [5, 8])
def test_matches_brute_force_euclidean(n: int, tol: float) -> None:
    matrix = gen_euclidean(rng(n), n)
    result = solve_tsp(matrix)
    best, _ = oracle_min_tour(matrix)
    assert math.isclose(result.cost, best, rel_tol=tol)


def test_determinism() -> None:
    matrix = gen_symmetric(rng(99), 9, integral=True)
    first = solve_tsp(matrix)
    for _ in range(3):
        again = solve_tsp(matrix)
        assert again == first
        assert repr(again) == repr(first)


# ---------------------------------------------------------------------------
#  Property tests
# ---------------------------------------------------------------------------
@settings(max_examples=40)
@given(
    st.integers(min_value=0, max_value=999_999),
    st.integers(min_value=2, max_value=7),
)
def test_property_exact_vs_oracle(seed: int, n: int) -> None:
    matrix = gen_symmetric(rng(seed), n, integral=True)
    result = solve_tsp(matrix)
    best, _ = oracle_min_tour(matrix)
    # integral weights: sums are exact
    assert result.cost == best
    check_closed_tour(matrix, result.tour, result.cost, tol=1e-9)


@settings(max_examples=40)
@given(st.integers(min_value=0, max_value=999_999), st.integers(min_value=3, max_value=8), st.data())
def test_property_anchor_invariance(seed: int, n: int, data) -> None:
    matrix = gen_symmetric(rng(seed), n)
    perm = data.draw(st.permutations(range(n)))
    base = solve_tsp(matrix)
    relabelled = solve_tsp(permute_matrix(matrix, perm))
    assert math.isclose(base.cost, relabelled.cost, rel_tol=1e-9)
    # mapping the relabelled tour back gives a tour of the original with the same cost
    original_tour = [perm[c] for c in relabelled.tour]
    assert math.isclose(tour_cost(matrix, original_tour), base.cost, rel_tol=1e-9)


@settings(max_examples=40)
@given(st.integers(min_value=0, max_value=999_999), st.integers(min_value=2, max_value=9))
def test_property_reversal_symmetry(seed: int, n: int) -> None:
    matrix = gen_symmetric(rng(seed), n)
    result = solve_tsp(matrix)
    reversed_tour = tuple(reversed(result.tour))
    assert math.isclose(tour_cost(matrix, reversed_tour), result.cost, rel_tol=1e-9)
