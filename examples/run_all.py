#!/usr/bin/env python3
"""examples/run_all.py – walk-through of the exact Held–Karp solver.

Run this file directly, or execute `python -m examples.run_all` from the project
root. It prints the reference four-city tour, a degenerate two-city case and a
random Euclidean instance, each with timings.
"""

from __future__ import annotations

import time

import numpy as np

import exact_tsp.algs.matrix as matrix_mod
from exact_tsp.data.gen_instances import REFERENCE_FOUR_CITY, draw_family
from exact_tsp.solver import solve_tsp

# Activate verbose internal logging so the user can see the solver traces.
matrix_mod.VERBOSE = True

SEP = "=" * 80

def _hdr(title: str) -> None:
    print(f"\n{SEP}\n{title}\n{SEP}\n")


def run_reference_example() -> None:
    _hdr("Reference four-city matrix")
    for row in REFERENCE_FOUR_CITY:
        print("  " + " ".join(f"{x:5.0f}" for x in row))

    t0 = time.perf_counter()
    result = solve_tsp(REFERENCE_FOUR_CITY)
    dt = time.perf_counter() - t0

    print(f"\nMinimum tour cost: {result.cost:.2f}")
    print(f"Tour order       : {list(result.tour)}")
    print(f"Elapsed: {dt:.6f} s")
    # Expected: 80.00 via [0, 1, 3, 2, 0]


def run_two_city_example() -> None:
    _hdr("Two cities")
    result = solve_tsp([[0.0, 7.5], [7.5, 0.0]])
    print(f"Minimum tour cost: {result.cost:.2f}")
    print(f"Tour order       : {list(result.tour)}")


def run_random_example(n: int = 10, seed: int = 7) -> None:
    _hdr(f"Random Euclidean instance ({n} cities)")
    instance = draw_family("euclidean", n, np.random.default_rng(seed))
    t0 = time.perf_counter()
    result = solve_tsp(instance.matrix())
    dt = time.perf_counter() - t0
    print(f"Minimum tour cost: {result.cost:.2f}")
    print(f"Tour order       : {list(result.tour)}")
    print(f"Elapsed: {dt:.6f} s")


if __name__ == "__main__":
    run_reference_example()
    run_two_city_example()
    run_random_example()
