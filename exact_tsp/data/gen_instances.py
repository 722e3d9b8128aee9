"""Synthetic distance matrices for tests, benchmarks and the CLI.

Every generator draws from a caller-supplied ``numpy.random.Generator`` so
the same seed always reproduces the same matrix.
"""

from __future__ import annotations

from typing import List

import numpy as np

from exact_tsp.data.schemas import Instance

FAMILIES = ("uniform", "euclidean", "clustered")

# d(0,1)=10, d(0,2)=15, d(0,3)=20, d(1,2)=35, d(1,3)=25, d(2,3)=30
REFERENCE_FOUR_CITY: List[List[float]] = [
    [0.0, 10.0, 15.0, 20.0],
    [10.0, 0.0, 35.0, 25.0],
    [15.0, 35.0, 0.0, 30.0],
    [20.0, 25.0, 30.0, 0.0],
]


def reference_instance() -> Instance:
    return Instance(distances=tuple(tuple(row) for row in REFERENCE_FOUR_CITY), name="reference-4")


def random_symmetric_matrix(
    rng: np.random.Generator,
    n: int,
    *,
    low: float = 1.0,
    high: float = 100.0,
    integral: bool = False,
) -> np.ndarray:
    """Uniform symmetric weights in ``[low, high)`` with a zero diagonal."""
    if n < 2:
        raise ValueError("n must be at least 2")
    if not (0.0 <= low < high):
        raise ValueError("require 0 <= low < high")
    if integral:
        upper = rng.integers(int(low), int(high), size=(n, n)).astype(np.float64)
    else:
        upper = rng.uniform(low, high, size=(n, n))
    upper = np.triu(upper, k=1)
    return upper + upper.T


def euclidean_points(rng: np.random.Generator, n: int, *, span: float = 100.0) -> np.ndarray:
    if n < 2:
        raise ValueError("n must be at least 2")
    return rng.uniform(0.0, span, size=(n, 2))


def euclidean_matrix(points: np.ndarray) -> np.ndarray:
    diff = points[:, None, :] - points[None, :, :]
    dist = np.sqrt((diff ** 2).sum(axis=-1))
    # exact symmetry regardless of rounding in the subtraction above
    return np.triu(dist, k=1) + np.triu(dist, k=1).T


def clustered_points(
    rng: np.random.Generator,
    n: int,
    *,
    clusters: int = 3,
    span: float = 100.0,
    spread: float = 5.0,
) -> np.ndarray:
    if clusters < 1:
        raise ValueError("clusters must be positive")
    centres = rng.uniform(0.0, span, size=(clusters, 2))
    labels = rng.integers(0, clusters, size=n)
    return centres[labels] + rng.normal(0.0, spread, size=(n, 2))


def draw_family(name: str, n: int, rng: np.random.Generator) -> Instance:
    """Sample an ``n``-city instance from the named family."""
    family = name.lower().strip()
    if family == "uniform":
        values = random_symmetric_matrix(rng, n)
    elif family == "euclidean":
        values = euclidean_matrix(euclidean_points(rng, n))
    elif family == "clustered":
        values = euclidean_matrix(clustered_points(rng, n))
    else:
        raise ValueError(f"Unknown instance family: {name!r}")
    return Instance(distances=tuple(tuple(row) for row in values.tolist()), name=f"{family}-{n}")


__all__ = [
    "FAMILIES",
    "REFERENCE_FOUR_CITY",
    "reference_instance",
    "random_symmetric_matrix",
    "euclidean_points",
    "euclidean_matrix",
    "clustered_points",
    "draw_family",
]
