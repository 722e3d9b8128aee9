from __future__ import annotations

import hashlib
import json
import platform
from dataclasses import dataclass, field
from typing import Any, Dict, Sequence, Tuple

from exact_tsp.algs.matrix import DistanceMatrix, tour_cost, validate_rows
from exact_tsp.common.constants import ANCHOR, TOL_NUM

SCHEMA_VERSION = "1.0"
HASH_PRECISION = 12

Rows = Tuple[Tuple[float, ...], ...]


def _round_float(value: float, precision: int = HASH_PRECISION) -> float:
    rounded = round(value, precision)
    # Coerce -0.0 to +0.0 for stability
    if rounded == 0.0:
        return 0.0
    return rounded


def compute_instance_hash(
    distances: Sequence[Sequence[float]],
    precision: int = HASH_PRECISION,
) -> str:
    payload = {
        "distances": [[_round_float(float(x), precision) for x in row] for row in distances],
    }
    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(serialized).hexdigest()


@dataclass(frozen=True, slots=True)
class Instance:
    distances: Rows
    name: str | None = None

    def __post_init__(self) -> None:
        values = validate_rows(self.distances)
        object.__setattr__(self, "distances", tuple(tuple(row) for row in values.tolist()))

    @property
    def n(self) -> int:
        return len(self.distances)

    def matrix(self) -> DistanceMatrix:
        return DistanceMatrix.from_rows(self.distances)

    def hash_id(self, precision: int = HASH_PRECISION) -> str:
        return compute_instance_hash(self.distances, precision=precision)


def _default_python_version() -> str:
    return platform.python_version()


@dataclass(frozen=True, slots=True)
class SolveRecord:
    """One solved instance as written to JSONL."""

    instance: Instance
    cost: float
    tour: Tuple[int, ...]
    elapsed_s: float | None = None
    meta: Dict[str, Any] = field(default_factory=dict)
    python_version: str = field(default_factory=_default_python_version)
    schema_version: str = SCHEMA_VERSION
    hash_id: str = field(init=False)

    def __post_init__(self) -> None:
        if self.schema_version != SCHEMA_VERSION:
            raise ValueError(f"schema_version mismatch: {self.schema_version} != {SCHEMA_VERSION}")
        object.__setattr__(self, "tour", tuple(int(c) for c in self.tour))
        object.__setattr__(self, "hash_id", self.instance.hash_id())


def record_to_dict(record: SolveRecord) -> Dict[str, Any]:
    return {
        "schema_version": record.schema_version,
        "python_version": record.python_version,
        "hash_id": record.hash_id,
        "instance": {
            "name": record.instance.name,
            "distances": [list(row) for row in record.instance.distances],
        },
        "cost": float(record.cost),
        "tour": list(record.tour),
        "elapsed_s": record.elapsed_s,
        "meta": record.meta,
    }


def validate_record(record: SolveRecord, *, tol: float = TOL_NUM) -> None:
    """Check that the stored tour is a closed permutation matching the cost."""
    n = record.instance.n
    tour = record.tour
    if len(tour) != n + 1 or tour[0] != ANCHOR or tour[-1] != ANCHOR:
        raise ValueError("tour must be closed at the anchor and visit n + 1 positions")
    if sorted(tour[:-1]) != list(range(n)):
        raise ValueError("tour must visit every city exactly once")
    expected = tour_cost(record.instance.distances, tour)
    if abs(expected - record.cost) > tol * max(1.0, abs(expected)):
        raise ValueError(f"recorded cost {record.cost} disagrees with tour cost {expected}")


__all__ = [
    "SCHEMA_VERSION",
    "HASH_PRECISION",
    "Instance",
    "SolveRecord",
    "compute_instance_hash",
    "record_to_dict",
    "validate_record",
]
