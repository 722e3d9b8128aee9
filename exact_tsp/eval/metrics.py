"""Summary statistics for solver timings and table sizes."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

import numpy as np

__all__ = [
    "timing_summary",
    "extract_elapsed",
    "expected_transitions",
]


def timing_summary(samples: Sequence[float]) -> dict[str, float]:
    if not samples:
        return {"count": 0}
    arr = np.array(samples, dtype=float)
    return {
        "count": float(arr.size),
        "mean": float(arr.mean()),
        "p50": float(np.percentile(arr, 50)),
        "p95": float(np.percentile(arr, 95)),
        "max": float(arr.max()),
    }


def extract_elapsed(records: Iterable[Mapping[str, object]]) -> Sequence[float]:
    """Collect ``elapsed_s`` from serialised solve records, skipping blanks."""

    values = []
    for record in records:
        elapsed = record.get("elapsed_s")
        if isinstance(elapsed, (int, float)):
            values.append(float(elapsed))
    return values


def expected_transitions(n: int) -> int:
    """Relaxations performed by the forward pass for ``n`` cities.

    Every subset of size ``s >= 2`` contributes ``s * (s - 1)`` candidate
    edges, which sums to ``m * (m - 1) * 2**(m - 2)`` with ``m = n - 1``.
    """
    m = n - 1
    if m < 2:
        return 0
    return m * (m - 1) * (1 << (m - 2))
