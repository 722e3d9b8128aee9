"""Benchmark harness for the Held–Karp solver across city counts."""

from __future__ import annotations

import argparse
import time
from typing import List

import sys
from pathlib import Path

import numpy as np

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from exact_tsp.common.constants import DEFAULT_SEED, RNG_SEEDS
from exact_tsp.data.gen_instances import FAMILIES, draw_family
from exact_tsp.eval.metrics import expected_transitions, timing_summary
from exact_tsp.solver import solve_tsp

BENCH_SEED = RNG_SEEDS.get("bench", DEFAULT_SEED)


def parse_sizes(value: str) -> List[int]:
    sizes = [int(p.strip()) for p in value.split(",") if p.strip()]
    if not sizes or min(sizes) < 2:
        raise argparse.ArgumentTypeError(f"expected comma-separated sizes >= 2, got {value!r}")
    return sizes


def run_benchmark(args: argparse.Namespace) -> None:
    rng = np.random.default_rng(args.seed)
    for n in args.sizes:
        durations: List[float] = []
        for iteration in range(args.warmup + args.repeats):
            instance = draw_family(args.family, n, rng)
            matrix = instance.matrix()
            debug: dict = {}
            start = time.perf_counter()
            solve_tsp(matrix, debug=debug)
            elapsed = time.perf_counter() - start
            if debug["transitions_total"] != expected_transitions(n):
                raise RuntimeError(f"transition count drifted for n={n}")
            if iteration >= args.warmup:
                durations.append(elapsed)

        summary = timing_summary(durations)
        print(
            f"n={n},states={(1 << (n - 1)) * (n - 1)},"
            f"mean={summary['mean']:.6f},p50={summary['p50']:.6f},"
            f"p95={summary['p95']:.6f},max={summary['max']:.6f}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark the Held-Karp exact TSP solver.")
    parser.add_argument("--sizes", type=parse_sizes, default=parse_sizes("4,6,8,10,12,14"))
    parser.add_argument("--repeats", type=int, default=5, help="Number of timed iterations per size.")
    parser.add_argument("--warmup", type=int, default=1, help="Number of warmup iterations per size.")
    parser.add_argument("--family", choices=FAMILIES, default="euclidean")
    parser.add_argument("--seed", type=int, default=BENCH_SEED, help="Deterministic RNG seed.")
    args = parser.parse_args()
    run_benchmark(args)


if __name__ == "__main__":
    main()
