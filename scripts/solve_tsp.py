#!/usr/bin/env python3
"""Solve TSP instances exactly with Held–Karp.

Examples::

    python scripts/solve_tsp.py --matrix cities.json
    python scripts/solve_tsp.py --family euclidean --cities 12 --count 5 --out runs/solves.jsonl
"""
from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List

import numpy as np

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

import exact_tsp.algs.matrix as matrix_mod
from exact_tsp.common.constants import RNG_SEEDS, seed_everywhere
from exact_tsp.data.gen_instances import FAMILIES, draw_family, reference_instance
from exact_tsp.data.io_utils import load_instance_json, write_manifest, write_records_jsonl
from exact_tsp.data.schemas import Instance, SolveRecord
from exact_tsp.errors import InputError
from exact_tsp.eval.metrics import timing_summary
from exact_tsp.solver import solve_tsp


def build_instances(args: argparse.Namespace) -> List[Instance]:
    if args.matrix is not None:
        return [load_instance_json(path) for path in args.matrix]
    if args.family is None:
        return [reference_instance()]
    rng = np.random.default_rng(args.seed)
    return [draw_family(args.family, args.cities, rng) for _ in range(args.count)]


def solve_all(instances: List[Instance]) -> List[SolveRecord]:
    records: List[SolveRecord] = []
    for instance in instances:
        debug: dict = {}
        start = time.perf_counter()
        result = solve_tsp(instance.matrix(), debug=debug)
        elapsed = time.perf_counter() - start
        records.append(
            SolveRecord(
                instance=instance,
                cost=result.cost,
                tour=result.tour,
                elapsed_s=elapsed,
                meta={"states": debug["state_count"], "transitions": debug["transitions_total"]},
            )
        )
        print(f"{instance.name}: cost={result.cost:.2f} tour={list(result.tour)} ({elapsed:.4f}s)")
    return records


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Exact TSP via the Held-Karp dynamic program.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--matrix", type=Path, nargs="+", help="JSON file(s) holding a distance matrix.")
    source.add_argument("--family", choices=FAMILIES, help="Generate random instances from this family.")
    parser.add_argument("--cities", type=int, default=10, help="Cities per generated instance.")
    parser.add_argument("--count", type=int, default=1, help="Number of generated instances.")
    parser.add_argument("--seed", type=int, default=RNG_SEEDS["data"], help="Deterministic RNG seed.")
    parser.add_argument("--out", type=Path, default=None, help="Write solve records as JSONL here.")
    parser.add_argument("--verbose", action="store_true", help="Print solver traces.")
    args = parser.parse_args(argv)

    if args.cities < 2:
        parser.error("--cities must be at least 2")
    matrix_mod.VERBOSE = args.verbose
    seed_everywhere(args.seed)

    try:
        instances = build_instances(args)
        records = solve_all(instances)
    except InputError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.out is not None:
        write_records_jsonl(args.out, records)
        write_manifest(
            args.out.parent,
            {
                "records": len(records),
                "family": args.family,
                "cities": args.cities,
                "seed": args.seed,
                "timing": timing_summary([r.elapsed_s for r in records if r.elapsed_s is not None]),
            },
            filename=f"{args.out.stem}.manifest.json",
        )
        print(f"Wrote {len(records)} record(s) to {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
