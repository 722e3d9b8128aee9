from __future__ import annotations

import os
import random
from typing import Dict

import numpy as np

ANCHOR: int = 0
TOL_NUM: float = 1e-6
DEFAULT_SEED: int = 1337

# Beyond this the 2^(n-1) x (n-1) table no longer fits comfortably in memory.
PRACTICAL_CITY_LIMIT: int = 24

RNG_SEEDS: Dict[str, int] = {
    "tests": DEFAULT_SEED,
    "bench": 4242,
    "data": 5150,
}


def seed_everywhere(seed: int) -> None:
    """Seed all supported RNG backends deterministically."""
    random.seed(seed)
    os.environ["PYTHONHASHSEED"] = str(seed)
    np.random.seed(seed)


__all__ = [
    "ANCHOR",
    "TOL_NUM",
    "DEFAULT_SEED",
    "PRACTICAL_CITY_LIMIT",
    "RNG_SEEDS",
    "seed_everywhere",
]
