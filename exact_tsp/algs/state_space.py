"""Bitmask encoding of Held–Karp states.

A subset is an integer over the non-anchor cities ``1..n-1``: bit ``j - 1``
is set when city ``j`` has been visited. A state pairs a subset with the
city the partial path ends at, and maps to row ``mask`` and column
``city - 1`` of the DP table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

from exact_tsp.common.constants import ANCHOR

__all__ = ["StateSpace", "city_bit"]


def city_bit(city: int) -> int:
    if city <= ANCHOR:
        raise ValueError(f"city {city} has no subset bit; the anchor is implicit")
    return 1 << (city - 1)


@dataclass(frozen=True)
class StateSpace:
    n: int

    def __post_init__(self) -> None:
        if self.n < 2:
            raise ValueError("state space needs at least two cities")

    @property
    def width(self) -> int:
        """Number of non-anchor cities, i.e. bits per subset."""
        return self.n - 1

    @property
    def subset_count(self) -> int:
        return 1 << self.width

    @property
    def full_mask(self) -> int:
        return self.subset_count - 1

    @property
    def state_count(self) -> int:
        return self.subset_count * self.width

    def masks(self) -> range:
        """Non-empty subsets in increasing numeric order.

        Clearing a bit always yields a smaller integer, so this order visits
        every subset after all of its proper subsets.
        """
        return range(1, self.subset_count)

    def cities_in(self, mask: int) -> List[int]:
        return [bit + 1 for bit in range(self.width) if mask >> bit & 1]

    def contains(self, mask: int, city: int) -> bool:
        return bool(mask & city_bit(city))

    def without(self, mask: int, city: int) -> int:
        return mask & ~city_bit(city)

    def column(self, city: int) -> int:
        if not (ANCHOR < city < self.n):
            raise IndexError(f"city {city} out of range for n={self.n}")
        return city - 1

    def state_index(self, mask: int, city: int) -> int:
        """Offset of ``(mask, city)`` in the flattened table."""
        return mask * self.width + self.column(city)

    def states(self) -> Iterator[tuple[int, int]]:
        for mask in self.masks():
            for city in self.cities_in(mask):
                yield mask, city
