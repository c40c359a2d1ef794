"""Seeded uniform random source used by the trainer."""
from __future__ import annotations

import random
from typing import Optional

from .errors import ArgumentError


class RandomGenerator:
    """Reproducible stream of uniform doubles and integers.

    The stream is driven by the Mersenne Twister behind :class:`random.Random`.
    Integers are derived from doubles (``floor(u * n)``) so that the integer
    sequence is a pure function of the double sequence for a given seed.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def __repr__(self) -> str:
        return f"RandomGenerator(seed={self.seed!r})"

    def next_double(self) -> float:
        """Return a uniform double in ``[0, 1)``."""

        return self._rng.random()

    def next_int(self, n: int) -> int:
        """Return a uniform integer in ``[0, n)``."""

        if n <= 0:
            raise ArgumentError(f"Upper bound must be a positive integer. Was: {n}")
        # Guard against u * n rounding up to n for u close to 1.
        return min(int(self.next_double() * n), n - 1)

    def uniform(self, low: float, high: float) -> float:
        """Return a uniform double in ``[low, high)``."""

        return low + (high - low) * self.next_double()

    def shuffle(self, items: list) -> None:
        """Shuffle ``items`` in place (Fisher-Yates driven by :meth:`next_int`)."""

        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(i + 1)
            items[i], items[j] = items[j], items[i]


def get_random(seed: Optional[int] = None) -> RandomGenerator:
    """Return a fresh generator for ``seed``; ``None`` seeds from OS entropy."""

    return RandomGenerator(seed)


__all__ = ["RandomGenerator", "get_random"]
