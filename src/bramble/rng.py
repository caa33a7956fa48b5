"""Seeded, splittable random source handed to generators."""

from __future__ import annotations

import random
from typing import Optional


class Random:
    """Thin wrapper around :class:`random.Random` that can be split.

    Every ``of`` call inside a composing function draws from its own child
    source, so the values one sub-generator sees do not depend on how much
    randomness its siblings consumed.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def __repr__(self) -> str:
        return f"Random(seed={self.seed!r})"

    def split(self) -> "Random":
        """Return an independent child source.

        The parent advances as a side effect, so two consecutive splits of the
        same source produce different children.
        """

        return Random(self._rng.getrandbits(64))

    def randint(self, low: int, high: int) -> int:
        """Return an integer in the inclusive range ``[low, high]``."""

        if low > high:
            raise ValueError(f"empty range [{low}, {high}]")
        return self._rng.randint(low, high)

    def getrandbits(self, k: int) -> int:
        return self._rng.getrandbits(k)


__all__ = ["Random"]
