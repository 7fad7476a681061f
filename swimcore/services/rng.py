"""Seeded random source shared by every generator in one composition."""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")

MAX_SEED = 2**31 - 1


class SeededRandom:
    """Reproducible draws: the same seed and call order yield the same values."""

    def __init__(self, seed: int):
        self.seed = int(seed)
        self._random = random.Random(self.seed)

    @staticmethod
    def draw_seed() -> int:
        return random.SystemRandom().randrange(0, MAX_SEED)

    def next(self) -> float:
        return self._random.random()

    def pick(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("cannot pick from an empty sequence")
        return items[int(self.next() * len(items))]

    def weighted_pick(self, items: Sequence[T], weights: Sequence[float]) -> T:
        if not items or len(items) != len(weights):
            raise ValueError("weighted_pick needs one weight per item")
        remainder = self.next() * sum(weights)
        for item, weight in zip(items, weights):
            remainder -= weight
            if remainder <= 0:
                return item
        return items[-1]

    def chance(self, p: float) -> bool:
        return self.next() < p

    def int_in_range(self, lo: int, hi: int) -> int:
        return int(self.next() * (hi - lo + 1)) + lo
