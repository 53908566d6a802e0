# mars_cleanup/sim/rng.py
from __future__ import annotations
from typing import Iterator, List

MODULUS = 2 ** 32
MULTIPLIER = 1664525
INCREMENT = 1013904223


class LCG:
    """
    Seeded linear congruential stream of floats in [0, 1).

    state = (state * 1664525 + 1013904223) mod 2^32, value = state / 2^32.
    The first value is produced from the seed itself, so re-seeding with the
    same integer replays the exact same sequence.
    """
    def __init__(self, seed: int = 0):
        self.seed(seed)

    def seed(self, s: int) -> None:
        self._state = int(s)

    def next(self) -> float:
        self._state = (self._state * MULTIPLIER + INCREMENT) % MODULUS
        return self._state / MODULUS

    def uniform(self, a: float, b: float) -> float:
        return a + self.next() * (b - a)

    def take(self, n: int) -> List[float]:
        return [self.next() for _ in range(n)]

    def __iter__(self) -> Iterator[float]:
        while True:
            yield self.next()
