"""
Injectable random source.

Every engine that makes a randomized decision (negotiation priority, counter
signing bonus, draft selection, AI bidding) takes a RandomSource instead of
calling the ``random`` module directly, so outcomes are reproducible under a
fixed seed in tests while production uses an unseeded generator.
"""

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """
    Thin wrapper over ``random.Random``.

    Usage:
        rng = RandomSource(seed=42)       # deterministic
        rng = RandomSource()              # production
        if rng.random() < 0.3:
            ...
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def random(self) -> float:
        """Float in [0.0, 1.0)."""
        return self._random.random()

    def randint(self, a: int, b: int) -> int:
        """Integer in [a, b], both inclusive."""
        return self._random.randint(a, b)

    def uniform(self, a: float, b: float) -> float:
        """Float in [a, b]."""
        return self._random.uniform(a, b)

    def gauss(self, mu: float, sigma: float) -> float:
        """Normally distributed float."""
        return self._random.gauss(mu, sigma)

    def choice(self, seq: Sequence[T]) -> T:
        """Random element of a non-empty sequence."""
        return self._random.choice(seq)

    def shuffle(self, items: list) -> None:
        """Shuffle a list in place."""
        self._random.shuffle(items)

    def reseed(self, seed: Optional[int]) -> None:
        """Reset the generator to a new seed."""
        self.seed = seed
        self._random.seed(seed)

