"""Injectable random source for rolls and CPU choices."""

from collections.abc import Sequence
from random import Random
from typing import TypeVar

T = TypeVar("T")


class Dice:
    """Wrapper around random.Random so matches can be seeded in tests."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def roll(self, min_roll: int, max_roll: int) -> int:
        """Return a random integer N such that min_roll <= N <= max_roll."""
        if min_roll > max_roll:
            raise ValueError(f"Invalid roll range {min_roll}-{max_roll}")
        return self._random.randint(min_roll, max_roll)

    def choice(self, seq: Sequence[T]) -> T:
        """Return a random element from a non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence")
        return self._random.choice(seq)
