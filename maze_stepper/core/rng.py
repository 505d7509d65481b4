import random
from typing import Optional


class RandomSource:
    """
    Seedable source of uniform choices.
    Generators draw from this instead of the global `random` state so a seed
    fully determines the maze.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_choice(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"Cannot choose from {n} options")
        return self._rng.randrange(n)

    def reseed(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng.seed(seed)
