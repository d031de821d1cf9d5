"""Process-wide randomness shared by sampling and fault injection."""
from typing import Optional
import numpy as np


class RandomSource:
    """Thin wrapper over one ``numpy.random.Generator``."""
    def __init__(self, seed: Optional[int] = None):
        self.seed(seed)

    def seed(self, seed: Optional[int] = None) -> None:
        self.gen = np.random.default_rng(seed)

    def choice(self, n: int, p: np.ndarray, size: Optional[int] = None):
        return self.gen.choice(n, size=size, p=p)

    def integers(self, low: int, high: int) -> int:
        return int(self.gen.integers(low, high))

    def random(self) -> float:
        return float(self.gen.random())


_SOURCE = RandomSource()


def get_source() -> RandomSource:
    return _SOURCE


def seed(value: Optional[int]) -> None:
    """Reseed the shared source in place; components holding it see the new stream."""
    _SOURCE.seed(value)


def resolve(rng: Optional[RandomSource]) -> RandomSource:
    return _SOURCE if rng is None else rng
