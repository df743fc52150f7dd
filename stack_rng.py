
"""Random-kind sources for the piece queue"""
import random
from typing import Callable, Iterable, Optional

from stack_piece import KINDS, random_kind

KindSource = Callable[[], str]


class UniformRandom:
    """Uniform draw over the seven kinds. ``seed=None`` seeds from the OS."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.rng = random.Random(seed)

    def __call__(self) -> str:
        return random_kind(self.rng)


class SequenceSource:
    """Replays a fixed list of kinds, cycling when it runs out."""

    def __init__(self, kinds: Iterable[str], cycle: bool = True):
        self.kinds = list(kinds)
        if not self.kinds:
            raise ValueError("SequenceSource needs at least one kind")
        for k in self.kinds:
            if k not in KINDS:
                raise KeyError(k)
        self.cycle = cycle
        self.index = 0

    def __call__(self) -> str:
        if self.index >= len(self.kinds):
            if not self.cycle:
                raise IndexError("kind sequence exhausted")
            self.index = 0
        k = self.kinds[self.index]
        self.index += 1
        return k
