
"""Piece model, shape library, rotation"""
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

Matrix = Tuple[Tuple[int, ...], ...]

KINDS: Tuple[str, ...] = ("I", "O", "T", "S", "Z", "J", "L")

# Spawn orientation, minimal bounding box.
SHAPES: Dict[str, Matrix] = {
    "I": ((1, 1, 1, 1),),
    "O": ((1, 1),
          (1, 1)),
    "T": ((0, 1, 0),
          (1, 1, 1)),
    "S": ((0, 1, 1),
          (1, 1, 0)),
    "Z": ((1, 1, 0),
          (0, 1, 1)),
    "J": ((1, 0, 0),
          (1, 1, 1)),
    "L": ((0, 0, 1),
          (1, 1, 1)),
}

COLOR_TAGS: Dict[str, str] = {
    "I": "cyan",
    "O": "yellow",
    "T": "purple",
    "S": "green",
    "Z": "red",
    "J": "blue",
    "L": "orange",
}


@dataclass(frozen=True)
class ShapeDef:
    kind: str
    matrix: Matrix
    color: str


def definition_for(kind: str) -> ShapeDef:
    """Canonical template for ``kind``; raises KeyError for unknown kinds."""
    return ShapeDef(kind, SHAPES[kind], COLOR_TAGS[kind])


def random_kind(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(KINDS)


def rotate_cw(m: Sequence[Sequence[int]]) -> Matrix:
    """R x C -> C x R, out[j][R-1-i] == m[i][j]."""
    return tuple(tuple(row) for row in zip(*m[::-1]))


@dataclass(frozen=True)
class Piece:
    kind: str
    shape: Matrix
    color: str
    x: int
    y: int

    @staticmethod
    def spawn(kind: str, cols: int) -> "Piece":
        d = definition_for(kind)
        w = len(d.matrix[0])
        return Piece(kind, d.matrix, d.color, (cols - w) // 2, 0)

    def moved(self, dx: int, dy: int) -> "Piece":
        return Piece(self.kind, self.shape, self.color, self.x + dx, self.y + dy)

    def with_shape(self, shape: Matrix) -> "Piece":
        return Piece(self.kind, shape, self.color, self.x, self.y)

    def cells(self) -> List[Tuple[int, int]]:
        """Absolute (x, y) of every occupied cell, including rows above 0."""
        return [(self.x + c, self.y + r)
                for r, row in enumerate(self.shape)
                for c, v in enumerate(row) if v]
