from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    """Piece kinds; the value doubles as the colour index stored in the grid."""

    T = 1
    O = 2
    L = 3
    J = 4
    I = 5
    S = 6
    Z = 7


Shape = np.ndarray

# RGB per colour index; index 0 is the empty background.
PALETTE: Tuple[Tuple[int, int, int], ...] = (
    (17, 17, 17),
    (255, 13, 114),
    (13, 194, 255),
    (13, 255, 114),
    (245, 56, 255),
    (255, 142, 13),
    (255, 225, 56),
    (56, 119, 255),
)


def _template(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


# Square footprints so a rotation keeps the piece inside the same box.
TEMPLATES: Dict[TetrominoType, Shape] = {
    TetrominoType.T: _template([[0, 0, 0], [1, 1, 1], [0, 1, 0]]),
    TetrominoType.O: _template([[2, 2], [2, 2]]),
    TetrominoType.L: _template([[0, 3, 0], [0, 3, 0], [0, 3, 3]]),
    TetrominoType.J: _template([[0, 4, 0], [0, 4, 0], [4, 4, 0]]),
    TetrominoType.I: _template([[0, 5, 0, 0], [0, 5, 0, 0], [0, 5, 0, 0], [0, 5, 0, 0]]),
    TetrominoType.S: _template([[0, 6, 6], [6, 6, 0], [0, 0, 0]]),
    TetrominoType.Z: _template([[7, 7, 0], [0, 7, 7], [0, 0, 0]]),
}


def shape_of(kind: TetrominoType) -> Shape:
    """Return a writable copy of the template for `kind`.

    Callers own the result and may rotate it in place; the catalog is never
    affected.
    """
    return np.array(TEMPLATES[TetrominoType(kind)], dtype=np.int8, copy=True)


@dataclass
class Piece:
    kind: TetrominoType
    shape: Shape = field(repr=False)
    x: int = 0
    y: int = 0

    @classmethod
    def spawn(cls, kind: TetrominoType, x: int = 0, y: int = 0) -> "Piece":
        return cls(kind=TetrominoType(kind), shape=shape_of(kind), x=x, y=y)

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    @property
    def color(self) -> int:
        return int(self.kind)

    def cells(self) -> List[Tuple[int, int]]:
        """Board coordinates (x, y) of every filled cell."""
        ys, xs = np.nonzero(self.shape)
        return [(self.x + int(dx), self.y + int(dy)) for dy, dx in zip(ys, xs)]
