from __future__ import annotations

from enum import IntEnum

import numpy as np

from .grid import GameGrid
from .pieces import Piece, Shape


class Rotation(IntEnum):
    CLOCKWISE = 1
    COUNTERCLOCKWISE = -1


def rotate_matrix(shape: Shape, direction: int) -> Shape:
    """Quarter-turn `shape`: transpose, then mirror columns (cw) or rows (ccw)."""
    direction = Rotation(direction)
    turned = shape.T
    if direction is Rotation.CLOCKWISE:
        turned = turned[:, ::-1]
    else:
        turned = turned[::-1, :]
    return np.ascontiguousarray(turned)


def rotate(grid: GameGrid, piece: Piece, direction: int) -> bool:
    """Rotate `piece` in place, kicking it sideways if the new footprint collides.

    Horizontal kicks are tried cumulatively as +1, -2, +3, -4, ... columns.
    Once the kick distance exceeds the piece width the rotation is abandoned
    and both shape and x are restored. Returns whether the rotation stuck.
    """
    direction = Rotation(direction)
    original_x = piece.x
    piece.shape = rotate_matrix(piece.shape, direction)
    offset = 1
    while grid.collides(piece):
        piece.x += offset
        offset = -(offset + (1 if offset > 0 else -1))
        if abs(offset) > piece.width:
            piece.shape = rotate_matrix(piece.shape, -direction)
            piece.x = original_x
            return False
    return True
