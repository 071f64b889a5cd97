from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .pieces import Piece
from .rules import ScoringRules


@dataclass
class SweepResult:
    lines_cleared: int
    score_delta: int


class GameGrid:
    """Settled cells of the board.

    The grid uses 0 for empty cells and 1..7 for the colour of the piece that
    filled them. Rows are stored top to bottom; row ``height - 1`` is the
    floor. Walls and floor are never stored: everything outside the matrix
    counts as occupied.
    """

    def __init__(self, width: int, height: int) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def collides(self, piece: Piece) -> bool:
        for x, y in piece.cells():
            if not self.is_inside(x, y):
                return True
            if self.grid[y, x] != 0:
                return True
        return False

    def merge(self, piece: Piece) -> None:
        """Write the piece's filled cells into the grid.

        The piece must already rest at a non-colliding position.
        """
        # Empty rows/columns of the shape may hang outside the board.
        for dy, dx in zip(*np.nonzero(piece.shape)):
            self.grid[piece.y + dy, piece.x + dx] = piece.shape[dy, dx]

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def sweep(self, rules: Optional[ScoringRules] = None) -> SweepResult:
        """Remove full rows from the floor upwards and score them.

        Each cleared row shifts everything above it down by one and leaves an
        empty row at the top; the same index is then examined again. The
        n-th row cleared in one call is worth ``rules.score_for_row(n)``.
        """
        rules = rules or ScoringRules()
        cleared = 0
        score = 0
        y = self.height - 1
        while y >= 0:
            if not self.is_row_full(y):
                y -= 1
                continue
            self.grid[1 : y + 1] = self.grid[0:y]
            self.grid[0] = 0
            score += rules.score_for_row(cleared)
            cleared += 1
        return SweepResult(lines_cleared=cleared, score_delta=score)

    def column_heights(self) -> List[int]:
        filled = self.grid != 0
        heights: List[int] = []
        for x in range(self.width):
            rows = np.flatnonzero(filled[:, x])
            heights.append(self.height - int(rows[0]) if rows.size else 0)
        return heights

    def get_max_height(self) -> int:
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            seen_block = False
            for cell in self.grid[:, x]:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def bumpiness(self) -> int:
        heights = self.column_heights()
        return sum(abs(a - b) for a, b in zip(heights, heights[1:]))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()


def collides(grid: GameGrid, piece: Piece) -> bool:
    return grid.collides(piece)


def merge(grid: GameGrid, piece: Piece) -> None:
    grid.merge(piece)


def sweep(grid: GameGrid, rules: Optional[ScoringRules] = None) -> int:
    """Sweep `grid` and return only the score delta."""
    return grid.sweep(rules).score_delta
