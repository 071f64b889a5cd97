from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from block_drop.game import GameSnapshot
from block_drop.game.pieces import PALETTE


def _color_for_value(v: int) -> Tuple[int, int, int]:
    v = abs(int(v))
    if 0 <= v < len(PALETTE):
        return PALETTE[v]
    return (200, 200, 200)


class Renderer:
    def __init__(self, cell_size: int = 20, margin: int = 20, header: int = 30) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.header = header
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            width * self.cell_size + self.margin * 2,
            height * self.cell_size + self.margin * 2 + self.header,
        )

    def _draw_matrix(self, surf: pygame.Surface, matrix: np.ndarray, offset_x: int, offset_y: int) -> None:
        h, w = matrix.shape
        for y in range(h):
            for x in range(w):
                v = int(matrix[y, x])
                if v == 0:
                    continue
                rect = pygame.Rect(
                    (x + offset_x) * self.cell_size,
                    (y + offset_y) * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(v), rect)

    def _grid_surface(self, snapshot: GameSnapshot) -> pygame.Surface:
        h, w = snapshot.grid.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(PALETTE[0])
        self._draw_matrix(surf, snapshot.grid, 0, 0)
        self._draw_matrix(surf, snapshot.shape, snapshot.x, snapshot.y)
        return surf

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        screen.fill((10, 10, 14))
        text = self._font.render(f"Score: {snapshot.score}", True, (230, 230, 230))
        screen.blit(text, (self.margin, self.margin // 2))
        screen.blit(self._grid_surface(snapshot), (self.margin, self.margin + self.header))
        pygame.display.flip()
