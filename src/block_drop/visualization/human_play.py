from __future__ import annotations

import argparse
import logging
from typing import Dict

import pygame

from block_drop.game import Action, BlockDropGame, GameConfig
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_q: Action.ROTATE_CCW,
    pygame.K_w: Action.ROTATE_CW,
    pygame.K_SPACE: Action.HARD_DROP,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Block Drop with the keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=20)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", default="WARNING")
    return p


def run(seed: int | None = None, cell_size: int = 20, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = BlockDropGame(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("Block Drop")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.step(action)

            # Gravity: the engine only counts time, the loop owns the clock
            game.advance_time(clock.tick(fps))
            renderer.draw(screen, game.snapshot())
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(seed=args.seed, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
