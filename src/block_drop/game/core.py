from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional, Protocol, Sequence, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import TEMPLATES, Piece, Shape, TetrominoType
from .rotation import Rotation, rotate
from .rules import ScoringRules

logger = logging.getLogger(__name__)

# Every template must fit on the board or a spawn could never land.
MIN_BOARD_SIZE = max(max(t.shape) for t in TEMPLATES.values())


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    NONE = 6


class PieceChooser(Protocol):
    def choice(self, seq: Sequence[Any]) -> Any: ...


@dataclass
class GameConfig:
    width: int = 12
    height: int = 20
    drop_interval: float = 1000
    random_seed: Optional[int] = None
    spawn_y: int = 0

    def __post_init__(self) -> None:
        if self.width < MIN_BOARD_SIZE or self.height < MIN_BOARD_SIZE:
            raise ValueError(
                f"board must be at least {MIN_BOARD_SIZE}x{MIN_BOARD_SIZE}, got {self.width}x{self.height}"
            )
        if self.drop_interval <= 0:
            raise ValueError(f"drop_interval must be positive, got {self.drop_interval}")


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view handed to renderers once per frame."""

    grid: np.ndarray
    shape: Shape
    color: int
    x: int
    y: int
    score: int


class BlockDropGame:
    """Board simulation: one grid, one falling piece, one score.

    Every public command runs to completion under the game's lock, so input
    handlers and a gravity timer may live on different threads.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[PieceChooser] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self._lock = threading.RLock()
        self.score = 0
        self.drop_accumulator = 0.0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.games_played = 0
        self.current_piece: Piece
        self.spawn()

    # -- commands -----------------------------------------------------------

    def reset(self) -> None:
        with self._lock:
            self.grid.reset()
            self.score = 0
            self.drop_accumulator = 0.0
            self.lines_cleared_total = 0
            self.pieces_placed = 0
            self.spawn()

    def spawn(self) -> None:
        """Bring in a random piece at the top centre.

        If it overlaps the stack the board and score are wiped; the new piece
        stays where it is and no second spawn is attempted.
        """
        with self._lock:
            kind = TetrominoType(self.rng.choice(list(TetrominoType)))
            piece = Piece.spawn(kind)
            piece.x = self.grid.width // 2 - piece.width // 2
            piece.y = self.config.spawn_y
            self.current_piece = piece
            logger.debug("spawned %s at (%d, %d)", kind.name, piece.x, piece.y)
            if self.grid.collides(piece):
                logger.info("spawn blocked, clearing board (score was %d)", self.score)
                self.grid.reset()
                self.score = 0
                self.games_played += 1

    def move_horizontal(self, direction: int) -> bool:
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction}")
        with self._lock:
            piece = self.current_piece
            piece.x += direction
            if self.grid.collides(piece):
                piece.x -= direction
                return False
            return True

    def rotate(self, direction: int) -> bool:
        with self._lock:
            return rotate(self.grid, self.current_piece, direction)

    def soft_drop(self) -> bool:
        """Move down one row; land the piece if that row is blocked.

        Returns True when the piece landed.
        """
        with self._lock:
            piece = self.current_piece
            piece.y += 1
            landed = self.grid.collides(piece)
            if landed:
                piece.y -= 1
                self._land()
            self.drop_accumulator = 0.0
            return landed

    def hard_drop(self) -> int:
        """Drop straight to the stack and land. Returns the rows fallen."""
        with self._lock:
            piece = self.current_piece
            start = piece.y
            while not self.grid.collides(piece):
                piece.y += 1
            piece.y -= 1
            fallen = piece.y - start
            self._land()
            self.drop_accumulator = 0.0
            return fallen

    def advance_time(self, delta: float) -> bool:
        """Feed elapsed time to gravity; returns True if a drop was attempted."""
        with self._lock:
            self.drop_accumulator += delta
            if self.drop_accumulator > self.config.drop_interval:
                self.soft_drop()
                return True
            return False

    def step(self, action: Action) -> Tuple[np.ndarray, int, dict]:
        """Apply one command; returns (state, score delta, info)."""
        with self._lock:
            before = self.score
            action = Action(action)
            if action == Action.LEFT:
                self.move_horizontal(-1)
            elif action == Action.RIGHT:
                self.move_horizontal(1)
            elif action == Action.ROTATE_CW:
                self.rotate(Rotation.CLOCKWISE)
            elif action == Action.ROTATE_CCW:
                self.rotate(Rotation.COUNTERCLOCKWISE)
            elif action == Action.SOFT_DROP:
                self.soft_drop()
            elif action == Action.HARD_DROP:
                self.hard_drop()
            info = {
                "score": self.score,
                "lines_cleared_total": self.lines_cleared_total,
                "pieces_placed": self.pieces_placed,
                "games_played": self.games_played,
            }
            return self.get_state(), self.score - before, info

    # -- internals ----------------------------------------------------------

    def _land(self) -> None:
        # Spawn runs before the sweep, so a blocked spawn wipes the board first.
        piece = self.current_piece
        self.grid.merge(piece)
        self.pieces_placed += 1
        logger.debug("landed %s at (%d, %d)", piece.kind.name, piece.x, piece.y)
        self.spawn()
        result = self.grid.sweep(self.rules)
        if result.lines_cleared:
            self.lines_cleared_total += result.lines_cleared
            self.score += result.score_delta
            logger.debug("cleared %d rows for %d points", result.lines_cleared, result.score_delta)

    # -- observation --------------------------------------------------------

    def get_state(self) -> np.ndarray:
        """Grid copy with the falling piece overlaid as negative colour values."""
        with self._lock:
            state = self.grid.clone_state()
            for x, y in self.current_piece.cells():
                if self.grid.is_inside(x, y):
                    state[y, x] = -self.current_piece.color
            return state

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            grid = self.grid.clone_state()
            shape = self.current_piece.shape.copy()
            grid.setflags(write=False)
            shape.setflags(write=False)
            piece = self.current_piece
            return GameSnapshot(
                grid=grid,
                shape=shape,
                color=piece.color,
                x=piece.x,
                y=piece.y,
                score=self.score,
            )
