from __future__ import annotations

from itertools import cycle
from typing import Iterable, Sequence

import pytest

from block_drop.game import BlockDropGame, GameConfig, TetrominoType


class ScriptedChooser:
    """Stands in for the random source: yields kinds from a fixed script."""

    def __init__(self, kinds: Iterable[TetrominoType]) -> None:
        self._kinds = cycle(list(kinds))

    def choice(self, seq: Sequence[TetrominoType]) -> TetrominoType:
        kind = next(self._kinds)
        assert kind in seq
        return kind


@pytest.fixture
def make_game():
    def _make(kinds, width: int = 12, height: int = 20, **config) -> BlockDropGame:
        return BlockDropGame(GameConfig(width=width, height=height, **config), rng=ScriptedChooser(kinds))

    return _make
