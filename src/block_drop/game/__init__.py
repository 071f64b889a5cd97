"""Game module for Block Drop.

Exports the board simulation and its building blocks:
- TetrominoType / Piece / shape_of: piece catalog and the falling piece
- GameGrid: settled cells, collision, merging and row sweeping
- rotate / Rotation: quarter turns with horizontal wall kicks
- ScoringRules: doubling combo score per sweep
- BlockDropGame: the state machine driven by commands and elapsed time
"""

from .pieces import Piece, TetrominoType, shape_of
from .grid import GameGrid, SweepResult, collides, merge, sweep
from .rotation import Rotation, rotate, rotate_matrix
from .rules import ScoringRules
from .core import Action, BlockDropGame, GameConfig, GameSnapshot

__all__ = [
    "Piece",
    "TetrominoType",
    "shape_of",
    "GameGrid",
    "SweepResult",
    "collides",
    "merge",
    "sweep",
    "Rotation",
    "rotate",
    "rotate_matrix",
    "ScoringRules",
    "Action",
    "BlockDropGame",
    "GameConfig",
    "GameSnapshot",
]
