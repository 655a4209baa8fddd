"""Game module for Block Blast.

Exports the core game engine and supporting classes:
- GameGrid: Board occupancy, placement checks and row/column clearing
- SHAPE_CATALOG / ShapeType: Polyomino blueprints used for tray pieces
- rotate: Clockwise blueprint rotation
- ScoreState / ScoringRules: Score and streak state machine
- JsonHighScoreStore / MemoryHighScoreStore: High score persistence
- BlockBlastGame: Session holding the board, tray and score
"""

from .grid import GameGrid
from .shapes import SHAPE_CATALOG, ShapeType, blueprint, make_blueprint, rotate, rotate_n
from .rules import ScoreState, ScoringRules
from .storage import HighScoreStore, JsonHighScoreStore, MemoryHighScoreStore
from .core import BlockBlastGame, GameConfig, Piece, PlacementOutcome

__all__ = [
    "GameGrid",
    "SHAPE_CATALOG",
    "ShapeType",
    "blueprint",
    "make_blueprint",
    "rotate",
    "rotate_n",
    "ScoreState",
    "ScoringRules",
    "HighScoreStore",
    "JsonHighScoreStore",
    "MemoryHighScoreStore",
    "BlockBlastGame",
    "GameConfig",
    "Piece",
    "PlacementOutcome",
]
