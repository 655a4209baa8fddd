from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from numbers import Real
from typing import Any, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from .grid import Color, Coordinate, GameGrid
from .rules import ScoreState, ScoringRules
from .shapes import SHAPE_CATALOG, Shape, rotate_n
from .storage import HighScoreStore, MemoryHighScoreStore


logger = logging.getLogger(__name__)

DEFAULT_GRID_SIZE = 8
MIN_GRID_SIZE = 2
DEFAULT_COLORS: Tuple[str, ...] = ("#bb0000", "#00bb00", "#0000bb", "#bbbb00", "#bb00bb", "#00bbbb")


def validate_grid_size(grid_size: Any) -> int:
    message = f"grid_size must be an integer >= {MIN_GRID_SIZE}, got {grid_size!r}"
    if isinstance(grid_size, bool) or not isinstance(grid_size, Real):
        raise ValueError(message)
    try:
        size = int(grid_size)
    except (OverflowError, ValueError):
        raise ValueError(message) from None
    if size != grid_size or size < MIN_GRID_SIZE:
        raise ValueError(message)
    return size


@dataclass
class GameConfig:
    grid_size: int = DEFAULT_GRID_SIZE
    pieces_per_set: int = 3
    random_seed: Optional[int] = None
    colors: Sequence[Color] = DEFAULT_COLORS
    catalog: Sequence[Shape] = SHAPE_CATALOG
    high_score_key: str = "highScore"

    def __post_init__(self) -> None:
        self.grid_size = validate_grid_size(self.grid_size)
        if self.pieces_per_set < 1:
            raise ValueError("pieces_per_set must be positive")
        if len(self.colors) == 0:
            raise ValueError("colors must not be empty")
        if len(self.catalog) == 0:
            raise ValueError("catalog must not be empty")

    @classmethod
    def from_params(cls, params: Mapping[str, Any], **overrides: Any) -> "GameConfig":
        """Build a config from launch parameters such as ``{"gridSize": "10"}``."""
        raw = params.get("gridSize")
        if raw is None or raw == "":
            grid_size = DEFAULT_GRID_SIZE
        elif isinstance(raw, str):
            try:
                grid_size = int(raw.strip())
            except ValueError:
                raise ValueError(f"gridSize must be an integer, got {raw!r}") from None
        else:
            # Non-string values must already be integral
            grid_size = raw
        return cls(grid_size=grid_size, **overrides)


@dataclass(frozen=True)
class Piece:
    """One tray piece: catalog index, clockwise rotation count and color."""
    shape_index: int
    rotation: int
    color: Color

    def blueprint(self, catalog: Sequence[Shape] = SHAPE_CATALOG) -> Shape:
        return rotate_n(catalog[self.shape_index], self.rotation)


@dataclass(frozen=True)
class PlacementOutcome:
    cells_placed: int
    lines_cleared: int
    score_gained: int


class BlockBlastGame:
    """Game session: board, tray of pieces, and score state.

    All mutation goes through `start_session` and `attempt_placement`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        store: Optional[HighScoreStore] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.store: HighScoreStore = store if store is not None else MemoryHighScoreStore()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.grid_size)
        self.state = ScoreState()
        self.tray: List[Optional[Piece]] = []
        self.last_outcome: Optional[PlacementOutcome] = None
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.start_session()

    @property
    def grid_size(self) -> int:
        return self.grid.size

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def pieces_remaining(self) -> int:
        return sum(1 for piece in self.tray if piece is not None)

    def start_session(self, grid_size: Optional[int] = None) -> None:
        size = self.config.grid_size if grid_size is None else validate_grid_size(grid_size)
        self.grid = GameGrid(size)
        self.state.reset(high_score=self.store.load(self.config.high_score_key))
        self.last_outcome = None
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.generate_new_piece_set()

    def _random_piece(self) -> Piece:
        return Piece(
            shape_index=self.rng.randrange(len(self.config.catalog)),
            rotation=self.rng.randrange(4),
            color=self.rng.choice(list(self.config.colors)),
        )

    def generate_new_piece_set(self) -> None:
        self.tray = [self._random_piece() for _ in range(self.config.pieces_per_set)]
        logger.debug("New tray: %s", self.tray)

    def _piece_at(self, tray_index: int) -> Optional[Piece]:
        if not 0 <= tray_index < len(self.tray):
            return None
        return self.tray[tray_index]

    def piece_blueprint(self, tray_index: int) -> Optional[Shape]:
        piece = self._piece_at(tray_index)
        if piece is None:
            return None
        return piece.blueprint(self.config.catalog)

    def preview(self, tray_index: int, anchor: Optional[Coordinate]) -> Optional[FrozenSet[Coordinate]]:
        """Cells the tray piece would cover at `anchor`, or None if it does not fit."""
        shape = self.piece_blueprint(tray_index)
        if shape is None:
            return None
        return self.grid.preview(shape, anchor)

    def attempt_placement(self, tray_index: int, anchor: Optional[Coordinate]) -> bool:
        """Drop the tray piece at `anchor`; False leaves board and tray unchanged."""
        piece = self._piece_at(tray_index)
        if piece is None:
            return False
        shape = piece.blueprint(self.config.catalog)
        if not self.grid.can_place(shape, anchor):
            logger.debug("Rejected piece %d at %s", tray_index, anchor)
            return False

        cells_placed = self.grid.place(shape, anchor, piece.color)
        self.tray[tray_index] = None
        lines_cleared = self.grid.clear_lines()

        previous_high = self.state.high_score
        gained = self.rules.apply(self.state, cells_placed, lines_cleared)
        if self.state.high_score > previous_high:
            self.store.save(self.config.high_score_key, self.state.high_score)
            logger.info("New high score: %d", self.state.high_score)

        self.total_pieces_placed += 1
        self.total_lines_cleared += lines_cleared
        self.last_outcome = PlacementOutcome(cells_placed, lines_cleared, gained)

        if self.pieces_remaining == 0:
            self.generate_new_piece_set()
        assert 1 <= self.pieces_remaining <= self.config.pieces_per_set
        return True

    def has_valid_move(self) -> bool:
        for index in range(len(self.tray)):
            shape = self.piece_blueprint(index)
            if shape is not None and self.grid.get_valid_placements(shape):
                return True
        return False

    @property
    def game_over(self) -> bool:
        return not self.has_valid_move()

    def get_state(self) -> dict:
        return {
            "grid": self.grid.to_array(),
            "tray": list(self.tray),
            "pieces_remaining": self.pieces_remaining,
            "score": self.state.score,
            "streak": self.state.streak,
            "displayed_streak": self.state.displayed_streak,
            "streak_lives": self.state.streak_lives,
            "high_score": self.state.high_score,
            "total_lines_cleared": self.total_lines_cleared,
            "total_pieces_placed": self.total_pieces_placed,
            "filled_ratio": self.grid.get_filled_ratio(),
            "game_over": self.game_over,
        }
