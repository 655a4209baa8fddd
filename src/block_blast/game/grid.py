from __future__ import annotations

from numbers import Integral
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Tuple

import numpy as np

from .shapes import Shape, offsets


Coordinate = Tuple[int, int]
Color = Any


def _is_cell(value: Any) -> bool:
    """True for an (x, y) pair of integers; bools are not coordinates."""
    if not isinstance(value, (tuple, list)) or len(value) != 2:
        return False
    return all(isinstance(v, Integral) and not isinstance(v, bool) for v in value)


class GameGrid:
    """Square grid of occupied cells for block placement.

    Occupied cells are kept in a dict keyed by ``y * size + x`` and mapped to
    an opaque color value. Placement is split into a pure check
    (`can_place`) and a commit (`place`) so previews can validate on every
    pointer move without touching the board.
    """

    def __init__(self, size: int = 8) -> None:
        self.size = int(size)
        self._cells: Dict[int, Color] = {}

    def __len__(self) -> int:
        return len(self._cells)

    def reset(self) -> None:
        self._cells.clear()

    def _key(self, x: int, y: int) -> int:
        return y * self.size + x

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def is_occupied(self, cell: Coordinate) -> bool:
        if not _is_cell(cell):
            return False
        x, y = cell
        return self.is_inside(x, y) and self._key(x, y) in self._cells

    def color_at(self, cell: Coordinate) -> Optional[Color]:
        if not _is_cell(cell):
            return None
        x, y = cell
        if not self.is_inside(x, y):
            return None
        return self._cells.get(self._key(x, y))

    def cells(self) -> Iterator[Tuple[Coordinate, Color]]:
        for key, color in self._cells.items():
            yield (key % self.size, key // self.size), color

    def _target_cells(self, shape: Shape, anchor: Optional[Coordinate]) -> Optional[List[Coordinate]]:
        if not _is_cell(anchor):
            return None
        ax, ay = int(anchor[0]), int(anchor[1])
        h, w = shape.shape
        # Bounding box must fit from the anchor
        if ax < 0 or ay < 0 or ax + w > self.size or ay + h > self.size:
            return None
        targets = [(ax + dx, ay + dy) for dx, dy in offsets(shape)]
        for x, y in targets:
            if self._key(x, y) in self._cells:
                return None
        return targets

    def can_place(self, shape: Shape, anchor: Optional[Coordinate]) -> bool:
        """Check if `shape` fits with its top-left corner at `anchor`"""
        return self._target_cells(shape, anchor) is not None

    def preview(self, shape: Shape, anchor: Optional[Coordinate]) -> Optional[FrozenSet[Coordinate]]:
        """Cells a placement would occupy, or None if it does not fit.

        The board is never modified; renderers draw the returned cells as an
        overlay.
        """
        targets = self._target_cells(shape, anchor)
        if targets is None:
            return None
        return frozenset(targets)

    def place(self, shape: Shape, anchor: Optional[Coordinate], color: Color) -> int:
        """Commit every filled cell of `shape` and return how many were added.

        Validation runs over the whole shape first; a placement that does not
        fit adds nothing and returns 0.
        """
        targets = self._target_cells(shape, anchor)
        if targets is None:
            return 0
        for x, y in targets:
            self._cells[self._key(x, y)] = color
        return len(targets)

    def find_full_lines(self) -> Tuple[FrozenSet[int], FrozenSet[int]]:
        """Return (full_rows, full_cols) of the current board."""
        if not self._cells:
            return frozenset(), frozenset()
        keys = np.fromiter(self._cells.keys(), dtype=np.int64, count=len(self._cells))
        row_counts = np.bincount(keys // self.size, minlength=self.size)
        col_counts = np.bincount(keys % self.size, minlength=self.size)
        full_rows = frozenset(int(r) for r in np.flatnonzero(row_counts == self.size))
        full_cols = frozenset(int(c) for c in np.flatnonzero(col_counts == self.size))
        return full_rows, full_cols

    def clear_lines(self) -> int:
        """Clear complete rows and columns and return the number of lines."""
        full_rows, full_cols = self.find_full_lines()
        if not full_rows and not full_cols:
            return 0
        doomed = set()
        for row in full_rows:
            doomed.update(self._key(x, row) for x in range(self.size))
        for col in full_cols:
            doomed.update(self._key(col, y) for y in range(self.size))
        for key in doomed:
            del self._cells[key]
        return len(full_rows) + len(full_cols)

    def get_valid_placements(self, shape: Shape) -> List[Coordinate]:
        """Get all valid (x, y) anchors for a shape"""
        valid: List[Coordinate] = []
        for y in range(self.size):
            for x in range(self.size):
                if self.can_place(shape, (x, y)):
                    valid.append((x, y))
        return valid

    def get_filled_ratio(self) -> float:
        return len(self._cells) / float(self.size * self.size)

    def to_array(self) -> np.ndarray:
        """Occupancy matrix indexed [y, x], 1 for filled cells."""
        grid = np.zeros((self.size, self.size), dtype=np.int8)
        for key in self._cells:
            grid[key // self.size, key % self.size] = 1
        return grid

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.size)
        new_grid._cells = dict(self._cells)
        return new_grid
