from __future__ import annotations

from enum import IntEnum
from typing import List, Tuple

import numpy as np


Shape = np.ndarray


class ShapeType(IntEnum):
    """Index of each blueprint in `SHAPE_CATALOG`"""
    L_RIGHT = 0
    L_LEFT = 1
    SQUARE = 2
    T = 3
    I4 = 4
    Z_RIGHT = 5
    Z_LEFT = 6
    I5 = 7
    I3 = 8
    I2 = 9
    MINI_ANGLE = 10
    SQUARE_3X3 = 11
    RECT_2X3 = 12
    DIAGONAL_2 = 13
    DIAGONAL_3 = 14
    SINGLE = 15
    BIG_L_RIGHT = 16
    BIG_L_LEFT = 17


def make_blueprint(rows) -> Shape:
    """Build a read-only boolean blueprint from nested 0/1 rows."""
    shape = np.array(rows, dtype=np.bool_)
    if shape.ndim != 2 or shape.shape[0] == 0 or shape.shape[1] == 0:
        raise ValueError(f"blueprint must be a non-empty 2D matrix, got shape {shape.shape}")
    shape.flags.writeable = False
    return shape


def rotate(shape: Shape) -> Shape:
    """Rotate a blueprint 90 degrees clockwise; R x C becomes C x R."""
    rotated = np.rot90(shape, 1, axes=(1, 0)).copy()
    rotated.flags.writeable = False
    return rotated


def rotate_n(shape: Shape, k: int) -> Shape:
    for _ in range(k % 4):
        shape = rotate(shape)
    return shape


def offsets(shape: Shape) -> List[Tuple[int, int]]:
    """(dx, dy) of every filled blueprint entry, row-major."""
    ys, xs = np.nonzero(shape)
    return [(int(dx), int(dy)) for dy, dx in zip(ys, xs)]


SHAPE_CATALOG: Tuple[Shape, ...] = (
    make_blueprint([[1, 0], [1, 0], [1, 1]]),
    make_blueprint([[0, 1], [0, 1], [1, 1]]),
    make_blueprint([[1, 1], [1, 1]]),
    make_blueprint([[1, 1, 1], [0, 1, 0]]),
    make_blueprint([[1], [1], [1], [1]]),
    make_blueprint([[1, 1, 0], [0, 1, 1]]),
    make_blueprint([[0, 1, 1], [1, 1, 0]]),
    make_blueprint([[1], [1], [1], [1], [1]]),
    make_blueprint([[1], [1], [1]]),
    make_blueprint([[1], [1]]),
    make_blueprint([[1, 1], [1, 0]]),
    make_blueprint([[1, 1, 1], [1, 1, 1], [1, 1, 1]]),
    make_blueprint([[1, 1], [1, 1], [1, 1]]),
    make_blueprint([[1, 0], [0, 1]]),
    make_blueprint([[1, 0, 0], [0, 1, 0], [0, 0, 1]]),
    make_blueprint([[1]]),
    make_blueprint([[1, 0, 0], [1, 0, 0], [1, 1, 1]]),
    make_blueprint([[0, 0, 1], [0, 0, 1], [1, 1, 1]]),
)


def blueprint(shape_index: int, rotation: int = 0) -> Shape:
    """Catalog shape `shape_index` rotated `rotation` times clockwise."""
    return rotate_n(SHAPE_CATALOG[shape_index], rotation)
