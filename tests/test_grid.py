import numpy as np

from block_blast.game.grid import GameGrid
from block_blast.game.shapes import SHAPE_CATALOG, ShapeType, make_blueprint

SINGLE = SHAPE_CATALOG[ShapeType.SINGLE]
SQUARE = SHAPE_CATALOG[ShapeType.SQUARE]


def fill_row(grid: GameGrid, row: int, skip=()):
    for x in range(grid.size):
        if x not in skip:
            assert grid.place(SINGLE, (x, row), "red") == 1


def fill_col(grid: GameGrid, col: int, skip=()):
    for y in range(grid.size):
        if y not in skip:
            assert grid.place(SINGLE, (col, y), "blue") == 1


def test_can_place_on_empty_board():
    grid = GameGrid(8)
    assert grid.can_place(SQUARE, (0, 0))
    assert grid.can_place(SQUARE, (6, 6))


def test_out_of_bounds_rejected():
    grid = GameGrid(8)
    assert not grid.can_place(SQUARE, (7, 0))
    assert not grid.can_place(SQUARE, (0, 7))
    assert not grid.can_place(SQUARE, (-1, 0))
    assert not grid.can_place(make_blueprint([[1] * 9]), (0, 0))


def test_missing_anchor_rejected():
    grid = GameGrid(8)
    assert not grid.can_place(SINGLE, None)
    assert grid.place(SINGLE, None, "red") == 0
    assert grid.preview(SINGLE, None) is None


def test_overlap_rejected():
    grid = GameGrid(8)
    grid.place(SINGLE, (1, 1), "red")
    assert not grid.can_place(SQUARE, (0, 0))
    assert not grid.can_place(SQUARE, (1, 1))
    assert grid.can_place(SQUARE, (2, 2))


def test_empty_blueprint_entries_do_not_block():
    grid = GameGrid(8)
    grid.place(SINGLE, (1, 0), "red")
    diagonal = SHAPE_CATALOG[ShapeType.DIAGONAL_2]
    assert grid.can_place(diagonal, (0, 0))


def test_can_place_is_pure():
    grid = GameGrid(8)
    grid.place(SQUARE, (3, 3), "red")
    snapshot = grid.to_array()
    results = {grid.can_place(SQUARE, (x, y)) for x in range(3, 5) for y in range(3, 5) for _ in range(3)}
    assert results == {False}
    assert grid.can_place(SQUARE, (0, 0)) and grid.can_place(SQUARE, (0, 0))
    assert np.array_equal(grid.to_array(), snapshot)
    assert len(grid) == 4


def test_place_commits_all_cells_with_color():
    grid = GameGrid(8)
    t_shape = SHAPE_CATALOG[ShapeType.T]
    assert grid.place(t_shape, (2, 4), "#bb0000") == 4
    assert grid.is_occupied((2, 4))
    assert grid.is_occupied((3, 5))
    assert not grid.is_occupied((2, 5))
    assert grid.color_at((4, 4)) == "#bb0000"
    assert grid.color_at((0, 0)) is None
    assert not grid.is_occupied((8, 8))


def test_rejected_place_adds_nothing():
    grid = GameGrid(8)
    grid.place(SINGLE, (7, 7), "red")
    assert grid.place(SQUARE, (6, 6), "blue") == 0
    assert grid.place(SQUARE, (7, 0), "blue") == 0
    assert sorted(grid.cells()) == [((7, 7), "red")]


def test_preview_does_not_mutate():
    grid = GameGrid(8)
    cells = grid.preview(SQUARE, (2, 3))
    assert cells == frozenset({(2, 3), (3, 3), (2, 4), (3, 4)})
    assert len(grid) == 0
    grid.place(SINGLE, (3, 4), "red")
    assert grid.preview(SQUARE, (2, 3)) is None


def test_clear_single_row():
    grid = GameGrid(8)
    grid.place(SINGLE, (0, 5), "blue")
    assert grid.place(make_blueprint([[1] * 8]), (0, 3), "red") == 8
    assert grid.find_full_lines() == (frozenset({3}), frozenset())
    assert grid.clear_lines() == 1
    assert len(grid) == 1
    assert grid.is_occupied((0, 5))
    assert not any(grid.is_occupied((x, 3)) for x in range(8))


def test_clear_shared_row_and_column_counts_two_lines():
    grid = GameGrid(8)
    fill_row(grid, 0, skip={0})
    fill_col(grid, 0, skip={0})
    grid.place(SINGLE, (5, 5), "green")
    assert grid.clear_lines() == 0
    grid.place(SINGLE, (0, 0), "red")
    assert grid.find_full_lines() == (frozenset({0}), frozenset({0}))
    assert grid.clear_lines() == 2
    assert [cell for cell, _ in grid.cells()] == [(5, 5)]


def test_partial_lines_untouched():
    grid = GameGrid(8)
    fill_row(grid, 2, skip={7})
    assert grid.clear_lines() == 0
    assert len(grid) == 7


def test_multiple_rows_and_columns():
    grid = GameGrid(4)
    for row in range(2):
        fill_row(grid, row)
    assert grid.find_full_lines() == (frozenset({0, 1}), frozenset())
    fill_col(grid, 3, skip={0, 1})
    assert grid.find_full_lines() == (frozenset({0, 1}), frozenset({3}))
    assert grid.clear_lines() == 3
    assert len(grid) == 0


def test_line_counts_follow_grid_size():
    grid = GameGrid(10)
    grid.place(make_blueprint([[1] * 8]), (0, 0), "red")
    assert grid.clear_lines() == 0
    grid.place(make_blueprint([[1, 1]]), (8, 0), "red")
    assert grid.clear_lines() == 1


def test_valid_placements_and_copy():
    grid = GameGrid(3)
    grid.place(SINGLE, (1, 1), "red")
    assert grid.get_valid_placements(SQUARE) == []
    clone = grid.copy()
    clone.reset()
    assert grid.is_occupied((1, 1))
    assert len(clone.get_valid_placements(SQUARE)) == 4
    assert grid.get_filled_ratio() == 1 / 9


def test_to_array_is_row_major():
    grid = GameGrid(3)
    grid.place(SINGLE, (2, 0), "red")
    assert grid.to_array().tolist() == [[0, 0, 1], [0, 0, 0], [0, 0, 0]]


def test_non_integer_anchor_rejected():
    grid = GameGrid(8)
    for anchor in [(0.5, 0), (0, 2.0), (True, 0), ("1", 1), (1,), (1, 2, 3)]:
        assert not grid.can_place(SINGLE, anchor)
        assert grid.place(SINGLE, anchor, "red") == 0
        assert grid.preview(SINGLE, anchor) is None
    assert len(grid) == 0
    assert not grid.is_occupied((0.5, 0))
    assert grid.color_at((0.5, 0)) is None


def test_numpy_integer_anchor_accepted():
    grid = GameGrid(8)
    assert grid.place(SINGLE, (np.int64(3), np.int64(4)), "red") == 1
    assert [cell for cell, _ in grid.cells()] == [(3, 4)]


def test_row_with_rejected_fractional_anchor_stays_partial():
    grid = GameGrid(8)
    fill_row(grid, 3, skip={0})
    assert grid.place(SINGLE, (0.5, 3), "red") == 0
    assert grid.find_full_lines() == (frozenset(), frozenset())
    assert grid.clear_lines() == 0
    assert len(grid) == 7
