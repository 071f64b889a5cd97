import numpy as np
import pytest

from block_drop.game import GameGrid, Piece, Rotation, TetrominoType, rotate, rotate_matrix, shape_of


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_rotate_matrix_is_a_quarter_turn(kind):
    shape = shape_of(kind)
    np.testing.assert_array_equal(rotate_matrix(shape, Rotation.CLOCKWISE), np.rot90(shape, -1))
    np.testing.assert_array_equal(rotate_matrix(shape, Rotation.COUNTERCLOCKWISE), np.rot90(shape, 1))


def test_rotate_matrix_handles_rectangles():
    shape = np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8)
    turned = rotate_matrix(shape, Rotation.CLOCKWISE)
    np.testing.assert_array_equal(turned, [[0, 1], [1, 1], [0, 1]])


def test_rotate_matrix_rejects_unknown_direction():
    with pytest.raises(ValueError):
        rotate_matrix(shape_of(TetrominoType.T), 2)


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_four_clockwise_turns_restore_shape(kind):
    grid = GameGrid(12, 20)
    piece = Piece.spawn(kind, x=4, y=5)
    for _ in range(4):
        assert rotate(grid, piece, Rotation.CLOCKWISE)
    np.testing.assert_array_equal(piece.shape, shape_of(kind))
    assert (piece.x, piece.y) == (4, 5)


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_clockwise_then_counterclockwise_is_identity(kind):
    grid = GameGrid(12, 20)
    piece = Piece.spawn(kind, x=4, y=5)
    rotate(grid, piece, Rotation.CLOCKWISE)
    rotate(grid, piece, Rotation.COUNTERCLOCKWISE)
    np.testing.assert_array_equal(piece.shape, shape_of(kind))
    assert (piece.x, piece.y) == (4, 5)


def test_wall_kick_pushes_piece_off_the_wall():
    grid = GameGrid(6, 6)
    # Vertical I hugging the left wall
    piece = Piece.spawn(TetrominoType.I, x=-1, y=0)
    assert not grid.collides(piece)
    assert rotate(grid, piece, Rotation.CLOCKWISE)
    assert piece.x == 0
    assert piece.y == 0
    assert sorted(piece.cells()) == [(0, 1), (1, 1), (2, 1), (3, 1)]


def test_kick_probes_alternate_sides():
    grid = GameGrid(10, 6)
    grid.grid[1, 5] = 1
    piece = Piece.spawn(TetrominoType.L, x=3, y=0)
    assert not grid.collides(piece)
    assert rotate(grid, piece, Rotation.CLOCKWISE)
    # x=3 and x=4 (+1) are blocked, x=2 (-2) fits
    assert piece.x == 2


def test_kick_search_stops_past_piece_width():
    grid = GameGrid(10, 6)
    grid.grid[1, 5] = 1
    grid.grid[2, 2] = 1
    piece = Piece.spawn(TetrominoType.L, x=3, y=0)
    # x=3, 4 and 2 are blocked; the next probe is beyond the piece width
    assert not rotate(grid, piece, Rotation.CLOCKWISE)
    assert piece.x == 3
    np.testing.assert_array_equal(piece.shape, shape_of(TetrominoType.L))


def test_failed_rotation_restores_shape_and_position():
    grid = GameGrid(6, 6)
    grid.grid[1, 1:] = 1
    piece = Piece.spawn(TetrominoType.I, x=-1, y=0)
    assert not grid.collides(piece)
    assert not rotate(grid, piece, Rotation.CLOCKWISE)
    np.testing.assert_array_equal(piece.shape, shape_of(TetrominoType.I))
    assert (piece.x, piece.y) == (-1, 0)


def test_rotation_never_moves_vertically():
    grid = GameGrid(6, 6)
    grid.grid[2, :] = 1
    grid.grid[2, 1] = 0
    piece = Piece.spawn(TetrominoType.I, x=0, y=0)
    assert not rotate(grid, piece, Rotation.COUNTERCLOCKWISE)
    assert piece.y == 0
