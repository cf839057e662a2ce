from blockfall.board import Board
from blockfall.tetromino import (
    SPAWN_X,
    SPAWN_Y,
    TETROMINO_SHAPES,
    Tetromino,
    TetrominoType,
    create_piece,
    get_shape_coords,
    move_piece,
    rotate,
)


def test_rotation_state_counts():
    counts = {t: len(states) for t, states in TETROMINO_SHAPES.items()}
    assert counts[TetrominoType.O] == 1
    assert counts[TetrominoType.I] == counts[TetrominoType.S] == counts[TetrominoType.Z] == 2
    assert counts[TetrominoType.T] == counts[TetrominoType.J] == counts[TetrominoType.L] == 4
    for states in TETROMINO_SHAPES.values():
        assert all(len(cells) == 4 for cells in states)


def test_create_piece_spawns_at_origin():
    piece = create_piece(TetrominoType.T)
    assert piece.rotation == 0
    assert (piece.x, piece.y) == (SPAWN_X, SPAWN_Y)
    assert piece.color == "#a000f0"
    assert get_shape_coords(piece) == ((1, 0), (0, 1), (1, 1), (2, 1))


def test_rotate_cycles_through_states():
    board = Board()
    piece = Tetromino(TetrominoType.T, x=4, y=5)
    for expected in (1, 2, 3, 0):
        piece = rotate(piece, board.check_collision)
        assert piece is not None
        assert piece.rotation == expected


def test_rejected_rotation_leaves_piece_unchanged():
    board = Board()
    # Vertical I at column 2 of its box; block that column's target cells.
    piece = Tetromino(TetrominoType.I, x=3, y=10)
    board.set_cell(12, 5, 1)
    result = rotate(piece, board.check_collision)
    assert result is None
    assert piece.rotation == 0
    assert (piece.x, piece.y) == (3, 10)


def test_no_wall_kick_against_the_wall():
    board = Board()
    vertical = Tetromino(TetrominoType.I, rotation=1, x=-2, y=5)
    assert not board.check_collision(vertical.cells(), vertical.x, vertical.y)
    assert rotate(vertical, board.check_collision) is None


def test_move_piece_commits_or_rejects():
    board = Board()
    piece = create_piece(TetrominoType.O)
    moved = move_piece(piece, 1, 2, board.check_collision)
    assert moved is not None
    assert (moved.x, moved.y) == (piece.x + 1, piece.y + 2)
    assert (piece.x, piece.y) == (SPAWN_X, SPAWN_Y)

    at_wall = Tetromino(TetrominoType.O, x=0, y=0)
    assert move_piece(at_wall, -1, 0, board.check_collision) is None


def test_blocks_are_absolute():
    piece = Tetromino(TetrominoType.O, x=2, y=7)
    assert piece.blocks() == [(2, 7), (3, 7), (2, 8), (3, 8)]
