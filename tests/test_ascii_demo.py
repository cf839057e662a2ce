from blockfall.__main__ import run_ascii
from blockfall.board import HEIGHT, WIDTH, Board
from blockfall.utils import grid_to_text, render_grid
from blockfall.tetromino import Tetromino, TetrominoType


def test_render_grid_overlays_active_piece():
    board = Board()
    board.set_cell(19, 0, 1)
    grid = render_grid(board.grid, Tetromino(TetrominoType.O, x=4, y=-1))
    assert grid[19][0] == 1
    assert grid[0][4] != 0 and grid[0][5] != 0
    assert board.get_cell(0, 4) == 0


def test_grid_to_text_uses_piece_letters():
    board = Board()
    grid = render_grid(board.grid, Tetromino(TetrominoType.T, x=0, y=0))
    lines = grid_to_text(grid).splitlines()
    assert lines[0] == ".T........"
    assert lines[1] == "TTT......."


def test_ascii_demo_prints_full_board():
    output = run_ascii(ticks=120, seed=0)
    header, *rows = output.splitlines()
    assert header.startswith("score=0 level=1 lines=0 status=PLAYING")
    assert len(rows) == HEIGHT
    assert all(len(row) == WIDTH for row in rows)
