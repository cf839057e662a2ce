"""Utility helpers for presenting the board."""

from __future__ import annotations

from typing import Dict, List, Optional

from .board import PIECE_VALUES, Grid
from .tetromino import SHAPE_COLORS, Tetromino, TetrominoType


# Colour id stored in the grid -> hex colour string.
CELL_COLORS: Dict[int, str] = {PIECE_VALUES[t]: SHAPE_COLORS[t] for t in TetrominoType}

# Colour id -> piece letter, used for text output.
CELL_LETTERS: Dict[int, str] = {PIECE_VALUES[t]: t.value for t in TetrominoType}


def render_grid(grid: Grid, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of ``grid`` with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without locking the piece.  Cells of the active piece above the board are
    skipped.
    """

    rows = [[int(v) for v in row] for row in grid]
    if active is not None:
        value = PIECE_VALUES[active.shape]
        for x, y in active.blocks():
            if 0 <= y < len(rows) and 0 <= x < len(rows[y]):
                rows[y][x] = value
    return rows


def grid_to_text(grid: List[List[int]], empty: str = ".") -> str:
    """Render a grid of colour ids as one line of piece letters per row."""

    return "\n".join(
        "".join(CELL_LETTERS.get(cell, "#") if cell else empty for cell in row) for row in grid
    )
