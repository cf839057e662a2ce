"""Board representation for the playfield."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import Tetromino, TetrominoType


# Dimensions of the standard board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]
Cells = Iterable[Tuple[int, int]]

# Mapping from ``TetrominoType`` to the colour id stored in the grid.  ``0``
# represents an empty cell.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


@dataclass(frozen=True)
class ClearedRow:
    """Contents of a removed row, captured before removal."""

    row: int
    cells: Tuple[int, ...]


@dataclass(frozen=True)
class LineClearResult:
    count: int
    rows: Tuple[ClearedRow, ...] = ()


class Board:
    """Board holding the locked cells."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied.
        """

        if 0 <= row < self.height and 0 <= col < self.width:
            return bool(self.grid[row, col] == 0)
        return False

    def check_collision(self, cells: Cells, x: int, y: int) -> bool:
        """Return ``True`` if ``cells`` placed at origin ``(x, y)`` collide.

        ``cells`` are ``(dx, dy)`` offsets relative to the origin.  A cell
        collides when it lies left or right of the board, below the floor, or
        on an occupied cell.  Cells above the top row never collide on their
        own, so pieces may spawn and rotate partially above the board.
        """

        for dx, dy in cells:
            col = x + dx
            row = y + dy
            if col < 0 or col >= self.width or row >= self.height:
                return True
            if row >= 0 and self.grid[row, col] != 0:
                return True
        return False

    def collides(self, x: int, y: int) -> bool:
        """Single-cell collision predicate handed to renderers."""

        return self.check_collision(((0, 0),), x, y)

    def lock_piece(self, cells: Cells, x: int, y: int, color: int) -> None:
        """Write ``color`` into every in-bounds cell of the placed shape."""

        value = np.uint8(color)
        for dx, dy in cells:
            col = x + dx
            row = y + dy
            if 0 <= row < self.height and 0 <= col < self.width:
                self.grid[row, col] = value

    def lock_tetromino(self, tetromino: Tetromino) -> None:
        """Lock the tetromino's blocks into the board grid."""

        self.lock_piece(
            tetromino.cells(), tetromino.x, tetromino.y, PIECE_VALUES[tetromino.shape]
        )

    def clear_lines(self) -> LineClearResult:
        """Clear completed rows.

        All full rows are removed at once and the same number of empty rows is
        stacked on top, so the remaining rows keep their order.  The returned
        snapshots list the removed rows from the bottom up.
        """

        full_rows = np.all(self.grid != 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if not cleared:
            return LineClearResult(0)

        snapshots: List[ClearedRow] = [
            ClearedRow(int(row), tuple(int(v) for v in self.grid[row]))
            for row in np.flatnonzero(full_rows)[::-1]
        ]
        remaining = self.grid[~full_rows]
        new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
        self.grid = np.vstack((new_rows, remaining))
        return LineClearResult(cleared, tuple(snapshots))

    def reset(self) -> None:
        self.grid = create_empty_grid()

    def snapshot(self) -> Grid:
        """Return an independent copy of the grid for readers."""

        return self.grid.copy()
