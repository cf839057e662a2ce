"""Tetromino definitions and movement proposals.

Pieces are immutable values.  Moving or rotating a piece never changes it in
place: :func:`move_piece` and :func:`rotate` propose a new position or
orientation, test it with a collision predicate and return either the new
piece or ``None`` when the proposal is rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

Offset = Tuple[int, int]  # (dx, dy)
RotationState = Tuple[Offset, ...]

# ``collides(cells, x, y)`` as provided by ``Board.check_collision``.
CollisionPredicate = Callable[[Sequence[Offset], int, int], bool]

# Spawn origin, roughly centred on a ten column board.
SPAWN_X = 3
SPAWN_Y = 0


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


# Rotation states in clockwise order.  Offsets are ``(dx, dy)`` within the
# piece's bounding box, listed row by row.
TETROMINO_SHAPES: Dict[TetrominoType, Tuple[RotationState, ...]] = {
    TetrominoType.I: (
        ((0, 1), (1, 1), (2, 1), (3, 1)),
        ((2, 0), (2, 1), (2, 2), (2, 3)),
    ),
    TetrominoType.O: (
        ((0, 0), (1, 0), (0, 1), (1, 1)),
    ),
    TetrominoType.T: (
        ((1, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (1, 2)),
        ((1, 0), (0, 1), (1, 1), (1, 2)),
    ),
    TetrominoType.S: (
        ((1, 0), (2, 0), (0, 1), (1, 1)),
        ((1, 0), (1, 1), (2, 1), (2, 2)),
    ),
    TetrominoType.Z: (
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((2, 0), (1, 1), (2, 1), (1, 2)),
    ),
    TetrominoType.J: (
        ((0, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (2, 0), (1, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (2, 2)),
        ((1, 0), (1, 1), (0, 2), (1, 2)),
    ),
    TetrominoType.L: (
        ((2, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (1, 2), (2, 2)),
        ((0, 1), (1, 1), (2, 1), (0, 2)),
        ((0, 0), (1, 0), (1, 1), (1, 2)),
    ),
}

SHAPE_COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00f0f0",
    TetrominoType.O: "#f0f000",
    TetrominoType.T: "#a000f0",
    TetrominoType.S: "#00f000",
    TetrominoType.Z: "#f00000",
    TetrominoType.J: "#0000f0",
    TetrominoType.L: "#f0a000",
}


def shape_blocks(shape: TetrominoType, rotation: int) -> RotationState:
    """Return the block offsets for ``shape`` at ``rotation``.

    Parameters
    ----------
    shape:
        The :class:`TetrominoType` to query.
    rotation:
        Index of the desired rotation state.  Values are wrapped so any integer
        is accepted.
    """

    states = TETROMINO_SHAPES[shape]
    return states[rotation % len(states)]


@dataclass(frozen=True)
class Tetromino:
    """A falling piece: its type, orientation and origin ``(x, y)``."""

    shape: TetrominoType
    rotation: int = 0
    x: int = SPAWN_X
    y: int = SPAWN_Y

    @property
    def states(self) -> Tuple[RotationState, ...]:
        return TETROMINO_SHAPES[self.shape]

    @property
    def color(self) -> str:
        return SHAPE_COLORS[self.shape]

    def cells(self) -> RotationState:
        """Return the relative offsets of the current rotation state."""

        return shape_blocks(self.shape, self.rotation)

    def blocks(self) -> List[Offset]:
        """Return the absolute ``(x, y)`` board cells covered by this piece."""

        return [(self.x + dx, self.y + dy) for dx, dy in self.cells()]


def create_piece(shape: TetrominoType) -> Tetromino:
    """Return a new ``shape`` piece in its spawn orientation and position."""

    return Tetromino(TetrominoType(shape), rotation=0, x=SPAWN_X, y=SPAWN_Y)


def get_shape_coords(piece: Tetromino) -> RotationState:
    return piece.cells()


def rotate(piece: Tetromino, collides: CollisionPredicate) -> Optional[Tetromino]:
    """Propose a clockwise rotation of ``piece`` in place.

    Returns the rotated piece, or ``None`` if the new orientation collides at
    the current origin.  No alternative offsets are tried.
    """

    candidate = replace(piece, rotation=(piece.rotation + 1) % len(piece.states))
    if collides(candidate.cells(), candidate.x, candidate.y):
        return None
    return candidate


def move_piece(
    piece: Tetromino, dx: int, dy: int, collides: CollisionPredicate
) -> Optional[Tetromino]:
    """Propose moving ``piece`` by ``(dx, dy)``; ``None`` if it would collide."""

    candidate = replace(piece, x=piece.x + dx, y=piece.y + dy)
    if collides(candidate.cells(), candidate.x, candidate.y):
        return None
    return candidate
