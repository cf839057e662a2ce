"""7-bag piece randomizer."""

from __future__ import annotations

from typing import List, Optional
import random

from .tetromino import Tetromino, TetrominoType, create_piece


class PieceQueue:
    """Stream of pieces drawn from shuffled bags of all seven types.

    Each bag holds every :class:`TetrominoType` exactly once, so any seven
    consecutive draws starting at a bag boundary contain each type once.  The
    upcoming piece is prepared ahead of time so it can be previewed with
    :meth:`peek`.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)
        self._bag: List[TetrominoType] = []
        self._next: Optional[Tetromino] = None
        self._fill_bag()
        self._prepare_next()

    @property
    def bag(self) -> List[TetrominoType]:
        """Types still waiting in the current bag, in draw order."""

        return list(self._bag)

    def _fill_bag(self) -> None:
        self._bag = list(TetrominoType)
        self._rng.shuffle(self._bag)

    def _prepare_next(self) -> None:
        if not self._bag:
            self._fill_bag()
        self._next = create_piece(self._bag[0])

    def get_next(self) -> Tetromino:
        """Return the prepared piece and prepare the one after it."""

        if not self._bag:
            self._fill_bag()
        self._bag.pop(0)
        piece = self._next
        self._prepare_next()
        return piece

    def peek(self) -> Tetromino:
        """Return the upcoming piece without consuming it."""

        return self._next

    def reset(self, seed: Optional[int] = None) -> None:
        """Discard the current bag and start over with a fresh one."""

        if seed is not None:
            self._rng.seed(seed)
        self._bag = []
        self._fill_bag()
        self._prepare_next()
