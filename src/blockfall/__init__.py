"""Falling-block puzzle game simulation."""

from .board import Board, ClearedRow, LineClearResult
from .tetromino import (
    Tetromino,
    TetrominoType,
    create_piece,
    get_shape_coords,
    move_piece,
    rotate,
    shape_blocks,
)
from .piece_queue import PieceQueue
from .game_state import DropBonus, GameState, GameStatus
from .input_timer import Action, InputTimer
from .engine import GameEngine, LineClearHandle
from .utils import grid_to_text, render_grid

__all__ = [
    "Action",
    "Board",
    "ClearedRow",
    "DropBonus",
    "GameEngine",
    "GameState",
    "GameStatus",
    "InputTimer",
    "LineClearHandle",
    "LineClearResult",
    "PieceQueue",
    "Tetromino",
    "TetrominoType",
    "create_piece",
    "get_shape_coords",
    "grid_to_text",
    "move_piece",
    "render_grid",
    "rotate",
    "shape_blocks",
]
