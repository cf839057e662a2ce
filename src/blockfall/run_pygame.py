"""Simple pygame front-end for the engine.

This module provides a playable desktop version of the game.  It implements
the engine's renderer and frame scheduler on top of ``pygame`` and feeds
keyboard edges into :meth:`GameEngine.key_down` / :meth:`GameEngine.key_up`.
Press ``r`` to restart and close the window to quit.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Callable, Dict, Optional, Sequence
import asyncio
import itertools
import logging
import os

import pygame

from .board import ClearedRow, Grid, HEIGHT, WIDTH
from .engine import GameEngine
from .game_state import GameState
from .tetromino import Tetromino
from .utils import CELL_COLORS


LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the information panel to the right of the board
PANEL_WIDTH = 6 * CELL_SIZE
# Frames per second to run the game loop at
FPS = 60
# Duration of the line clear flash
LINE_CLEAR_MS = 300

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)
TEXT = (230, 230, 230)
FLASH = (255, 255, 255)


def _rgb(color: str) -> pygame.Color:
    return pygame.Color(color)


class FrameQueue:
    """Run frame callbacks once per loop iteration.

    Mirrors ``requestAnimationFrame``: callbacks requested while a batch runs
    are deferred to the next call of :meth:`run`.
    """

    def __init__(self) -> None:
        self._pending: Dict[int, Callable[[float], None]] = {}
        self._ids = itertools.count(1)

    def request_frame(self, callback: Callable[[float], None]) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def run(self, ts: float) -> None:
        batch, self._pending = self._pending, {}
        for callback in batch.values():
            callback(ts)


class PygameRenderer:
    """Renderer drawing the board, side panel and overlays.

    The ``draw_*`` calls only record what to show; :meth:`present` paints the
    latest recorded frame, so the window stays up to date while the engine is
    paused or over.
    """

    def __init__(self, screen: pygame.Surface, *, show_preview: bool = True) -> None:
        self.screen = screen
        self.show_preview = show_preview
        self.font = pygame.font.Font(None, 28)
        self._grid: Optional[Grid] = None
        self._active: Optional[Tetromino] = None
        self._ghost_y: Optional[int] = None
        self._state: Optional[GameState] = None
        self._next: Optional[Tetromino] = None
        self._game_over: Optional[int] = None
        self._paused = False
        self._flash_rows: Sequence[ClearedRow] = ()
        self._flash_started: Optional[int] = None
        self._flash_future: Optional[Future] = None

    # Renderer interface ----------------------------------------------
    def draw_board(
        self, grid: Grid, active: Optional[Tetromino], collides: Callable[[int, int], bool]
    ) -> None:
        self._grid = grid
        self._active = active
        self._ghost_y = self._landing_row(active, collides) if active else None

    def draw_ui(self, state: GameState) -> None:
        self._state = state

    def draw_next_piece(self, piece: Tetromino) -> None:
        if self.show_preview:
            self._next = piece

    def show_game_over(self, score: int) -> None:
        self._game_over = score

    def hide_game_over(self) -> None:
        self._game_over = None

    def show_pause(self) -> None:
        self._paused = True

    def hide_pause(self) -> None:
        self._paused = False

    def animate_line_clear(self, rows: Sequence[ClearedRow], count: int) -> Future:
        if self._flash_future is not None:
            self._flash_future.cancel()
        self._flash_rows = tuple(rows)
        self._flash_started = pygame.time.get_ticks()
        self._flash_future = Future()
        LOGGER.debug("Animating %d cleared row(s)", count)
        return self._flash_future

    # Drawing ---------------------------------------------------------
    @staticmethod
    def _landing_row(piece: Tetromino, collides: Callable[[int, int], bool]) -> int:
        y = piece.y
        while not any(collides(piece.x + dx, y + 1 + dy) for dx, dy in piece.cells()):
            y += 1
        return y

    def advance(self, now: int) -> None:
        """Finish the line clear flash once it has run its course."""

        if self._flash_future is None or self._flash_started is None:
            return
        if now - self._flash_started >= LINE_CLEAR_MS:
            future, self._flash_future = self._flash_future, None
            self._flash_rows = ()
            self._flash_started = None
            if not future.done():
                future.set_result(None)

    def _cell(self, x: int, y: int, color: pygame.Color, width: int = 0) -> None:
        if y < 0:
            return
        rect = pygame.Rect(x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE, CELL_SIZE)
        pygame.draw.rect(self.screen, color, rect, width)
        if not width:
            pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

    def _text(self, message: str, x: int, y: int) -> None:
        self.screen.blit(self.font.render(message, True, TEXT), (x, y))

    def present(self) -> None:
        self.screen.fill(BACKGROUND)
        if self._grid is not None:
            for r in range(self._grid.shape[0]):
                for c in range(self._grid.shape[1]):
                    value = int(self._grid[r, c])
                    if value:
                        self._cell(c, r, _rgb(CELL_COLORS[value]))
                    else:
                        rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
                        pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

        for row in self._flash_rows:
            for c in range(WIDTH):
                self._cell(c, row.row, FLASH)

        if self._active is not None:
            color = _rgb(self._active.color)
            if self._ghost_y is not None and self._ghost_y != self._active.y:
                for dx, dy in self._active.cells():
                    self._cell(self._active.x + dx, self._ghost_y + dy, color, 2)
            for x, y in self._active.blocks():
                self._cell(x, y, color)

        panel_x = WIDTH * CELL_SIZE + 10
        if self._state is not None:
            self._text(f"Score: {self._state.score}", panel_x, 10)
            self._text(f"Level: {self._state.level}", panel_x, 40)
            self._text(f"Lines: {self._state.lines}", panel_x, 70)
        if self._next is not None:
            self._text("Next:", panel_x, 110)
            color = _rgb(self._next.color)
            for dx, dy in self._next.cells():
                rect = pygame.Rect(
                    panel_x + dx * CELL_SIZE, 140 + dy * CELL_SIZE, CELL_SIZE, CELL_SIZE
                )
                pygame.draw.rect(self.screen, color, rect)
                pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

        if self._paused:
            self._text("PAUSED", panel_x, 260)
        if self._game_over is not None:
            self._text("GAME OVER", panel_x, 260)
            self._text(f"Final: {self._game_over}", panel_x, 290)
            self._text("Press R", panel_x, 320)
        pygame.display.flip()


class GameRunner:
    """Own the pygame window and drive the engine until the window closes."""

    def __init__(self, *, seed: Optional[int] = None, show_preview: bool = True) -> None:
        self._seed = seed
        self._show_preview = show_preview
        self._running = False
        self.engine: Optional[GameEngine] = None

    @property
    def running(self) -> bool:
        return self._running

    def _handle_event(self, event: pygame.event.Event, now: int) -> None:
        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN:
            key = pygame.key.name(event.key)
            if key == "r":
                self.engine.restart(now)
            else:
                self.engine.key_down(key, now)
        elif event.type == pygame.KEYUP:
            self.engine.key_up(pygame.key.name(event.key))

    async def run(self) -> None:
        # Ensure SDL/pygame binds to the visible canvas in the page when running on Web.
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_KEYBOARD_ELEMENT", "#canvas")
        pygame.init()
        screen = pygame.display.set_mode((WIDTH * CELL_SIZE + PANEL_WIDTH, HEIGHT * CELL_SIZE))
        pygame.display.set_caption("Blockfall")
        clock = pygame.time.Clock()

        renderer = PygameRenderer(screen, show_preview=self._show_preview)
        frames = FrameQueue()
        self.engine = GameEngine(renderer, frames, seed=self._seed)
        self.engine.start(pygame.time.get_ticks())

        self._running = True
        while self._running:
            clock.tick(FPS)
            now = pygame.time.get_ticks()
            for event in pygame.event.get():
                self._handle_event(event, now)
            frames.run(now)
            renderer.advance(now)
            renderer.present()
            # Yield to the host event loop to keep it responsive
            await asyncio.sleep(0)

        self.engine.stop()
        pygame.quit()
        LOGGER.info("Window closed")


def main(*, seed: Optional[int] = None, show_preview: bool = True) -> None:
    asyncio.run(GameRunner(seed=seed, show_preview=show_preview).run())


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
