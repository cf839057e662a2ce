"""Game engine tying the board, piece stream, scoring and input together.

The engine is driven one tick at a time, either by calling :meth:`GameEngine.tick`
directly or through a frame scheduler (an analogue of the browser's
``requestAnimationFrame``).  Everything happens synchronously inside a tick
except the line clear animation: when rows are cleared the engine asks the
renderer to animate them and waits for the returned future to complete before
scoring the clear and spawning the next piece.  Restarting the engine cancels
that wait, and completions belonging to an earlier game are ignored.
"""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional, Protocol, Sequence, Tuple, Union
import logging

from .board import Board, ClearedRow, Grid
from .game_state import DropBonus, GameState, GameStatus
from .input_timer import Action, InputTimer
from .piece_queue import PieceQueue
from .tetromino import Tetromino, move_piece, rotate


LOGGER = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class Renderer(Protocol):
    """Output surface consulted by the engine.

    Every method is optional; the engine skips any the renderer lacks.
    """

    def draw_board(
        self, grid: Grid, active: Optional[Tetromino], collides: Callable[[int, int], bool]
    ) -> None: ...

    def draw_ui(self, state: GameState) -> None: ...

    def draw_next_piece(self, piece: Tetromino) -> None: ...

    def show_game_over(self, score: int) -> None: ...

    def hide_game_over(self) -> None: ...

    def show_pause(self) -> None: ...

    def hide_pause(self) -> None: ...

    def animate_line_clear(self, rows: Sequence[ClearedRow], count: int) -> Optional[Future]: ...


class FrameScheduler(Protocol):
    def request_frame(self, callback: FrameCallback) -> Any: ...

    def cancel_frame(self, handle: Any) -> None: ...


@dataclass(eq=False)
class LineClearHandle:
    """Pending line clear awaiting its animation."""

    generation: int
    count: int
    rows: Tuple[ClearedRow, ...]
    future: Optional[Future] = None
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True
        if self.future is not None:
            self.future.cancel()


class GameEngine:
    """Run a game session on top of an optional renderer and scheduler."""

    def __init__(
        self,
        renderer: Optional[Renderer] = None,
        scheduler: Optional[FrameScheduler] = None,
        *,
        seed: Optional[int] = None,
        input_timer: Optional[InputTimer] = None,
    ) -> None:
        self.board = Board()
        self.queue = PieceQueue(seed)
        self.state = GameState()
        self.input = input_timer or InputTimer()
        self.renderer = renderer
        self.scheduler = scheduler

        self.active: Optional[Tetromino] = None
        self.running = False
        self.generation = 0
        self.fall_accum = 0.0
        self.last_ts: Optional[float] = None
        self.frame_handle: Any = None
        self.pending_clear: Optional[LineClearHandle] = None

    # Lifecycle --------------------------------------------------------
    def start(self, now: float = 0.0) -> None:
        """Reset every component and begin a new game."""

        self.board.reset()
        self.queue.reset()
        self.state.reset()
        self.input.clear()
        self.active = None
        self.pending_clear = None
        self._notify("hide_game_over")
        self._notify("hide_pause")

        self.state.set_status(GameStatus.PLAYING)
        self.running = True
        self.fall_accum = 0.0
        self.last_ts = now
        LOGGER.info("Game started")
        self._spawn_next()
        self._schedule_frame()

    def restart(self, now: float = 0.0) -> None:
        """Abandon the current game and start a fresh one."""

        self._cancel_frame()
        if self.pending_clear is not None:
            self.pending_clear.cancel()
            self.pending_clear = None
        self.generation += 1
        LOGGER.info("Restarting (generation %d)", self.generation)
        self.start(now)

    def stop(self) -> None:
        self.running = False
        self._cancel_frame()

    # Frame loop -------------------------------------------------------
    def _schedule_frame(self) -> None:
        if self.scheduler is None or not self.running:
            return
        generation = self.generation
        self.frame_handle = self.scheduler.request_frame(
            lambda ts: self._on_frame(ts, generation)
        )

    def _cancel_frame(self) -> None:
        if self.scheduler is not None and self.frame_handle is not None:
            self.scheduler.cancel_frame(self.frame_handle)
        self.frame_handle = None

    def _on_frame(self, ts: float, generation: int) -> None:
        if generation != self.generation:
            return
        self.frame_handle = None
        self.tick(ts)
        # A restart during the tick has already scheduled its own frame.
        if generation == self.generation and self.frame_handle is None:
            self._schedule_frame()

    def tick(self, now: float) -> None:
        """Advance the simulation to ``now`` (milliseconds) and render."""

        if not self.running:
            return
        elapsed = 0.0 if self.last_ts is None else now - self.last_ts
        self.last_ts = now
        self.update(elapsed, now)
        self.render()

    def update(self, elapsed: float, now: float) -> None:
        """Apply key repeats and gravity for ``elapsed`` milliseconds."""

        if self.state.status is not GameStatus.PLAYING:
            return

        for action in self.input.update(now):
            self.handle_input(action)

        if self.pending_clear is not None or self.active is None:
            return
        if self.state.status is not GameStatus.PLAYING:
            return

        self.fall_accum += elapsed
        if self.fall_accum >= self.state.get_fall_interval():
            if not self._try_move(0, 1):
                self._lock_active()
            self.fall_accum = 0.0

    # Input ------------------------------------------------------------
    def key_down(self, key: str, now: float) -> None:
        action = self.input.press(key, now)
        if action is not None:
            self.handle_input(action)

    def key_up(self, key: str) -> None:
        self.input.release(key)

    def handle_input(self, action: Union[Action, str]) -> None:
        """Apply a single game action.

        Piece actions only take effect while playing.  ``PAUSE`` toggles
        between playing and paused and is ignored in any other status.
        """

        try:
            action = Action(action)
        except ValueError:
            LOGGER.debug("Ignoring unknown action %r", action)
            return

        status = self.state.status
        if status is GameStatus.PAUSED:
            if action is Action.PAUSE:
                self.resume()
            return
        if status is not GameStatus.PLAYING:
            return

        if action is Action.PAUSE:
            self.pause()
        elif self.active is None:
            return
        elif action is Action.MOVE_LEFT:
            self._try_move(-1, 0)
        elif action is Action.MOVE_RIGHT:
            self._try_move(1, 0)
        elif action is Action.SOFT_DROP:
            if self._try_move(0, 1):
                self.state.add_score(0, DropBonus.SOFT)
        elif action is Action.HARD_DROP:
            self.hard_drop()
        elif action is Action.ROTATE:
            self._try_rotate()

    def pause(self) -> None:
        self.state.set_status(GameStatus.PAUSED)
        self._notify("show_pause")
        LOGGER.info("Paused")

    def resume(self) -> None:
        self.state.set_status(GameStatus.PLAYING)
        self._notify("hide_pause")
        self.last_ts = None
        self.fall_accum = 0.0
        LOGGER.info("Resumed")

    # Piece handling ---------------------------------------------------
    def _try_move(self, dx: int, dy: int) -> bool:
        if self.active is None:
            return False
        moved = move_piece(self.active, dx, dy, self.board.check_collision)
        if moved is None:
            return False
        self.active = moved
        return True

    def _try_rotate(self) -> bool:
        if self.active is None:
            return False
        rotated = rotate(self.active, self.board.check_collision)
        if rotated is None:
            return False
        self.active = rotated
        return True

    def hard_drop(self) -> int:
        """Drop the active piece as far as it goes and lock it.

        Returns the number of rows descended; each row is worth two points.
        """

        dropped = 0
        while self._try_move(0, 1):
            dropped += 1
            self.state.add_score(0, DropBonus.HARD)
        self._lock_active()
        return dropped

    def _lock_active(self) -> None:
        """Lock the active piece, clear rows and continue with the next piece."""

        piece = self.active
        if piece is None:
            return
        self.board.lock_tetromino(piece)
        self.active = None

        result = self.board.clear_lines()
        if not result.count:
            self._spawn_next()
            return

        LOGGER.debug("Cleared %d line(s)", result.count)
        handle = LineClearHandle(self.generation, result.count, result.rows)
        self.pending_clear = handle
        signal = self._notify("animate_line_clear", result.rows, result.count)
        if signal is None:
            self.complete_line_clear(handle)
            return
        handle.future = signal
        signal.add_done_callback(lambda _future: self.complete_line_clear(handle))

    def complete_line_clear(self, handle: LineClearHandle) -> bool:
        """Score a finished line clear and spawn the next piece.

        Completions for cancelled handles or for handles issued before the
        last restart are ignored.  Returns ``True`` if the game resumed.
        """

        if handle.cancelled or handle is not self.pending_clear or handle.generation != self.generation:
            LOGGER.debug("Ignoring stale line clear completion (generation %d)", handle.generation)
            return False
        self.pending_clear = None
        self.state.add_score(handle.count)
        LOGGER.debug("Score %d, lines %d, level %d", self.state.score, self.state.lines, self.state.level)
        self._spawn_next()
        return True

    def _spawn_next(self) -> None:
        piece = self.queue.get_next()
        self.active = piece
        if self.board.check_collision(piece.cells(), piece.x, piece.y):
            self._game_over()

    def _game_over(self) -> None:
        self.state.set_status(GameStatus.GAME_OVER)
        self.running = False
        self._cancel_frame()
        self._notify("show_game_over", self.state.score)
        LOGGER.info("Game over. Score: %d", self.state.score)

    # Output -----------------------------------------------------------
    def _notify(self, method: str, *args: Any) -> Any:
        if self.renderer is None:
            return None
        func = getattr(self.renderer, method, None)
        if func is None:
            return None
        return func(*args)

    def render(self) -> None:
        """Hand the renderer a consistent snapshot of the game."""

        if self.renderer is None:
            return
        self._notify("draw_board", self.board.snapshot(), self.active, self.board.collides)
        self._notify("draw_ui", replace(self.state))
        self._notify("draw_next_piece", self.queue.peek())
