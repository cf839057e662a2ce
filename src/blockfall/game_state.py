"""Score, level and play status for a game session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union
import logging


LOGGER = logging.getLogger(__name__)

# Points for clearing 0-4 lines at once, multiplied by the current level.
LINE_SCORES = {0: 0, 1: 40, 2: 100, 3: 300, 4: 1200}
LINES_PER_LEVEL = 10

BASE_FALL_INTERVAL_MS = 1000
FALL_INTERVAL_STEP_MS = 50
MIN_FALL_INTERVAL_MS = 100


class GameStatus(str, Enum):
    READY = "READY"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"


class DropBonus(str, Enum):
    """Flat bonus awarded for a player-driven drop step."""

    SOFT = "soft"
    HARD = "hard"


DROP_POINTS = {DropBonus.SOFT: 1, DropBonus.HARD: 2}


def fall_interval_ms(level: int) -> int:
    """Return the gravity tick period in milliseconds for ``level``.

    The interval shrinks by 50ms per level from one second at level 1 and
    bottoms out at 100ms from level 19 onwards.
    """

    interval = BASE_FALL_INTERVAL_MS - (level - 1) * FALL_INTERVAL_STEP_MS
    return max(MIN_FALL_INTERVAL_MS, interval)


@dataclass
class GameState:
    """Mutable counters and status for a game session."""

    score: int = 0
    level: int = 1
    lines: int = 0
    status: GameStatus = GameStatus.READY

    def set_status(self, status: Union[GameStatus, str]) -> None:
        """Switch to ``status``.

        Unknown targets are ignored and the current status is kept.
        """

        try:
            self.status = GameStatus(status)
        except ValueError:
            LOGGER.debug("Ignoring unknown status %r", status)

    def add_score(self, lines_cleared: int, drop: Optional[Union[DropBonus, str]] = None) -> None:
        """Award points for a line clear and/or a drop step.

        Line points are multiplied by the level before the clear is counted.
        Drop bonuses are flat.  Clearing lines may raise the level, which never
        goes down.
        """

        self.score += LINE_SCORES.get(lines_cleared, 0) * self.level
        if drop is not None:
            try:
                self.score += DROP_POINTS[DropBonus(drop)]
            except ValueError:
                LOGGER.debug("Ignoring unknown drop bonus %r", drop)

        if lines_cleared > 0:
            self.lines += lines_cleared
            self.level = max(self.level, 1 + self.lines // LINES_PER_LEVEL)

    def get_fall_interval(self) -> int:
        return fall_interval_ms(self.level)

    def reset(self) -> None:
        """Reset the counters and return to ``READY``."""

        self.score = 0
        self.level = 1
        self.lines = 0
        self.status = GameStatus.READY
