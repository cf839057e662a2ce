"""Key repeat timing (DAS/ARR).

:class:`InputTimer` turns raw key-down/key-up edges into discrete game
actions.  A newly pressed key fires its action straight away.  Movement and
soft drop keys that stay held fire again once the delayed auto shift (DAS)
has elapsed and then every auto repeat rate (ARR) interval.  The repeat
schedule is anchored on the original press time, so the cadence does not
drift with the polling rate.

The timer has no clock of its own; the engine advances it once per tick with
:meth:`InputTimer.update`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional


DAS_MS = 170
ARR_MS = 50


class Action(str, Enum):
    MOVE_LEFT = "MOVE_LEFT"
    MOVE_RIGHT = "MOVE_RIGHT"
    SOFT_DROP = "SOFT_DROP"
    HARD_DROP = "HARD_DROP"
    ROTATE = "ROTATE"
    PAUSE = "PAUSE"


REPEATABLE_ACTIONS = frozenset({Action.MOVE_LEFT, Action.MOVE_RIGHT, Action.SOFT_DROP})

# Keys are named the way ``pygame.key.name`` reports them.
DEFAULT_KEY_MAP: Dict[str, Action] = {
    "left": Action.MOVE_LEFT,
    "right": Action.MOVE_RIGHT,
    "down": Action.SOFT_DROP,
    "up": Action.ROTATE,
    "space": Action.HARD_DROP,
    "p": Action.PAUSE,
}


@dataclass
class KeyRepeat:
    """Repeat bookkeeping for one held key."""

    action: Action
    pressed_at: float
    next_repeat_at: float


class InputTimer:
    def __init__(
        self,
        key_map: Optional[Mapping[str, Action]] = None,
        *,
        das_ms: float = DAS_MS,
        arr_ms: float = ARR_MS,
    ) -> None:
        self.key_map: Dict[str, Action] = dict(DEFAULT_KEY_MAP if key_map is None else key_map)
        self.das_ms = das_ms
        self.arr_ms = arr_ms
        self._held: Dict[str, KeyRepeat] = {}

    def press(self, key: str, now: float) -> Optional[Action]:
        """Register a key-down edge and return the action to fire, if any.

        Unmapped keys and key-down events for keys that are already held
        (e.g. OS auto-repeat) produce nothing.
        """

        action = self.key_map.get(key)
        if action is None or key in self._held:
            return None
        self._held[key] = KeyRepeat(action, now, now + self.das_ms)
        return action

    def release(self, key: str) -> None:
        self._held.pop(key, None)

    def update(self, now: float) -> List[Action]:
        """Return the repeat actions due at ``now``.

        Each held repeatable key fires at most once per call.  When the call
        comes late the next slot is moved past ``now`` along the original
        schedule instead of firing a burst of catch-up repeats.
        """

        fired: List[Action] = []
        for repeat in self._held.values():
            if repeat.action not in REPEATABLE_ACTIONS:
                continue
            if now < repeat.next_repeat_at:
                continue
            fired.append(repeat.action)
            if self.arr_ms <= 0:
                repeat.next_repeat_at = now
                continue
            since_das = now - repeat.pressed_at - self.das_ms
            slot = int(since_das // self.arr_ms) + 1
            repeat.next_repeat_at = repeat.pressed_at + self.das_ms + slot * self.arr_ms
        return fired

    def held_keys(self) -> List[str]:
        return list(self._held)

    def clear(self) -> None:
        """Forget every held key."""

        self._held.clear()
