"""Translate raw key and touch events into session commands."""

from __future__ import annotations

import logging

from torus_snake.directions import Direction
from torus_snake.engine import GameSession, Phase

logger = logging.getLogger(__name__)

KEY_DIRECTIONS: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}

PAUSE_KEYS = frozenset({" ", "p", "Escape"})
RESTART_KEYS = frozenset({"Enter", "r"})


def swipe_direction(
    start: tuple[float, float], end: tuple[float, float],
) -> Direction | None:
    """Return the dominant direction of a swipe, ``None`` for a tap."""
    x_diff = start[0] - end[0]
    y_diff = start[1] - end[1]
    if x_diff == 0 and y_diff == 0:
        return None
    if abs(x_diff) > abs(y_diff):
        return Direction.LEFT if x_diff > 0 else Direction.RIGHT
    return Direction.UP if y_diff > 0 else Direction.DOWN


class InputController:
    """Stateful adapter between an input device and a :class:`GameSession`.

    Pressing or swiping the direction the snake is already committed to
    counts as a hold and starts fast-forward until the key is released or
    the touch ends.
    """

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self.held_key: str | None = None

    def key_down(self, key: str) -> None:
        if key in PAUSE_KEYS:
            self.session.toggle_pause()
            return
        if key in RESTART_KEYS:
            if self.session.phase == Phase.GAME_OVER:
                self.session.play_again()
            return

        direction = KEY_DIRECTIONS.get(key)
        if direction is None:
            return
        if self.session.on_direction(direction):
            self.held_key = key
            self.session.start_fast_forward(direction)
        else:
            self.held_key = None

    def key_up(self, key: str) -> None:
        if self.held_key is not None and key == self.held_key:
            self.held_key = None
            self.session.stop_fast_forward()

    def swipe(
        self, start: tuple[float, float], end: tuple[float, float],
    ) -> Direction | None:
        """Apply a swipe gesture and return the direction it mapped to."""
        direction = swipe_direction(start, end)
        if direction is None:
            logger.debug("Ignoring zero-length swipe at %s.", start)
            return None
        if self.session.on_direction(direction):
            self.session.start_fast_forward(direction)
        return direction

    def touch_end(self) -> None:
        self.session.stop_fast_forward()
