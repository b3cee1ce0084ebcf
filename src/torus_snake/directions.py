"""Movement directions and the buffered direction-change queue."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterator


class Direction(enum.Enum):
    """Cardinal movement directions with (x_delta, y_delta) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def parse(cls, name: str) -> Direction | None:
        """Look up a direction by case-insensitive name, ``None`` if unknown."""
        return cls.__members__.get(name.strip().upper())


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class DirectionBuffer:
    """FIFO of pending direction changes, consumed one per tick.

    The buffer is never empty: once drained to a single entry that entry
    keeps being returned, so the last command persists. Consecutive
    entries are always distinct and never reverses of each other.
    """

    def __init__(self, initial: Direction = Direction.RIGHT) -> None:
        self._queue: deque[Direction] = deque([initial])

    @property
    def last(self) -> Direction:
        """The most recently queued direction."""
        return self._queue[-1]

    def push(self, direction: Direction) -> bool:
        """Queue a direction change.

        Returns ``True`` only when *direction* repeats the last queued
        entry, which callers use to start fast-forward. Reversals are
        dropped and also return ``False``.
        """
        last = self._queue[-1]
        if direction == last:
            return True
        if direction != last.opposite:
            self._queue.append(direction)
        return False

    def next(self) -> Direction:
        """Return the direction to commit this tick."""
        if len(self._queue) > 1:
            self._queue.popleft()
        return self._queue[0]

    def reset(self, direction: Direction = Direction.RIGHT) -> None:
        """Drop every pending entry and start over from *direction*."""
        self._queue.clear()
        self._queue.append(direction)

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[Direction]:
        return iter(list(self._queue))

    def __repr__(self) -> str:
        names = ", ".join(d.name for d in self._queue)
        return f"DirectionBuffer([{names}])"
