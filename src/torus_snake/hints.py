"""Render hints attached to snake segments.

Nothing in here affects collision, growth or scoring; the values only tell
a renderer which sprite to draw for a segment.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from torus_snake.directions import Direction

if TYPE_CHECKING:
    from torus_snake.grid import Grid, Position


class SegmentKind(str, enum.Enum):
    """Sprite shown for a segment."""

    HEAD = "head"
    OPEN_MOUTH = "open-mouth"
    BODY = "body"
    TAIL = "tail"


class BendDirection(str, enum.Enum):
    """Which way a body segment curls at a turn."""

    INWARD = "inward"
    OUTWARD = "outward"


# Counter-clockwise turns on screen.
_INWARD_TURNS: frozenset[tuple[Direction, Direction]] = frozenset({
    (Direction.RIGHT, Direction.UP),
    (Direction.UP, Direction.LEFT),
    (Direction.LEFT, Direction.DOWN),
    (Direction.DOWN, Direction.RIGHT),
})


def classify_bend(old: Direction, new: Direction) -> BendDirection | None:
    """Classify a turn from *old* to *new*, ``None`` when going straight."""
    if old == new:
        return None
    if (old, new) in _INWARD_TURNS:
        return BendDirection.INWARD
    return BendDirection.OUTWARD


def head_kind(
    grid: Grid,
    head: Position,
    direction: Direction,
    food: Position | None,
) -> SegmentKind:
    """Open the mouth when the food sits one cell ahead of the new head."""
    if food is not None and grid.step(head, direction) == food:
        return SegmentKind.OPEN_MOUTH
    return SegmentKind.HEAD
