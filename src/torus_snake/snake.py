"""Snake representation and movement logic."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from torus_snake.directions import Direction
from torus_snake.grid import Position, quantize
from torus_snake.hints import BendDirection, SegmentKind, classify_bend, head_kind

if TYPE_CHECKING:
    from torus_snake.grid import Grid


def _new_id() -> str:
    return uuid.uuid4().hex


class Outcome(enum.Enum):
    """Result of advancing the snake by one tick."""

    MOVED = "moved"
    ATE = "ate"
    COLLIDED = "collided"


@dataclass(frozen=True)
class Segment:
    """One body element. Segments are never mutated once created."""

    position: Position
    kind: SegmentKind
    facing: Direction
    bend: bool = False
    bend_direction: BendDirection | None = None
    just_ate: bool = False
    id: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            object.__setattr__(self, "id", _new_id())

    def to_dict(self) -> dict:
        """Serialize segment state to a dictionary."""
        return {
            "id": self.id,
            "x": self.position.x,
            "y": self.position.y,
            "kind": self.kind.value,
            "facing": self.facing.name.lower(),
            "bend": self.bend,
            "bend_direction": (
                self.bend_direction.value if self.bend_direction else None
            ),
            "just_ate": self.just_ate,
        }


@dataclass(frozen=True)
class Step:
    """What one call to :meth:`Snake.advance` produced.

    ``snake`` is the chain after the move; on a collision it is the
    unchanged chain the move was attempted from.
    """

    outcome: Outcome
    snake: Snake


class Snake:
    """An immutable, head-first chain of segments.

    The head is ``segments[0]``; the tail is ``segments[-1]``. Every call to
    :meth:`advance` returns a new ``Snake`` and leaves this one untouched,
    so a renderer holding on to a snake never sees it change.
    """

    __slots__ = ("segments",)

    def __init__(self, segments: tuple[Segment, ...]) -> None:
        if len(segments) < 2:
            raise ValueError("Snake length must be at least 2.")
        self.segments = segments

    @classmethod
    def initial(
        cls,
        grid: Grid,
        length: int = 5,
        direction: Direction = Direction.RIGHT,
    ) -> Snake:
        """Build a straight snake with its head a quarter into the grid."""
        if length < 2:
            raise ValueError("Snake length must be at least 2.")
        start = Position(
            quantize(grid.width / 4, grid.cell_size),
            quantize(grid.height / 2, grid.cell_size),
        )
        return cls.from_positions(grid, start, direction, length)

    @classmethod
    def from_positions(
        cls,
        grid: Grid,
        head: Position,
        direction: Direction,
        length: int,
    ) -> Snake:
        """Lay out *length* segments behind *head*, against *direction*."""
        positions = [grid.wrap(head)]
        for _ in range(length - 1):
            positions.append(grid.step(positions[-1], direction.opposite))
        if len(set(positions)) != len(positions):
            raise ValueError("Initial snake does not fit the grid.")

        segments = []
        for i, pos in enumerate(positions):
            if i == 0:
                kind = SegmentKind.HEAD
            elif i == length - 1:
                kind = SegmentKind.TAIL
            else:
                kind = SegmentKind.BODY
            segments.append(Segment(position=pos, kind=kind, facing=direction))
        return cls(tuple(segments))

    @property
    def head(self) -> Segment:
        return self.segments[0]

    @property
    def tail(self) -> Segment:
        return self.segments[-1]

    @property
    def positions(self) -> list[Position]:
        """Segment positions, head first."""
        return [seg.position for seg in self.segments]

    def occupied(self) -> set[Position]:
        """Return the set of cells covered by the snake, head included."""
        return {seg.position for seg in self.segments}

    def occupies(self, position: Position) -> bool:
        """Check whether the snake occupies a given cell."""
        return any(seg.position == position for seg in self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def next_head(self, direction: Direction, grid: Grid) -> Position:
        """Compute the next head position without moving."""
        return grid.step(self.head.position, direction)

    def advance(
        self,
        direction: Direction,
        food: Position | None,
        grid: Grid,
    ) -> Step:
        """Move one cell along *direction*.

        The tail cell is excluded from the collision check because it is
        vacated this tick. When the new head lands on *food* the tail's
        removal is deferred instead, so the chain grows by one.
        """
        candidate = self.next_head(direction, grid)

        # --- self-collision check against the body that will remain ---
        if any(seg.position == candidate for seg in self.segments[:-1]):
            return Step(Outcome.COLLIDED, self)

        ate = candidate == food

        new_head = Segment(
            position=candidate,
            kind=head_kind(grid, candidate, direction, food),
            facing=direction,
            just_ate=ate,
        )

        old_head = self.head
        bend_direction = classify_bend(old_head.facing, direction)
        neck = replace(
            old_head,
            kind=SegmentKind.BODY,
            bend=bend_direction is not None,
            bend_direction=bend_direction,
        )

        chain = [new_head, neck, *self.segments[1:]]
        if not ate:
            chain.pop()
            predecessor = chain[-2]
            chain[-1] = replace(
                chain[-1],
                kind=SegmentKind.TAIL,
                facing=predecessor.facing,
                bend=False,
                bend_direction=None,
                just_ate=False,
            )

        outcome = Outcome.ATE if ate else Outcome.MOVED
        return Step(outcome, Snake(tuple(chain)))

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "segments": [seg.to_dict() for seg in self.segments],
            "length": len(self.segments),
        }
