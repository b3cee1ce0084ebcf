"""Toroidal, cell-quantized grid geometry for the snake game."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from torus_snake.snake import Direction

DEFAULT_CELL_SIZE = 20


class Position(NamedTuple):
    """Cell-aligned screen coordinate; ``y`` grows downward."""

    x: int
    y: int


def quantize(raw: float, cell_size: int = DEFAULT_CELL_SIZE) -> int:
    """Round *raw* down to the nearest multiple of *cell_size*."""
    return int(raw // cell_size) * cell_size


class Grid:
    """Fixed-size playing field whose edges wrap around.

    Coordinates are in screen units (multiples of ``cell_size``), not cell
    indices, so a position can be handed straight to a renderer.
    """

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        cell_size: int = DEFAULT_CELL_SIZE,
    ) -> None:
        if cell_size < 1:
            raise ValueError("cell_size must be at least 1.")
        self.cell_size = cell_size
        self.width = quantize(width, cell_size)
        self.height = quantize(height, cell_size)
        if self.columns < 4 or self.rows < 4:
            raise ValueError("Grid dimensions must be at least 4×4 cells.")

    @classmethod
    def from_viewport(
        cls,
        width: float,
        height: float,
        cell_size: int = DEFAULT_CELL_SIZE,
        reserved_height: int = 0,
    ) -> Grid:
        """Derive a grid once from raw viewport dimensions."""
        return cls(
            width=quantize(width, cell_size),
            height=quantize(height, cell_size) - reserved_height,
            cell_size=cell_size,
        )

    @property
    def columns(self) -> int:
        return self.width // self.cell_size

    @property
    def rows(self) -> int:
        return self.height // self.cell_size

    def in_bounds(self, position: Position) -> bool:
        """Check whether a coordinate lies on a cell of the grid."""
        x, y = position
        return (
            0 <= x < self.width
            and 0 <= y < self.height
            and x % self.cell_size == 0
            and y % self.cell_size == 0
        )

    def wrap(self, position: Position) -> Position:
        """Move coordinates that left the grid onto the opposite edge."""
        x, y = position
        if y < 0:
            y = self.height - self.cell_size
        if y + self.cell_size > self.height:
            y = 0
        if x + self.cell_size > self.width:
            x = 0
        if x < 0:
            x = self.width - self.cell_size
        return Position(x, y)

    def step(self, position: Position, direction: Direction) -> Position:
        """Return the wrapped cell one step from *position* along *direction*."""
        dx, dy = direction.value
        x, y = position
        return self.wrap(
            Position(x + dx * self.cell_size, y + dy * self.cell_size),
        )

    def cell_at(self, column: int, row: int) -> Position:
        """Convert cell indices to a screen coordinate."""
        return Position(column * self.cell_size, row * self.cell_size)

    def cells(self) -> list[Position]:
        """Return every cell position, row by row."""
        return [
            self.cell_at(col, row)
            for row in range(self.rows)
            for col in range(self.columns)
        ]

    def to_dict(self) -> dict:
        """Serialize grid geometry to a dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "cell_size": self.cell_size,
        }
