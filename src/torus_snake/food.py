"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

import numpy as np

from torus_snake.grid import Position

if TYPE_CHECKING:
    from torus_snake.grid import Grid

logger = logging.getLogger(__name__)


class BoardFullError(RuntimeError):
    """Raised when every cell of the grid is covered by the snake."""


class FoodSpawner:
    """Picks random free cells for the food.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Sampling is rejection-based; occupancy is normally a small fraction
    of the grid, so a miss is rare. After ``max_attempts`` misses the
    spawner scans for free cells and picks one of them directly.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_attempts: int = 1000,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def random_cell(self) -> Position:
        """Draw a uniformly random cell, occupied or not."""
        col = int(self.rng.integers(self.grid.columns))
        row = int(self.rng.integers(self.grid.rows))
        return self.grid.cell_at(col, row)

    def place(self, occupied: Collection[Position]) -> Position:
        """Return a random cell that is not in *occupied*."""
        blocked = set(occupied)
        for _ in range(self.max_attempts):
            pos = self.random_cell()
            if pos not in blocked:
                return pos

        free = [pos for pos in self.grid.cells() if pos not in blocked]
        if not free:
            raise BoardFullError("No free cell left for food.")
        logger.debug(
            "Rejection sampling gave up after %d draws; %d free cells left.",
            self.max_attempts, len(free),
        )
        return free[int(self.rng.integers(len(free)))]
