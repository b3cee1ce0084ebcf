"""Torus Snake — real-time snake simulation core."""

from torus_snake.config import GameConfig
from torus_snake.directions import Direction, DirectionBuffer
from torus_snake.engine import GameSession, Phase, SessionSnapshot
from torus_snake.food import BoardFullError, FoodSpawner
from torus_snake.grid import Grid, Position, quantize
from torus_snake.hints import BendDirection, SegmentKind
from torus_snake.snake import Outcome, Segment, Snake

__all__ = [
    "BendDirection",
    "BoardFullError",
    "Direction",
    "DirectionBuffer",
    "FoodSpawner",
    "GameConfig",
    "GameSession",
    "Grid",
    "Outcome",
    "Phase",
    "Position",
    "Segment",
    "SegmentKind",
    "SessionSnapshot",
    "Snake",
    "quantize",
]
