"""Tests for segment render hints."""

import pytest

from torus_snake.directions import Direction
from torus_snake.grid import Grid, Position
from torus_snake.hints import BendDirection, SegmentKind, classify_bend, head_kind

UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT


class TestClassifyBend:
    @pytest.mark.parametrize(
        ("old", "new"), [(RIGHT, UP), (UP, LEFT), (LEFT, DOWN), (DOWN, RIGHT)],
    )
    def test_inward_turns(self, old, new):
        assert classify_bend(old, new) == BendDirection.INWARD

    @pytest.mark.parametrize(
        ("old", "new"), [(RIGHT, DOWN), (DOWN, LEFT), (LEFT, UP), (UP, RIGHT)],
    )
    def test_outward_turns(self, old, new):
        assert classify_bend(old, new) == BendDirection.OUTWARD

    def test_straight_is_not_a_bend(self):
        for d in Direction:
            assert classify_bend(d, d) is None


class TestHeadKind:
    def test_open_mouth_when_food_ahead(self):
        grid = Grid(width=200, height=200)
        kind = head_kind(grid, Position(40, 40), DOWN, Position(40, 60))
        assert kind == SegmentKind.OPEN_MOUTH

    def test_closed_otherwise(self):
        grid = Grid(width=200, height=200)
        assert head_kind(grid, Position(40, 40), DOWN, Position(60, 60)) == SegmentKind.HEAD
        assert head_kind(grid, Position(40, 40), DOWN, None) == SegmentKind.HEAD
