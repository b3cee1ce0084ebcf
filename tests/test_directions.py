"""Tests for directions and the DirectionBuffer."""

import pytest

from torus_snake.directions import Direction, DirectionBuffer


class TestDirection:
    def test_opposites(self):
        assert Direction.UP.opposite == Direction.DOWN
        assert Direction.DOWN.opposite == Direction.UP
        assert Direction.LEFT.opposite == Direction.RIGHT
        assert Direction.RIGHT.opposite == Direction.LEFT

    def test_parse(self):
        assert Direction.parse("up") == Direction.UP
        assert Direction.parse(" Right ") == Direction.RIGHT
        assert Direction.parse("sideways") is None


class TestPush:
    def test_reverse_rejected(self):
        buf = DirectionBuffer(Direction.RIGHT)
        assert buf.push(Direction.LEFT) is False
        assert list(buf) == [Direction.RIGHT]

    def test_same_direction_reports_repeat(self):
        buf = DirectionBuffer(Direction.RIGHT)
        assert buf.push(Direction.RIGHT) is True
        assert len(buf) == 1

    def test_turn_appended(self):
        buf = DirectionBuffer(Direction.RIGHT)
        assert buf.push(Direction.UP) is False
        assert list(buf) == [Direction.RIGHT, Direction.UP]
        assert buf.last == Direction.UP

    def test_reverse_checked_against_last_entry(self):
        buf = DirectionBuffer(Direction.RIGHT)
        buf.push(Direction.UP)
        # LEFT reverses the committed RIGHT but not the queued UP.
        buf.push(Direction.LEFT)
        assert list(buf) == [Direction.RIGHT, Direction.UP, Direction.LEFT]
        buf.push(Direction.RIGHT)
        assert buf.last == Direction.LEFT

    def test_no_consecutive_reversals_after_many_pushes(self):
        buf = DirectionBuffer(Direction.RIGHT)
        sequence = [
            Direction.LEFT, Direction.UP, Direction.DOWN, Direction.UP,
            Direction.LEFT, Direction.RIGHT, Direction.DOWN, Direction.DOWN,
        ]
        for d in sequence:
            buf.push(d)
        entries = list(buf)
        for prev, cur in zip(entries, entries[1:]):
            assert cur != prev
            assert cur != prev.opposite


class TestNext:
    def test_single_entry_persists(self):
        buf = DirectionBuffer(Direction.DOWN)
        assert buf.next() == Direction.DOWN
        assert buf.next() == Direction.DOWN
        assert len(buf) == 1

    def test_changes_applied_in_order_one_per_tick(self):
        buf = DirectionBuffer(Direction.RIGHT)
        buf.push(Direction.UP)
        buf.push(Direction.LEFT)
        buf.push(Direction.DOWN)
        assert buf.next() == Direction.UP
        assert buf.next() == Direction.LEFT
        assert buf.next() == Direction.DOWN
        assert buf.next() == Direction.DOWN
        assert len(buf) == 1

    def test_reset(self):
        buf = DirectionBuffer(Direction.RIGHT)
        buf.push(Direction.UP)
        buf.reset(Direction.LEFT)
        assert list(buf) == [Direction.LEFT]

    @pytest.mark.parametrize("initial", list(Direction))
    def test_never_empty(self, initial):
        buf = DirectionBuffer(initial)
        for _ in range(3):
            buf.next()
        assert len(buf) == 1
