"""Tests for the input controller."""

import pytest

from torus_snake.clock import ManualClock
from torus_snake.config import GameConfig
from torus_snake.controls import InputController, swipe_direction
from torus_snake.directions import Direction
from torus_snake.engine import GameSession, Phase
from torus_snake.grid import Position


@pytest.fixture()
def session():
    s = GameSession(config=GameConfig(width=400, height=300, seed=0), clock=ManualClock())
    s.food = Position(0, 0)
    return s


@pytest.fixture()
def controller(session):
    return InputController(session)


class TestSwipeDirection:
    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            ((100, 100), (40, 110), Direction.LEFT),
            ((100, 100), (160, 90), Direction.RIGHT),
            ((100, 100), (95, 20), Direction.UP),
            ((100, 100), (105, 180), Direction.DOWN),
        ],
    )
    def test_dominant_axis(self, start, end, expected):
        assert swipe_direction(start, end) == expected

    def test_zero_length_is_ignored(self):
        assert swipe_direction((50, 50), (50, 50)) is None


class TestKeys:
    def test_space_toggles_pause(self, controller, session):
        controller.key_down(" ")
        assert session.phase == Phase.PLAYING
        controller.key_down(" ")
        assert session.phase == Phase.PAUSED

    def test_arrow_queues_turn(self, controller, session):
        session.start()
        controller.key_down("ArrowUp")
        assert session.buffer.last == Direction.UP
        assert controller.held_key is None
        assert not session.fast_forwarding

    def test_unknown_key_ignored(self, controller, session):
        session.start()
        controller.key_down("q")
        assert list(session.buffer) == [Direction.RIGHT]

    def test_holding_current_direction_fast_forwards(self, controller, session):
        session.start()
        controller.key_down("ArrowRight")
        assert controller.held_key == "ArrowRight"
        assert session.fast_forwarding
        controller.key_up("ArrowLeft")
        assert session.fast_forwarding
        controller.key_up("ArrowRight")
        assert not session.fast_forwarding

    def test_reverse_key_does_not_fast_forward(self, controller, session):
        session.start()
        controller.key_down("ArrowLeft")
        assert not session.fast_forwarding
        assert list(session.buffer) == [Direction.RIGHT]

    def test_restart_only_after_game_over(self, controller, session):
        session.start()
        session.tick()
        controller.key_down("Enter")
        assert session.tick_count == 1

        session.pause()
        session.phase = Phase.GAME_OVER
        controller.key_down("Enter")
        assert session.phase == Phase.PLAYING
        assert session.tick_count == 0

    def test_directions_ignored_while_paused(self, controller, session):
        controller.key_down("ArrowUp")
        assert list(session.buffer) == [Direction.RIGHT]


class TestTouch:
    def test_swipe_turns(self, controller, session):
        session.start()
        assert controller.swipe((100, 100), (100, 20)) == Direction.UP
        assert session.buffer.last == Direction.UP

    def test_same_direction_swipe_fast_forwards_until_touch_end(self, controller, session):
        session.start()
        controller.swipe((10, 100), (200, 100))
        assert session.fast_forwarding
        controller.touch_end()
        assert not session.fast_forwarding

    def test_tap_is_ignored(self, controller, session):
        session.start()
        assert controller.swipe((30, 30), (30, 30)) is None
        assert list(session.buffer) == [Direction.RIGHT]
