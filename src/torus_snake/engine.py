"""Game session: tick loop, scoring, pacing and lifecycle."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from torus_snake.clock import AsyncioClock, Clock, TimerHandle
from torus_snake.config import GameConfig
from torus_snake.directions import Direction, DirectionBuffer
from torus_snake.food import BoardFullError, FoodSpawner
from torus_snake.grid import Grid, Position
from torus_snake.highscore import HighScoreStore, MemoryHighScoreStore
from torus_snake.snake import Outcome, Segment, Snake

logger = logging.getLogger(__name__)

Listener = Callable[["SessionSnapshot"], None]


class Phase(str, enum.Enum):
    """Lifecycle states for a session."""

    PAUSED = "paused"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a renderer needs, frozen at one point in time."""

    segments: tuple[Segment, ...]
    food: Position | None
    score: int
    high_score: int
    speed: float
    phase: Phase
    tick: int

    def to_dict(self) -> dict:
        """Return the snapshot as a serializable dict."""
        return {
            "tick": self.tick,
            "phase": self.phase.value,
            "score": self.score,
            "high_score": self.high_score,
            "speed": round(self.speed, 6),
            "food": list(self.food) if self.food is not None else None,
            "segments": [seg.to_dict() for seg in self.segments],
        }


class GameSession:
    """Single-player session owning the snake, food, buffer and timers.

    Input commands only queue directions, flip the phase or start/stop
    timers; the snake and food change exclusively inside :meth:`tick`.
    The session starts paused.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        clock: Clock | None = None,
        store: HighScoreStore | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.clock = clock if clock is not None else AsyncioClock()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.rng = rng if rng is not None else np.random.default_rng(
            self.config.seed,
        )
        self.grid = Grid(
            width=self.config.width,
            height=self.config.height,
            cell_size=self.config.cell_size,
        )
        self.spawner = FoodSpawner(
            self.grid, rng=self.rng, max_attempts=self.config.max_food_attempts,
        )
        self.buffer = DirectionBuffer(Direction.RIGHT)
        self.phase = Phase.PAUSED

        self._main_timer: TimerHandle | None = None
        self._fast_timer: TimerHandle | None = None
        self._listeners: list[Listener] = []
        self._reset()

    def _reset(self) -> None:
        """Restore snake, food, score, speed and buffer to their start values."""
        self.snake = Snake.initial(
            self.grid, self.config.initial_length, Direction.RIGHT,
        )
        self.buffer.reset(Direction.RIGHT)
        self.food: Position | None = self.spawner.place(self.snake.occupied())
        self.score = 0
        self.speed = self.config.initial_speed
        self.tick_count = 0
        self._feed_counter = 0
        self.high_score = self.store.read()

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    @property
    def tick_interval(self) -> float:
        return self.config.tick_interval(self.speed)

    @property
    def fast_forwarding(self) -> bool:
        return self._fast_timer is not None

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            segments=self.snake.segments,
            food=self.food,
            score=self.score,
            high_score=self.high_score,
            speed=self.speed,
            phase=self.phase,
            tick=self.tick_count,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with a snapshot after every change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self) -> Outcome | None:
        """Advance the game by one tick.

        Returns the move outcome, or ``None`` when the session is not
        playing and nothing happened.
        """
        if self.phase != Phase.PLAYING:
            return None

        direction = self.buffer.next()
        step = self.snake.advance(direction, self.food, self.grid)
        self.tick_count += 1

        if step.outcome == Outcome.COLLIDED:
            logger.debug(
                "Collision at %s heading %s.",
                self.snake.head.position, direction.name,
            )
            self._end_game()
            return step.outcome

        self.snake = step.snake
        if step.outcome == Outcome.ATE:
            self._on_food_eaten()
        if self.phase == Phase.PLAYING:
            self._notify()
        return step.outcome

    def _on_food_eaten(self) -> None:
        self.score += self.config.food_reward
        if self._feed_counter > self.config.speed_up_every:
            self.speed += self.config.speed_increment
            self._feed_counter = 0
            logger.info(
                "Speed increased to %.2f (tick every %.3fs).",
                self.speed, self.tick_interval,
            )
            if self._main_timer is not None:
                self._start_main_timer()
        else:
            self._feed_counter += 1

        try:
            self.food = self.spawner.place(self.snake.occupied())
        except BoardFullError:
            logger.info("Board full at score %d.", self.score)
            self.food = None
            self._end_game()

    def _end_game(self) -> None:
        """Stop all timers and settle the high score."""
        self.phase = Phase.GAME_OVER
        self._stop_timers()
        logger.info(
            "Game over at tick %d with score %d.", self.tick_count, self.score,
        )
        # Other sessions may share the store.
        self.high_score = max(self.high_score, self.store.read())
        if self.score > self.high_score:
            self.high_score = self.score
            self.store.write(self.score)
            logger.info("New high score: %d.", self.score)
        self._notify()

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _start_main_timer(self) -> None:
        if self._main_timer is not None:
            self._main_timer.cancel()
        self._main_timer = self.clock.call_every(self.tick_interval, self.tick)

    def _stop_timers(self) -> None:
        if self._main_timer is not None:
            self._main_timer.cancel()
            self._main_timer = None
        self.stop_fast_forward()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def on_direction(self, direction: Direction) -> bool:
        """Queue a direction change.

        Returns ``True`` when *direction* repeats the last queued one,
        meaning the player is holding it and fast-forward may start.
        """
        if self.phase != Phase.PLAYING:
            return False
        return self.buffer.push(direction)

    def start(self) -> None:
        """Start or resume ticking."""
        if self.phase == Phase.PLAYING:
            return
        if self.phase == Phase.GAME_OVER:
            self.play_again()
            return
        self.phase = Phase.PLAYING
        self._start_main_timer()
        logger.info("Session playing (speed %.2f).", self.speed)
        self._notify()

    def pause(self) -> None:
        if self.phase != Phase.PLAYING:
            return
        self.phase = Phase.PAUSED
        self._stop_timers()
        logger.info("Session paused at tick %d.", self.tick_count)
        self._notify()

    def toggle_pause(self) -> None:
        """Flip between playing and paused; no effect after game over."""
        if self.phase == Phase.PLAYING:
            self.pause()
        elif self.phase == Phase.PAUSED:
            self.start()

    def play_again(self) -> None:
        """Start a fresh round from the initial snake and a new food."""
        self._stop_timers()
        self._reset()
        self.phase = Phase.PLAYING
        self._start_main_timer()
        logger.info("New round started.")
        self._notify()

    def start_fast_forward(self, direction: Direction | None = None) -> None:
        """Tick at the fast-forward rate while a direction is held.

        *direction* is the held direction; it is only queued here when it
        is not already the last buffered entry.
        """
        if self.phase != Phase.PLAYING or self._fast_timer is not None:
            return
        if direction is not None:
            self.buffer.push(direction)
        self._fast_timer = self.clock.call_every(
            self.config.fast_forward_interval, self.tick,
        )
        logger.debug("Fast-forward started.")

    def stop_fast_forward(self) -> None:
        if self._fast_timer is None:
            return
        self._fast_timer.cancel()
        self._fast_timer = None
        logger.debug("Fast-forward stopped.")

    def close(self) -> None:
        """Cancel every timer and drop all listeners."""
        self._stop_timers()
        self._listeners.clear()
