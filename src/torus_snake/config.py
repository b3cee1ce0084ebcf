"""Game tuning configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Grid size, scoring and pacing for a session.

    Supports JSON serialization so a tuned setup can be shared.
    """

    # Grid
    width: int = 800
    height: int = 600
    cell_size: int = 20

    # Snake
    initial_length: int = 5

    # Scoring
    food_reward: int = 100
    speed_up_every: int = 4
    speed_increment: float = 0.3

    # Pacing (seconds)
    initial_speed: float = 1.0
    base_interval: float = 1.0
    interval_damping: float = 0.8
    fast_forward_interval: float = 0.1

    # Food placement
    max_food_attempts: int = 1000

    seed: int | None = None
    high_score_path: str | None = None

    def __post_init__(self) -> None:
        if self.cell_size < 1:
            raise ValueError("cell_size must be at least 1.")
        if self.initial_length < 2:
            raise ValueError("initial_length must be at least 2.")
        if self.food_reward < 0:
            raise ValueError("food_reward must be >= 0.")
        if self.speed_up_every < 0:
            raise ValueError("speed_up_every must be >= 0.")
        if self.initial_speed <= 0:
            raise ValueError("initial_speed must be positive.")
        if self.base_interval <= 0 or self.interval_damping <= 0:
            raise ValueError("base_interval and interval_damping must be positive.")
        if self.fast_forward_interval <= 0:
            raise ValueError("fast_forward_interval must be positive.")

    def tick_interval(self, speed: float) -> float:
        """Seconds between ticks at the given speed multiplier."""
        return self.base_interval / speed * self.interval_damping

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
