"""High-score persistence."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class HighScoreStore(ABC):
    """Interface for reading and writing the single persisted high score."""

    @abstractmethod
    def read(self) -> int:
        ...

    @abstractmethod
    def write(self, score: int) -> None:
        ...


class MemoryHighScoreStore(HighScoreStore):
    """Keeps the high score for the lifetime of the process only."""

    def __init__(self, initial: int = 0) -> None:
        self.value = initial
        self.writes = 0

    def read(self) -> int:
        return self.value

    def write(self, score: int) -> None:
        self.value = score
        self.writes += 1


class FileHighScoreStore(HighScoreStore):
    """Stores the high score as a bare integer in a text file.

    A missing or unreadable file reads as 0, and a failed write is logged
    rather than raised, so storage trouble never ends a session.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read(self) -> int:
        try:
            text = self.path.read_text(encoding="utf-8")
            return max(int(text.strip() or "0"), 0)
        except FileNotFoundError:
            return 0
        except (OSError, ValueError) as exc:
            logger.warning(
                "Could not read high score from %s (%s); using 0.",
                self.path, exc,
            )
            return 0

    def write(self, score: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(str(score), encoding="utf-8")
        except OSError as exc:
            logger.warning(
                "Could not save high score to %s: %s", self.path, exc,
            )
