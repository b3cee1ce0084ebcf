"""In-memory session registry and per-connection state fan-out."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from torus_snake.config import GameConfig
from torus_snake.engine import GameSession, Phase, SessionSnapshot
from torus_snake.highscore import HighScoreStore, MemoryHighScoreStore
from torus_snake.server.models import SessionSummary

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


def encode_snapshot(snapshot: SessionSnapshot) -> str:
    """Compact JSON for the wire."""
    return json.dumps(snapshot.to_dict(), separators=(",", ":"))


def offer_latest(queue: asyncio.Queue[str], payload: str) -> None:
    """Put *payload* on a one-slot queue, dropping an unsent older snapshot."""
    if queue.full():
        try:
            queue.get_nowait()
        except asyncio.QueueEmpty:
            pass
    queue.put_nowait(payload)


@dataclass
class SessionInstance:
    """A hosted session plus the queues of its connected viewers."""

    session_id: str
    session: GameSession
    viewers: list[asyncio.Queue[str]] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    _unsubscribe: Callable[[], None] | None = field(default=None, repr=False)

    def summary(self) -> SessionSummary:
        s = self.session
        return SessionSummary(
            session_id=self.session_id,
            phase=s.phase,
            score=s.score,
            high_score=s.high_score,
            speed=s.speed,
            length=len(s.snake),
        )

    def attach(self) -> asyncio.Queue[str]:
        """Register a viewer queue primed with the current snapshot."""
        # Each message is a full snapshot, so only the newest one matters.
        queue: asyncio.Queue[str] = asyncio.Queue(maxsize=1)
        queue.put_nowait(encode_snapshot(self.session.snapshot()))
        self.viewers.append(queue)
        return queue

    def detach(self, queue: asyncio.Queue[str]) -> None:
        if queue in self.viewers:
            self.viewers.remove(queue)

    def _fan_out(self, snapshot: SessionSnapshot) -> None:
        payload = encode_snapshot(snapshot)
        for queue in list(self.viewers):
            offer_latest(queue, payload)


class SessionManager:
    """Central registry managing all hosted sessions.

    Sessions share one high-score store, so the best score survives
    across sessions for the lifetime of the store.
    """

    def __init__(
        self,
        base_config: GameConfig | None = None,
        store: HighScoreStore | None = None,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.base_config = base_config if base_config is not None else GameConfig()
        self.store = store if store is not None else MemoryHighScoreStore()
        self._sessions: dict[str, SessionInstance] = {}
        self._max_sessions = max_sessions

    def create_session(self, **overrides) -> SessionInstance:
        """Create a paused session; ``None`` overrides keep the defaults."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        config = replace(self.base_config, **changes)

        self._prune_sessions()
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Too many active sessions. Try again later.")

        session_id = uuid.uuid4().hex[:12]
        instance = SessionInstance(
            session_id=session_id,
            session=GameSession(config=config, store=self.store),
        )
        instance._unsubscribe = instance.session.subscribe(instance._fan_out)
        self._sessions[session_id] = instance
        logger.info(
            "Session %s created (%dx%d, cell %d).",
            session_id, config.width, config.height, config.cell_size,
        )
        return instance

    def get_session(self, session_id: str) -> SessionInstance | None:
        return self._sessions.get(session_id)

    def require(self, session_id: str) -> SessionInstance:
        instance = self._sessions.get(session_id)
        if instance is None:
            raise KeyError(f"Session {session_id} not found.")
        return instance

    def list_sessions(self) -> list[SessionSummary]:
        return [inst.summary() for inst in self._sessions.values()]

    def close_session(self, session_id: str) -> None:
        instance = self.require(session_id)
        self._close(instance)
        del self._sessions[session_id]
        logger.info("Session %s closed.", session_id)

    def _close(self, instance: SessionInstance) -> None:
        if instance._unsubscribe is not None:
            instance._unsubscribe()
            instance._unsubscribe = None
        instance.session.close()

    def _prune_sessions(self) -> None:
        """Drop finished sessions nobody is watching, oldest first."""
        if len(self._sessions) < self._max_sessions:
            return
        stale = sorted(
            (
                inst for inst in self._sessions.values()
                if inst.session.phase == Phase.GAME_OVER and not inst.viewers
            ),
            key=lambda inst: inst.created_at,
        )
        overflow = len(self._sessions) - self._max_sessions + 1
        for inst in stale[:overflow]:
            self._close(inst)
            self._sessions.pop(inst.session_id, None)
        if stale:
            logger.info("Pruned %d finished sessions.", min(len(stale), overflow))

    async def cleanup(self) -> None:
        """Stop every session's timers."""
        for instance in self._sessions.values():
            self._close(instance)
        # Let cancelled timer tasks unwind before the loop goes away.
        await asyncio.sleep(0)
        logger.info("SessionManager cleanup complete.")
