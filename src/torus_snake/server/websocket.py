"""WebSocket handler for real-time play."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from torus_snake.directions import Direction
from torus_snake.engine import GameSession
from torus_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def apply_command(session: GameSession, msg: dict) -> None:
    """Dispatch one decoded client message; malformed ones are ignored."""
    command = msg.get("command", "direction")
    if not isinstance(command, str):
        return

    direction = None
    raw_direction = msg.get("direction")
    if isinstance(raw_direction, str):
        direction = Direction.parse(raw_direction)

    if command == "direction":
        if direction is not None:
            session.on_direction(direction)
    elif command == "hold":
        if direction is not None and session.on_direction(direction):
            session.start_fast_forward(direction)
    elif command == "release":
        session.stop_fast_forward()
    elif command == "pause":
        session.toggle_pause()
    elif command == "restart":
        session.play_again()


async def _pump(websocket: WebSocket, queue: asyncio.Queue[str]) -> None:
    while True:
        payload = await queue.get()
        await websocket.send_text(payload)


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send commands, receive a snapshot after each change."""
    manager = _get_manager(websocket)
    instance = manager.get_session(session_id)
    if instance is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    queue = instance.attach()
    sender = asyncio.create_task(_pump(websocket, queue))
    logger.info("Player connected to session %s.", session_id)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            apply_command(instance.session, msg)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        instance.detach(queue)
        sender.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await sender
