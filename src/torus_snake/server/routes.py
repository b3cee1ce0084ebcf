"""REST API route handlers for session lifecycle and commands."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from torus_snake.directions import Direction
from torus_snake.server.models import (
    CreateSessionRequest,
    DirectionRequest,
    DirectionResponse,
    ErrorResponse,
    SessionSummary,
)
from torus_snake.server.session_manager import SessionInstance, SessionManager

router = APIRouter(prefix="/sessions", tags=["sessions"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Session not found."}}


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _require(request: Request, session_id: str) -> SessionInstance:
    try:
        return _get_manager(request).require(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new paused session."""
    manager = _get_manager(request)
    try:
        instance = manager.create_session(
            width=body.width,
            height=body.height,
            cell_size=body.cell_size,
            initial_length=body.initial_length,
            seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return instance.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List hosted sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}", responses=_NOT_FOUND)
async def get_session(session_id: str, request: Request) -> dict:
    """Get the session summary, grid geometry and a full snapshot."""
    instance = _require(request, session_id)
    result = instance.summary().model_dump(mode="json")
    result["grid"] = instance.session.grid.to_dict()
    result["state"] = instance.session.snapshot().to_dict()
    return result


@router.post("/{session_id}/pause", responses=_NOT_FOUND)
async def toggle_pause(session_id: str, request: Request) -> SessionSummary:
    """Pause a playing session or resume a paused one."""
    instance = _require(request, session_id)
    instance.session.toggle_pause()
    return instance.summary()


@router.post("/{session_id}/restart", responses=_NOT_FOUND)
async def restart(session_id: str, request: Request) -> SessionSummary:
    """Start a fresh round."""
    instance = _require(request, session_id)
    instance.session.play_again()
    return instance.summary()


@router.post("/{session_id}/direction", responses=_NOT_FOUND)
async def push_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Queue a direction change for a playing session."""
    instance = _require(request, session_id)
    direction = Direction.parse(body.direction)
    if direction is None:
        raise HTTPException(status_code=422, detail="Unknown direction.")
    repeated = instance.session.on_direction(direction)
    return DirectionResponse(
        session_id=session_id,
        direction=direction.name.lower(),
        repeated=repeated,
    )


@router.delete("/{session_id}", status_code=204, responses=_NOT_FOUND)
async def close_session(session_id: str, request: Request) -> Response:
    """Stop and forget a session."""
    manager = _get_manager(request)
    try:
        manager.close_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    return Response(status_code=204)
