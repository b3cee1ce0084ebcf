"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from torus_snake.engine import Phase


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    width: int | None = Field(default=None, ge=80, le=4000)
    height: int | None = Field(default=None, ge=80, le=4000)
    cell_size: int | None = Field(default=None, ge=4, le=100)
    initial_length: int | None = Field(default=None, ge=2, le=20)
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: str = Field(min_length=1, max_length=8)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    phase: Phase
    score: int
    high_score: int
    speed: float
    length: int


class DirectionResponse(BaseModel):
    """Result of queueing a direction change."""

    session_id: str
    direction: str
    repeated: bool


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
