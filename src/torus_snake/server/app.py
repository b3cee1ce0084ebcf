"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from torus_snake.config import GameConfig
from torus_snake.highscore import FileHighScoreStore, MemoryHighScoreStore
from torus_snake.server.routes import router
from torus_snake.server.session_manager import SessionManager
from torus_snake.server.websocket import ws_router


def _build_manager(config: GameConfig) -> SessionManager:
    if config.high_score_path:
        store = FileHighScoreStore(config.high_score_path)
    else:
        store = MemoryHighScoreStore()
    return SessionManager(base_config=config, store=store)


def create_app(config: GameConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    base_config = config if config is not None else GameConfig()
    manager = _build_manager(base_config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await manager.cleanup()

    app = FastAPI(title="Torus Snake API", version="0.1.0", lifespan=lifespan)
    # Set outside the lifespan so lifespan-less ASGI transports can use it.
    app.state.session_manager = manager
    app.include_router(router)
    app.include_router(ws_router)
    return app
