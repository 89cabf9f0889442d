# gamebreaker/server/__init__.py
"""GameBreaker telemetry server - HUD feed and game log access for training runs."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from .config import settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("gamebreaker.server")

_server_start_time: float = 0.0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    global _server_start_time
    _server_start_time = time.time()
    logger.info(f"GameBreaker telemetry server starting on {settings.HOST}:{settings.PORT}")
    yield
    logger.info("GameBreaker telemetry server shutting down...")


def create_app(*, gamelog_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        gamelog_path: Optional path to the flat game log for the episodes API.
    """
    from .models import HealthResponse
    from .routes import episodes as episode_routes
    from .routes import telemetry

    app = FastAPI(lifespan=lifespan, title="GameBreaker Telemetry Server")

    app.include_router(telemetry.router)

    if gamelog_path is not None:
        from gamebreaker.records.history import GameLog

        episode_routes.init_episode_routes(GameLog(gamelog_path))
        app.include_router(episode_routes.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="ok",
            agents=telemetry.agent_count(),
            uptime_s=time.time() - _server_start_time,
        )

    return app
