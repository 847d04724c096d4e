"""FastAPI application for the league scoring API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import Settings, get_settings
from api.logging_config import setup_logging
from database.connection import db
from database.db_manager import DatabaseManager

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize DB pool on startup, close on shutdown."""
        await db.initialize(
            dsn=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=max(settings.pool_min_size, settings.pool_max_size),
        )
        app.state.db_manager = DatabaseManager(db.pool, settings.duplicate_round_policy)
        logger.info("Duplicate round policy: %s", settings.duplicate_round_policy.value)
        yield
        await db.close()

    app = FastAPI(
        title="League Scoring API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import awards, leagues, rounds
    app.include_router(rounds.router, prefix="/api/rounds", tags=["rounds"])
    app.include_router(leagues.router, prefix="/api/leagues", tags=["leagues"])
    app.include_router(awards.router, prefix="/api/awards", tags=["awards"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
