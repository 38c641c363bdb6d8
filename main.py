"""
Taskboard API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI

from api.middleware import register_middleware
from api.routes import tasks_router, users_router
from auth.routes import router as auth_router
from config.settings import Settings, config
from database.session import Database
from utils.errors import register_exception_handlers

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or config
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(settings.database_url, echo=settings.database_echo)
        await db.create_all()
        app.state.db = db
        logger.info("Application ready to accept requests.")
        try:
            yield
        finally:
            await db.dispose()

    app = FastAPI(
        title="Taskboard API",
        version="1.0.0",
        description="Users register, log in and manage their own tasks.",
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_middleware(app, settings)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(users_router, prefix="/api/users")
    app.include_router(tasks_router, prefix="/api/tasks")

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
