from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from src.api.exception_handlers import register_exception_handlers
from src.api.middleware import build_pipeline
from src.api.routes import register_routes
from src.core.config import Settings, get_settings
from src.core.logging import setup_logging
from src.infrastructure.repositories.user_repository import InMemoryUserRepository

logger = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory for the public API.

    Each app owns its own in-memory user store; nothing survives a restart.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "service_startup",
            service=settings.app_name,
            environment=settings.environment,
            version=settings.version,
        )
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        lifespan=lifespan,
        middleware=build_pipeline(settings),
    )
    app.state.settings = settings
    app.state.user_repository = InMemoryUserRepository()

    register_exception_handlers(app)
    register_routes(app, settings)
    return app


app = create_app()
