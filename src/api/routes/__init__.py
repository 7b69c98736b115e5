from fastapi import FastAPI
from src.core.config import Settings

from . import auth, health, users


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Attach all API routers to the FastAPI application."""
    app.include_router(health.router)
    app.include_router(auth.router)
    if settings.enable_failure_probe:
        # before the users router so "/boom" is not parsed as an id
        app.include_router(users.probe_router)
    app.include_router(users.router)
