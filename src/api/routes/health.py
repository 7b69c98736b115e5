from __future__ import annotations

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Depends
from src.api.deps import get_app_settings
from src.core.config import Settings

router = APIRouter(tags=["Observability"])
logger = structlog.get_logger()


@router.get("/", summary="Service info")
async def service_info(settings: Settings = Depends(get_app_settings)) -> dict:  # noqa: B008
    return {"app": settings.app_name, "version": settings.version}


@router.get("/health", summary="Service health probe")
async def health_check(settings: Settings = Depends(get_app_settings)) -> dict:  # noqa: B008
    """Return basic service status information."""
    payload = {
        "service": settings.app_name,
        "version": settings.version,
        "environment": settings.environment,
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
    }
    logger.info("health_probe", **payload)
    return payload
