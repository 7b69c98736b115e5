"""Development token endpoint."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends
from src.api.deps import get_app_settings
from src.api.schemas.auth import TokenRequest, TokenResponse
from src.core.auth import create_access_token
from src.core.config import Settings

logger = structlog.get_logger()
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/token",
    response_model=TokenResponse,
    summary="Issue a development token",
    description="DEV ONLY: issues a short-lived bearer token without checking credentials.",
)
async def issue_token(
    payload: TokenRequest,
    settings: Settings = Depends(get_app_settings),  # noqa: B008
) -> TokenResponse:
    token = create_access_token(payload.subject, settings)
    logger.info("token_issued", subject=payload.subject)
    return TokenResponse(token=token)
