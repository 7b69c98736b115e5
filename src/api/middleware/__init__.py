"""Request pipeline.

Stages run in the order listed, outermost first; responses travel back
through them in reverse:

    ErrorContainment -> Authentication -> PayloadGuard
        -> SecurityHeaders -> CorrelationLogging -> routes

The order is part of the service contract. Authentication must reject a bad
token before the payload guard or any handler sees the request, and the
error boundary must enclose everything else.
"""

from __future__ import annotations

from src.api.middleware.authentication import AuthenticationMiddleware
from src.api.middleware.correlation import (
    CORRELATION_HEADER,
    CorrelationLoggingMiddleware,
    resolve_correlation_id,
)
from src.api.middleware.errors import ErrorContainmentMiddleware
from src.api.middleware.payload_guard import PayloadGuardMiddleware, PayloadTooLargeError
from src.api.middleware.security_headers import SECURITY_HEADERS, SecurityHeadersMiddleware
from src.core.config import Settings
from starlette.middleware import Middleware


def build_pipeline(settings: Settings) -> list[Middleware]:
    """Return the pipeline stages in canonical order for ``FastAPI(middleware=...)``."""
    return [
        Middleware(ErrorContainmentMiddleware),
        Middleware(AuthenticationMiddleware, settings=settings),
        Middleware(PayloadGuardMiddleware, settings=settings),
        Middleware(SecurityHeadersMiddleware),
        Middleware(CorrelationLoggingMiddleware),
    ]


__all__ = [
    "CORRELATION_HEADER",
    "SECURITY_HEADERS",
    "AuthenticationMiddleware",
    "CorrelationLoggingMiddleware",
    "ErrorContainmentMiddleware",
    "PayloadGuardMiddleware",
    "PayloadTooLargeError",
    "SecurityHeadersMiddleware",
    "build_pipeline",
    "resolve_correlation_id",
]
