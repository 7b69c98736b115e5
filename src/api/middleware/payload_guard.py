from __future__ import annotations

from fnmatch import fnmatchcase

import structlog
from fastapi import HTTPException, status
from src.api.middleware.responses import problem_response
from src.core.config import Settings
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = structlog.get_logger()

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class PayloadTooLargeError(HTTPException):
    """Raised while reading a body that grows past the configured ceiling."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            status_code=413,
            detail=f"Max allowed request body is {limit} bytes.",
        )
        self.limit = limit


class PayloadGuardMiddleware:
    """Content-type allow-list and body size ceiling for body-carrying verbs.

    A declared ``Content-Length`` over the limit is rejected up front. Bodies
    without one are counted as they stream in and rejected as soon as they
    cross the limit, so an oversized body is never buffered whole.
    """

    def __init__(self, app: ASGIApp, *, settings: Settings) -> None:
        self.app = app
        self.allowed_content_types = tuple(ct.lower() for ct in settings.allowed_content_types)
        self.max_body_bytes = settings.max_request_body_bytes

    def is_allowed(self, content_type: str | None) -> bool:
        if not content_type or not content_type.strip():
            return False
        media_type = content_type.split(";", 1)[0].strip().lower()
        return any(fnmatchcase(media_type, allowed) for allowed in self.allowed_content_types)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] not in BODY_METHODS:
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        content_type = headers.get("content-type")
        if not self.is_allowed(content_type):
            logger.warning(
                "payload_rejected",
                reason="unsupported_media_type",
                content_type=content_type or "<none>",
            )
            response = problem_response(
                status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                "Unsupported media type.",
                f"Allowed content types: {', '.join(self.allowed_content_types)}",
            )
            await response(scope, receive, send)
            return

        declared = _declared_length(headers.get("content-length"))
        if declared is not None and declared > self.max_body_bytes:
            logger.warning("payload_rejected", reason="declared_too_large", content_length=declared)
            response = problem_response(
                413,
                "Payload too large.",
                f"Max allowed request body is {self.max_body_bytes} bytes.",
            )
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    logger.warning("payload_rejected", reason="body_too_large", received=received)
                    raise PayloadTooLargeError(self.max_body_bytes)
            return message

        await self.app(scope, limited_receive, send)


def _declared_length(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
