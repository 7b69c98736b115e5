from __future__ import annotations

from uuid import uuid4

import structlog
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send
from structlog.contextvars import bind_contextvars, clear_contextvars

logger = structlog.get_logger()

CORRELATION_HEADER = "X-Correlation-ID"


def resolve_correlation_id(scope: Scope) -> str:
    """Return the request's correlation id, resolving it on first use.

    The inbound ``X-Correlation-ID`` header wins; otherwise a new id is
    generated. The id is kept in the request state so every stage sees the
    same value.
    """
    state = scope.setdefault("state", {})
    correlation_id = state.get("correlation_id")
    if correlation_id is None:
        correlation_id = Headers(scope=scope).get(CORRELATION_HEADER) or str(uuid4())
        state["correlation_id"] = correlation_id
    return correlation_id


class CorrelationLoggingMiddleware:
    """Log request entry and exit under a shared correlation id."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = resolve_correlation_id(scope)
        bind_contextvars(
            correlation_id=correlation_id,
            method=scope["method"],
            path=scope["path"],
        )
        status_code: int | None = None

        async def send_with_correlation(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                MutableHeaders(scope=message)[CORRELATION_HEADER] = correlation_id
            await send(message)

        try:
            logger.info("request_started")
            await self.app(scope, receive, send_with_correlation)
            logger.info("request_completed", status_code=status_code)
        finally:
            clear_contextvars()
