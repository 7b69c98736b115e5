from __future__ import annotations

import structlog
from src.api.middleware.correlation import CORRELATION_HEADER, resolve_correlation_id
from src.api.middleware.responses import short_circuit_response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = structlog.get_logger()


class ErrorContainmentMiddleware:
    """Turn any unhandled downstream failure into an opaque 500.

    The downstream response is held back until it is complete, so a failure
    halfway through never leaks a partial response to the client.
    ``asyncio.CancelledError`` is not an ``Exception`` and passes through.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        pending: list[Message] = []
        flushed = False

        async def buffered_send(message: Message) -> None:
            nonlocal flushed
            pending.append(message)
            if message["type"] == "http.response.body" and not message.get("more_body", False):
                for item in pending:
                    await send(item)
                pending.clear()
                flushed = True

        try:
            await self.app(scope, receive, buffered_send)
        except Exception:
            correlation_id = resolve_correlation_id(scope)
            logger.exception(
                "unhandled_exception",
                correlation_id=correlation_id,
                method=scope.get("method"),
                path=scope.get("path"),
            )
            if flushed:
                return
            response = short_circuit_response(
                500,
                {"error": "Internal server error.", "traceId": correlation_id},
                headers={CORRELATION_HEADER: correlation_id},
            )
            await response(scope, receive, send)
            return

        for item in pending:
            await send(item)
