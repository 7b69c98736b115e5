from __future__ import annotations

import structlog
from src.api.middleware.responses import short_circuit_response
from src.core.auth import Principal, TokenError, decode_access_token
from src.core.config import Settings
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

logger = structlog.get_logger()


class AuthenticationMiddleware:
    """Require a valid bearer token on every path not marked anonymous.

    The verified principal is stored in the request state for handlers.
    """

    def __init__(self, app: ASGIApp, *, settings: Settings) -> None:
        self.app = app
        self.settings = settings
        self.anonymous_paths = frozenset(settings.anonymous_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["path"] in self.anonymous_paths:
            await self.app(scope, receive, send)
            return

        try:
            principal = self.authenticate(Headers(scope=scope).get("authorization"))
        except TokenError as exc:
            logger.info(
                "authentication_failed",
                method=scope["method"],
                path=scope["path"],
                reason=str(exc),
            )
            response = short_circuit_response(
                401,
                {"detail": str(exc)},
                headers={"WWW-Authenticate": "Bearer"},
            )
            await response(scope, receive, send)
            return

        scope.setdefault("state", {})["principal"] = principal
        await self.app(scope, receive, send)

    def authenticate(self, authorization: str | None) -> Principal:
        if not authorization:
            raise TokenError("Missing bearer token")

        scheme, _, token = authorization.partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            raise TokenError("Invalid authorization scheme")

        claims = decode_access_token(token, self.settings)
        return Principal(
            subject=claims["sub"],
            token_id=claims["jti"],
            scopes=tuple(str(claims.get("scope", "")).split()),
        )
