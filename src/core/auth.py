from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt
from src.core.config import Settings

REQUIRED_CLAIMS = ["sub", "jti", "iss", "aud", "nbf", "exp"]


class TokenError(Exception):
    """Raised when a token cannot be decoded or validated."""


@dataclass(frozen=True, slots=True)
class Principal:
    """The authenticated caller behind a verified bearer token."""

    subject: str
    token_id: str
    scopes: tuple[str, ...] = ()


def create_access_token(
    subject: str,
    settings: Settings,
    *,
    now: datetime | None = None,
) -> str:
    """Issue a signed, time-bounded bearer token for ``subject``.

    Development convenience only: there is no credential check behind it, so
    hardened deployments should take tokens from a real identity provider.
    """
    if not subject or not subject.strip():
        raise TokenError("Token subject is required")

    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + timedelta(minutes=settings.token_lifetime_minutes)
    payload = {
        "sub": subject,
        "jti": str(uuid4()),
        "scope": settings.token_scope,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": int(issued_at.timestamp()),
        "nbf": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """Verify signature, issuer, audience and lifetime of a bearer token.

    No clock skew is tolerated.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            leeway=0,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenError("Token has expired") from exc
    except jwt.PyJWTError as exc:  # pragma: no cover - third-party raises numerous subclasses
        raise TokenError("Invalid token") from exc

    if not payload.get("sub"):
        raise TokenError("Token missing subject")
    return payload
