"""Responses written directly by pipeline stages."""

from __future__ import annotations

from typing import Any

from src.api.middleware.security_headers import apply_security_headers
from starlette.responses import JSONResponse


def short_circuit_response(
    status_code: int,
    content: Any,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a JSON response for a stage that stops the chain.

    These responses never pass through the security-header stage, so they
    carry the hardening headers themselves.
    """
    response = JSONResponse(content, status_code=status_code, headers=headers)
    apply_security_headers(response.headers)
    return response


def problem_response(status_code: int, title: str, detail: str) -> JSONResponse:
    return short_circuit_response(
        status_code,
        {"title": title, "detail": detail, "status": status_code},
    )
