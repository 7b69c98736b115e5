from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from src.api.middleware.payload_guard import PayloadTooLargeError


def _describe(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Request is invalid."


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies and parameters as bad input (400), not 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": _describe(exc)},
    )


async def payload_too_large_handler(_: Request, exc: PayloadTooLargeError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"title": "Payload too large.", "detail": exc.detail, "status": exc.status_code},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PayloadTooLargeError, payload_too_large_handler)
