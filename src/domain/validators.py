"""Shape and format checks for user input."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.models import CreateUserRequest, UpdateUserRequest

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserValidationError(ValueError):
    """Raised when caller-supplied user data violates a field contract."""


def require_text(value: str | None, field_name: str) -> None:
    if value is None or not value.strip():
        raise UserValidationError(f"{field_name} is required.")


def validate_email(value: str | None) -> None:
    if value is None or not value.strip():
        raise UserValidationError("Email is required.")
    if not EMAIL_PATTERN.match(value.strip()):
        raise UserValidationError("Email format is invalid.")


def _validate_fields(request: CreateUserRequest | UpdateUserRequest | None) -> None:
    if request is None:
        raise UserValidationError("Request body is required.")
    require_text(request.first_name, "FirstName")
    require_text(request.last_name, "LastName")
    validate_email(request.email)
    require_text(request.department, "Department")


def validate_create(request: CreateUserRequest | None) -> None:
    """Raise ``UserValidationError`` unless ``request`` can create a user."""
    _validate_fields(request)


def validate_update(request: UpdateUserRequest | None) -> None:
    """Raise ``UserValidationError`` unless ``request`` can be applied to a user."""
    _validate_fields(request)
