from __future__ import annotations

from typing import Any

from src.core.auth import create_access_token
from src.core.config import Settings
from src.domain.models import CreateUserRequest, UpdateUserRequest


def auth_headers(settings: Settings, subject: str = "tester@example.com") -> dict[str, str]:
    token = create_access_token(subject, settings)
    return {"Authorization": f"Bearer {token}"}


def user_payload(**overrides: Any) -> dict[str, Any]:
    """Camel-cased JSON body for POST/PUT /api/users."""
    payload: dict[str, Any] = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@techhive.local",
        "department": "R&D",
        "isActive": True,
    }
    payload.update(overrides)
    return payload


def create_request(
    first_name: str = "Ada",
    last_name: str = "Lovelace",
    email: str = "ada@techhive.local",
    department: str = "R&D",
    is_active: bool = True,
) -> CreateUserRequest:
    return CreateUserRequest(first_name, last_name, email, department, is_active)


def update_request(
    first_name: str = "Ada",
    last_name: str = "Lovelace",
    email: str = "ada@techhive.local",
    department: str = "R&D",
    is_active: bool = True,
) -> UpdateUserRequest:
    return UpdateUserRequest(first_name, last_name, email, department, is_active)
