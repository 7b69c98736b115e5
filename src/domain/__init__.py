"""Domain layer: user entity, request shapes and validation."""

from src.domain.models import (
    UNASSIGNED_ID,
    CreateUserRequest,
    PagedResult,
    UpdateUserRequest,
    User,
)
from src.domain.validators import UserValidationError, validate_create, validate_update

__all__ = [
    "UNASSIGNED_ID",
    "CreateUserRequest",
    "PagedResult",
    "UpdateUserRequest",
    "User",
    "UserValidationError",
    "validate_create",
    "validate_update",
]
