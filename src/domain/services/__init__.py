"""Domain services."""

from src.domain.services.users import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, UserService

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "UserService",
]
