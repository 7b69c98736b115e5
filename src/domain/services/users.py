"""User management service.

Validation failures surface as ``UserValidationError``; a missing record is a
normal outcome and is reported as ``None``/``False``, never raised.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import structlog
from src.domain.models import (
    UNASSIGNED_ID,
    CreateUserRequest,
    PagedResult,
    UpdateUserRequest,
    User,
)
from src.domain.validators import validate_create, validate_update
from src.infrastructure.repositories.user_repository import InMemoryUserRepository

logger = structlog.get_logger()

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 500


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UserService:
    """Validated CRUD and paginated listing over the user store."""

    def __init__(
        self,
        repository: InMemoryUserRepository,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.repository = repository
        self._clock = clock

    def create(self, request: CreateUserRequest) -> int:
        validate_create(request)

        now = self._clock()
        user = User(
            id=UNASSIGNED_ID,
            first_name=request.first_name.strip(),
            last_name=request.last_name.strip(),
            email=request.email.strip(),
            department=request.department.strip(),
            is_active=request.is_active,
            created_at=now,
            updated_at=now,
        )

        user_id = self.repository.add(user)
        logger.info("user_created", user_id=user_id, email=user.email)
        return user_id

    def get_by_id(self, user_id: int) -> User | None:
        return self.repository.get_by_id(user_id)

    def get_all(self) -> list[User]:
        return self.repository.get_all()

    def get_paged(
        self,
        department: str | None = None,
        is_active: bool | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PagedResult[User]:
        """Filter, count, then slice one page.

        ``page`` below 1 becomes 1 and ``page_size`` outside [1, 500] becomes
        20. A page past the end is an empty page, not an error.
        """
        page = 1 if page <= 0 else page
        page_size = DEFAULT_PAGE_SIZE if not 1 <= page_size <= MAX_PAGE_SIZE else page_size

        users = self.repository.get_all()
        if department and department.strip():
            wanted = department.casefold()
            users = [user for user in users if user.department.casefold() == wanted]
        if is_active is not None:
            users = [user for user in users if user.is_active == is_active]

        offset = (page - 1) * page_size
        return PagedResult(
            items=tuple(users[offset : offset + page_size]),
            total_count=len(users),
            page=page,
            page_size=page_size,
        )

    def update(self, user_id: int, request: UpdateUserRequest) -> bool:
        validate_update(request)

        existing = self.repository.get_by_id(user_id)
        if existing is None:
            return False

        changed = existing.with_changes(
            first_name=request.first_name.strip(),
            last_name=request.last_name.strip(),
            email=request.email.strip(),
            department=request.department.strip(),
            is_active=request.is_active,
            now=self._clock(),
        )
        updated = self.repository.update(changed)
        if updated:
            logger.info("user_updated", user_id=user_id)
        return updated

    def delete(self, user_id: int) -> bool:
        deleted = self.repository.delete(user_id)
        if deleted:
            logger.info("user_deleted", user_id=user_id)
        return deleted
