from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Generic, TypeVar

from src.domain.validators import require_text, validate_email

T = TypeVar("T")

UNASSIGNED_ID = 0


@dataclass(frozen=True, slots=True)
class User:
    """Identity and profile record.

    Instances are immutable snapshots: the store replaces whole records rather
    than mutating them, so readers never observe a half-applied update.
    ``id`` is ``UNASSIGNED_ID`` until the store issues one.
    """

    id: int
    first_name: str
    last_name: str
    email: str
    department: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        require_text(self.first_name, "FirstName")
        require_text(self.last_name, "LastName")
        validate_email(self.email)
        require_text(self.department, "Department")
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not precede created_at")

    def with_id(self, user_id: int) -> User:
        return replace(self, id=user_id)

    def with_changes(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        department: str,
        is_active: bool,
        now: datetime | None = None,
    ) -> User:
        """Return a re-validated copy carrying the new fields and a fresh ``updated_at``."""
        stamp = now or datetime.now(UTC)
        return replace(
            self,
            first_name=first_name,
            last_name=last_name,
            email=email,
            department=department,
            is_active=is_active,
            updated_at=max(stamp, self.created_at),
        )


@dataclass(frozen=True, slots=True)
class CreateUserRequest:
    first_name: str | None
    last_name: str | None
    email: str | None
    department: str | None
    is_active: bool = True


@dataclass(frozen=True, slots=True)
class UpdateUserRequest:
    first_name: str | None
    last_name: str | None
    email: str | None
    department: str | None
    is_active: bool = True


@dataclass(frozen=True, slots=True)
class PagedResult(Generic[T]):
    """One page of a filtered collection plus the pre-pagination match count."""

    items: Sequence[T]
    total_count: int
    page: int
    page_size: int
