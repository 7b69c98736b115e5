from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from src.domain.models import CreateUserRequest, PagedResult, UpdateUserRequest, User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserPayload(CamelModel):
    """Body for create and update.

    Text fields are optional here so that missing values reach the domain
    validator and are reported as a 400 with a readable message.
    """

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    department: str | None = None
    is_active: bool = True

    def to_create_request(self) -> CreateUserRequest:
        return CreateUserRequest(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            department=self.department,
            is_active=self.is_active,
        )

    def to_update_request(self) -> UpdateUserRequest:
        return UpdateUserRequest(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            department=self.department,
            is_active=self.is_active,
        )


class UserResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    department: str
    is_active: bool
    created_at_utc: datetime
    updated_at_utc: datetime

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            department=user.department,
            is_active=user.is_active,
            created_at_utc=user.created_at,
            updated_at_utc=user.updated_at,
        )


class PagedUsersResponse(CamelModel):
    items: list[UserResponse]
    total_count: int = Field(..., description="Matches before pagination")
    page: int
    page_size: int

    @classmethod
    def from_domain(cls, result: PagedResult[User]) -> PagedUsersResponse:
        return cls(
            items=[UserResponse.from_domain(user) for user in result.items],
            total_count=result.total_count,
            page=result.page,
            page_size=result.page_size,
        )


class UserCreatedResponse(BaseModel):
    id: int
