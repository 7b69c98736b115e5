from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from src.core.auth import Principal
from src.core.config import Settings
from src.domain.services.users import UserService
from src.infrastructure.repositories.user_repository import InMemoryUserRepository

# Token verification happens in the authentication stage; this scheme only
# documents the requirement in the OpenAPI schema.
bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_repository(request: Request) -> InMemoryUserRepository:
    return request.app.state.user_repository


def get_user_service(
    repository: InMemoryUserRepository = Depends(get_user_repository),  # noqa: B008
) -> UserService:
    return UserService(repository)


async def get_current_principal(
    request: Request,
    _credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
) -> Principal:
    """Return the principal verified by the authentication stage."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal
