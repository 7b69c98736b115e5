from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import JSONResponse
from src.api.deps import get_current_principal, get_user_service
from src.api.schemas.users import (
    PagedUsersResponse,
    UserCreatedResponse,
    UserPayload,
    UserResponse,
)
from src.domain.services.users import DEFAULT_PAGE_SIZE, UserService
from src.domain.validators import UserValidationError

router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
    dependencies=[Depends(get_current_principal)],
)
probe_router = APIRouter(
    prefix="/api/users",
    tags=["Diagnostics"],
    dependencies=[Depends(get_current_principal)],
)
logger = structlog.get_logger()


def _not_found(user_id: int) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": f"User {user_id} not found."},
    )


def _bad_request(exc: UserValidationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("", response_model=PagedUsersResponse, summary="List users with optional filtering and pagination")
async def list_users(
    department: str | None = Query(None),
    is_active: bool | None = Query(None, alias="isActive"),
    page: int = Query(1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    service: UserService = Depends(get_user_service),  # noqa: B008
) -> PagedUsersResponse:
    result = service.get_paged(department, is_active, page, page_size)
    return PagedUsersResponse.from_domain(result)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user by id",
    responses={404: {"description": "User not found"}},
)
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),  # noqa: B008
) -> UserResponse | JSONResponse:
    user = service.get_by_id(user_id)
    if user is None:
        return _not_found(user_id)
    return UserResponse.from_domain(user)


@router.post(
    "",
    response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
)
async def create_user(
    payload: UserPayload,
    response: Response,
    service: UserService = Depends(get_user_service),  # noqa: B008
) -> UserCreatedResponse:
    try:
        user_id = service.create(payload.to_create_request())
    except UserValidationError as exc:
        logger.info("user_create_rejected", reason=str(exc))
        raise _bad_request(exc) from exc

    response.headers["Location"] = f"/api/users/{user_id}"
    return UserCreatedResponse(id=user_id)


@router.put(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Update an existing user",
    responses={404: {"description": "User not found"}},
)
async def update_user(
    user_id: int,
    payload: UserPayload,
    service: UserService = Depends(get_user_service),  # noqa: B008
) -> Response:
    try:
        updated = service.update(user_id, payload.to_update_request())
    except UserValidationError as exc:
        logger.info("user_update_rejected", user_id=user_id, reason=str(exc))
        raise _bad_request(exc) from exc

    if not updated:
        return _not_found(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a user by id",
    responses={404: {"description": "User not found"}},
)
async def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service),  # noqa: B008
) -> Response:
    if not service.delete(user_id):
        return _not_found(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@probe_router.get("/boom", summary="Raise an unhandled error to exercise error containment")
async def failure_probe() -> None:
    raise RuntimeError("Simulated failure.")
