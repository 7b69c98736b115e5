from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from src.api.main import create_app
from src.core.config import Settings
from src.domain.services.users import UserService
from src.infrastructure.repositories.user_repository import InMemoryUserRepository
from tests.utils import auth_headers


@pytest.fixture()
def settings() -> Settings:
    return Settings(enable_failure_probe=True)


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture()
def test_client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as client:
        yield client


@pytest.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client for testing async routes."""
    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture()
def headers(settings: Settings) -> dict[str, str]:
    """Bearer headers signed with the test app's settings."""
    return auth_headers(settings)


@pytest.fixture()
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def service(repository: InMemoryUserRepository) -> UserService:
    return UserService(repository)
