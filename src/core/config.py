from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment."""

    app_name: str = Field(default="UserManagement API", validation_alias="APP_NAME")
    environment: str = Field(default="local", validation_alias="APP_ENV")
    version: str = Field(default="1.0.0")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Bearer token issuance/verification
    jwt_issuer: str = Field(default="usermanagement-api", validation_alias="JWT_ISSUER")
    jwt_audience: str = Field(default="usermanagement-clients", validation_alias="JWT_AUDIENCE")
    jwt_secret: str = Field(
        default="replace-with-a-secure-secret-of-32-bytes-or-more",
        validation_alias="JWT_SECRET",
    )
    jwt_algorithm: str = Field(default="HS256")
    token_lifetime_minutes: int = Field(
        default=30, ge=1, validation_alias="JWT_TOKEN_LIFETIME_MINUTES"
    )
    token_scope: str = Field(default="users.read users.write")

    # Payload guard
    allowed_content_types: tuple[str, ...] = Field(
        default=("application/json", "application/*+json"),
        validation_alias="SECURITY_ALLOWED_CONTENT_TYPES",
    )
    max_request_body_bytes: int = Field(
        default=1_048_576, ge=1, validation_alias="SECURITY_MAX_REQUEST_BODY_BYTES"
    )

    anonymous_paths: tuple[str, ...] = Field(
        default=("/", "/health", "/auth/token", "/docs", "/docs/oauth2-redirect", "/openapi.json", "/redoc"),
    )
    enable_failure_probe: bool = Field(default=False, validation_alias="ENABLE_FAILURE_PROBE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
