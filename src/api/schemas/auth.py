"""Pydantic schemas for the token endpoint."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field


class TokenRequest(BaseModel):
    """Request body for issuing a development token."""

    subject: EmailStr = Field(..., description="Token subject, usually an email")


class TokenResponse(BaseModel):
    token: str = Field(..., description="Signed bearer token")
