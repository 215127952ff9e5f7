"""Authentication schemas for request/response models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CredentialsRequest(BaseModel):
    """Email and password, shared by registration and login.

    The email is an opaque, case-sensitive identifier; it is not normalized.
    """

    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=1024)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123",
            },
        },
    )


class RegisterRequest(CredentialsRequest):
    """Request schema for user registration."""


class LoginRequest(CredentialsRequest):
    """Request schema for user login."""


class IdentityResponse(BaseModel):
    """Response schema for a registered identity (never includes the hash)."""

    id: int
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """Response schema for a successful login."""

    access_token: str
    token_type: str = Field(default="bearer")
    expires_in: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJFZERTQSIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_in": 86400,
            },
        },
    )


class JWKSResponse(BaseModel):
    """Public verification keys as a JSON Web Key Set."""

    keys: list[dict[str, Any]]


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    detail: str
    code: str
