"""API request/response schemas."""

from sigil.presentation.api.schemas.auth import (
    ErrorResponse,
    IdentityResponse,
    JWKSResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)

__all__ = [
    "ErrorResponse",
    "IdentityResponse",
    "JWKSResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
]
