"""Sigil Auth - credential hashing, token signing, and the error taxonomy.

This package is independent of storage and transport. It handles:
- Password hashing (Argon2id)
- JWT token issuance and verification (EdDSA / Ed25519)
- Signing key material
- The error vocabulary every transport maps from

Architecture:
    sigil_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── keys.py             # Ed25519 key pair loading
    ├── schemas.py          # Claims
    └── exceptions.py       # ErrorCode + AuthError hierarchy

Usage:
    from sigil_auth import JWTService, PasswordHashingService, SigningKeyPair

    keys = SigningKeyPair.from_file(path)
    jwt_service = JWTService.from_key_pair(keys)
"""

from sigil_auth.exceptions import (
    AuthError,
    ErrorCode,
    HashingError,
    IdentityExistsError,
    InternalError,
    InvalidCredentialsError,
    InvalidTokenError,
    MalformedTokenError,
    SigningError,
    StoreUnavailableError,
    TokenExpiredError,
)
from sigil_auth.keys import SigningKeyPair
from sigil_auth.schemas import Claims
from sigil_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    # Key material
    "SigningKeyPair",
    # Schemas
    "Claims",
    # Exceptions
    "AuthError",
    "ErrorCode",
    "HashingError",
    "IdentityExistsError",
    "InternalError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MalformedTokenError",
    "SigningError",
    "StoreUnavailableError",
    "TokenExpiredError",
]
