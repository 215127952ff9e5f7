"""Authentication error taxonomy.

Every failure that leaves the authentication core is an ``AuthError``
subclass carrying a stable ``ErrorCode``. Transport adapters map the code
to their own status vocabulary and must never inspect the message text.

``message`` is safe to show to end users. ``details`` is for server-side
logging only and is never serialized outbound.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Client-correctable
    IDENTITY_EXISTS = "IDENTITY_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Token validation
    TOKEN_INVALID = "TOKEN_INVALID"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_MALFORMED = "TOKEN_MALFORMED"

    # Operational faults
    HASHING_ERROR = "HASHING_ERROR"
    SIGNING_ERROR = "SIGNING_ERROR"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AuthError(Exception):
    """Base exception for all authentication errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    """

    def __init__(
        self,
        message: str = "Authentication error",
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class IdentityExistsError(AuthError):
    """Raised when registering an email that is already taken."""

    def __init__(
        self,
        message: str = "Email already exists",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, ErrorCode.IDENTITY_EXISTS, details)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login.

    Unknown email and wrong password deliberately share this error.
    """

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, ErrorCode.INVALID_CREDENTIALS)


class InvalidTokenError(AuthError):
    """Raised when a token's signature or algorithm is not acceptable."""

    def __init__(
        self,
        message: str = "Invalid token",
        code: ErrorCode = ErrorCode.TOKEN_INVALID,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class TokenExpiredError(InvalidTokenError):
    """Raised when a token's expiration instant has passed."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, ErrorCode.TOKEN_EXPIRED)


class MalformedTokenError(InvalidTokenError):
    """Raised when a token cannot be decoded or lacks required claims."""

    def __init__(
        self,
        message: str = "Malformed token",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, ErrorCode.TOKEN_MALFORMED, details)


class HashingError(AuthError):
    """Raised when a password hash cannot be produced or parsed."""

    def __init__(
        self,
        message: str = "Internal server error",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, ErrorCode.HASHING_ERROR, details)


class SigningError(AuthError):
    """Raised when signing key material is missing or unusable."""

    def __init__(
        self,
        message: str = "Internal server error",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, ErrorCode.SIGNING_ERROR, details)


class StoreUnavailableError(AuthError):
    """Raised when the identity store cannot serve a request."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, ErrorCode.STORE_UNAVAILABLE, details)


class InternalError(AuthError):
    """Raised for internal faults such as corrupted stored credentials."""

    def __init__(
        self,
        message: str = "Internal server error",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, ErrorCode.INTERNAL_ERROR, details)
