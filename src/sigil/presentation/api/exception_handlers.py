"""Centralized exception handlers for the FastAPI application.

Every ``AuthError`` is mapped to an HTTP status through one table keyed by
its ``ErrorCode``. Message text is never inspected.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Usage:
    from sigil.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from sigil_auth import AuthError, ErrorCode

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 409 Conflict - already exists
    ErrorCode.IDENTITY_EXISTS: status.HTTP_409_CONFLICT,
    # 401 Unauthorized - authentication errors
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_MALFORMED: status.HTTP_401_UNAUTHORIZED,
    # 503 Service Unavailable - persistence dependency down
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    # 500 Internal Server Error
    ErrorCode.HASHING_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.SIGNING_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "An internal error occurred"


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle authentication errors with structured response.

        Server-side faults are logged with their details and cause while
        the client receives only a generic message.
        """
        status_code = ERROR_CODE_TO_STATUS[exc.code]

        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "%s on %s %s (code=%s, details=%s, cause=%r)",
                type(exc).__name__,
                request.method,
                request.url.path,
                exc.code.value,
                exc.details,
                exc.__cause__,
            )
            message = INTERNAL_ERROR_MESSAGE
            if exc.code is ErrorCode.STORE_UNAVAILABLE:
                message = exc.message
        else:
            logger.warning(
                "Auth error on %s %s: %s (code=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
            )
            message = exc.message

        return _create_error_response(
            status_code=status_code,
            message=message,
            code=exc.code.value,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=INTERNAL_ERROR_MESSAGE,
            code=ErrorCode.INTERNAL_ERROR.value,
        )
