"""Authentication router for user registration and login."""

import logging

from fastapi import APIRouter, status
from sqlalchemy.exc import SQLAlchemyError

from sigil.presentation.api.dependencies import (
    AuthService,
    DBSession,
    JWTServiceDep,
)
from sigil.presentation.api.schemas.auth import (
    ErrorResponse,
    IdentityResponse,
    JWKSResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)
from sigil_auth import StoreUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        503: {"model": ErrorResponse, "description": "Identity store unavailable"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
) -> IdentityResponse:
    identity = await auth_service.register(
        email=request.email,
        password=request.password,
    )

    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Commit failed after registration: %s", type(e).__name__)
        raise StoreUnavailableError from e

    return IdentityResponse.model_validate(identity)


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    jwt_service: JWTServiceDep,
) -> TokenResponse:
    """
    Authenticate with email and password.

    Returns a signed access token on success. Unknown email and wrong
    password produce the same 401 response.
    """
    token = await auth_service.login(
        email=request.email,
        password=request.password,
    )

    return TokenResponse(
        access_token=token,
        expires_in=int(jwt_service.token_lifetime.total_seconds()),
    )


@router.get(
    "/jwks",
    summary="Public token verification key",
)
async def jwks(jwt_service: JWTServiceDep) -> JWKSResponse:
    """Return the Ed25519 public key relying parties use to verify tokens."""
    return JWKSResponse(keys=[jwt_service.public_jwk()])
