"""FastAPI dependency injection for the Sigil API.

Process-wide collaborators (session maker, hasher, token issuer)
are built once in the application lifespan and kept on ``app.state``.
Dependencies here hand them to request handlers:
- Database sessions
- Authentication service instances
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sigil.application.services import AuthenticationService
from sigil.infrastructure.persistence.sqlalchemy import IdentityRepositorySQLAlchemy
from sigil_auth import JWTService, PasswordHashingService


def get_session_maker(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.session_maker


def get_password_service(request: Request) -> PasswordHashingService:
    return request.app.state.password_service


def get_jwt_service(request: Request) -> JWTService:
    return request.app.state.jwt_service


async def get_db_session(
    session_maker: Annotated[
        async_sessionmaker[AsyncSession],
        Depends(get_session_maker),
    ],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.

    Yields
    ------
    AsyncSession for database operations
    """
    async with session_maker() as session:
        yield session


# Type aliases for injected dependencies
DBSession = Annotated[AsyncSession, Depends(get_db_session)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]
JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]


def get_auth_service(
    session: DBSession,
    password_service: PasswordServiceDep,
    jwt_service: JWTServiceDep,
) -> AuthenticationService:
    """Build an AuthenticationService bound to the request's session."""
    return AuthenticationService(
        identity_repository=IdentityRepositorySQLAlchemy(session),
        password_service=password_service,
        jwt_service=jwt_service,
    )


AuthService = Annotated[AuthenticationService, Depends(get_auth_service)]
