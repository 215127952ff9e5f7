"""Authentication service for registration and login."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sigil.domain.identity import (
    Identity,
    IdentityConflictError,
    IdentityStoreError,
)
from sigil_auth import (
    Claims,
    HashingError,
    IdentityExistsError,
    InternalError,
    InvalidCredentialsError,
    JWTService,
    PasswordHashingService,
    SigningError,
    StoreUnavailableError,
)

if TYPE_CHECKING:
    from sigil.domain.identity import IdentityRepository

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates the identity store, the password hasher and the token
    issuer. It keeps no state between calls apart from the injected
    collaborators, so one instance may serve concurrent requests.

    Every failure surfaces as a ``sigil_auth.AuthError`` subclass:
    - ``IdentityExistsError`` when registering a taken email
    - ``InvalidCredentialsError`` for unknown email or wrong password alike
    - ``StoreUnavailableError`` when the store fails
    - ``HashingError`` / ``InternalError`` for operational faults
    """

    def __init__(
        self,
        identity_repository: IdentityRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._identity_repo = identity_repository
        self._password_service = password_service
        self._jwt_service = jwt_service

    async def register(self, email: str, password: str) -> Identity:
        password_hash = self._password_service.hash(password)

        try:
            record = await self._identity_repo.insert(email, password_hash)
        except IdentityConflictError as e:
            logger.warning("Registration rejected, email already exists: %s", email)
            raise IdentityExistsError from e
        except IdentityStoreError as e:
            logger.error("Identity store unavailable during registration: %s", e)
            raise StoreUnavailableError from e

        logger.info("Identity registered: %s (id: %s)", record.email, record.id)
        return record.to_identity()

    async def login(self, email: str, password: str) -> str:
        try:
            record = await self._identity_repo.find_by_email(email)
        except IdentityStoreError as e:
            logger.error("Identity store unavailable during login: %s", e)
            raise StoreUnavailableError from e

        if record is None:
            # Same Argon2 cost as the wrong-password path.
            self._password_service.verify_dummy(password)
            raise InvalidCredentialsError

        try:
            matches = self._password_service.verify(password, record.password_hash)
        except HashingError as e:
            logger.error("Stored password hash is corrupt for identity %s", record.id)
            raise InternalError(details={"identity_id": record.id}) from e

        if not matches:
            raise InvalidCredentialsError

        if self._password_service.needs_rehash(record.password_hash):
            logger.debug("Password hash for identity %s uses old parameters", record.id)

        claims = Claims.create(record.email, self._jwt_service.token_lifetime)
        try:
            token = self._jwt_service.issue(claims)
        except SigningError as e:
            logger.error("Token signing failed for identity %s", record.id)
            raise InternalError(details={"identity_id": record.id}) from e

        logger.info("Identity logged in: %s", record.email)
        return token

    def verify_token(self, token: str) -> Claims:
        return self._jwt_service.verify_token(token)
