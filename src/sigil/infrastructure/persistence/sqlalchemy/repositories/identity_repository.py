"""SQLAlchemy implementation of IdentityRepository."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sigil.domain.identity import (
    IdentityConflictError,
    IdentityRecord,
    IdentityRepository,
    IdentityStoreError,
)
from sigil.domain.shared.time import ensure_tz_aware
from sigil.infrastructure.persistence.sqlalchemy.models import IdentityModel

logger = logging.getLogger(__name__)


class IdentityRepositorySQLAlchemy(IdentityRepository):
    """SQLAlchemy implementation of the IdentityRepository interface.

    Writes are flushed but not committed; the caller owns the transaction.
    A conflicting insert rolls the session back so it stays usable.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> IdentityRecord | None:
        stmt = select(IdentityModel).where(IdentityModel.email == email)
        try:
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Identity lookup failed: %s", type(e).__name__)
            raise IdentityStoreError("find_by_email") from e

        if model is None:
            return None

        return self._map_to_domain(model)

    async def insert(self, email: str, password_hash: str) -> IdentityRecord:
        model = IdentityModel(email=email, password_hash=password_hash)

        try:
            self._session.add(model)
            await self._session.flush()
        except IntegrityError as e:
            # email is the only constraint a well-formed insert can violate
            await self._session.rollback()
            raise IdentityConflictError(email) from e
        except (SQLAlchemyError, OSError) as e:
            logger.error("Identity insert failed: %s", type(e).__name__)
            raise IdentityStoreError("insert") from e

        logger.info("Created identity: %s (email: %s)", model.id, model.email)
        return self._map_to_domain(model)

    def _map_to_domain(self, model: IdentityModel) -> IdentityRecord:
        return IdentityRecord(
            id=model.id,
            email=model.email,
            created_at=ensure_tz_aware(model.created_at),
            password_hash=model.password_hash,
        )
