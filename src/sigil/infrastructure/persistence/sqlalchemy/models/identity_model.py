"""SQLAlchemy model for identities.

Table: users
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sigil.domain.shared.time import utc_now
from sigil.infrastructure.persistence.sqlalchemy.base import Base


class IdentityModel(Base):
    """
    SQLAlchemy model for a registered identity.

    The unique constraint on ``email`` is what serializes concurrent
    registrations: of two inserts for the same email exactly one commits.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Case-sensitive, stored exactly as submitted
    email: Mapped[str] = mapped_column(
        String(320),
        unique=True,
        nullable=False,
        index=True,
    )

    # Argon2 PHC string (~100 chars)
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<IdentityModel(id={self.id}, email={self.email})>"
