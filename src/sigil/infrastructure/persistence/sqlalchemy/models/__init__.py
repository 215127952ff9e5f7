"""SQLAlchemy models."""

from sigil.infrastructure.persistence.sqlalchemy.models.identity_model import (
    IdentityModel,
)

__all__ = ["IdentityModel"]
