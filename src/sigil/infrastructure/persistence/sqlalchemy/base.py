"""SQLAlchemy declarative base for Sigil models.

Examples
--------
# Create the schema for a fresh database:
from sigil.infrastructure.persistence.sqlalchemy import Base
async with engine.begin() as conn:
    await conn.run_sync(Base.metadata.create_all)
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all Sigil models."""
