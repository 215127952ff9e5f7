"""SQLAlchemy implementation of the identity store.

Provides:
- Base: Declarative base
- IdentityModel: the ``users`` table
- IdentityRepositorySQLAlchemy: Repository implementation
- create_tables / drop_tables: schema helpers
"""

from sigil.infrastructure.persistence.sqlalchemy.base import Base
from sigil.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    drop_tables,
)
from sigil.infrastructure.persistence.sqlalchemy.models import IdentityModel
from sigil.infrastructure.persistence.sqlalchemy.repositories import (
    IdentityRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "IdentityModel",
    "IdentityRepositorySQLAlchemy",
    "create_tables",
    "drop_tables",
]
