"""Identity records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Identity:
    """A registered user as seen outside the store.

    Carries no credential material and is safe to serialize outbound.
    """

    id: int
    email: str
    created_at: datetime


@dataclass(frozen=True)
class IdentityRecord(Identity):
    """A stored identity including its password hash.

    Only the authentication core sees this type. The hash is excluded
    from ``repr`` so it never reaches logs by accident.
    """

    password_hash: str = field(repr=False)

    def to_identity(self) -> Identity:
        return Identity(id=self.id, email=self.email, created_at=self.created_at)
