"""Identity domain."""

from sigil.domain.identity.exceptions import IdentityConflictError, IdentityStoreError
from sigil.domain.identity.identity import Identity, IdentityRecord
from sigil.domain.identity.repositories import IdentityRepository

__all__ = [
    "Identity",
    "IdentityConflictError",
    "IdentityRecord",
    "IdentityRepository",
    "IdentityStoreError",
]
