"""Identity repository interface."""

from abc import ABC, abstractmethod

from sigil.domain.identity.identity import IdentityRecord


class IdentityRepository(ABC):
    """
    Repository interface for identities.

    Implementations own their concurrency and locking. The only ordering
    guarantee required: of concurrent ``insert`` calls for one email,
    exactly one succeeds and every other raises ``IdentityConflictError``.

    Example implementation:
        class IdentityRepositorySQLAlchemy(IdentityRepository):
            def __init__(self, session: AsyncSession):
                self._session = session

            async def insert(self, email: str, password_hash: str) -> IdentityRecord:
                # SQLAlchemy-specific implementation
                ...
    """

    @abstractmethod
    async def find_by_email(self, email: str) -> IdentityRecord | None:
        """
        Find an identity by exact (case-sensitive) email match.

        Returns
        -------
        The stored record, or None when no identity has this email

        Raises
        ------
        IdentityStoreError
            If the store cannot be queried
        """

    @abstractmethod
    async def insert(self, email: str, password_hash: str) -> IdentityRecord:
        """
        Create a new identity.

        Parameters
        ----------
        email
            Unique email address
        password_hash
            Encoded password hash (never the plaintext)

        Returns
        -------
        The created record with its generated id and creation time

        Raises
        ------
        IdentityConflictError
            If the email is already registered
        IdentityStoreError
            For any other storage failure
        """
