"""Password hashing service using Argon2id.

Hashes are PHC strings (``$argon2id$v=19$m=...,t=...,p=...$salt$digest``)
so cost parameters travel with every stored hash and older hashes stay
verifiable after the configured parameters change.
"""

import secrets

from argon2 import PasswordHasher, Type
from argon2.exceptions import HashingError as Argon2HashingError
from argon2.exceptions import (
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from sigil_auth.exceptions import HashingError


def _encode(password: str) -> bytes:
    """UTF-8 encode a plaintext, passing lone surrogates through unchanged."""
    return password.encode("utf-8", "surrogatepass")


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses Argon2id, a memory-hard algorithm. A fresh random salt is drawn
    for every call to ``hash``.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> hashed = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hashed)
    True
    >>> service.verify("wrong_password", hashed)
    False
    """

    DEFAULT_TIME_COST = 2
    DEFAULT_MEMORY_COST = 19456  # KiB
    DEFAULT_PARALLELISM = 1
    HASH_LENGTH = 32
    SALT_LENGTH = 16

    def __init__(
        self,
        time_cost: int = DEFAULT_TIME_COST,
        memory_cost: int = DEFAULT_MEMORY_COST,
        parallelism: int = DEFAULT_PARALLELISM,
    ):
        """Initialize the password hashing service.

        Parameters
        ----------
        time_cost
            Number of Argon2 iterations.
        memory_cost
            Memory usage in KiB. Must be at least ``8 * parallelism``.
        parallelism
            Number of parallel lanes.
        """
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=self.HASH_LENGTH,
            salt_len=self.SALT_LENGTH,
            type=Type.ID,
        )
        # Target for verify_dummy; hashed up front, never stored.
        self._dummy_hash = self.hash(secrets.token_urlsafe(16))

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash. Any string is accepted.

        Returns
        -------
        The Argon2id hash as a PHC string

        Raises
        ------
        HashingError
            If the underlying library fails (e.g. no entropy source)
        """
        try:
            return self._hasher.hash(_encode(password))
        except (Argon2HashingError, OSError) as e:
            msg = "Password hashing failed"
            raise HashingError(details={"reason": msg}) from e

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a stored hash.

        The digest comparison is done by libargon2 in constant time.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The stored Argon2 hash to verify against

        Returns
        -------
        True if password matches, False otherwise

        Raises
        ------
        HashingError
            If ``password_hash`` is not a parseable Argon2 hash
        """
        try:
            return self._hasher.verify(password_hash, _encode(password))
        except VerifyMismatchError:
            return False
        # The plaintext is already bytes, so only a non-ASCII hash fails to encode
        except (InvalidHashError, UnicodeEncodeError) as e:
            raise HashingError(details={"reason": "Stored hash is malformed"}) from e
        except VerificationError as e:
            raise HashingError(details={"reason": "Hash verification failed"}) from e

    def verify_dummy(self, password: str) -> None:
        """Run one verification against a throwaway hash.

        Login calls this when the email is unknown so the response costs
        the same Argon2 work as a wrong-password check.
        """
        self.verify(password, self._dummy_hash)

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a stored hash was produced with outdated parameters.

        Parameters
        ----------
        password_hash
            The existing hash to check

        Returns
        -------
        True if the hash should be regenerated with current parameters
        """
        try:
            return self._hasher.check_needs_rehash(password_hash)
        except (InvalidHashError, UnicodeEncodeError):
            return True
