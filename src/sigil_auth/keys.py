"""Ed25519 signing key material.

The key pair is loaded once at process start and passed explicitly into
``JWTService``. Any problem with the key material raises ``SigningError``,
which callers treat as fatal before serving.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from sigil_auth.exceptions import SigningError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SigningKeyPair:
    """Immutable Ed25519 key pair used to sign and verify tokens."""

    private_key: Ed25519PrivateKey
    public_key: Ed25519PublicKey

    @classmethod
    def generate(cls) -> SigningKeyPair:
        """Create a fresh random key pair."""
        private_key = Ed25519PrivateKey.generate()
        return cls(private_key=private_key, public_key=private_key.public_key())

    @classmethod
    def from_private_pem(cls, data: bytes) -> SigningKeyPair:
        """Load a key pair from a PEM-encoded Ed25519 private key.

        Raises
        ------
        SigningError
            If the data is not an unencrypted Ed25519 private key
        """
        try:
            private_key = serialization.load_pem_private_key(data, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise SigningError(details={"reason": "Unreadable private key"}) from e

        if not isinstance(private_key, Ed25519PrivateKey):
            raise SigningError(
                details={"reason": f"Expected Ed25519 key, got {type(private_key).__name__}"},
            )
        return cls(private_key=private_key, public_key=private_key.public_key())

    @classmethod
    def from_file(cls, path: Path) -> SigningKeyPair:
        """Load a key pair from a PEM file on disk.

        Raises
        ------
        SigningError
            If the file is missing, unreadable, or holds an unsuitable key
        """
        try:
            data = path.read_bytes()
        except OSError as e:
            raise SigningError(
                details={"reason": f"Cannot read private key file {path}"},
            ) from e
        key_pair = cls.from_private_pem(data)
        logger.info("Loaded signing key from %s", path)
        return key_pair

    def private_pem(self) -> bytes:
        """Private key as unencrypted PKCS8 PEM."""
        return self.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def public_pem(self) -> bytes:
        """Public key as SubjectPublicKeyInfo PEM."""
        return public_key_to_pem(self.public_key)


def public_key_to_pem(public_key: Ed25519PublicKey) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def load_public_key_pem(data: bytes) -> Ed25519PublicKey:
    """Load a PEM-encoded Ed25519 public key (for relying parties).

    Raises
    ------
    SigningError
        If the data is not an Ed25519 public key
    """
    try:
        public_key = serialization.load_pem_public_key(data)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise SigningError(details={"reason": "Unreadable public key"}) from e

    if not isinstance(public_key, Ed25519PublicKey):
        raise SigningError(
            details={"reason": f"Expected Ed25519 key, got {type(public_key).__name__}"},
        )
    return public_key
