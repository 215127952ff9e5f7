"""JWT token service.

Issues and verifies stateless session tokens signed with EdDSA (Ed25519).
Only the issuing process holds the private key; any relying party can
verify with the public key alone.
"""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Any

import jwt
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from jwt.algorithms import OKPAlgorithm

from sigil_auth.exceptions import (
    InvalidTokenError,
    MalformedTokenError,
    SigningError,
    TokenExpiredError,
)
from sigil_auth.keys import SigningKeyPair
from sigil_auth.schemas import Claims


class JWTService:
    """Service for JWT token creation and verification.

    Examples
    --------
    >>> keys = SigningKeyPair.generate()
    >>> service = JWTService.from_key_pair(keys)
    >>> token = service.create_access_token("user@example.com")
    >>> service.verify_token(token).subject
    'user@example.com'
    """

    DEFAULT_ACCESS_EXPIRE_HOURS = 24
    ALGORITHM = "EdDSA"

    def __init__(
        self,
        public_key: Ed25519PublicKey,
        private_key: Ed25519PrivateKey | None = None,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        public_key
            Key used to verify token signatures.
        private_key
            Key used to sign tokens. Verify-only services omit it.
        access_token_expire_hours
            Hours until an issued token expires (default 24)
        """
        if access_token_expire_hours <= 0:
            msg = "Token lifetime must be positive"
            raise ValueError(msg)

        self._public_key = public_key
        self._private_key = private_key
        self._access_expire = timedelta(hours=access_token_expire_hours)

    @classmethod
    def from_key_pair(
        cls,
        key_pair: SigningKeyPair,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
    ) -> JWTService:
        return cls(
            public_key=key_pair.public_key,
            private_key=key_pair.private_key,
            access_token_expire_hours=access_token_expire_hours,
        )

    @property
    def token_lifetime(self) -> timedelta:
        """Fixed horizon between issuance and expiry."""
        return self._access_expire

    def create_access_token(self, subject: str) -> str:
        """Build claims for ``subject`` with the configured horizon and sign them."""
        return self.issue(Claims.create(subject, self._access_expire))

    def issue(self, claims: Claims) -> str:
        """Sign claims into a compact JWT.

        Raises
        ------
        SigningError
            If no private key is configured or signing fails
        """
        if self._private_key is None:
            raise SigningError(details={"reason": "No private key configured"})

        try:
            return jwt.encode(
                claims.to_payload(),
                self._private_key,
                algorithm=self.ALGORITHM,
            )
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise SigningError(details={"reason": "Token signing failed"}) from e

    def verify_token(self, token: str) -> Claims:
        """Verify a token's signature and expiry and return its claims.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        Claims decoded from the token

        Raises
        ------
        TokenExpiredError
            If ``exp`` is in the past
        InvalidTokenError
            If the signature or algorithm does not check out
        MalformedTokenError
            If the token cannot be decoded or lacks ``sub``/``exp``
        """
        try:
            payload = jwt.decode(
                token,
                self._public_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as e:
            raise InvalidTokenError from e
        except (jwt.DecodeError, jwt.MissingRequiredClaimError) as e:
            raise MalformedTokenError(details={"reason": str(e)}) from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(details={"reason": str(e)}) from e

        try:
            return Claims.from_payload(payload)
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise MalformedTokenError(
                details={"reason": f"Malformed token payload: {e}"},
            ) from e

    def public_jwk(self) -> dict[str, Any]:
        """Public verification key as a JSON Web Key."""
        jwk = json.loads(OKPAlgorithm.to_jwk(self._public_key))
        jwk.update({"alg": self.ALGORITHM, "use": "sig"})
        return jwk
