"""Data classes for sigil_auth."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any


@dataclass(frozen=True)
class Claims:
    """Subject and expiration embedded in a session token.

    ``expires_at`` is always timezone-aware UTC with whole-second
    precision, matching what survives a round trip through ``exp``.
    """

    subject: str
    expires_at: datetime

    @classmethod
    def create(
        cls,
        subject: str,
        lifetime: timedelta,
        now: datetime | None = None,
    ) -> Claims:
        """Build claims expiring ``lifetime`` after ``now`` (default: current time).

        A naive ``now`` is taken as UTC; aware values are converted to UTC.
        """
        if now is None:
            now = datetime.now(tz=timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        issued = now.astimezone(timezone.utc).replace(microsecond=0)
        return cls(subject=subject, expires_at=issued + lifetime)

    def to_payload(self) -> dict[str, Any]:
        return {
            "sub": self.subject,
            "exp": int(self.expires_at.timestamp()),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Claims:
        """Rebuild claims from a decoded JWT payload.

        Raises
        ------
        KeyError, TypeError, ValueError
            If ``sub`` or ``exp`` is missing or has the wrong type
        """
        subject = payload["sub"]
        if not isinstance(subject, str):
            msg = "sub must be a string"
            raise TypeError(msg)
        exp = payload["exp"]
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            msg = "exp must be numeric"
            raise TypeError(msg)
        return cls(
            subject=subject,
            expires_at=datetime.fromtimestamp(int(exp), tz=timezone.utc),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(tz=timezone.utc)) >= self.expires_at
