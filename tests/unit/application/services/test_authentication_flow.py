"""Behavior tests for AuthenticationService with real hashing and signing.

The identity store is an in-memory implementation of IdentityRepository
that enforces email uniqueness exactly like the database does.
"""

import asyncio
from datetime import timedelta

import pytest

from sigil.application.services import AuthenticationService
from sigil.domain.identity import (
    IdentityConflictError,
    IdentityRecord,
    IdentityRepository,
)
from sigil.domain.shared.time import utc_now
from sigil_auth import (
    IdentityExistsError,
    InvalidCredentialsError,
    JWTService,
    PasswordHashingService,
    SigningKeyPair,
)


class InMemoryIdentityRepository(IdentityRepository):
    def __init__(self) -> None:
        self._by_email: dict[str, IdentityRecord] = {}
        self._next_id = 1

    async def find_by_email(self, email: str) -> IdentityRecord | None:
        return self._by_email.get(email)

    async def insert(self, email: str, password_hash: str) -> IdentityRecord:
        if email in self._by_email:
            raise IdentityConflictError(email)
        record = IdentityRecord(
            id=self._next_id,
            email=email,
            created_at=utc_now(),
            password_hash=password_hash,
        )
        self._next_id += 1
        self._by_email[email] = record
        return record


class TestAuthenticationFlow:
    """Register and login end to end."""

    def setup_method(self):
        """Set up test fixtures."""
        self.repo = InMemoryIdentityRepository()
        self.jwt_service = JWTService.from_key_pair(SigningKeyPair.generate())
        self.service = AuthenticationService(
            identity_repository=self.repo,
            password_service=PasswordHashingService(time_cost=1, memory_cost=8),
            jwt_service=self.jwt_service,
        )

    @pytest.mark.asyncio
    async def test_register_then_login(self):
        await self.service.register("a@x.com", "pw1")

        token = await self.service.login("a@x.com", "pw1")

        assert self.jwt_service.verify_token(token).subject == "a@x.com"

    @pytest.mark.asyncio
    async def test_register_same_email_twice(self):
        await self.service.register("a@x.com", "pw1")

        with pytest.raises(IdentityExistsError):
            await self.service.register("a@x.com", "other")

    @pytest.mark.asyncio
    async def test_failed_duplicate_keeps_original_credentials(self):
        await self.service.register("a@x.com", "pw1")
        with pytest.raises(IdentityExistsError):
            await self.service.register("a@x.com", "pw2")

        await self.service.login("a@x.com", "pw1")
        with pytest.raises(InvalidCredentialsError):
            await self.service.login("a@x.com", "pw2")

    @pytest.mark.asyncio
    async def test_stored_hash_is_not_the_password(self):
        await self.service.register("a@x.com", "pw1")

        record = await self.repo.find_by_email("a@x.com")

        assert record.password_hash != "pw1"
        assert record.password_hash.startswith("$argon2id$")

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self):
        await self.service.register("a@x.com", "pw1")

        with pytest.raises(InvalidCredentialsError) as wrong:
            await self.service.login("a@x.com", "bad")
        with pytest.raises(InvalidCredentialsError) as unknown:
            await self.service.login("b@x.com", "pw1")

        assert type(wrong.value) is type(unknown.value)
        assert wrong.value.code == unknown.value.code
        assert str(wrong.value) == str(unknown.value)

    @pytest.mark.asyncio
    async def test_unencodable_password_fails_like_any_wrong_password(self):
        await self.service.register("a@x.com", "pw1")

        with pytest.raises(InvalidCredentialsError) as wrong:
            await self.service.login("a@x.com", "pw\ud800")
        with pytest.raises(InvalidCredentialsError) as unknown:
            await self.service.login("b@x.com", "pw\ud800")

        assert type(wrong.value) is type(unknown.value)
        assert wrong.value.code == unknown.value.code

    @pytest.mark.asyncio
    async def test_register_and_login_with_unencodable_password(self):
        await self.service.register("a@x.com", "pw\ud800")

        token = await self.service.login("a@x.com", "pw\ud800")

        assert self.jwt_service.verify_token(token).subject == "a@x.com"

    @pytest.mark.asyncio
    async def test_email_is_case_sensitive(self):
        """Emails are opaque identifiers; no normalization happens."""
        await self.service.register("a@x.com", "pw1")
        await self.service.register("A@x.com", "pw2")

        with pytest.raises(InvalidCredentialsError):
            await self.service.login("A@X.COM", "pw1")

    @pytest.mark.asyncio
    async def test_token_expires_after_horizon(self):
        await self.service.register("a@x.com", "pw1")
        issued = utc_now().replace(microsecond=0)

        token = await self.service.login("a@x.com", "pw1")

        claims = self.service.verify_token(token)
        assert claims.expires_at - issued >= timedelta(hours=24)
        assert claims.expires_at - issued <= timedelta(hours=24, seconds=5)

    @pytest.mark.asyncio
    async def test_concurrent_registrations_single_winner(self):
        """Exactly one of several concurrent registrations succeeds."""
        results = await asyncio.gather(
            *(self.service.register("race@x.com", f"pw{i}") for i in range(5)),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, Exception)]
        conflicts = [r for r in results if isinstance(r, IdentityExistsError)]
        assert len(successes) == 1
        assert len(conflicts) == 4
