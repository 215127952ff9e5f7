"""Unit tests for AuthenticationService."""

import logging
from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from sigil.application.services import AuthenticationService
from sigil.domain.identity import (
    Identity,
    IdentityConflictError,
    IdentityRecord,
    IdentityStoreError,
)
from sigil.domain.shared.time import utc_now
from sigil_auth import (
    Claims,
    ErrorCode,
    HashingError,
    IdentityExistsError,
    InternalError,
    InvalidCredentialsError,
    JWTService,
    PasswordHashingService,
    SigningError,
    StoreUnavailableError,
)

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "secure_password_123"
TEST_HASH = "$argon2id$v=19$m=8,t=1,p=1$c2FsdA$aGFzaA"


def _record(email: str = TEST_EMAIL) -> IdentityRecord:
    return IdentityRecord(
        id=1,
        email=email,
        created_at=utc_now(),
        password_hash=TEST_HASH,
    )


class _ServiceFixture:
    def setup_method(self):
        """Set up test fixtures."""
        self.identity_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.jwt_service = Mock(spec=JWTService)
        self.jwt_service.token_lifetime = timedelta(hours=24)

        self.service = AuthenticationService(
            identity_repository=self.identity_repo,
            password_service=self.password_service,
            jwt_service=self.jwt_service,
        )


class TestRegister(_ServiceFixture):
    """Tests for register."""

    @pytest.mark.asyncio
    async def test_register_success(self):
        """Stores the hash, never the password."""
        self.password_service.hash.return_value = TEST_HASH
        self.identity_repo.insert.return_value = _record()

        identity = await self.service.register(TEST_EMAIL, TEST_PASSWORD)

        self.password_service.hash.assert_called_once_with(TEST_PASSWORD)
        self.identity_repo.insert.assert_called_once_with(TEST_EMAIL, TEST_HASH)
        assert identity.email == TEST_EMAIL
        assert identity.id == 1

    @pytest.mark.asyncio
    async def test_register_returns_identity_without_hash(self):
        self.password_service.hash.return_value = TEST_HASH
        self.identity_repo.insert.return_value = _record()

        identity = await self.service.register(TEST_EMAIL, TEST_PASSWORD)

        assert type(identity) is Identity
        assert not hasattr(identity, "password_hash")

    @pytest.mark.asyncio
    async def test_register_does_not_pre_check_existence(self):
        """Uniqueness is left to the store's insert."""
        self.password_service.hash.return_value = TEST_HASH
        self.identity_repo.insert.return_value = _record()

        await self.service.register(TEST_EMAIL, TEST_PASSWORD)

        self.identity_repo.find_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_conflict_raises_identity_exists(self):
        self.password_service.hash.return_value = TEST_HASH
        self.identity_repo.insert.side_effect = IdentityConflictError(TEST_EMAIL)

        with pytest.raises(IdentityExistsError) as exc_info:
            await self.service.register(TEST_EMAIL, TEST_PASSWORD)

        assert exc_info.value.code == ErrorCode.IDENTITY_EXISTS

    @pytest.mark.asyncio
    async def test_register_conflict_logged_as_warning(self, caplog):
        self.password_service.hash.return_value = TEST_HASH
        self.identity_repo.insert.side_effect = IdentityConflictError(TEST_EMAIL)

        with caplog.at_level(logging.INFO, logger="sigil.application"):
            with pytest.raises(IdentityExistsError):
                await self.service.register(TEST_EMAIL, TEST_PASSWORD)

        record = next(r for r in caplog.records if "already exists" in r.getMessage())
        assert record.levelno == logging.WARNING

    @pytest.mark.asyncio
    async def test_register_store_failure_raises_unavailable(self):
        self.password_service.hash.return_value = TEST_HASH
        self.identity_repo.insert.side_effect = IdentityStoreError("insert")

        with pytest.raises(StoreUnavailableError):
            await self.service.register(TEST_EMAIL, TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_register_hashing_failure_skips_insert(self):
        self.password_service.hash.side_effect = HashingError()

        with pytest.raises(HashingError):
            await self.service.register(TEST_EMAIL, TEST_PASSWORD)

        self.identity_repo.insert.assert_not_called()


class TestLogin(_ServiceFixture):
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_login_success(self):
        self.identity_repo.find_by_email.return_value = _record()
        self.password_service.verify.return_value = True
        self.password_service.needs_rehash.return_value = False
        self.jwt_service.issue.return_value = "signed.token.value"

        token = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert token == "signed.token.value"
        self.password_service.verify.assert_called_once_with(TEST_PASSWORD, TEST_HASH)

    @pytest.mark.asyncio
    async def test_login_issues_claims_for_stored_email(self):
        """Subject is the stored email with the issuer's horizon."""
        self.identity_repo.find_by_email.return_value = _record()
        self.password_service.verify.return_value = True
        self.password_service.needs_rehash.return_value = False
        self.jwt_service.issue.return_value = "token"

        before = utc_now().replace(microsecond=0)
        await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        claims = self.jwt_service.issue.call_args[0][0]
        assert isinstance(claims, Claims)
        assert claims.subject == TEST_EMAIL
        assert claims.expires_at >= before + timedelta(hours=24)

    @pytest.mark.asyncio
    async def test_login_unknown_email(self):
        """Unknown email still pays for one verification."""
        self.identity_repo.find_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError):
            await self.service.login("unknown@example.com", TEST_PASSWORD)

        self.password_service.verify_dummy.assert_called_once_with(TEST_PASSWORD)
        self.jwt_service.issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_wrong_password(self):
        self.identity_repo.find_by_email.return_value = _record()
        self.password_service.verify.return_value = False

        with pytest.raises(InvalidCredentialsError):
            await self.service.login(TEST_EMAIL, "wrong_password")

        self.jwt_service.issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_indistinguishable(self):
        self.identity_repo.find_by_email.return_value = None
        with pytest.raises(InvalidCredentialsError) as unknown:
            await self.service.login("unknown@example.com", TEST_PASSWORD)

        self.identity_repo.find_by_email.return_value = _record()
        self.password_service.verify.return_value = False
        with pytest.raises(InvalidCredentialsError) as wrong:
            await self.service.login(TEST_EMAIL, "wrong_password")

        assert type(unknown.value) is type(wrong.value)
        assert unknown.value.code == wrong.value.code
        assert unknown.value.message == wrong.value.message
        assert unknown.value.details == wrong.value.details

    @pytest.mark.asyncio
    async def test_login_store_failure_raises_unavailable(self):
        self.identity_repo.find_by_email.side_effect = IdentityStoreError("find_by_email")

        with pytest.raises(StoreUnavailableError):
            await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        self.password_service.verify.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_corrupt_hash_raises_internal_error(self):
        """A malformed stored hash is a fault, not a credential failure."""
        self.identity_repo.find_by_email.return_value = _record()
        self.password_service.verify.side_effect = HashingError()

        with pytest.raises(InternalError) as exc_info:
            await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert exc_info.value.code == ErrorCode.INTERNAL_ERROR
        assert exc_info.value.details == {"identity_id": 1}

    @pytest.mark.asyncio
    async def test_login_signing_failure_raises_internal_error(self):
        self.identity_repo.find_by_email.return_value = _record()
        self.password_service.verify.return_value = True
        self.password_service.needs_rehash.return_value = False
        self.jwt_service.issue.side_effect = SigningError()

        with pytest.raises(InternalError):
            await self.service.login(TEST_EMAIL, TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_login_with_outdated_hash_still_succeeds(self):
        self.identity_repo.find_by_email.return_value = _record()
        self.password_service.verify.return_value = True
        self.password_service.needs_rehash.return_value = True
        self.jwt_service.issue.return_value = "token"

        token = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert token == "token"
        self.identity_repo.insert.assert_not_called()


class TestVerifyToken(_ServiceFixture):
    def test_verify_token_delegates(self):
        claims = Claims.create(TEST_EMAIL, timedelta(hours=1))
        self.jwt_service.verify_token.return_value = claims

        assert self.service.verify_token("token") == claims
        self.jwt_service.verify_token.assert_called_once_with("token")
