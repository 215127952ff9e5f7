"""Pytest fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from sigil.presentation.api.app import API_V1_PREFIX, create_app
from sigil_auth import SigningKeyPair
from sigil_config.settings import Settings


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def signing_key_pair() -> SigningKeyPair:
    return SigningKeyPair.generate()


@pytest.fixture
def api_settings(tmp_path, signing_key_pair) -> Settings:
    """Test API settings backed by a temporary SQLite file."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        database_auto_create=True,
        jwt_private_key=SecretStr(signing_key_pair.private_pem().decode()),
        jwt_token_expire_hours=24,
        password_time_cost=1,
        password_memory_cost=8,
        password_parallelism=1,
        api_debug=True,
        api_cors_origins="",
    )


@pytest.fixture
def test_client(api_settings):
    """TestClient with the lifespan running (tables created, keys loaded)."""
    app = create_app(api_settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def registered_user_data() -> dict:
    return {"email": "a@x.com", "password": "pw1"}
