"""Root pytest configuration and shared fixtures.

Test Structure:
    tests/
    └── unit/
        ├── sigil_auth/        # Hashing, signing, keys, error taxonomy
        ├── sigil_config/      # Settings loading
        ├── domain/            # Identity records
        ├── application/       # AuthenticationService (mocks and in-memory store)
        ├── infrastructure/    # SQLAlchemy repository on SQLite
        └── presentation/      # HTTP API and CLI

Argon2 runs with minimal cost parameters in tests; production defaults are
covered by dedicated tests in test_password_service.py.
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from sigil_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Drop cached settings so env changes in one test don't leak."""
    clear_settings_cache()
    yield
    clear_settings_cache()

