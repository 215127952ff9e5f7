"""FastAPI application factory.

Creates and configures the FastAPI application with routers, exception
handlers, and the process-wide collaborators built at startup.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sigil import __version__
from sigil.infrastructure.persistence.sqlalchemy import create_tables
from sigil.infrastructure.persistence.sqlalchemy.init_db import create_engine_from_url
from sigil.presentation.api.exception_handlers import setup_exception_handlers
from sigil.presentation.api.routers import auth_router
from sigil_auth import JWTService, PasswordHashingService, SigningKeyPair
from sigil_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Sets up logging for the sigil application with:
    - Console output with timestamps and module names
    - Configurable log level for sigil modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level_str = settings.log_level.upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("sigil").setLevel(log_level)
    logging.getLogger("sigil_auth").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = __version__
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """User registration and login.

**Security:**
- Passwords are hashed with Argon2id
- Tokens are EdDSA (Ed25519) signed JWTs, valid for a fixed horizon
- Unknown email and wrong password are indistinguishable
""",
    },
]


def load_signing_key_pair(settings: Settings) -> SigningKeyPair:
    """Load the Ed25519 key pair from inline settings or the key file.

    Raises
    ------
    SigningError
        If no usable key material is configured (fatal at startup)
    """
    if settings.jwt_private_key is not None:
        return SigningKeyPair.from_private_pem(
            settings.jwt_private_key.get_secret_value().encode(),
        )
    return SigningKeyPair.from_file(settings.jwt_private_key_path)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build process-wide collaborators, dispose them on shutdown."""
    settings: Settings = app.state.settings

    key_pair = load_signing_key_pair(settings)
    app.state.jwt_service = JWTService.from_key_pair(
        key_pair,
        access_token_expire_hours=settings.jwt_token_expire_hours,
    )
    app.state.password_service = PasswordHashingService(
        time_cost=settings.password_time_cost,
        memory_cost=settings.password_memory_cost,
        parallelism=settings.password_parallelism,
    )

    engine = create_engine_from_url(settings.database_url)
    if settings.database_auto_create:
        await create_tables(engine)
    app.state.session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    logger.info("%s API %s ready", settings.app_name, API_VERSION)
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("Database engine disposed")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()
    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    # Configure logging on first app creation (not on module import)
    _configure_logging()

    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Email/password authentication issuing signed session tokens.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.settings = settings

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": API_VERSION,
            "api_versions": ["v1"],
        }

    return app
