"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
import structlog
from jose import jwt

ROOT = Path(__file__).resolve().parents[1]

# Add app to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Set test environment variables before importing app
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("AUTH0_DOMAIN", "test.local")
os.environ.setdefault("AUTH0_AUDIENCE", "https://migration-settings-api")
os.environ.pop("AUTH0_ENV_MIGRATION_TOKEN", None)

from app.core.auth import (  # noqa: E402
    MIGRATION_TOKEN_ROTATE,
    SETTINGS_ADMIN,
    AuthenticatedUser,
)
from app.core.config import (  # noqa: E402
    Auth0Config,
    MigrationConfig,
    ObservabilityConfig,
    Settings,
)
from app.services.settings_service import MigrationSettingsService  # noqa: E402
from app.services.settings_store import InMemorySettingsStore  # noqa: E402
from app.views.migration_field import FieldArgs  # noqa: E402

OPTIONS_NAME = "wp_auth0_settings"
TEST_CLIENT_SECRET = "__test_client_secret__"
ENV_MIGRATION_TOKEN = "__test_constant_setting__"
TEST_AUDIENCE = "https://migration-settings-api"
ROLES_CLAIM = f"{TEST_AUDIENCE}/roles"


def make_hs_token(claims: dict, secret: str) -> str:
    """Sign claims with HS256, the way migration tokens are issued."""
    return jwt.encode(claims, secret, algorithm="HS256")


def build_settings(env_token: str | None = None, client_secret: str = "") -> Settings:
    """Settings isolated from the process environment."""
    return Settings(
        auth0=Auth0Config(client_secret=client_secret),
        migration=MigrationConfig(migration_token=env_token),
        observability=ObservabilityConfig(log_record_format="console"),
    )


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration made by a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def field_args() -> FieldArgs:
    """Field arguments used by the settings page."""
    return FieldArgs(label_for="wpa0_migration_ws", opt_name="migration_ws")


@pytest.fixture
def settings() -> Settings:
    """Settings without an environment token override."""
    return build_settings()


@pytest.fixture
def env_settings() -> Settings:
    """Settings with AUTH0_ENV_MIGRATION_TOKEN set."""
    return build_settings(env_token=ENV_MIGRATION_TOKEN)


@pytest.fixture
def store() -> InMemorySettingsStore:
    """Fresh settings store with defaults."""
    return InMemorySettingsStore()


@pytest.fixture
def service(store, settings) -> MigrationSettingsService:
    """Migration settings service over a fresh store."""
    return MigrationSettingsService(store, settings)


@pytest.fixture
def env_service(store, env_settings) -> MigrationSettingsService:
    """Migration settings service with the token pinned by the environment."""
    return MigrationSettingsService(store, env_settings)


@pytest.fixture
def signed_token() -> str:
    """Signed migration token carrying a token id."""
    return make_hs_token({"jti": "__test_token_id__"}, TEST_CLIENT_SECRET)


@pytest.fixture
def settings_admin() -> AuthenticatedUser:
    """Settings admin allowed to rotate the migration token."""
    return AuthenticatedUser(
        user_id="auth0|settings-admin",
        email="admin@example.com",
        roles=[SETTINGS_ADMIN],
        permissions=[MIGRATION_TOKEN_ROTATE],
    )
