"""
FastAPI dependency injection utilities.

Provides the settings store and the migration settings service from
application state.
"""

from typing import Annotated

from fastapi import Depends, Request

from app.core.config import Settings, get_settings
from app.services.settings_service import MigrationSettingsService
from app.services.settings_store import InMemorySettingsStore, SettingsStore


def get_app_settings(request: Request) -> Settings:
    """Return settings loaded at startup, falling back to the cached instance."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_settings_store(request: Request) -> SettingsStore:
    """
    Return the settings store held in application state.

    A store is created on first use when the lifespan did not run
    (e.g. a TestClient used without a context manager).
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = InMemorySettingsStore()
        request.app.state.store = store
    return store


def get_migration_settings_service(
    store: SettingsStore = Depends(get_settings_store),
    settings: Settings = Depends(get_app_settings),
) -> MigrationSettingsService:
    """Build the migration settings service for a request."""
    return MigrationSettingsService(store, settings)


SettingsServiceDep = Annotated[MigrationSettingsService, Depends(get_migration_settings_service)]
