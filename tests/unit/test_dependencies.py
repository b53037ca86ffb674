"""Unit tests for FastAPI dependencies."""

from unittest.mock import MagicMock

from fastapi import FastAPI
from starlette.requests import Request

from app.core.dependencies import (
    get_app_settings,
    get_migration_settings_service,
    get_settings_store,
)
from app.services.settings_service import MigrationSettingsService
from app.services.settings_store import InMemorySettingsStore


def make_request(app: FastAPI) -> Request:
    return Request({"type": "http", "app": app, "headers": []})


class TestDependencies:
    """Test dependency providers."""

    def test_settings_from_app_state(self, settings):
        app = FastAPI()
        app.state.settings = settings

        assert get_app_settings(make_request(app)) is settings

    def test_settings_fallback(self):
        app = FastAPI()

        assert get_app_settings(make_request(app)) is not None

    def test_store_from_app_state(self):
        app = FastAPI()
        store = InMemorySettingsStore()
        app.state.store = store

        assert get_settings_store(make_request(app)) is store

    def test_store_created_once(self):
        app = FastAPI()
        request = make_request(app)

        first = get_settings_store(request)

        assert isinstance(first, InMemorySettingsStore)
        assert get_settings_store(request) is first

    def test_service_built_from_store_and_settings(self, store):
        settings = MagicMock()

        service = get_migration_settings_service(store=store, settings=settings)

        assert isinstance(service, MigrationSettingsService)
        assert service.store is store
        assert service.settings is settings
