"""Unit tests for health check routes."""

from fastapi.testclient import TestClient

from app import __version__
from app.api.routes.health import HealthResponse, ReadyResponse, router
from app.main import create_app
from app.services.settings_store import InMemorySettingsStore


class TestHealthRoutes:
    """Test health check routes."""

    def test_health_routes_in_router(self):
        """Test that health routes are defined in router."""
        paths = [r.path for r in router.routes]
        assert "/health" in paths
        assert "/health/ready" in paths
        assert "/health/live" in paths

    def test_health_response_model(self):
        response = HealthResponse(status="healthy", version="1.0.0")
        assert response.status == "healthy"

    def test_ready_response_model(self):
        response = ReadyResponse(status="ready", settings_store="available")
        assert response.settings_store == "available"


class TestHealthEndpoints:
    """Test health endpoints through the application."""

    def test_health_check(self):
        response = TestClient(create_app()).get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}

    def test_ready_without_store(self):
        response = TestClient(create_app()).get("/api/v1/health/ready")

        assert response.json()["status"] == "starting"

    def test_ready_with_store(self):
        app = create_app()
        app.state.store = InMemorySettingsStore()

        response = TestClient(app).get("/api/v1/health/ready")

        assert response.json() == {"status": "ready", "settings_store": "available"}

    def test_live(self):
        response = TestClient(create_app()).get("/api/v1/health/live")

        assert response.json() == {"status": "alive"}
