"""Unit tests for configuration module."""

from unittest.mock import patch

from app.core.config import (
    AppConfig,
    Auth0Config,
    MigrationConfig,
    SecurityConfig,
    Settings,
    get_settings,
    reload_settings,
)


class TestConfig:
    """Tests for configuration classes."""

    def test_app_config_defaults(self):
        """Test AppConfig has correct defaults."""
        with patch.dict("os.environ", {}, clear=True):
            config = AppConfig()
        assert config.name == "auth0-migration-settings"
        assert config.env.value == "local"
        assert config.options_name == "wp_auth0_settings"

    def test_migration_config_defaults(self):
        """Test MigrationConfig has no override by default."""
        with patch.dict("os.environ", {}, clear=True):
            config = MigrationConfig()
        assert config.migration_token is None
        assert config.has_override is False
        assert config.token_entropy_bytes == 64
        assert config.docs_url == "https://auth0.com/docs/cms/wordpress/user-migration"
        assert config.dashboard_url == "https://manage.auth0.com/#/connections/database"

    def test_migration_token_from_environment(self):
        """Test AUTH0_ENV_MIGRATION_TOKEN is picked up."""
        with patch.dict("os.environ", {"AUTH0_ENV_MIGRATION_TOKEN": "__env_token__"}):
            config = MigrationConfig()
        assert config.migration_token == "__env_token__"
        assert config.has_override is True

    def test_blank_migration_token_is_unset(self):
        """Test a whitespace override counts as not set."""
        with patch.dict("os.environ", {"AUTH0_ENV_MIGRATION_TOKEN": "   "}):
            config = MigrationConfig()
        assert config.migration_token is None
        assert config.has_override is False

    def test_auth0_client_secret_value(self):
        """Test client secret accessor."""
        assert Auth0Config(client_secret="abc").client_secret_value == "abc"
        assert Auth0Config(client_secret="").client_secret_value is None

    def test_auth0_urls_and_algorithms(self):
        config = Auth0Config(domain="tenant.auth0.com", algorithms="RS256, HS256")
        assert config.jwks_url == "https://tenant.auth0.com/.well-known/jwks.json"
        assert config.issuer_url == "https://tenant.auth0.com/"
        assert config.algorithms_list == ["RS256", "HS256"]

    def test_cors_origins_parsed(self):
        """Test comma-separated origins are split."""
        config = SecurityConfig(cors_allowed_origins="http://a.test, http://b.test")
        assert config.cors_allowed_origins == ["http://a.test", "http://b.test"]

    def test_get_settings_cached(self):
        """Test that get_settings returns cached instance."""
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2

    def test_reload_settings(self):
        """Test that reload_settings picks up environment changes."""
        with patch.dict("os.environ", {"AUTH0_ENV_MIGRATION_TOKEN": "__reloaded__"}):
            settings = reload_settings()
            assert settings.migration.migration_token == "__reloaded__"
        reload_settings()

    def test_settings_has_all_configs(self):
        """Test Settings has all required config objects."""
        settings = Settings()
        assert hasattr(settings, "app")
        assert hasattr(settings, "server")
        assert hasattr(settings, "auth0")
        assert hasattr(settings, "migration")
        assert hasattr(settings, "observability")
        assert hasattr(settings, "security")
