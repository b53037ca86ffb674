"""Configuration management for the Migration Settings service.

Configuration is loaded from environment variables. The migration token
override (``AUTH0_ENV_MIGRATION_TOKEN``) is read once here and handed to the
token policy explicitly.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnvironment(str, Enum):
    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AppConfig(BaseSettings):
    name: str = Field(default="auth0-migration-settings")
    env: AppEnvironment = Field(default=AppEnvironment.LOCAL)
    version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    log_level: LogLevel = Field(default=LogLevel.INFO)
    options_name: str = Field(default="wp_auth0_settings")

    model_config = SettingsConfigDict(env_prefix="APP_")

    @field_validator("env", mode="before")
    @classmethod
    def validate_env(cls, v: str | AppEnvironment) -> AppEnvironment:
        if isinstance(v, AppEnvironment):
            return v
        return AppEnvironment(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        if isinstance(v, LogLevel):
            return v
        return LogLevel(v)


class ServerConfig(BaseSettings):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    workers: int = Field(default=1)

    model_config = SettingsConfigDict(env_prefix="SERVER_")


class Auth0Config(BaseSettings):
    domain: str = Field(default="")
    audience: str = Field(default="")
    client_id: str = Field(default="")
    client_secret: SecretStr = Field(default=SecretStr(""))
    algorithms: str = Field(default="RS256")  # Comma-separated

    model_config = SettingsConfigDict(env_prefix="AUTH0_")

    @property
    def client_secret_value(self) -> str | None:
        """Return the configured client secret, or None when unset."""
        return self.client_secret.get_secret_value() or None

    @property
    def jwks_url(self) -> str:
        """Build JWKS URL."""
        return f"https://{self.domain}/.well-known/jwks.json"

    @property
    def issuer_url(self) -> str:
        """Build issuer URL."""
        return f"https://{self.domain}/"

    @property
    def algorithms_list(self) -> list[str]:
        """Parse Auth0 algorithms string into a list."""
        return [algo.strip() for algo in self.algorithms.split(",") if algo.strip()]


class MigrationConfig(BaseSettings):
    # AUTH0_ENV_MIGRATION_TOKEN
    migration_token: str | None = Field(default=None)
    token_entropy_bytes: int = Field(default=64, ge=49)
    docs_url: str = Field(default="https://auth0.com/docs/cms/wordpress/user-migration")
    dashboard_url: str = Field(default="https://manage.auth0.com/#/connections/database")

    model_config = SettingsConfigDict(env_prefix="AUTH0_ENV_")

    @field_validator("migration_token", mode="before")
    @classmethod
    def blank_token_is_unset(cls, v: str | None) -> str | None:
        """Treat an empty or whitespace-only override as not set."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @property
    def has_override(self) -> bool:
        return self.migration_token is not None


class ObservabilityConfig(BaseSettings):
    service_name: str = Field(default="auth0-migration-settings")
    log_record_format: str = Field(default="json")

    model_config = SettingsConfigDict(env_prefix="OTEL_")


class SecurityConfig(BaseSettings):
    cors_allowed_origins: str = Field(default="http://localhost:3000,http://localhost:8000")
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: list[str] = Field(default=["GET", "POST"])
    cors_allow_headers: list[str] = Field(default=["Authorization", "Content-Type", "X-Request-ID"])

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    @field_validator("cors_allowed_origins", mode="after")
    @classmethod
    def validate_cors_allowed_origins(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated string into list of origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class Settings(BaseSettings):
    app: AppConfig = Field(default_factory=AppConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    auth0: Auth0Config = Field(default_factory=Auth0Config)
    migration: MigrationConfig = Field(default_factory=MigrationConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (useful for testing)."""
    get_settings.cache_clear()
    return get_settings()
