"""Advanced settings service for the migration web service option."""

from collections.abc import Mapping
from typing import Any

from app.core.config import Settings
from app.core.errors import ConflictError
from app.core.logging import LoggerMixin
from app.services.migration_token import (
    MigrationSettings,
    generate_migration_token,
    resolve_migration_settings,
)
from app.services.settings_store import SettingsStore
from app.views.migration_field import (
    FieldArgs,
    build_migration_field_view,
    render_migration_field,
)


class MigrationSettingsService(LoggerMixin):
    """Validates, persists and renders the migration web service settings."""

    def __init__(self, store: SettingsStore, settings: Settings):
        self.store = store
        self.settings = settings

    @property
    def has_constant_token(self) -> bool:
        """Whether the environment override pins the migration token."""
        return self.settings.migration.has_override

    def _client_secret(self, form: Mapping[str, Any]) -> str | None:
        return (
            form.get("client_secret")
            or self.store.get("client_secret")
            or self.settings.auth0.client_secret_value
        )

    def resolve(self, form: Mapping[str, Any]) -> MigrationSettings:
        """Run the token policy against stored state."""
        resolved = resolve_migration_settings(
            form,
            prior_token=self.store.get("migration_token"),
            env_override=self.settings.migration.migration_token,
            client_secret=self._client_secret(form),
            token_bytes=self.settings.migration.token_entropy_bytes,
        )
        self.logger.info(
            "migration_token_resolved",
            migration_ws=resolved.flag,
            source=resolved.source.value,
            has_token_id=resolved.token_id is not None,
        )
        return resolved

    def migration_ws_validation(self, form: Mapping[str, Any]) -> dict[str, Any]:
        """Return the form with migration keys normalized."""
        resolved = self.resolve(form)
        validated = dict(form)
        validated["migration_ws"] = resolved.flag
        validated["migration_token"] = resolved.token
        validated["migration_token_id"] = resolved.token_id
        return validated

    def input_validator(self, form: Mapping[str, Any] | None) -> dict[str, Any]:
        """Normalize a full settings form submission. Missing input means flag off."""
        return self.migration_ws_validation(dict(form or {}))

    def save(self, form: Mapping[str, Any] | None) -> dict[str, Any]:
        """Validate a submission and persist the result."""
        validated = self.input_validator(form)
        self.store.update(validated)
        return validated

    def rotate_migration_token(self) -> str:
        """Replace the stored token with a freshly generated one."""
        if self.has_constant_token:
            raise ConflictError(
                "Migration token is set by the AUTH0_ENV_MIGRATION_TOKEN environment variable",
                details={"setting": "migration_token"},
            )
        token = generate_migration_token(self.settings.migration.token_entropy_bytes)
        self.store.update({"migration_token": token, "migration_token_id": None})
        self.logger.info("migration_token_rotated")
        return token

    def render_migration_ws(self, field_args: FieldArgs) -> str:
        """Render the migration web service field from current settings."""
        view = build_migration_field_view(
            field_args,
            self.store.get_all(),
            options_name=self.settings.app.options_name,
            token_from_env=self.has_constant_token,
            migration_config=self.settings.migration,
        )
        return render_migration_field(view)
