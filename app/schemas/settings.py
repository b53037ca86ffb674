"""Settings form schemas for the migration web service option."""

from pydantic import BaseModel, ConfigDict, Field


class MigrationSettingsInput(BaseModel):
    """Submitted settings form. Every field is optional; unknown keys pass through."""

    model_config = ConfigDict(extra="allow")

    migration_ws: str | int | bool | None = Field(
        None, description="Checkbox value, '1' when checked"
    )
    client_secret: str | None = Field(None, description="Auth0 application client secret")

    def to_form(self) -> dict:
        """Return submitted keys only, as the settings form would post them."""
        return self.model_dump(exclude_unset=True)


class ValidatedSettingsResponse(BaseModel):
    """Normalized migration settings."""

    migration_ws: bool
    migration_token: str | None = None
    migration_token_id: str | None = None
    token_from_env: bool = Field(
        default=False, description="Whether AUTH0_ENV_MIGRATION_TOKEN pins the token"
    )


class RotateTokenResponse(BaseModel):
    """Result of a migration token rotation."""

    migration_token: str
