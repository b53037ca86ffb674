"""Schemas package for request/response models."""

from app.schemas.settings import (
    MigrationSettingsInput,
    RotateTokenResponse,
    ValidatedSettingsResponse,
)

__all__ = [
    "MigrationSettingsInput",
    "RotateTokenResponse",
    "ValidatedSettingsResponse",
]
