"""Admin settings routes for the migration web service option."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from app.core.auth import require_settings_admin, require_token_rotation
from app.core.dependencies import SettingsServiceDep
from app.core.errors import NotFoundError, ValidationError
from app.schemas.settings import (
    MigrationSettingsInput,
    RotateTokenResponse,
    ValidatedSettingsResponse,
)
from app.services.settings_service import MigrationSettingsService
from app.views.migration_field import FieldArgs

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/settings",
    tags=["Settings"],
    dependencies=[Depends(require_settings_admin)],
)

MIGRATION_WS_FIELD = "migration_ws"


def _to_response(validated: dict, service: MigrationSettingsService) -> ValidatedSettingsResponse:
    # An environment-pinned token is never echoed back
    token_from_env = service.has_constant_token
    return ValidatedSettingsResponse(
        migration_ws=validated["migration_ws"],
        migration_token=None if token_from_env else validated["migration_token"],
        migration_token_id=validated["migration_token_id"],
        token_from_env=token_from_env,
    )


@router.get(
    "/fields/{field_name}",
    response_class=HTMLResponse,
    summary="Render settings field",
    description="Render the admin settings field markup for the current settings.",
)
async def render_field(
    field_name: str,
    service: SettingsServiceDep,
    label_for: str = Query(default="wpa0_migration_ws", min_length=1),
) -> HTMLResponse:
    """Return field HTML."""
    if field_name != MIGRATION_WS_FIELD:
        raise NotFoundError("Settings field not found", details={"field": field_name})
    if any(ch.isspace() for ch in label_for):
        raise ValidationError(
            "label_for must be a valid element id", details={"label_for": label_for}
        )

    html = service.render_migration_ws(FieldArgs(label_for=label_for, opt_name=field_name))
    return HTMLResponse(content=html)


@router.post(
    "/validate",
    response_model=ValidatedSettingsResponse,
    summary="Validate settings",
    description="Normalize a settings submission without persisting it.",
)
async def validate_settings(
    body: MigrationSettingsInput,
    service: SettingsServiceDep,
) -> ValidatedSettingsResponse:
    """Run the input validator."""
    return _to_response(service.input_validator(body.to_form()), service)


@router.post(
    "",
    response_model=ValidatedSettingsResponse,
    summary="Save settings",
    description="Validate a settings submission and persist the result.",
)
async def save_settings(
    body: MigrationSettingsInput,
    service: SettingsServiceDep,
) -> ValidatedSettingsResponse:
    """Validate and persist."""
    validated = service.save(body.to_form())
    logger.info("Settings saved", extra={"migration_ws": validated["migration_ws"]})
    return _to_response(validated, service)


@router.post(
    "/migration-token/rotate",
    response_model=RotateTokenResponse,
    summary="Rotate migration token",
    description=(
        "Generate and store a new migration token. "
        "Fails when the token is set by the environment."
    ),
    dependencies=[Depends(require_token_rotation)],
)
async def rotate_migration_token(service: SettingsServiceDep) -> RotateTokenResponse:
    """Replace the migration token."""
    return RotateTokenResponse(migration_token=service.rotate_migration_token())
