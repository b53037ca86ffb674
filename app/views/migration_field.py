"""
Migration web service settings field.

The field is described by a view-model built from current settings, then
rendered by a Jinja2 template. Building the view is pure; only
``render_migration_field`` touches the template layer.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.core.config import MigrationConfig
from app.services.migration_token import is_truthy

TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
FIELD_TEMPLATE = "migration_ws.html"

TOKEN_ELEMENT_ID = "auth0_migration_token"
ROTATE_BUTTON_ID = "auth0_rotate_migration_token"
ROTATE_BUTTON_LABEL = "Generate New Migration Token"
ROTATE_CONFIRM_MSG = (
    "This will change your migration token immediately. "
    "The new token must be changed in the custom scripts for your database Connection in Auth0."
)
NO_TOKEN_TEXT = "No migration token"
ENV_TOKEN_TEXT = "Token set in the AUTH0_ENV_MIGRATION_TOKEN environment variable"

ACTIVATED_TEXT = (
    "User migration endpoints activated. "
    "The custom database scripts need to be configured manually as described"
)
DEACTIVATED_TEXT = (
    "User migration endpoints deactivated. "
    "Custom database connections can be deactivated in the"
)

_jinja = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


class FieldState(str, Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


@dataclass(frozen=True)
class FieldArgs:
    """Arguments the settings page passes to a field renderer."""

    label_for: str
    opt_name: str


@dataclass(frozen=True)
class MigrationFieldView:
    """Everything the template needs to draw the field."""

    input_id: str
    input_name: str
    state: FieldState
    description: str
    link_url: str
    link_text: str
    token_display: str | None = None
    token_from_env: bool = False
    token_element_id: str = TOKEN_ELEMENT_ID
    rotate_button_id: str = ROTATE_BUTTON_ID
    rotate_button_label: str = ROTATE_BUTTON_LABEL
    rotate_confirm_msg: str = ROTATE_CONFIRM_MSG

    @property
    def checked(self) -> bool:
        return self.state is FieldState.ENABLED

    @property
    def show_token_controls(self) -> bool:
        return self.state is FieldState.ENABLED

    @property
    def show_rotate_button(self) -> bool:
        return self.show_token_controls and not self.token_from_env


def build_migration_field_view(
    field_args: FieldArgs,
    values: Mapping[str, Any],
    options_name: str,
    token_from_env: bool = False,
    migration_config: MigrationConfig | None = None,
) -> MigrationFieldView:
    """Describe the migration field for the current settings."""
    config = migration_config or MigrationConfig()
    enabled = is_truthy(values.get(field_args.opt_name))
    common = {
        "input_id": field_args.label_for,
        "input_name": f"{options_name}[{field_args.opt_name}]",
    }

    if not enabled:
        return MigrationFieldView(
            state=FieldState.DISABLED,
            description=DEACTIVATED_TEXT,
            link_url=config.dashboard_url,
            link_text="dashboard",
            **common,
        )

    if token_from_env:
        token_display = ENV_TOKEN_TEXT
    else:
        token_display = values.get("migration_token") or NO_TOKEN_TEXT

    return MigrationFieldView(
        state=FieldState.ENABLED,
        description=ACTIVATED_TEXT,
        link_url=config.docs_url,
        link_text="here",
        token_display=token_display,
        token_from_env=token_from_env,
        **common,
    )


def render_migration_field(view: MigrationFieldView) -> str:
    """Render the field markup."""
    return _jinja.get_template(FIELD_TEMPLATE).render(view=view)
