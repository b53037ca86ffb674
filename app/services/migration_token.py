"""
Migration token lifecycle policy.

Decides, for a submitted settings form, whether the migration token is kept,
generated or taken from the environment override. The policy is a pure
function of its arguments and always returns a complete result.
"""

import logging
import secrets
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

# secrets.token_urlsafe(64) yields 86 characters
DEFAULT_TOKEN_BYTES = 64

FALSY_FORM_VALUES = frozenset({"", "0", "false", "off", "no"})


class TokenSource(str, Enum):
    """Where the resolved token came from."""

    OVERRIDE = "override"
    STORED = "stored"
    GENERATED = "generated"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class MigrationSettings:
    """Normalized migration settings proposed for persistence."""

    flag: bool
    token: str | None
    token_id: str | None
    source: TokenSource


def is_truthy(value: Any) -> bool:
    """Interpret an untyped form value as a boolean flag."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() not in FALSY_FORM_VALUES
    return bool(value)


def generate_migration_token(nbytes: int = DEFAULT_TOKEN_BYTES) -> str:
    """Generate a URL-safe random token with ``nbytes`` of entropy."""
    return secrets.token_urlsafe(nbytes)


def get_token_id(token: str | None, client_secret: str | None) -> str | None:
    """
    Return the ``jti`` claim of a signed migration token.

    Only attempted when a client secret is configured, since signed tokens
    are issued with it. Claims are read without verifying the signature;
    the identifier is used for display. Plain random tokens yield None.
    """
    if not token or not client_secret or token.count(".") != 2:
        return None
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        logger.debug("Migration token is not a readable JWT")
        return None
    token_id = claims.get("jti")
    return str(token_id) if token_id else None


def resolve_migration_settings(
    form: Mapping[str, Any],
    prior_token: str | None,
    env_override: str | None,
    client_secret: str | None = None,
    token_bytes: int = DEFAULT_TOKEN_BYTES,
) -> MigrationSettings:
    """
    Apply the token policy to a submitted form.

    Priority:
        1. A non-empty environment override always wins.
        2. Flag on: keep a non-empty prior token, otherwise generate one.
        3. Flag off: the stored token passes through untouched.

    Args:
        form: Submitted fields; missing keys mean "not set"
        prior_token: Token currently stored, if any
        env_override: Deployment-level token, if any
        client_secret: Used to decide whether to read a signed token's id
        token_bytes: Entropy for generated tokens

    Returns:
        MigrationSettings with the flag and the token to persist
    """
    flag = is_truthy(form.get("migration_ws"))
    prior_token = prior_token or None

    if env_override:
        token, source = env_override, TokenSource.OVERRIDE
    elif not flag:
        token, source = prior_token, TokenSource.UNCHANGED
    elif prior_token:
        token, source = prior_token, TokenSource.STORED
    else:
        token, source = generate_migration_token(token_bytes), TokenSource.GENERATED

    return MigrationSettings(
        flag=flag,
        token=token,
        token_id=get_token_id(token, client_secret),
        source=source,
    )
