"""
Auth0 JWT verification for the settings admin API.

Bearer tokens are verified with python-jose, against Auth0's JWKS for RS*
algorithms or the application client secret for HS*. Roles and permissions
come from the token and gate access to the migration settings.
"""

import logging
import threading
from datetime import UTC, datetime
from typing import Any

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from app.core.config import Settings, get_settings
from app.core.errors import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)

_http = httpx.Client(timeout=httpx.Timeout(10.0))

# =============================================================================
# Roles and permissions
# =============================================================================

PLATFORM_ADMIN = "PLATFORM_ADMIN"  # Full access
SETTINGS_ADMIN = "SETTINGS_ADMIN"  # Manage plugin settings

MIGRATION_TOKEN_ROTATE = "migration_token:rotate"

INVALID_OR_EXPIRED_TOKEN_MSG = "Invalid or expired token"

_optional_security = HTTPBearer(auto_error=False)


class AuthenticatedUser(BaseModel):
    """Authenticated user information."""

    user_id: str
    email: str | None = None
    roles: list[str] = []
    permissions: list[str] = []

    @property
    def is_platform_admin(self) -> bool:
        return PLATFORM_ADMIN in self.roles

    def has_permission(self, permission: str) -> bool:
        """Check if user has a specific permission."""
        return permission in self.permissions or self.is_platform_admin

    def has_role(self, role: str) -> bool:
        return role in self.roles


class JWKSCache:
    """Auth0 signing keys with a TTL. A stale copy is served if a refresh fails."""

    def __init__(self, ttl_seconds: int = 3600):
        self._cache: dict[str, Any] | None = None
        self._cache_time: datetime | None = None
        self._ttl_seconds = ttl_seconds
        self._lock = threading.RLock()

    def _is_cache_valid(self, now: datetime) -> bool:
        return (
            self._cache is not None
            and self._cache_time is not None
            and (now - self._cache_time).total_seconds() < self._ttl_seconds
        )

    def get_jwks(self, url: str) -> dict[str, Any]:
        with self._lock:
            now = datetime.now(UTC)
            if self._is_cache_valid(now):
                return self._cache  # type: ignore[return-value]

            try:
                response = _http.get(url)
                response.raise_for_status()
                jwks = response.json()
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Failed to fetch JWKS: {e}")
                if self._cache is not None:
                    logger.warning("Using stale JWKS cache as fallback")
                    return self._cache
                raise UnauthorizedError(
                    "Unable to verify token: authentication service unavailable"
                ) from None

            self._cache = jwks
            self._cache_time = now
            logger.debug("JWKS cache refreshed")
            return jwks

    def clear(self) -> None:
        with self._lock:
            self._cache = None
            self._cache_time = None


_jwks_cache = JWKSCache()


def _find_rsa_key(jwks: dict[str, Any], token: str) -> dict[str, Any]:
    """Extract the JWKS entry matching the token's key ID."""
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError as e:
        logger.warning(f"Invalid JWT header: {e}")
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from None

    for key in jwks.get("keys", []):
        if key.get("kid") == unverified_header.get("kid"):
            return {
                "kty": key["kty"],
                "kid": key["kid"],
                "use": key["use"],
                "n": key["n"],
                "e": key["e"],
            }

    logger.error(f"Unable to find matching key for kid: {unverified_header.get('kid')}")
    raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from None


def get_signing_key(token: str, settings: Settings) -> dict[str, Any] | str:
    """Return the key that verifies ``token`` under the configured algorithms."""
    if all(algo.startswith("HS") for algo in settings.auth0.algorithms_list):
        secret = settings.auth0.client_secret_value
        if not secret:
            logger.error("HS algorithms configured without AUTH0_CLIENT_SECRET")
            raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG)
        return secret
    return _find_rsa_key(_jwks_cache.get_jwks(settings.auth0.jwks_url), token)


def verify_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """Verify signature, audience and issuer; return the claims."""
    settings = settings or get_settings()
    key = get_signing_key(token, settings)

    try:
        payload = jwt.decode(
            token,
            key,
            algorithms=settings.auth0.algorithms_list,
            audience=settings.auth0.audience,
            issuer=settings.auth0.issuer_url,
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Token has expired")
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from None
    except jwt.JWTClaimsError as e:
        logger.warning(f"Invalid token claims: {e}")
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from None
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from None

    logger.debug(f"Token verified for subject: {payload.get('sub')}")
    return payload


def get_user_roles(payload: dict[str, Any], audience: str) -> list[str]:
    roles = payload.get(f"{audience}/roles", [])
    if not isinstance(roles, list):
        logger.warning(f"Roles claim is not a list: {type(roles)}")
        return []
    return roles


def get_user_permissions(payload: dict[str, Any]) -> list[str]:
    """Auth0 RBAC puts permissions at the top level of the token."""
    permissions = payload.get("permissions", [])
    if not isinstance(permissions, list):
        logger.warning(f"Permissions claim is not a list: {type(permissions)}")
        return []
    return permissions


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_optional_security),
) -> AuthenticatedUser:
    """Verify the bearer token and build the AuthenticatedUser."""
    if credentials is None:
        logger.warning("Missing Authorization header")
        raise UnauthorizedError("Missing authorization header")

    settings = get_settings()
    payload = verify_token(credentials.credentials, settings)

    sub = payload.get("sub")
    if not sub:
        raise UnauthorizedError("Invalid token - missing user identifier")

    return AuthenticatedUser(
        user_id=sub,
        email=payload.get("email"),
        roles=get_user_roles(payload, settings.auth0.audience),
        permissions=get_user_permissions(payload),
    )


def require_roles(*allowed_roles: str):
    """Dependency factory that enforces one of the allowed roles."""

    def role_checker(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
        if not any(user.has_role(role) for role in allowed_roles):
            logger.warning(
                "Access denied - user %s lacks required roles: %s. User roles: %s",
                user.user_id,
                allowed_roles,
                user.roles,
            )
            raise ForbiddenError(
                "Insufficient permissions",
                details={"required_roles": list(allowed_roles)},
            )
        return user

    return role_checker


def require_permission(required_permission: str):
    """Dependency factory that enforces a specific permission."""

    def permission_checker(
        user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        if not user.has_permission(required_permission):
            logger.warning(
                "Access denied - user %s lacks required permission: %s",
                user.user_id,
                required_permission,
            )
            raise ForbiddenError("Insufficient permissions")
        return user

    return permission_checker


require_settings_admin = require_roles(SETTINGS_ADMIN, PLATFORM_ADMIN)
require_token_rotation = require_permission(MIGRATION_TOKEN_ROTATE)
