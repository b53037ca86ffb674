"""
Domain-specific exceptions for the Migration Settings API.

The token policy itself is total and never raises. These exceptions cover
the HTTP surface around it and are mapped to status codes in the API layer.
"""

from typing import Any


class MigrationSettingsError(Exception):
    """Base exception for all migration settings domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(MigrationSettingsError):
    """
    Raised when a request cannot be interpreted.

    Examples:
    - Unknown settings field requested for rendering
    - Form body is not a flat mapping

    HTTP Status: 400 Bad Request
    """

    pass


class UnauthorizedError(MigrationSettingsError):
    """
    Raised when the caller lacks valid authentication.

    Examples:
    - Missing bearer token
    - Invalid, expired or wrongly signed JWT

    HTTP Status: 401 Unauthorized
    """

    pass


class ForbiddenError(MigrationSettingsError):
    """
    Raised when the caller is authenticated but may not manage settings.

    Examples:
    - No settings admin role
    - Missing permission to rotate the migration token

    HTTP Status: 403 Forbidden
    """

    pass


class NotFoundError(MigrationSettingsError):
    """
    Raised when a requested settings field does not exist.

    HTTP Status: 404 Not Found
    """

    pass


class ConflictError(MigrationSettingsError):
    """
    Raised when an operation conflicts with deployment state.

    Examples:
    - Rotating a migration token pinned by AUTH0_ENV_MIGRATION_TOKEN

    HTTP Status: 409 Conflict
    """

    pass


ERROR_STATUS_MAP = {
    ValidationError: 400,
    UnauthorizedError: 401,
    ForbiddenError: 403,
    NotFoundError: 404,
    ConflictError: 409,
}


def get_status_code(error: Exception) -> int:
    """
    Get the HTTP status code for a given exception.

    Args:
        error: The exception instance

    Returns:
        HTTP status code (defaults to 500 for unknown errors)
    """
    return ERROR_STATUS_MAP.get(type(error), 500)
