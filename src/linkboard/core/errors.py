"""Typed errors raised by the service layer.

Each error carries the HTTP status the API layer maps it to, so handlers
never need to inspect messages. Services raise these and let them
propagate; nothing below the API layer catches them.
"""

from __future__ import annotations

__all__ = [
    "LinkboardError",
    "ConfigurationError",
    "ValidationError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
]


class LinkboardError(Exception):
    """Base class for application errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(LinkboardError):
    """Required configuration is missing. Fatal at startup."""

    default_message = "Application is misconfigured"


class ValidationError(LinkboardError):
    """Input failed a domain rule (malformed id, out-of-range value, ...)."""

    status_code = 400
    default_message = "Validation failed"


class AuthenticationError(LinkboardError):
    """Credentials are missing, invalid, expired or already consumed."""

    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(LinkboardError):
    """The caller is authenticated but may not touch the resource."""

    status_code = 403
    default_message = "Access denied"


class NotFoundError(LinkboardError):
    """A referenced target, session or comment does not exist."""

    status_code = 404
    default_message = "Resource not found"


class ConflictError(LinkboardError):
    """The request conflicts with existing state (duplicate resource)."""

    status_code = 409
    default_message = "Resource conflict"
