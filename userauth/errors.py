"""
Error taxonomy for userauth.

``AuthError`` subclasses map one-to-one onto HTTP responses. The remaining
exceptions are raised at layer boundaries (token verifier, directory, email
provider) so callers can tell expected failures from unexpected ones.
"""

from __future__ import annotations

from typing import Optional


class AuthError(Exception):
    """Base error rendered as ``{"message": ...}`` with ``status_code``."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[dict[str, str]]:
        return None


class BadRequestError(AuthError):
    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(AuthError):
    status_code = 401
    default_message = "Not authorized"

    @property
    def headers(self) -> Optional[dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class NotFoundError(AuthError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AuthError):
    status_code = 409
    default_message = "Conflict"


class InternalError(AuthError):
    status_code = 500
    default_message = "Internal server error"


class ServiceUnavailableError(AuthError):
    status_code = 503
    default_message = "Service unavailable"


# Layer-boundary errors


class InvalidTokenError(Exception):
    """A session token failed signature, format or expiry checks."""


class DuplicateEmailError(Exception):
    """The directory refused a second user with the same email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


class NotificationError(Exception):
    """The email provider rejected or failed to accept a message."""
