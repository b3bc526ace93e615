"""
Error taxonomy for the auth core.

Every client-facing error carries the HTTP status it maps to and a message
that is safe to return verbatim as ``{"error": message}``.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for errors that are reported to the client."""

    status_code: int = 500
    default_message: str = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid request"


class ConflictError(AppError):
    """A user with this email already exists."""

    status_code = 400
    default_message = "User already exists"


class AuthError(AppError):
    """Bad credentials. Deliberately 400, not 401."""

    status_code = 400
    default_message = "Invalid email or password"


class Unauthenticated(AppError):
    """Missing, invalid or expired session token."""

    status_code = 401
    default_message = "Not authenticated"


class UpstreamError(AppError):
    """The user store or the chat provider failed."""

    status_code = 500
    default_message = "Server error"


class StoreError(UpstreamError):
    pass


class ConfigurationError(AppError):
    """
    Server is misconfigured (e.g. no signing secret).

    The client only ever sees "Server error"; ``detail`` goes to the log.
    """

    status_code = 500
    default_message = "Server error"

    def __init__(self, detail: str):
        super().__init__()
        self.detail = detail

    def __str__(self) -> str:
        return self.detail


# ── Internal errors (never serialised directly) ────────────────────────


class DuplicateKeyError(Exception):
    """Raised by the user store when the unique email index rejects an insert."""


class InvalidTokenError(Exception):
    """Token is expired, tampered with or malformed."""
