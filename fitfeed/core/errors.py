"""Domain error types.

Each error maps to one HTTP status. Services raise these; the API layer
renders them as ``{"error": message}`` bodies.
"""

from __future__ import annotations


class FitFeedError(Exception):
    """Base class for expected, user-facing failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FitFeedError):
    """Missing or malformed request fields."""

    status_code = 400


class AuthenticationError(FitFeedError):
    """Missing, invalid or expired token, or wrong credentials."""

    status_code = 401


class NotFoundError(FitFeedError):
    """Unknown resource, or a resource the caller does not own."""

    status_code = 404


class ConflictError(FitFeedError):
    """Resource already exists (duplicate registration)."""

    status_code = 409
