"""
Typed error taxonomy shared by the stores, the auth flow and the HTTP layer.

Each error carries the HTTP status it maps to, so the exception handlers in
``api.errors`` never need to inspect message text.
"""

from __future__ import annotations


class TaskTrackerError(Exception):
    """Base class for every domain error raised by this service."""

    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(TaskTrackerError):
    """Malformed input: a required field is missing or badly formatted."""

    status_code = 422
    detail = "Invalid input"

    def __init__(self, detail: str | None = None, fields: tuple[str, ...] = ()) -> None:
        super().__init__(detail)
        self.fields = fields

    def errors(self) -> list[dict]:
        """Per-field entries in the same shape FastAPI uses for request validation."""
        locs = [["body", field] for field in self.fields] or [["body"]]
        return [{"type": "value_error", "loc": loc, "msg": self.detail} for loc in locs]


class ConflictError(TaskTrackerError):
    """A unique constraint (username / email) would be violated."""

    status_code = 409
    detail = "Resource already exists"


class InvalidCredentials(TaskTrackerError):
    """Sign-in failed.  Deliberately says nothing about *why*."""

    status_code = 401
    detail = "Invalid credentials"

    def __init__(self) -> None:
        super().__init__()


class InvalidToken(TaskTrackerError):
    """Bearer token missing, malformed, badly signed or expired."""

    status_code = 401
    detail = "Invalid or expired token"


class NotFoundError(TaskTrackerError):
    """No row matched the requested key (including cross-owner misses)."""

    status_code = 404
    detail = "Not found"


class StorageError(TaskTrackerError):
    """Any other persistence failure."""

    status_code = 500
    detail = "Internal server error"


class ConfigError(TaskTrackerError):
    """Required startup configuration is missing or invalid.  Fatal at boot."""
