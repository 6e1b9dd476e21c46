"""Errors raised by the notification center use cases."""

from __future__ import annotations

from collections.abc import Mapping


class NotificationCenterError(Exception):
    """Base class for errors surfaced to API callers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(NotificationCenterError, ValueError):
    """A required field is missing or a value is outside its allowed set."""

    def __init__(self, message: str, *, fields: Mapping[str, str] | None = None) -> None:
        super().__init__(message)
        self.fields: dict[str, str] = dict(fields or {})


class NotFoundError(NotificationCenterError):
    """The requested resource does not exist."""


class ForbiddenError(NotificationCenterError):
    """The resource belongs to a different user than the caller."""


class ConflictError(NotificationCenterError):
    """A concurrent writer kept winning and the change could not be applied."""


__all__ = [
    "NotificationCenterError",
    "ValidationError",
    "NotFoundError",
    "ForbiddenError",
    "ConflictError",
]
