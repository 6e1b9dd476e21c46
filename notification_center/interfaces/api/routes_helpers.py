"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from notification_center.domain.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    NotificationCenterError,
    ValidationError,
)


def to_http_exception(exc: NotificationCenterError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""

    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": exc.message, "fields": exc.fields},
        )
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    if isinstance(exc, ForbiddenError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=exc.message)
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
