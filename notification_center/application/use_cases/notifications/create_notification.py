"""Use case for creating notifications on behalf of event producers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from notification_center.domain.entities import (
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    Notification,
    NotificationAction,
    NotificationDelivery,
    RelatedEntity,
)
from notification_center.domain.exceptions import ValidationError
from notification_center.infrastructure.repositories import NotificationRepository
from notification_center.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, int, float, bool, type(None))


def create_notification(
    session: Session,
    *,
    user_id: str,
    title: str,
    message: str,
    type: str,
    priority: str,
    category: str,
    related_entity: RelatedEntity | None = None,
    action: NotificationAction | None = None,
    expires_at: datetime | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> Notification:
    """Validate the payload and store a new unread notification.

    Delivery starts as unsent on every channel; the caller reports outcomes
    through :func:`record_delivery_outcome` once transport is attempted.
    """

    errors: dict[str, str] = {}
    normalized_user = (user_id or "").strip()
    if not normalized_user:
        errors["userId"] = "Field required"
    normalized_title = (title or "").strip()
    if not normalized_title:
        errors["title"] = "Field required"
    normalized_message = (message or "").strip()
    if not normalized_message:
        errors["message"] = "Field required"
    _check_choice(errors, "type", type, NOTIFICATION_TYPES)
    _check_choice(errors, "priority", priority, NOTIFICATION_PRIORITIES)
    _check_choice(errors, "category", category, NOTIFICATION_CATEGORIES)

    created_at = now_in_app_timezone()
    if expires_at is not None and ensure_app_timezone(expires_at) <= created_at:
        errors["expiresAt"] = "Must be in the future"

    extra = dict(metadata or {})
    invalid_keys = [key for key, value in extra.items() if not isinstance(value, _SCALAR_TYPES)]
    if invalid_keys:
        errors["metadata"] = f"Values must be scalars: {', '.join(sorted(map(str, invalid_keys)))}"

    if errors:
        raise ValidationError("Invalid notification", fields=errors)

    notification = Notification(
        id=None,
        user_id=normalized_user,
        title=normalized_title,
        message=normalized_message,
        type=type,
        priority=priority,
        category=category,
        related_entity=related_entity,
        action=action,
        metadata=extra,
        delivery=NotificationDelivery(),
        read=False,
        read_at=None,
        archived=False,
        archived_at=None,
        expires_at=ensure_app_timezone(expires_at),
        created_at=created_at,
        updated_at=created_at,
    )
    saved = NotificationRepository(session).create(notification)
    logger.info(
        "Created %s notification %s (%s) for user %s",
        saved.priority,
        saved.id,
        saved.type,
        saved.user_id,
    )
    return saved


def _check_choice(errors: dict[str, str], field: str, value: Any, allowed: tuple[str, ...]) -> None:
    if not value:
        errors[field] = "Field required"
    elif value not in allowed:
        errors[field] = f"Must be one of: {', '.join(allowed)}"
