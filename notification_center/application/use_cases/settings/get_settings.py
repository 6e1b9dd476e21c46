"""Use case for reading a user's notification settings."""

from sqlalchemy.orm import Session

from notification_center.domain.entities import NotificationSettings, default_settings_document
from notification_center.domain.exceptions import ValidationError
from notification_center.infrastructure.repositories import NotificationSettingsRepository


def get_notification_settings(session: Session, *, user_id: str) -> NotificationSettings:
    """Return the settings of ``user_id``, creating the defaults on first access."""

    if not (user_id or "").strip():
        raise ValidationError("Invalid user", fields={"userId": "Field required"})
    return NotificationSettingsRepository(session).get_or_create(
        user_id, default_settings_document()
    )
