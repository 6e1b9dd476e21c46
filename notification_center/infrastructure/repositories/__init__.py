"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationFilters, NotificationRepository
from .notification_settings_repository import NotificationSettingsRepository

__all__ = [
    "NotificationFilters",
    "NotificationRepository",
    "NotificationSettingsRepository",
]
