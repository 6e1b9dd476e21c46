"""Aggregate application use cases."""

from .notifications import create_notification, list_notifications, publish_notification
from .settings import get_notification_settings, update_notification_settings

__all__ = [
    "create_notification",
    "list_notifications",
    "publish_notification",
    "get_notification_settings",
    "update_notification_settings",
]
