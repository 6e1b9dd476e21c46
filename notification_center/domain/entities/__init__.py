"""Domain entities exposed by the application."""

from .notification import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_PUSH,
    CHANNEL_SMS,
    DELIVERY_CHANNELS,
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    SENDING_CHANNELS,
    ChannelDelivery,
    InAppDelivery,
    Notification,
    NotificationAction,
    NotificationDelivery,
    RelatedEntity,
    normalize_channel,
)
from .notification_settings import (
    SETTINGS_SCHEMA,
    NotificationSettings,
    default_settings_document,
    merge_settings_document,
    parse_clock,
)
from .user import ADMIN_ROLE, User

__all__ = [
    "CHANNEL_EMAIL",
    "CHANNEL_IN_APP",
    "CHANNEL_PUSH",
    "CHANNEL_SMS",
    "DELIVERY_CHANNELS",
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_TYPES",
    "SENDING_CHANNELS",
    "ChannelDelivery",
    "InAppDelivery",
    "Notification",
    "NotificationAction",
    "NotificationDelivery",
    "RelatedEntity",
    "normalize_channel",
    "SETTINGS_SCHEMA",
    "NotificationSettings",
    "default_settings_document",
    "merge_settings_document",
    "parse_clock",
    "ADMIN_ROLE",
    "User",
]
