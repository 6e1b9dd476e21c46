"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

NOTIFICATION_TYPES: Final[tuple[str, ...]] = (
    "project_update",
    "project_approval",
    "project_rejection",
    "workshop_update",
    "event_update",
    "news_update",
    "system_alert",
    "role_approval",
    "inventory_alert",
    "contact_submission",
    "security_alert",
    "backup_alert",
    "performance_alert",
    "user_activity",
    "system_health",
)
NOTIFICATION_PRIORITIES: Final[tuple[str, ...]] = ("low", "medium", "high", "critical")
NOTIFICATION_CATEGORIES: Final[tuple[str, ...]] = (
    "info",
    "success",
    "warning",
    "error",
    "system",
)

CHANNEL_EMAIL: Final[str] = "email"
CHANNEL_PUSH: Final[str] = "push"
CHANNEL_SMS: Final[str] = "sms"
CHANNEL_IN_APP: Final[str] = "inApp"
SENDING_CHANNELS: Final[tuple[str, ...]] = (CHANNEL_EMAIL, CHANNEL_PUSH, CHANNEL_SMS)
DELIVERY_CHANNELS: Final[tuple[str, ...]] = (*SENDING_CHANNELS, CHANNEL_IN_APP)

_CHANNEL_ALIASES: Final[dict[str, str]] = {
    "email": CHANNEL_EMAIL,
    "push": CHANNEL_PUSH,
    "sms": CHANNEL_SMS,
    "inapp": CHANNEL_IN_APP,
    "in_app": CHANNEL_IN_APP,
    "in-app": CHANNEL_IN_APP,
}


def normalize_channel(name: object) -> str | None:
    """Return the canonical channel name for ``name`` or ``None`` if unknown."""

    if not isinstance(name, str):
        return None
    return _CHANNEL_ALIASES.get(name.strip().lower())


@dataclass
class ChannelDelivery:
    """Outcome of the last send attempt through email, push or SMS."""

    sent: bool = False
    sent_at: datetime | None = None
    error: str | None = None


@dataclass
class InAppDelivery:
    """Whether the notification reached the console mailbox."""

    delivered: bool = False
    delivered_at: datetime | None = None


@dataclass
class NotificationDelivery:
    """Independent delivery records, one per channel."""

    email: ChannelDelivery = field(default_factory=ChannelDelivery)
    push: ChannelDelivery = field(default_factory=ChannelDelivery)
    sms: ChannelDelivery = field(default_factory=ChannelDelivery)
    in_app: InAppDelivery = field(default_factory=InAppDelivery)


@dataclass
class RelatedEntity:
    """Weak reference to the business object that triggered a notification."""

    type: str
    id: str
    title: str


@dataclass
class NotificationAction:
    """Follow-up the console may render as a button."""

    type: str
    url: str
    label: str


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    user_id: str
    title: str
    message: str
    type: str
    priority: str
    category: str
    related_entity: RelatedEntity | None = None
    action: NotificationAction | None = None
    metadata: dict[str, str | int | float | bool | None] = field(default_factory=dict)
    delivery: NotificationDelivery = field(default_factory=NotificationDelivery)
    read: bool = False
    read_at: datetime | None = None
    archived: bool = False
    archived_at: datetime | None = None
    expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_expired(self, reference: datetime) -> bool:
        """Return ``True`` when the notification should leave active views."""

        return self.expires_at is not None and self.expires_at <= reference


__all__ = [
    "NOTIFICATION_TYPES",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_CATEGORIES",
    "CHANNEL_EMAIL",
    "CHANNEL_PUSH",
    "CHANNEL_SMS",
    "CHANNEL_IN_APP",
    "SENDING_CHANNELS",
    "DELIVERY_CHANNELS",
    "normalize_channel",
    "ChannelDelivery",
    "InAppDelivery",
    "NotificationDelivery",
    "RelatedEntity",
    "NotificationAction",
    "Notification",
]
