"""Use cases for the notification store, delivery tracking and listings."""

from .archive_notification import archive_notification
from .create_notification import create_notification
from .events import (
    PublishedNotification,
    notify_project_decision,
    notify_security_alert,
    publish_notification,
)
from .get_notification import get_notification
from .list_notifications import (
    NotificationPage,
    NotificationStats,
    PageInfo,
    PriorityCount,
    TypeCount,
    compute_notification_stats,
    list_notifications,
)
from .mark_notifications_read import (
    MarkAllReadResult,
    mark_all_notifications_read,
    mark_notification_read,
)
from .record_delivery_outcome import record_delivery_outcome

__all__ = [
    "archive_notification",
    "create_notification",
    "PublishedNotification",
    "notify_project_decision",
    "notify_security_alert",
    "publish_notification",
    "get_notification",
    "NotificationPage",
    "NotificationStats",
    "PageInfo",
    "PriorityCount",
    "TypeCount",
    "compute_notification_stats",
    "list_notifications",
    "MarkAllReadResult",
    "mark_all_notifications_read",
    "mark_notification_read",
    "record_delivery_outcome",
]
