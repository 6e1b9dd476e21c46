"""Use cases for the read state of notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from notification_center.domain.entities import Notification
from notification_center.infrastructure.repositories import NotificationRepository
from notification_center.utils import now_in_app_timezone

from .get_notification import get_notification

logger = logging.getLogger(__name__)


@dataclass
class MarkAllReadResult:
    """Outcome of marking a whole mailbox as read."""

    marked_count: int
    total_notifications: int


def mark_notification_read(session: Session, notification_id: int, *, user_id: str) -> Notification:
    """Mark the notification as read; repeated calls keep the first ``read_at``."""

    get_notification(session, notification_id, user_id=user_id)
    repository = NotificationRepository(session)
    if repository.mark_as_read(notification_id, read_at=now_in_app_timezone()):
        logger.info("Notification %s marked as read by user %s", notification_id, user_id)
    return get_notification(session, notification_id, user_id=user_id)


def mark_all_notifications_read(session: Session, *, user_id: str) -> MarkAllReadResult:
    """Mark every unread, non-archived notification of ``user_id`` as read."""

    repository = NotificationRepository(session)
    marked = repository.mark_all_as_read(user_id, read_at=now_in_app_timezone())
    total = repository.count_for_user(user_id)
    logger.info("Marked %s notifications as read for user %s", marked, user_id)
    return MarkAllReadResult(marked_count=marked, total_notifications=total)
