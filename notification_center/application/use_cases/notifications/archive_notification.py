"""Use case for archiving notifications."""

import logging

from sqlalchemy.orm import Session

from notification_center.domain.entities import Notification
from notification_center.infrastructure.repositories import NotificationRepository
from notification_center.utils import now_in_app_timezone

from .get_notification import get_notification

logger = logging.getLogger(__name__)


def archive_notification(session: Session, notification_id: int, *, user_id: str) -> Notification:
    """Move the notification out of active listings; archiving twice is a no-op."""

    get_notification(session, notification_id, user_id=user_id)
    if NotificationRepository(session).archive(notification_id, archived_at=now_in_app_timezone()):
        logger.info("Notification %s archived by user %s", notification_id, user_id)
    return get_notification(session, notification_id, user_id=user_id)
