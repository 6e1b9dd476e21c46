"""Use case for retrieving a single notification."""

from sqlalchemy.orm import Session

from notification_center.domain.entities import Notification
from notification_center.domain.exceptions import ForbiddenError, NotFoundError
from notification_center.infrastructure.repositories import NotificationRepository


def get_notification(session: Session, notification_id: int, *, user_id: str) -> Notification:
    """Return the notification if it exists and belongs to ``user_id``."""

    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.user_id != user_id:
        raise ForbiddenError("Notification belongs to another user")
    return notification
