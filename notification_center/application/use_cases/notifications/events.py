"""Helpers event producers use to create and route notifications."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from notification_center.application.use_cases.settings import (
    eligible_channels,
    get_notification_settings,
)
from notification_center.domain.entities import (
    CHANNEL_IN_APP,
    Notification,
    NotificationAction,
    RelatedEntity,
)
from notification_center.utils import now_in_app_timezone

from .create_notification import create_notification
from .record_delivery_outcome import record_delivery_outcome

logger = logging.getLogger(__name__)


@dataclass
class PublishedNotification:
    """A stored notification plus the external channels left to attempt."""

    notification: Notification
    channels: list[str] = field(default_factory=list)


def publish_notification(
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
    at_time: datetime | None = None,
) -> PublishedNotification:
    """Create a notification and decide where it should be delivered.

    The console mailbox is the in-app transport, so an eligible in-app
    channel is recorded as delivered right away. Email, push and SMS are
    returned to the caller, which attempts transport and reports each result
    through :func:`record_delivery_outcome`.
    """

    notification = create_notification(
        session,
        user_id=user_id,
        title=title,
        message=message,
        type=type,
        priority=priority,
        category=category,
        related_entity=related_entity,
        action=action,
        expires_at=expires_at,
        metadata=metadata,
    )
    settings = get_notification_settings(session, user_id=notification.user_id)
    channels = eligible_channels(
        settings,
        notification.type,
        at_time or now_in_app_timezone(),
        priority=notification.priority,
    )

    if CHANNEL_IN_APP in channels:
        notification = record_delivery_outcome(
            session, notification.id, CHANNEL_IN_APP, {"delivered": True}
        )
    external = [channel for channel in channels if channel != CHANNEL_IN_APP]
    logger.info(
        "Published notification %s for user %s; pending channels: %s",
        notification.id,
        notification.user_id,
        ", ".join(external) or "none",
    )
    return PublishedNotification(notification=notification, channels=external)


def notify_project_decision(
    session: Session,
    *,
    user_id: str,
    project_id: str,
    project_title: str,
    approved: bool,
    reviewer_note: str | None = None,
) -> PublishedNotification:
    """Tell a member whether their project request was approved."""

    verdict = "approved" if approved else "rejected"
    message = f"Your project request '{project_title}' has been {verdict}."
    if reviewer_note:
        message = f"{message} {reviewer_note}"
    return publish_notification(
        session,
        user_id=user_id,
        title=f"Project {verdict}",
        message=message,
        type="project_approval" if approved else "project_rejection",
        priority="medium" if approved else "high",
        category="success" if approved else "warning",
        related_entity=RelatedEntity(type="project_request", id=project_id, title=project_title),
        action=NotificationAction(
            type="view",
            url=f"/project-requests/{project_id}",
            label="View Request",
        ),
    )


def notify_security_alert(
    session: Session,
    *,
    user_id: str,
    title: str,
    message: str,
    source: str | None = None,
) -> PublishedNotification:
    """Raise a critical security alert for an administrator."""

    return publish_notification(
        session,
        user_id=user_id,
        title=title,
        message=message,
        type="security_alert",
        priority="critical",
        category="error",
        metadata={"source": source} if source else None,
    )
