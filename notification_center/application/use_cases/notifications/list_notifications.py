"""Use case for filtered notification listings and their aggregate counts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.orm import Session

from notification_center.config import get_settings
from notification_center.domain.entities import (
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    Notification,
)
from notification_center.domain.exceptions import ValidationError
from notification_center.infrastructure.repositories import (
    NotificationFilters,
    NotificationRepository,
)
from notification_center.utils import now_in_app_timezone


@dataclass
class TypeCount:
    """Number of notifications of a given type."""

    type: str
    count: int


@dataclass
class PriorityCount:
    """Number of notifications of a given priority."""

    priority: str
    count: int


@dataclass
class NotificationStats:
    """Aggregates computed over the same filtered set as the listing."""

    total: int = 0
    unread: int = 0
    read: int = 0
    by_type: list[TypeCount] = field(default_factory=list)
    by_priority: list[PriorityCount] = field(default_factory=list)


@dataclass
class PageInfo:
    """Offset pagination details for a listing."""

    limit: int
    skip: int
    total: int
    has_more: bool


@dataclass
class NotificationPage:
    """A page of notifications plus the statistics of the filtered set."""

    items: Sequence[Notification]
    stats: NotificationStats
    pagination: PageInfo


def list_notifications(
    session: Session,
    *,
    user_id: str | None,
    type: str | None = None,
    priority: str | None = None,
    read: bool | None = None,
    limit: int | None = None,
    skip: int = 0,
) -> NotificationPage:
    """Return active notifications, newest first, matching the given filters.

    ``user_id=None`` lists every mailbox and is reserved for administrators.
    Archived and expired notifications never appear here.
    """

    settings = get_settings()
    page_size = settings.default_page_size if limit is None else limit
    errors: dict[str, str] = {}
    if type is not None and type not in NOTIFICATION_TYPES:
        errors["type"] = f"Must be one of: {', '.join(NOTIFICATION_TYPES)}"
    if priority is not None and priority not in NOTIFICATION_PRIORITIES:
        errors["priority"] = f"Must be one of: {', '.join(NOTIFICATION_PRIORITIES)}"
    if not 1 <= page_size <= settings.max_page_size:
        errors["limit"] = f"Must be between 1 and {settings.max_page_size}"
    if skip < 0:
        errors["skip"] = "Must be zero or greater"
    if errors:
        raise ValidationError("Invalid notification filters", fields=errors)

    filters = NotificationFilters(user_id=user_id, type=type, priority=priority, read=read)
    now = now_in_app_timezone()
    repository = NotificationRepository(session)

    items = repository.list_active(filters, now=now, skip=skip, limit=page_size)
    stats = compute_notification_stats(repository, filters, now=now)
    return NotificationPage(
        items=items,
        stats=stats,
        pagination=PageInfo(
            limit=page_size,
            skip=skip,
            total=stats.total,
            has_more=skip + len(items) < stats.total,
        ),
    )


def compute_notification_stats(
    repository: NotificationRepository,
    filters: NotificationFilters,
    *,
    now: datetime | None = None,
) -> NotificationStats:
    """Aggregate counts for ``filters`` using grouped queries."""

    reference = now or now_in_app_timezone()
    total, unread = repository.count_read_state(filters, now=reference)
    return NotificationStats(
        total=total,
        unread=unread,
        read=total - unread,
        by_type=[
            TypeCount(type=value, count=count)
            for value, count in repository.count_grouped("type", filters, now=reference)
        ],
        by_priority=[
            PriorityCount(priority=value, count=count)
            for value, count in repository.count_grouped("priority", filters, now=reference)
        ],
    )
