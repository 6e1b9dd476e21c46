"""Tests for notification listings, statistics and pagination."""

from __future__ import annotations

from datetime import timedelta

import pytest

from notification_center.application.use_cases.notifications import (
    archive_notification,
    compute_notification_stats,
    create_notification,
    list_notifications,
    mark_notification_read,
)
from notification_center.domain.entities import Notification, NotificationDelivery
from notification_center.domain.exceptions import ValidationError
from notification_center.infrastructure.repositories import NotificationFilters, NotificationRepository
from notification_center.utils import now_in_app_timezone


def _create(session, *, user_id: str = "member-1", type: str = "event_update", priority: str = "low"):
    return create_notification(
        session,
        user_id=user_id,
        title=f"{type} for {user_id}",
        message="Details inside",
        type=type,
        priority=priority,
        category="info",
    )


def _store_expired(session, *, user_id: str = "member-1") -> Notification:
    """Insert a notification whose expiry has already passed."""

    created = now_in_app_timezone() - timedelta(days=2)
    return NotificationRepository(session).create(
        Notification(
            id=None,
            user_id=user_id,
            title="Old event",
            message="This event already happened",
            type="event_update",
            priority="low",
            category="info",
            delivery=NotificationDelivery(),
            expires_at=created + timedelta(days=1),
            created_at=created,
            updated_at=created,
        )
    )


def test_listing_is_newest_first_and_scoped_to_user(session) -> None:
    first = _create(session)
    second = _create(session)
    third = _create(session)
    _create(session, user_id="member-2")

    page = list_notifications(session, user_id="member-1")

    assert [item.id for item in page.items] == [third.id, second.id, first.id]
    assert {item.user_id for item in page.items} == {"member-1"}


def test_stats_cover_the_filtered_set(session) -> None:
    """Counts follow the filters and the grouped counts add up to the total."""

    _create(session, type="project_update", priority="high")
    _create(session, type="project_update", priority="low")
    read_one = _create(session, type="news_update", priority="low")
    mark_notification_read(session, read_one.id, user_id="member-1")
    _create(session, type="news_update", priority="medium", user_id="member-2")

    page = list_notifications(session, user_id="member-1")

    assert page.stats.total == 3
    assert page.stats.unread == 2
    assert page.stats.read == 1
    assert [(entry.type, entry.count) for entry in page.stats.by_type] == [
        ("project_update", 2),
        ("news_update", 1),
    ]
    assert [(entry.priority, entry.count) for entry in page.stats.by_priority] == [
        ("low", 2),
        ("high", 1),
    ]

    filtered = list_notifications(session, user_id="member-1", read=False)
    assert filtered.stats.total == 2
    assert filtered.stats.unread == 2
    assert filtered.stats.read == 0
    assert all(item.read is False for item in filtered.items)


def test_type_and_priority_filters(session) -> None:
    _create(session, type="workshop_update", priority="high")
    _create(session, type="workshop_update", priority="low")
    _create(session, type="news_update", priority="high")

    page = list_notifications(session, user_id="member-1", type="workshop_update", priority="high")

    assert len(page.items) == 1
    assert page.items[0].type == "workshop_update"
    assert page.items[0].priority == "high"
    assert page.stats.total == 1


def test_archived_and_expired_notifications_are_excluded(session) -> None:
    visible = _create(session)
    archived = _create(session)
    archive_notification(session, archived.id, user_id="member-1")
    _store_expired(session)
    future = create_notification(
        session,
        user_id="member-1",
        title="Upcoming event",
        message="Starts tomorrow",
        type="event_update",
        priority="low",
        category="info",
        expires_at=now_in_app_timezone() + timedelta(days=1),
    )

    page = list_notifications(session, user_id="member-1")

    assert {item.id for item in page.items} == {visible.id, future.id}
    assert page.stats.total == 2


def test_pagination_reports_has_more(session) -> None:
    for _ in range(5):
        _create(session)

    first_page = list_notifications(session, user_id="member-1", limit=2, skip=0)
    assert len(first_page.items) == 2
    assert first_page.pagination.total == 5
    assert first_page.pagination.has_more is True

    last_page = list_notifications(session, user_id="member-1", limit=2, skip=4)
    assert len(last_page.items) == 1
    assert last_page.pagination.has_more is False

    beyond = list_notifications(session, user_id="member-1", limit=2, skip=10)
    assert beyond.items == []
    assert beyond.pagination.has_more is False


def test_admin_scope_lists_every_mailbox(session) -> None:
    _create(session, user_id="member-1")
    _create(session, user_id="member-2")

    page = list_notifications(session, user_id=None)

    assert page.stats.total == 2
    assert {item.user_id for item in page.items} == {"member-1", "member-2"}


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"type": "party_invite"}, "type"),
        ({"priority": "urgent"}, "priority"),
        ({"limit": 0}, "limit"),
        ({"limit": 101}, "limit"),
        ({"skip": -1}, "skip"),
    ],
)
def test_invalid_filters_are_rejected(session, kwargs, field) -> None:
    with pytest.raises(ValidationError) as excinfo:
        list_notifications(session, user_id="member-1", **kwargs)
    assert field in excinfo.value.fields


def test_created_at_ties_are_broken_by_newest_id(session) -> None:
    """Rows stored in the same instant still come back newest id first."""

    stamp = now_in_app_timezone() - timedelta(minutes=5)
    repository = NotificationRepository(session)
    stored = [
        repository.create(
            Notification(
                id=None,
                user_id="member-1",
                title=f"Batch item {index}",
                message="Imported together",
                type="news_update",
                priority="low",
                category="info",
                delivery=NotificationDelivery(),
                created_at=stamp,
                updated_at=stamp,
            )
        )
        for index in range(3)
    ]

    page = list_notifications(session, user_id="member-1")

    assert len({item.created_at for item in page.items}) == 1
    assert [item.id for item in page.items] == sorted((item.id for item in stored), reverse=True)


def test_stats_use_the_given_reference_time(session) -> None:
    """An expiry counts relative to ``now``, not the wall clock."""

    create_notification(
        session,
        user_id="member-1",
        title="Lab open late",
        message="Lab stays open until midnight",
        type="event_update",
        priority="low",
        category="info",
        expires_at=now_in_app_timezone() + timedelta(hours=1),
    )
    repository = NotificationRepository(session)
    filters = NotificationFilters(user_id="member-1")

    assert compute_notification_stats(repository, filters).total == 1
    later = now_in_app_timezone() + timedelta(hours=2)
    assert compute_notification_stats(repository, filters, now=later).total == 0
