"""Tests for creating notifications and changing their read/archive state."""

from __future__ import annotations

from datetime import timedelta

import pytest

from notification_center.application.use_cases.notifications import (
    archive_notification,
    create_notification,
    get_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    record_delivery_outcome,
)
from notification_center.domain.entities import NotificationAction, RelatedEntity
from notification_center.domain.exceptions import ForbiddenError, NotFoundError, ValidationError
from notification_center.utils import now_in_app_timezone


def _create(session, user_id: str = "member-1", **overrides):
    values = {
        "user_id": user_id,
        "title": "Workshop moved",
        "message": "The soldering workshop moved to room B12",
        "type": "workshop_update",
        "priority": "medium",
        "category": "info",
    }
    values.update(overrides)
    return create_notification(session, **values)


def test_create_initializes_unread_undelivered_state(session) -> None:
    """A new notification starts unread, unarchived and undelivered everywhere."""

    notification = _create(
        session,
        related_entity=RelatedEntity(type="event", id="event_001", title="Soldering 101"),
        action=NotificationAction(type="view", url="/events/event_001", label="View Event"),
        metadata={"room": "B12", "seats": 12},
    )

    assert notification.id is not None
    assert notification.read is False and notification.read_at is None
    assert notification.archived is False and notification.archived_at is None
    for channel in (notification.delivery.email, notification.delivery.push, notification.delivery.sms):
        assert channel.sent is False
        assert channel.sent_at is None
        assert channel.error is None
    assert notification.delivery.in_app.delivered is False
    assert notification.delivery.in_app.delivered_at is None
    assert notification.created_at == notification.updated_at
    assert notification.related_entity == RelatedEntity(type="event", id="event_001", title="Soldering 101")
    assert notification.action.url == "/events/event_001"
    assert notification.metadata == {"room": "B12", "seats": 12}


def test_create_reports_every_invalid_field(session) -> None:
    """Missing content and unknown enumeration values are rejected together."""

    with pytest.raises(ValidationError) as excinfo:
        create_notification(
            session,
            user_id="member-1",
            title="  ",
            message="",
            type="party_invite",
            priority="urgent",
            category="",
        )

    assert set(excinfo.value.fields) == {"title", "message", "type", "priority", "category"}


def test_create_rejects_past_expiry(session) -> None:
    with pytest.raises(ValidationError) as excinfo:
        _create(session, expires_at=now_in_app_timezone() - timedelta(minutes=1))
    assert "expiresAt" in excinfo.value.fields


def test_mark_read_is_idempotent(session) -> None:
    """Marking twice keeps the first ``read_at``."""

    notification = _create(session)

    first = mark_notification_read(session, notification.id, user_id="member-1")
    second = mark_notification_read(session, notification.id, user_id="member-1")

    assert first.read is True
    assert first.read_at is not None
    assert first.read_at >= first.created_at
    assert second.read_at == first.read_at


def test_mark_read_unknown_and_foreign_notifications(session) -> None:
    notification = _create(session, user_id="owner")

    with pytest.raises(NotFoundError):
        mark_notification_read(session, 9999, user_id="owner")
    with pytest.raises(ForbiddenError):
        mark_notification_read(session, notification.id, user_id="intruder")
    assert get_notification(session, notification.id, user_id="owner").read is False


def test_mark_all_read_skips_archived_and_other_users(session) -> None:
    """Only unread, non-archived notifications of the caller are changed."""

    unread = [_create(session) for _ in range(3)]
    already_read = _create(session)
    mark_notification_read(session, already_read.id, user_id="member-1")
    archived = _create(session)
    archive_notification(session, archived.id, user_id="member-1")
    other = _create(session, user_id="member-2")

    result = mark_all_notifications_read(session, user_id="member-1")

    assert result.marked_count == len(unread)
    assert result.total_notifications == 5
    assert list_notifications(session, user_id="member-1", read=False).items == []
    assert get_notification(session, archived.id, user_id="member-1").read is False
    assert get_notification(session, other.id, user_id="member-2").read is False


def test_mark_all_read_twice_marks_nothing_the_second_time(session) -> None:
    _create(session)
    assert mark_all_notifications_read(session, user_id="member-1").marked_count == 1
    assert mark_all_notifications_read(session, user_id="member-1").marked_count == 0


def test_archive_is_idempotent_and_hides_from_listing(session) -> None:
    notification = _create(session)

    first = archive_notification(session, notification.id, user_id="member-1")
    second = archive_notification(session, notification.id, user_id="member-1")

    assert first.archived is True
    assert second.archived_at == first.archived_at
    assert list_notifications(session, user_id="member-1").items == []


def test_read_and_delivery_writes_on_separate_sessions_both_survive(session_factory) -> None:
    """A read racing a delivery report on the same row keeps both changes."""

    setup = session_factory()
    notification = _create(setup)
    setup.close()

    reader = session_factory()
    worker = session_factory()
    try:
        get_notification(reader, notification.id, user_id="member-1")
        record_delivery_outcome(worker, notification.id, "email", {"sent": True})
        mark_notification_read(reader, notification.id, user_id="member-1")

        final = get_notification(worker, notification.id, user_id="member-1")
    finally:
        reader.close()
        worker.close()

    assert final.read is True
    assert final.delivery.email.sent is True
