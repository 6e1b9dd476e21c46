"""Tests for the helpers event producers use to publish notifications."""

from datetime import datetime, timezone

from notification_center.application.use_cases.notifications import (
    notify_project_decision,
    notify_security_alert,
    publish_notification,
)
from notification_center.application.use_cases.settings import update_notification_settings

NOON = datetime(2024, 1, 20, 12, 0, tzinfo=timezone.utc)
LATE = datetime(2024, 1, 20, 23, 30, tzinfo=timezone.utc)


def _publish(session, *, at_time, user_id="member-1", type="workshop_update"):
    return publish_notification(
        session,
        user_id=user_id,
        title="Workshop tomorrow",
        message="Bring your Arduino kit",
        type=type,
        priority="medium",
        category="info",
        at_time=at_time,
    )


def test_publish_marks_in_app_delivered_and_returns_external_channels(session) -> None:
    published = _publish(session, at_time=NOON)

    assert published.channels == ["email", "push"]
    assert published.notification.delivery.in_app.delivered is True
    assert published.notification.delivery.email.sent is False


def test_publish_during_quiet_hours_keeps_only_in_app(session) -> None:
    published = _publish(session, at_time=LATE)

    assert published.channels == []
    assert published.notification.delivery.in_app.delivered is True


def test_publish_respects_disabled_in_app_channel(session) -> None:
    update_notification_settings(session, user_id="member-1", changes={"inApp": {"enabled": False}})

    published = _publish(session, at_time=NOON)

    assert published.notification.delivery.in_app.delivered is False
    assert published.notification.id is not None
    assert published.channels == ["email", "push"]


def test_project_decision_helpers(session) -> None:
    approved = notify_project_decision(
        session,
        user_id="member-1",
        project_id="req_001",
        project_title="Line Follower",
        approved=True,
    )
    rejected = notify_project_decision(
        session,
        user_id="member-1",
        project_id="req_002",
        project_title="Flamethrower Bot",
        approved=False,
        reviewer_note="Safety review failed.",
    )

    assert approved.notification.type == "project_approval"
    assert approved.notification.category == "success"
    assert approved.notification.related_entity.id == "req_001"
    assert approved.notification.action.url == "/project-requests/req_001"
    assert rejected.notification.type == "project_rejection"
    assert rejected.notification.priority == "high"
    assert rejected.notification.message.endswith("Safety review failed.")


def test_security_alert_uses_sms_when_enabled(session) -> None:
    update_notification_settings(
        session,
        user_id="admin-1",
        changes={"sms": {"enabled": True}, "quietHours": {"enabled": False}},
    )

    published = notify_security_alert(
        session,
        user_id="admin-1",
        title="Suspicious login",
        message="Five failed logins",
        source="auth-service",
    )

    assert published.notification.priority == "critical"
    assert published.notification.metadata == {"source": "auth-service"}
    assert published.channels == ["email", "push", "sms"]


def test_critical_alerts_disabled_keeps_security_alert_in_app(session) -> None:
    update_notification_settings(
        session,
        user_id="admin-1",
        changes={"adminSettings": {"criticalAlerts": False}, "quietHours": {"enabled": False}},
    )

    published = notify_security_alert(
        session, user_id="admin-1", title="Suspicious login", message="Five failed logins"
    )

    assert published.channels == []
    assert published.notification.delivery.in_app.delivered is True
