"""Utility script to fill a user's mailbox with sample notifications."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from notification_center.application.use_cases.notifications import (
    mark_notification_read,
    publish_notification,
    record_delivery_outcome,
)
from notification_center.domain.entities import NotificationAction, RelatedEntity
from notification_center.domain.exceptions import NotificationCenterError
from notification_center.infrastructure.database import SessionLocal, initialize_database

SAMPLE_NOTIFICATIONS = (
    {
        "title": "New Project Request",
        "message": "A new project request has been submitted by John Doe",
        "type": "project_update",
        "priority": "medium",
        "category": "info",
        "related_entity": RelatedEntity(type="project_request", id="req_001", title="AI Chatbot Development"),
        "action": NotificationAction(type="review", url="/project-requests/req_001", label="Review Request"),
        "metadata": {"requesterName": "John Doe", "projectTitle": "AI Chatbot Development"},
    },
    {
        "title": "Event Registration Deadline",
        "message": "Registration deadline for Robotics Workshop is approaching",
        "type": "event_update",
        "priority": "high",
        "category": "warning",
        "related_entity": RelatedEntity(type="event", id="event_001", title="Robotics Workshop"),
        "action": NotificationAction(type="view", url="/events/event_001", label="View Event"),
        "metadata": {"currentRegistrations": 15, "maxCapacity": 30},
    },
    {
        "title": "News Article Published",
        "message": 'Your news article "Team Achievements" has been published',
        "type": "news_update",
        "priority": "low",
        "category": "success",
        "related_entity": RelatedEntity(type="news", id="news_001", title="Team Achievements"),
        "mark_read": True,
    },
    {
        "title": "Equipment Request Approved",
        "message": "Your equipment request for Arduino Kits has been approved",
        "type": "inventory_alert",
        "priority": "medium",
        "category": "success",
        "related_entity": RelatedEntity(type="equipment", id="equip_001", title="Arduino Kits"),
    },
    {
        "title": "System Maintenance",
        "message": "Scheduled system maintenance will occur tonight from 2-4 AM",
        "type": "system_alert",
        "priority": "high",
        "category": "system",
    },
)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the seeding run."""

    parser = argparse.ArgumentParser(
        description="Seed the notification center with the console's sample mailbox.",
    )
    parser.add_argument(
        "--user-id",
        default="admin_user_001",
        help="Identifier of the user receiving the notifications (default: admin_user_001)",
    )
    parser.add_argument(
        "--simulate-delivery",
        action="store_true",
        help="Report every pending external channel as successfully sent.",
    )
    return parser.parse_args()


def main() -> None:
    """Create the sample notifications for the selected user."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        for sample in SAMPLE_NOTIFICATIONS:
            fields = dict(sample)
            mark_read = fields.pop("mark_read", False)
            published = publish_notification(session, user_id=args.user_id, **fields)
            notification = published.notification
            if args.simulate_delivery:
                for channel in published.channels:
                    record_delivery_outcome(session, notification.id, channel, {"sent": True})
            if mark_read:
                mark_notification_read(session, notification.id, user_id=args.user_id)
            print(
                f"  #{notification.id} {notification.title} "
                f"(pending: {', '.join(published.channels) or '-'})"
            )
    except NotificationCenterError as exc:
        session.rollback()
        raise SystemExit(f"Could not seed notifications: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while seeding notifications: {exc}") from exc
    else:
        print(f"Seeded {len(SAMPLE_NOTIFICATIONS)} notifications for {args.user_id}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
