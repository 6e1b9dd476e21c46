"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import case, desc, false, func, or_, true
from sqlalchemy.orm import Query, Session

from notification_center.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_PUSH,
    CHANNEL_SMS,
    ChannelDelivery,
    InAppDelivery,
    Notification,
    NotificationAction,
    NotificationDelivery,
    RelatedEntity,
)
from notification_center.infrastructure.models import NotificationModel
from notification_center.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

_CHANNEL_COLUMN_PREFIX = {
    CHANNEL_EMAIL: "email",
    CHANNEL_PUSH: "push",
    CHANNEL_SMS: "sms",
}


@dataclass(frozen=True)
class NotificationFilters:
    """Predicates applied to active notification listings.

    ``user_id=None`` widens the scope to every mailbox. Archived and expired
    notifications are always excluded.
    """

    user_id: str | None
    type: str | None = None
    priority: str | None = None
    read: bool | None = None


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id, populate_existing=True)
        return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_active(
        self,
        filters: NotificationFilters,
        *,
        now: datetime,
        skip: int = 0,
        limit: int | None = 20,
    ) -> Sequence[Notification]:
        query = self._active_query(filters, now=now)
        query = query.order_by(desc(NotificationModel.created_at), desc(NotificationModel.id))
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_read_state(self, filters: NotificationFilters, *, now: datetime) -> tuple[int, int]:
        """Return ``(total, unread)`` for the filtered set in one aggregate query."""

        unread_expression = func.coalesce(
            func.sum(case((NotificationModel.read == false(), 1), else_=0)), 0
        )
        total, unread = (
            self.session.query(func.count(NotificationModel.id), unread_expression)
            .filter(*self._active_conditions(filters, now=now))
            .one()
        )
        return int(total or 0), int(unread or 0)

    def count_grouped(
        self, column_name: str, filters: NotificationFilters, *, now: datetime
    ) -> list[tuple[str, int]]:
        """Return ``(value, count)`` pairs grouped by ``column_name``."""

        column = getattr(NotificationModel, column_name)
        count = func.count(NotificationModel.id)
        rows = (
            self.session.query(column, count)
            .filter(*self._active_conditions(filters, now=now))
            .group_by(column)
            .order_by(count.desc(), column.asc())
            .all()
        )
        return [(value, int(total)) for value, total in rows]

    def count_for_user(self, user_id: str) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.user_id == user_id)
            .scalar()
            or 0
        )

    def mark_as_read(self, notification_id: int, *, read_at: datetime) -> bool:
        """Flag a single unread notification as read.

        Returns ``False`` when the row was already read, leaving ``read_at``
        untouched.
        """

        stamp = ensure_app_naive_datetime(read_at)
        changed = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id, NotificationModel.read == false())
            .update(
                {
                    NotificationModel.read: True,
                    NotificationModel.read_at: stamp,
                    NotificationModel.updated_at: stamp,
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return changed > 0

    def mark_all_as_read(self, user_id: str, *, read_at: datetime) -> int:
        """Flag every unread, non-archived notification of ``user_id`` as read."""

        stamp = ensure_app_naive_datetime(read_at)
        changed = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.read == false(),
                NotificationModel.archived == false(),
            )
            .update(
                {
                    NotificationModel.read: True,
                    NotificationModel.read_at: stamp,
                    NotificationModel.updated_at: stamp,
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return changed

    def archive(self, notification_id: int, *, archived_at: datetime) -> bool:
        stamp = ensure_app_naive_datetime(archived_at)
        changed = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.archived == false(),
            )
            .update(
                {
                    NotificationModel.archived: True,
                    NotificationModel.archived_at: stamp,
                    NotificationModel.updated_at: stamp,
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return changed > 0

    def record_delivery(
        self, notification_id: int, channel: str, outcome: Mapping[str, Any], *, at: datetime
    ) -> bool:
        """Overwrite the stored outcome of ``channel`` only.

        ``outcome`` carries ``sent``/``error`` for sending channels and
        ``delivered`` for the in-app channel.
        """

        stamp = ensure_app_naive_datetime(at)
        if channel == CHANNEL_IN_APP:
            delivered = bool(outcome.get("delivered"))
            values = {
                NotificationModel.in_app_delivered: delivered,
                NotificationModel.in_app_delivered_at: stamp if delivered else None,
            }
        else:
            prefix = _CHANNEL_COLUMN_PREFIX[channel]
            sent = bool(outcome.get("sent"))
            values = {
                getattr(NotificationModel, f"{prefix}_sent"): sent,
                getattr(NotificationModel, f"{prefix}_sent_at"): stamp if sent else None,
                getattr(NotificationModel, f"{prefix}_error"): None if sent else outcome.get("error"),
            }
        values[NotificationModel.updated_at] = stamp

        changed = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .update(values, synchronize_session=False)
        )
        self.session.commit()
        return changed > 0

    def _active_query(self, filters: NotificationFilters, *, now: datetime) -> Query:
        return self.session.query(NotificationModel).filter(
            *self._active_conditions(filters, now=now)
        )

    @staticmethod
    def _active_conditions(filters: NotificationFilters, *, now: datetime) -> list[Any]:
        conditions: list[Any] = [
            NotificationModel.archived == false(),
            or_(
                NotificationModel.expires_at.is_(None),
                NotificationModel.expires_at > ensure_app_naive_datetime(now),
            ),
        ]
        if filters.user_id is not None:
            conditions.append(NotificationModel.user_id == filters.user_id)
        if filters.type is not None:
            conditions.append(NotificationModel.type == filters.type)
        if filters.priority is not None:
            conditions.append(NotificationModel.priority == filters.priority)
        if filters.read is not None:
            conditions.append(NotificationModel.read == (true() if filters.read else false()))
        return conditions

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        created_at = ensure_app_naive_datetime(
            notification.created_at or now_in_app_timezone()
        )
        model.created_at = created_at
        model.updated_at = ensure_app_naive_datetime(notification.updated_at) or created_at
        model.user_id = notification.user_id
        model.title = notification.title
        model.message = notification.message
        model.type = notification.type
        model.priority = notification.priority
        model.category = notification.category
        model.related_entity = (
            {
                "type": notification.related_entity.type,
                "id": notification.related_entity.id,
                "title": notification.related_entity.title,
            }
            if notification.related_entity
            else None
        )
        model.action = (
            {
                "type": notification.action.type,
                "url": notification.action.url,
                "label": notification.action.label,
            }
            if notification.action
            else None
        )
        model.extra_metadata = dict(notification.metadata or {})

        delivery = notification.delivery
        for channel, record in (
            (CHANNEL_EMAIL, delivery.email),
            (CHANNEL_PUSH, delivery.push),
            (CHANNEL_SMS, delivery.sms),
        ):
            prefix = _CHANNEL_COLUMN_PREFIX[channel]
            setattr(model, f"{prefix}_sent", record.sent)
            setattr(model, f"{prefix}_sent_at", ensure_app_naive_datetime(record.sent_at))
            setattr(model, f"{prefix}_error", record.error)
        model.in_app_delivered = delivery.in_app.delivered
        model.in_app_delivered_at = ensure_app_naive_datetime(delivery.in_app.delivered_at)

        model.read = notification.read
        model.read_at = ensure_app_naive_datetime(notification.read_at)
        model.archived = notification.archived
        model.archived_at = ensure_app_naive_datetime(notification.archived_at)
        model.expires_at = ensure_app_naive_datetime(notification.expires_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        related = model.related_entity or None
        action = model.action or None
        return Notification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            message=model.message,
            type=model.type,
            priority=model.priority,
            category=model.category,
            related_entity=RelatedEntity(**related) if related else None,
            action=NotificationAction(**action) if action else None,
            metadata=dict(model.extra_metadata or {}),
            delivery=NotificationDelivery(
                email=ChannelDelivery(
                    sent=bool(model.email_sent),
                    sent_at=ensure_app_timezone(model.email_sent_at),
                    error=model.email_error,
                ),
                push=ChannelDelivery(
                    sent=bool(model.push_sent),
                    sent_at=ensure_app_timezone(model.push_sent_at),
                    error=model.push_error,
                ),
                sms=ChannelDelivery(
                    sent=bool(model.sms_sent),
                    sent_at=ensure_app_timezone(model.sms_sent_at),
                    error=model.sms_error,
                ),
                in_app=InAppDelivery(
                    delivered=bool(model.in_app_delivered),
                    delivered_at=ensure_app_timezone(model.in_app_delivered_at),
                ),
            ),
            read=bool(model.read),
            read_at=ensure_app_timezone(model.read_at),
            archived=bool(model.archived),
            archived_at=ensure_app_timezone(model.archived_at),
            expires_at=ensure_app_timezone(model.expires_at),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationFilters", "NotificationRepository"]
