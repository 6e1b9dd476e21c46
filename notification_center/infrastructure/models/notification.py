"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, JSON, String, Text
from sqlalchemy.sql import expression

from notification_center.infrastructure.database import Base
from notification_center.utils import now_in_app_naive_datetime


def _delivery_flag() -> Column:
    return Column(Boolean, nullable=False, default=False, server_default=expression.false())


class NotificationModel(Base):
    """Database representation for user notifications.

    Delivery outcomes live in one group of columns per channel so that a
    channel update only touches its own columns.
    """

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_user_created", "user_id", "created_at", "id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)
    priority = Column(String(20), nullable=False)
    category = Column(String(20), nullable=False)
    related_entity = Column(JSON, nullable=True)
    action = Column(JSON, nullable=True)
    extra_metadata = Column("metadata", JSON, nullable=False, default=dict)

    email_sent = _delivery_flag()
    email_sent_at = Column(DateTime(), nullable=True)
    email_error = Column(Text, nullable=True)
    push_sent = _delivery_flag()
    push_sent_at = Column(DateTime(), nullable=True)
    push_error = Column(Text, nullable=True)
    sms_sent = _delivery_flag()
    sms_sent_at = Column(DateTime(), nullable=True)
    sms_error = Column(Text, nullable=True)
    in_app_delivered = _delivery_flag()
    in_app_delivered_at = Column(DateTime(), nullable=True)

    read = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    read_at = Column(DateTime(), nullable=True)
    archived = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    archived_at = Column(DateTime(), nullable=True)
    expires_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]
