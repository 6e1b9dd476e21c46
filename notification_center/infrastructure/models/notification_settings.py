"""SQLAlchemy model for per-user notification preferences."""

from sqlalchemy import Column, DateTime, Integer, JSON, String

from notification_center.infrastructure.database import Base
from notification_center.utils import now_in_app_naive_datetime


class NotificationSettingsModel(Base):
    """Database representation of a user's notification settings document."""

    __tablename__ = "notification_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, unique=True, index=True)
    preferences = Column(JSON, nullable=False)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    __mapper_args__ = {"version_id_col": version}


__all__ = ["NotificationSettingsModel"]
