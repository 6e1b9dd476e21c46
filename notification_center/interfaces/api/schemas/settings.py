"""Pydantic models describing notification settings payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .response import CamelModel


class NotificationSettingsRead(CamelModel):
    """Full settings document of the authenticated user."""

    user_id: str
    email: dict[str, bool]
    push: dict[str, bool]
    sms: dict[str, bool]
    in_app: dict[str, bool]
    frequency: dict[str, bool]
    quiet_hours: dict[str, Any]
    admin_settings: dict[str, bool]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NotificationSettingsData(CamelModel):
    settings: NotificationSettingsRead


class EligibilityData(CamelModel):
    type: str
    at: datetime
    channels: dict[str, bool] = Field(
        default_factory=dict, description="Whether each channel would deliver right now"
    )


__all__ = ["EligibilityData", "NotificationSettingsData", "NotificationSettingsRead"]
