"""Endpoints for the caller's notification preferences."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from notification_center.application.use_cases.settings import (
    eligible_channels,
    get_notification_settings as get_notification_settings_uc,
    update_notification_settings as update_notification_settings_uc,
)
from notification_center.domain.entities import DELIVERY_CHANNELS, NotificationSettings, User
from notification_center.domain.exceptions import NotificationCenterError
from notification_center.infrastructure.database import get_db
from notification_center.interfaces.api.dependencies import get_current_user
from notification_center.interfaces.api.routes_helpers import to_http_exception
from notification_center.interfaces.api.schemas import (
    APIResponse,
    EligibilityData,
    NotificationSettingsData,
    NotificationSettingsRead,
)
from notification_center.utils import now_in_app_timezone

router = APIRouter(prefix="/settings", tags=["settings"])


def _settings_to_schema(settings: NotificationSettings) -> NotificationSettingsRead:
    return NotificationSettingsRead(
        user_id=settings.user_id,
        email=settings.section("email"),
        push=settings.section("push"),
        sms=settings.section("sms"),
        in_app=settings.section("inApp"),
        frequency=settings.section("frequency"),
        quiet_hours=settings.section("quietHours"),
        admin_settings=settings.section("adminSettings"),
        created_at=settings.created_at,
        updated_at=settings.updated_at,
    )


@router.get("", response_model=APIResponse[NotificationSettingsData])
def read_settings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> APIResponse[NotificationSettingsData]:
    """Return the caller's settings, creating the defaults on first access."""

    try:
        settings = get_notification_settings_uc(db, user_id=current_user.id)
    except NotificationCenterError as exc:
        raise to_http_exception(exc) from exc
    return APIResponse(data=NotificationSettingsData(settings=_settings_to_schema(settings)))


@router.put("", response_model=APIResponse[NotificationSettingsData])
def update_settings(
    changes: dict[str, Any] = Body(..., description="Partial settings document to deep-merge"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> APIResponse[NotificationSettingsData]:
    """Deep-merge the provided fields into the caller's settings."""

    try:
        settings = update_notification_settings_uc(db, user_id=current_user.id, changes=changes)
    except NotificationCenterError as exc:
        raise to_http_exception(exc) from exc
    return APIResponse(
        message="Notification settings updated successfully",
        data=NotificationSettingsData(settings=_settings_to_schema(settings)),
    )


@router.get("/eligibility", response_model=APIResponse[EligibilityData])
def check_eligibility(
    type: str = Query(..., description="Notification type to evaluate"),
    priority: str | None = Query(None, description="Notification priority; critical is gated by adminSettings"),
    at: datetime | None = Query(None, description="Instant to evaluate; defaults to now"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> APIResponse[EligibilityData]:
    """Report which channels would deliver a notification of ``type`` at ``at``."""

    moment = at or now_in_app_timezone()
    try:
        settings = get_notification_settings_uc(db, user_id=current_user.id)
    except NotificationCenterError as exc:
        raise to_http_exception(exc) from exc
    allowed = set(eligible_channels(settings, type, moment, priority=priority))
    return APIResponse(
        data=EligibilityData(
            type=type,
            at=moment,
            channels={channel: channel in allowed for channel in DELIVERY_CHANNELS},
        )
    )


__all__ = ["router"]
