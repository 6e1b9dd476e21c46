"""Channel eligibility decisions based on a user's notification settings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, time, timezone
from typing import Any, Final

from notification_center.domain.entities import (
    CHANNEL_IN_APP,
    CHANNEL_SMS,
    DELIVERY_CHANNELS,
    NotificationSettings,
    normalize_channel,
    parse_clock,
)
from notification_center.utils import resolve_timezone

logger = logging.getLogger(__name__)

TYPE_TOGGLES: Final[dict[str, str]] = {
    "project_update": "projectUpdates",
    "project_approval": "projectApprovals",
    "project_rejection": "projectRejections",
    "workshop_update": "workshopUpdates",
    "event_update": "eventUpdates",
    "news_update": "newsUpdates",
    "system_alert": "systemAlerts",
    "role_approval": "roleApprovals",
    "inventory_alert": "inventoryAlerts",
    "contact_submission": "contactSubmissions",
}
CHANNEL_TYPE_TOGGLES: Final[dict[str, dict[str, str]]] = {
    CHANNEL_SMS: {"security_alert": "emergencyAlerts"},
}
ADMIN_TYPE_TOGGLES: Final[dict[str, str]] = {
    "security_alert": "securityAlerts",
    "backup_alert": "backupAlerts",
    "performance_alert": "performanceAlerts",
    "user_activity": "userActivity",
    "system_health": "systemHealth",
}
CRITICAL_PRIORITY_TOGGLE: Final[str] = "criticalAlerts"


def is_channel_eligible(
    settings: NotificationSettings | Mapping[str, Any],
    channel: str,
    notification_type: str,
    at_time: datetime,
    *,
    priority: str | None = None,
) -> bool:
    """Return whether ``notification_type`` may be delivered on ``channel`` now.

    ``adminSettings.criticalAlerts`` gates external delivery of notifications
    whose ``priority`` is ``critical``.

    Never raises: an unknown channel or a malformed settings document makes
    the channel ineligible (or, for quiet hours, simply not silenced) so that
    eligibility checks cannot block notification creation.
    """

    canonical = normalize_channel(channel)
    if canonical is None:
        return False
    if not isinstance(notification_type, str):
        notification_type = ""

    preferences = _preferences_of(settings)
    channel_settings = preferences.get(canonical)
    if not isinstance(channel_settings, Mapping) or channel_settings.get("enabled") is not True:
        return False

    toggle = CHANNEL_TYPE_TOGGLES.get(canonical, {}).get(notification_type)
    if toggle is None:
        toggle = TYPE_TOGGLES.get(notification_type)
    # Types without a toggle on this channel are eligible by default.
    if toggle is not None and toggle in channel_settings and channel_settings[toggle] is False:
        return False

    if canonical == CHANNEL_IN_APP:
        return True

    admin_toggle = ADMIN_TYPE_TOGGLES.get(notification_type)
    admin_settings = preferences.get("adminSettings")
    if (
        admin_toggle is not None
        and isinstance(admin_settings, Mapping)
        and admin_settings.get(admin_toggle) is False
    ):
        return False
    if (
        priority == "critical"
        and isinstance(admin_settings, Mapping)
        and admin_settings.get(CRITICAL_PRIORITY_TOGGLE) is False
    ):
        return False

    quiet_hours = preferences.get("quietHours")
    if isinstance(quiet_hours, Mapping) and quiet_hours.get("enabled") is True:
        if is_within_quiet_hours(quiet_hours, at_time):
            return False
    return True


def eligible_channels(
    settings: NotificationSettings | Mapping[str, Any],
    notification_type: str,
    at_time: datetime,
    *,
    priority: str | None = None,
) -> list[str]:
    """Return the channels, in canonical order, that may deliver right now."""

    return [
        channel
        for channel in DELIVERY_CHANNELS
        if is_channel_eligible(settings, channel, notification_type, at_time, priority=priority)
    ]


def is_within_quiet_hours(quiet_hours: Mapping[str, Any], at_time: datetime) -> bool:
    """Return whether ``at_time`` falls inside ``[startTime, endTime)``.

    The window wraps past midnight when ``startTime`` is later than
    ``endTime`` and is empty when both are equal. ``at_time`` is converted to
    the window's timezone; naive values are taken as UTC.
    """

    try:
        start = parse_clock(quiet_hours.get("startTime", ""))
        end = parse_clock(quiet_hours.get("endTime", ""))
    except ValueError:
        logger.warning("Ignoring malformed quiet hours window %s", dict(quiet_hours))
        return False
    if not isinstance(at_time, datetime):
        return False

    tz = resolve_timezone(str(quiet_hours.get("timezone") or "UTC")) or timezone.utc
    moment = at_time if at_time.tzinfo is not None else at_time.replace(tzinfo=timezone.utc)
    local: time = moment.astimezone(tz).time().replace(tzinfo=None)

    if start == end:
        return False
    if start < end:
        return start <= local < end
    return local >= start or local < end


def _preferences_of(settings: NotificationSettings | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(settings, NotificationSettings):
        return settings.preferences or {}
    if isinstance(settings, Mapping):
        return settings
    return {}
