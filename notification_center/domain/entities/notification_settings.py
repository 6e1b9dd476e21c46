"""Domain entity describing per-user notification preferences."""

from __future__ import annotations

import copy
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Any, Final

from notification_center.domain.exceptions import ValidationError
from notification_center.utils import resolve_timezone

_TOPIC_TOGGLES: Final[tuple[str, ...]] = (
    "projectUpdates",
    "projectApprovals",
    "projectRejections",
    "workshopUpdates",
    "eventUpdates",
    "newsUpdates",
    "systemAlerts",
    "roleApprovals",
    "inventoryAlerts",
    "contactSubmissions",
)
_CLOCK_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?P<hour>[01]\d|2[0-3]):(?P<minute>[0-5]\d)$")

SETTINGS_SCHEMA: Final[dict[str, dict[str, type]]] = {
    "email": {
        "enabled": bool,
        **{toggle: bool for toggle in _TOPIC_TOGGLES[:7]},
        "weeklyDigest": bool,
        **{toggle: bool for toggle in _TOPIC_TOGGLES[7:]},
    },
    "push": {"enabled": bool, **{toggle: bool for toggle in _TOPIC_TOGGLES}},
    "sms": {
        "enabled": bool,
        "projectApprovals": bool,
        "projectRejections": bool,
        "systemAlerts": bool,
        "emergencyAlerts": bool,
    },
    "inApp": {"enabled": bool, **{toggle: bool for toggle in _TOPIC_TOGGLES}},
    "frequency": {"immediate": bool, "daily": bool, "weekly": bool, "monthly": bool},
    "quietHours": {"enabled": bool, "startTime": str, "endTime": str, "timezone": str},
    "adminSettings": {
        "criticalAlerts": bool,
        "systemHealth": bool,
        "userActivity": bool,
        "securityAlerts": bool,
        "backupAlerts": bool,
        "performanceAlerts": bool,
    },
}

_DEFAULT_OVERRIDES: Final[dict[str, dict[str, Any]]] = {
    "sms": {"enabled": False},
    "frequency": {"daily": False, "weekly": False, "monthly": False},
    "quietHours": {"startTime": "22:00", "endTime": "08:00", "timezone": "UTC"},
}


def default_settings_document() -> dict[str, dict[str, Any]]:
    """Return the preferences assigned to a user without a stored record.

    Every channel is enabled except SMS, every topic toggle is on, delivery is
    immediate and quiet hours silence 22:00-08:00 UTC.
    """

    document: dict[str, dict[str, Any]] = {}
    for section, fields in SETTINGS_SCHEMA.items():
        values = {name: True for name, kind in fields.items() if kind is bool}
        values.update(_DEFAULT_OVERRIDES.get(section, {}))
        document[section] = values
    return document


def parse_clock(value: str) -> time:
    """Parse an ``HH:MM`` string into a :class:`~datetime.time`."""

    match = _CLOCK_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return time(int(match.group("hour")), int(match.group("minute")))


def merge_settings_document(
    current: Mapping[str, Mapping[str, Any]],
    changes: Mapping[str, Any],
) -> dict[str, dict[str, Any]]:
    """Deep-merge ``changes`` into ``current`` following :data:`SETTINGS_SCHEMA`.

    Only the leaves present in ``changes`` are replaced; sibling fields and
    sections keep their stored values. The whole change set is validated
    before anything is applied, so a rejected update leaves ``current``
    untouched.
    """

    if not isinstance(changes, Mapping):
        raise ValidationError("Settings update must be an object")

    errors: dict[str, str] = {}
    merged = copy.deepcopy({section: dict(values) for section, values in current.items()})

    for section, section_changes in changes.items():
        fields = SETTINGS_SCHEMA.get(section)
        if fields is None:
            errors[section] = "Unknown settings section"
            continue
        if not isinstance(section_changes, Mapping):
            errors[section] = "Must be an object"
            continue
        target = merged.setdefault(section, {})
        for name, value in section_changes.items():
            path = f"{section}.{name}"
            expected = fields.get(name)
            if expected is None:
                errors[path] = "Unknown setting"
                continue
            # ``bool`` is a subclass of ``int``; compare the exact type.
            if type(value) is not expected:
                errors[path] = f"Must be a {'boolean' if expected is bool else 'string'}"
                continue
            target[name] = value

    if "quietHours" in changes and isinstance(changes["quietHours"], Mapping):
        _validate_quiet_hours(merged.get("quietHours", {}), errors)

    if errors:
        raise ValidationError("Invalid notification settings", fields=errors)
    return merged


def _validate_quiet_hours(quiet_hours: Mapping[str, Any], errors: dict[str, str]) -> None:
    for name in ("startTime", "endTime"):
        path = f"quietHours.{name}"
        if path in errors:
            continue
        try:
            parse_clock(quiet_hours.get(name, ""))
        except ValueError:
            errors[path] = "Must use the HH:MM format"
    path = "quietHours.timezone"
    if path not in errors and resolve_timezone(quiet_hours.get("timezone", "")) is None:
        errors[path] = "Unknown timezone"


@dataclass
class NotificationSettings:
    """Delivery preferences stored once per user."""

    id: int | None
    user_id: str
    preferences: dict[str, dict[str, Any]] = field(default_factory=default_settings_document)
    version: int = 1
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def section(self, name: str) -> dict[str, Any]:
        """Return the stored values for ``name`` (empty when missing)."""

        return self.preferences.get(name) or {}


__all__ = [
    "SETTINGS_SCHEMA",
    "NotificationSettings",
    "default_settings_document",
    "merge_settings_document",
    "parse_clock",
]
