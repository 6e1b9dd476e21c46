"""Use case for recording the result of an out-of-band delivery attempt."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from notification_center.domain.entities import (
    CHANNEL_IN_APP,
    DELIVERY_CHANNELS,
    Notification,
    normalize_channel,
)
from notification_center.domain.exceptions import NotFoundError, ValidationError
from notification_center.infrastructure.repositories import NotificationRepository
from notification_center.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def record_delivery_outcome(
    session: Session,
    notification_id: int,
    channel: str,
    outcome: Mapping[str, Any],
) -> Notification:
    """Overwrite the delivery record of one channel (last outcome wins).

    Email, push and SMS expect ``{"sent": bool, "error": str | None}`` and get
    ``sent_at`` stamped on success. The in-app channel expects
    ``{"delivered": bool}`` and gets ``delivered_at`` stamped the same way.
    """

    canonical = normalize_channel(channel)
    if canonical is None:
        raise ValidationError(
            "Unknown delivery channel",
            fields={"channel": f"Must be one of: {', '.join(DELIVERY_CHANNELS)}"},
        )
    cleaned = _validate_outcome(canonical, outcome)

    repository = NotificationRepository(session)
    if not repository.record_delivery(notification_id, canonical, cleaned, at=now_in_app_timezone()):
        raise NotFoundError("Notification not found")

    if cleaned.get("sent") is False and cleaned.get("error"):
        logger.warning(
            "Delivery of notification %s through %s failed: %s",
            notification_id,
            canonical,
            cleaned["error"],
        )
    else:
        logger.info("Recorded %s outcome for notification %s", canonical, notification_id)

    notification = repository.get(notification_id)
    if notification is None:  # pragma: no cover - row existed a statement ago
        raise NotFoundError("Notification not found")
    return notification


def _validate_outcome(channel: str, outcome: Mapping[str, Any]) -> dict[str, Any]:
    if not isinstance(outcome, Mapping):
        raise ValidationError("Delivery outcome must be an object")

    if channel == CHANNEL_IN_APP:
        delivered = outcome.get("delivered")
        if not isinstance(delivered, bool):
            raise ValidationError(
                "Invalid in-app delivery outcome",
                fields={"delivered": "Must be a boolean"},
            )
        return {"delivered": delivered}

    sent = outcome.get("sent")
    error = outcome.get("error")
    fields: dict[str, str] = {}
    if not isinstance(sent, bool):
        fields["sent"] = "Must be a boolean"
    if error is not None and not isinstance(error, str):
        fields["error"] = "Must be a string or null"
    if fields:
        raise ValidationError(f"Invalid {channel} delivery outcome", fields=fields)
    return {"sent": sent, "error": None if sent else error}
