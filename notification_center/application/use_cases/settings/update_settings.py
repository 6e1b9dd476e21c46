"""Use case for partially updating notification settings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from notification_center.config import get_settings
from notification_center.domain.entities import NotificationSettings, merge_settings_document
from notification_center.domain.exceptions import ConflictError
from notification_center.infrastructure.repositories import NotificationSettingsRepository

from .get_settings import get_notification_settings

logger = logging.getLogger(__name__)


def update_notification_settings(
    session: Session,
    *,
    user_id: str,
    changes: Mapping[str, Any],
) -> NotificationSettings:
    """Deep-merge ``changes`` into the stored settings of ``user_id``.

    Only the provided leaves change. When another request updates the same
    document between our read and write, the merge is replayed on the fresh
    copy up to ``SETTINGS_UPDATE_RETRIES`` times before :class:`ConflictError`
    is raised.
    """

    repository = NotificationSettingsRepository(session)
    attempts = get_settings().settings_update_retries

    for attempt in range(1, attempts + 1):
        current = get_notification_settings(session, user_id=user_id)
        merged = merge_settings_document(current.preferences, changes)
        try:
            updated = repository.update_preferences(current, merged)
        except StaleDataError as exc:
            session.rollback()
            if attempt == attempts:
                logger.warning(
                    "Giving up on settings update for user %s after %s attempts", user_id, attempts
                )
                raise ConflictError(
                    "Notification settings were changed by another request, please retry"
                ) from exc
            logger.warning(
                "Settings for user %s changed concurrently, retrying (%s/%s)",
                user_id,
                attempt,
                attempts,
            )
            continue
        logger.info(
            "Updated notification settings for user %s (sections: %s)",
            user_id,
            ", ".join(sorted(changes)),
        )
        return updated

    raise RuntimeError("Settings update retries exhausted")  # pragma: no cover
