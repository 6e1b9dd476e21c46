"""Persistence helpers for notification settings."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from notification_center.domain.entities import NotificationSettings
from notification_center.infrastructure.models import NotificationSettingsModel
from notification_center.utils import ensure_app_timezone, now_in_app_naive_datetime

logger = logging.getLogger(__name__)


class NotificationSettingsRepository:
    """Load and store the settings document owned by each user."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_user(self, user_id: str) -> NotificationSettings | None:
        model = self._get_model(user_id)
        return self._to_entity(model) if model else None

    def get_or_create(
        self, user_id: str, defaults: Mapping[str, Mapping[str, Any]]
    ) -> NotificationSettings:
        """Return the settings of ``user_id``, inserting ``defaults`` when missing.

        The unique constraint on ``user_id`` decides concurrent first accesses:
        the losing insert is rolled back and the winner's row is returned.
        """

        model = self._get_model(user_id)
        if model is not None:
            return self._to_entity(model)

        timestamp = now_in_app_naive_datetime()
        model = NotificationSettingsModel(
            user_id=user_id,
            preferences=copy.deepcopy(dict(defaults)),
            created_at=timestamp,
            updated_at=timestamp,
        )
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info("Settings for user %s were created concurrently; reusing them", user_id)
            model = self._get_model(user_id)
            if model is None:  # pragma: no cover - the conflicting row must exist
                raise
            return self._to_entity(model)

        self.session.refresh(model)
        logger.info("Created default notification settings for user %s", user_id)
        return self._to_entity(model)

    def update_preferences(
        self, settings: NotificationSettings, preferences: Mapping[str, Mapping[str, Any]]
    ) -> NotificationSettings:
        """Persist ``preferences`` if the stored version still matches ``settings``.

        Raises :class:`StaleDataError` when another writer committed first.
        """

        model = self._get_model(settings.user_id)
        if model is None:
            msg = f"Notification settings for user {settings.user_id} not found"
            raise ValueError(msg)
        if model.version != settings.version:
            raise StaleDataError(
                f"Settings for user {settings.user_id} changed (version {model.version})"
            )
        model.preferences = copy.deepcopy(dict(preferences))
        model.updated_at = now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, user_id: str) -> NotificationSettingsModel | None:
        return (
            self.session.query(NotificationSettingsModel)
            .filter(NotificationSettingsModel.user_id == user_id)
            .populate_existing()
            .one_or_none()
        )

    @staticmethod
    def _to_entity(model: NotificationSettingsModel) -> NotificationSettings:
        return NotificationSettings(
            id=model.id,
            user_id=model.user_id,
            preferences=copy.deepcopy(model.preferences or {}),
            version=model.version,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationSettingsRepository"]
