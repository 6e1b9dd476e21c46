"""Use cases for managing notification preferences."""

from .eligibility import eligible_channels, is_channel_eligible, is_within_quiet_hours
from .get_settings import get_notification_settings
from .update_settings import update_notification_settings

__all__ = [
    "eligible_channels",
    "get_notification_settings",
    "is_channel_eligible",
    "is_within_quiet_hours",
    "update_notification_settings",
]
