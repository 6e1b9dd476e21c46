from .notification import (
    ChannelDeliveryRead,
    DeliveryOutcomeUpdate,
    InAppDeliveryRead,
    MarkAllReadData,
    NotificationActionSchema,
    NotificationCreate,
    NotificationData,
    NotificationDeliveryRead,
    NotificationListData,
    NotificationRead,
    NotificationStatsRead,
    PaginationRead,
    PriorityCountRead,
    PublishedNotificationData,
    RelatedEntitySchema,
    TypeCountRead,
)
from .response import APIResponse, CamelModel, ErrorBody, ErrorDetails, ErrorResponse
from .settings import EligibilityData, NotificationSettingsData, NotificationSettingsRead

__all__ = [
    "APIResponse",
    "CamelModel",
    "ChannelDeliveryRead",
    "DeliveryOutcomeUpdate",
    "EligibilityData",
    "ErrorBody",
    "ErrorDetails",
    "ErrorResponse",
    "InAppDeliveryRead",
    "MarkAllReadData",
    "NotificationActionSchema",
    "NotificationCreate",
    "NotificationData",
    "NotificationDeliveryRead",
    "NotificationListData",
    "NotificationRead",
    "NotificationSettingsData",
    "NotificationSettingsRead",
    "NotificationStatsRead",
    "PaginationRead",
    "PriorityCountRead",
    "PublishedNotificationData",
    "RelatedEntitySchema",
    "TypeCountRead",
]
