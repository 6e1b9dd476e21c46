"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .response import CamelModel

MetadataValue = str | int | float | bool | None


class RelatedEntitySchema(CamelModel):
    type: str = Field(..., min_length=1)
    id: str = Field(..., min_length=1)
    title: str


class NotificationActionSchema(CamelModel):
    type: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    label: str


class ChannelDeliveryRead(CamelModel):
    sent: bool
    sent_at: datetime | None = None
    error: str | None = None


class InAppDeliveryRead(CamelModel):
    delivered: bool
    delivered_at: datetime | None = None


class NotificationDeliveryRead(CamelModel):
    email: ChannelDeliveryRead
    push: ChannelDeliveryRead
    sms: ChannelDeliveryRead
    in_app: InAppDeliveryRead


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the console."""

    id: int
    user_id: str
    title: str
    message: str
    type: str
    priority: str
    category: str
    related_entity: RelatedEntitySchema | None = None
    action: NotificationActionSchema | None = None
    metadata: dict[str, MetadataValue] = Field(default_factory=dict)
    delivery: NotificationDeliveryRead
    read: bool
    read_at: datetime | None = None
    archived: bool
    archived_at: datetime | None = None
    expires_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    time_ago: str = Field(..., description="Derived from createdAt when the response is built")


class TypeCountRead(CamelModel):
    type: str
    count: int


class PriorityCountRead(CamelModel):
    priority: str
    count: int


class NotificationStatsRead(CamelModel):
    total: int
    unread: int
    read: int
    by_type: list[TypeCountRead] = Field(default_factory=list)
    by_priority: list[PriorityCountRead] = Field(default_factory=list)


class PaginationRead(CamelModel):
    limit: int
    skip: int
    total: int
    has_more: bool


class NotificationListData(CamelModel):
    notifications: list[NotificationRead]
    stats: NotificationStatsRead
    pagination: PaginationRead


class NotificationData(CamelModel):
    notification: NotificationRead


class PublishedNotificationData(CamelModel):
    notification: NotificationRead
    channels: list[str] = Field(
        default_factory=list,
        description="External channels the caller should attempt delivery on",
    )


class MarkAllReadData(CamelModel):
    marked_count: int
    total_notifications: int


class NotificationCreate(CamelModel):
    """Payload used by administrators and services to publish a notification."""

    user_id: str = Field(..., min_length=1)
    title: str
    message: str
    type: str
    priority: str
    category: str
    related_entity: RelatedEntitySchema | None = None
    action: NotificationActionSchema | None = None
    expires_at: datetime | None = None
    metadata: dict[str, MetadataValue] = Field(default_factory=dict)


class DeliveryOutcomeUpdate(CamelModel):
    """Result of a delivery attempt; ``delivered`` applies to the in-app channel."""

    sent: bool | None = None
    error: str | None = None
    delivered: bool | None = None


__all__ = [
    "ChannelDeliveryRead",
    "DeliveryOutcomeUpdate",
    "InAppDeliveryRead",
    "MarkAllReadData",
    "NotificationActionSchema",
    "NotificationCreate",
    "NotificationData",
    "NotificationDeliveryRead",
    "NotificationListData",
    "NotificationRead",
    "NotificationStatsRead",
    "PaginationRead",
    "PriorityCountRead",
    "PublishedNotificationData",
    "RelatedEntitySchema",
    "TypeCountRead",
]
