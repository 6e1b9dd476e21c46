"""Endpoints for the console mailbox and delivery reporting."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from notification_center.application.use_cases.notifications import (
    NotificationPage,
    archive_notification as archive_notification_uc,
    get_notification as get_notification_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read as mark_all_notifications_read_uc,
    mark_notification_read as mark_notification_read_uc,
    publish_notification as publish_notification_uc,
    record_delivery_outcome as record_delivery_outcome_uc,
)
from notification_center.domain.entities import (
    Notification,
    NotificationAction,
    RelatedEntity,
    User,
)
from notification_center.domain.exceptions import NotificationCenterError
from notification_center.infrastructure.database import get_db
from notification_center.interfaces.api.dependencies import get_current_user, require_admin
from notification_center.interfaces.api.routes_helpers import to_http_exception
from notification_center.interfaces.api.schemas import (
    APIResponse,
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
from notification_center.utils import format_time_ago

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    delivery = notification.delivery
    return NotificationRead(
        id=notification.id or 0,
        user_id=notification.user_id,
        title=notification.title,
        message=notification.message,
        type=notification.type,
        priority=notification.priority,
        category=notification.category,
        related_entity=(
            RelatedEntitySchema(
                type=notification.related_entity.type,
                id=notification.related_entity.id,
                title=notification.related_entity.title,
            )
            if notification.related_entity
            else None
        ),
        action=(
            NotificationActionSchema(
                type=notification.action.type,
                url=notification.action.url,
                label=notification.action.label,
            )
            if notification.action
            else None
        ),
        metadata=notification.metadata or {},
        delivery=NotificationDeliveryRead(
            email=ChannelDeliveryRead(**vars(delivery.email)),
            push=ChannelDeliveryRead(**vars(delivery.push)),
            sms=ChannelDeliveryRead(**vars(delivery.sms)),
            in_app=InAppDeliveryRead(**vars(delivery.in_app)),
        ),
        read=notification.read,
        read_at=notification.read_at,
        archived=notification.archived,
        archived_at=notification.archived_at,
        expires_at=notification.expires_at,
        created_at=notification.created_at,
        updated_at=notification.updated_at,
        time_ago=format_time_ago(notification.created_at),
    )


def _page_to_schema(page: NotificationPage) -> NotificationListData:
    stats = page.stats
    return NotificationListData(
        notifications=[_notification_to_schema(item) for item in page.items],
        stats=NotificationStatsRead(
            total=stats.total,
            unread=stats.unread,
            read=stats.read,
            by_type=[TypeCountRead(type=entry.type, count=entry.count) for entry in stats.by_type],
            by_priority=[
                PriorityCountRead(priority=entry.priority, count=entry.count)
                for entry in stats.by_priority
            ],
        ),
        pagination=PaginationRead(
            limit=page.pagination.limit,
            skip=page.pagination.skip,
            total=page.pagination.total,
            has_more=page.pagination.has_more,
        ),
    )


@router.get("", response_model=APIResponse[NotificationListData])
def list_notifications(
    limit: int | None = Query(None, ge=1, description="Page size; defaults to DEFAULT_PAGE_SIZE"),
    skip: int = Query(0, ge=0),
    type: str | None = Query(None, description="Exact notification type"),
    priority: str | None = Query(None, description="Exact priority"),
    read: bool | None = Query(None, description="Filter on read state"),
    all_users: bool = Query(False, description="Administrators only: list every mailbox"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> APIResponse[NotificationListData]:
    """Return a page of active notifications with statistics of the filtered set."""

    if all_users and not current_user.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")

    try:
        page = list_notifications_uc(
            db,
            user_id=None if all_users else current_user.id,
            type=type,
            priority=priority,
            read=read,
            limit=limit,
            skip=skip,
        )
    except NotificationCenterError as exc:
        raise to_http_exception(exc) from exc
    return APIResponse(data=_page_to_schema(page))


@router.post(
    "",
    response_model=APIResponse[PublishedNotificationData],
    status_code=status.HTTP_201_CREATED,
)
def publish_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> APIResponse[PublishedNotificationData]:
    """Create a notification for a user and report which channels should deliver it."""

    try:
        published = publish_notification_uc(
            db,
            user_id=payload.user_id,
            title=payload.title,
            message=payload.message,
            type=payload.type,
            priority=payload.priority,
            category=payload.category,
            related_entity=(
                RelatedEntity(**payload.related_entity.model_dump())
                if payload.related_entity
                else None
            ),
            action=NotificationAction(**payload.action.model_dump()) if payload.action else None,
            expires_at=payload.expires_at,
            metadata=payload.metadata,
        )
    except NotificationCenterError as exc:
        raise to_http_exception(exc) from exc
    return APIResponse(
        message="Notification created",
        data=PublishedNotificationData(
            notification=_notification_to_schema(published.notification),
            channels=published.channels,
        ),
    )


@router.put("/read-all", response_model=APIResponse[MarkAllReadData])
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> APIResponse[MarkAllReadData]:
    """Mark every unread, non-archived notification of the caller as read."""

    result = mark_all_notifications_read_uc(db, user_id=current_user.id)
    return APIResponse(
        message=f"Marked {result.marked_count} notifications as read",
        data=MarkAllReadData(
            marked_count=result.marked_count,
            total_notifications=result.total_notifications,
        ),
    )


@router.get("/{notification_id}", response_model=APIResponse[NotificationData])
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> APIResponse[NotificationData]:
    """Return a single notification owned by the caller."""

    try:
        notification = get_notification_uc(db, notification_id, user_id=current_user.id)
    except NotificationCenterError as exc:
        raise to_http_exception(exc) from exc
    return APIResponse(data=NotificationData(notification=_notification_to_schema(notification)))


@router.put("/{notification_id}/read", response_model=APIResponse[NotificationData])
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> APIResponse[NotificationData]:
    """Mark a notification as read; repeating the call changes nothing."""

    try:
        notification = mark_notification_read_uc(db, notification_id, user_id=current_user.id)
    except NotificationCenterError as exc:
        raise to_http_exception(exc) from exc
    return APIResponse(
        message="Notification marked as read",
        data=NotificationData(notification=_notification_to_schema(notification)),
    )


@router.put("/{notification_id}/archive", response_model=APIResponse[NotificationData])
def archive_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> APIResponse[NotificationData]:
    """Archive a notification so it leaves the active mailbox."""

    try:
        notification = archive_notification_uc(db, notification_id, user_id=current_user.id)
    except NotificationCenterError as exc:
        raise to_http_exception(exc) from exc
    return APIResponse(
        message="Notification archived",
        data=NotificationData(notification=_notification_to_schema(notification)),
    )


@router.put(
    "/{notification_id}/delivery/{channel}",
    response_model=APIResponse[NotificationData],
)
def record_delivery_outcome(
    notification_id: int,
    channel: str,
    outcome: DeliveryOutcomeUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> APIResponse[NotificationData]:
    """Store the result of a delivery attempt reported by a transport worker."""

    try:
        notification = record_delivery_outcome_uc(
            db,
            notification_id,
            channel,
            outcome.model_dump(exclude_unset=True),
        )
    except NotificationCenterError as exc:
        raise to_http_exception(exc) from exc
    return APIResponse(
        message="Delivery outcome recorded",
        data=NotificationData(notification=_notification_to_schema(notification)),
    )


__all__ = ["router"]
