"""REST endpoints for reading and mutating the current user's notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tourney_hub.application.use_cases.notifications import (
    NotificationAccessError,
    NotificationNotFoundError,
    create_notification,
    delete_user_notifications,
    get_unread_count,
    hide_notifications,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from tourney_hub.domain.entities import Notification, User
from tourney_hub.infrastructure.database import get_db
from tourney_hub.interfaces.api.dependencies import get_current_active_user, require_admin
from tourney_hub.interfaces.api.schemas import (
    NotificationBatchCreated,
    NotificationCreateRequest,
    NotificationRead,
    OperationResult,
    UnreadCountRead,
)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        user_id=notification.user_id,
        title=notification.title,
        message=notification.message,
        type=notification.type,
        related_id=notification.related_id,
        is_read=notification.is_read,
        created_at=notification.created_at,
    )


@router.get("", response_model=list[NotificationRead])
def read_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the targeted and broadcast notifications of the user, newest first."""

    return [
        notification_to_schema(notification)
        for notification in list_notifications(db, current_user)
    ]


@router.get("/count", response_model=UnreadCountRead)
def read_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountRead:
    return UnreadCountRead(count=get_unread_count(db, current_user))


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    try:
        notification = mark_notification_read(db, current_user, notification_id)
    except NotificationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except NotificationAccessError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    return notification_to_schema(notification)


@router.post(
    "/mark-all-read", response_model=OperationResult, response_model_exclude_none=True
)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> OperationResult:
    updated = mark_all_notifications_read(db, current_user)
    return OperationResult(updated=updated)


@router.post("/hide", response_model=OperationResult, response_model_exclude_none=True)
def hide(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> OperationResult:
    """Hide the current list for this user without deleting anything."""

    return OperationResult(hidden=hide_notifications(db, current_user))


@router.delete("/all", response_model=OperationResult, response_model_exclude_none=True)
def delete_all(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> OperationResult:
    """Delete notifications addressed to this user. Broadcasts are kept."""

    return OperationResult(deleted=delete_user_notifications(db, current_user))


@router.post(
    "",
    response_model=NotificationBatchCreated,
    status_code=status.HTTP_201_CREATED,
)
def create(
    payload: NotificationCreateRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> NotificationBatchCreated:
    """Broadcast to everybody, or notify one user or a list of users."""

    try:
        notifications = create_notification(
            db,
            title=payload.title or "",
            message=payload.message or "",
            notification_type=payload.type,
            user_id=payload.user_id,
            user_ids=payload.user_ids,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return NotificationBatchCreated(
        notifications_created=len(notifications),
        notifications=[notification_to_schema(n) for n in notifications],
    )
