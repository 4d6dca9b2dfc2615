"""Administrative notification endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tourney_hub.application.use_cases.notifications import create_notification
from tourney_hub.domain.entities import User
from tourney_hub.infrastructure.database import get_db
from tourney_hub.interfaces.api.dependencies import require_admin
from tourney_hub.interfaces.api.schemas import AdminNotificationCreate, NotificationRead

from .notifications import notification_to_schema

router = APIRouter(prefix="/api/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.post(
    "/notifications",
    response_model=NotificationRead,
    status_code=status.HTTP_201_CREATED,
)
def create_admin_notification(
    payload: AdminNotificationCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> NotificationRead:
    """Create one notification, targeted at ``userId`` or broadcast when absent."""

    try:
        [notification] = create_notification(
            db,
            title=payload.title or "",
            message=payload.message or "",
            notification_type=payload.type,
            user_id=payload.user_id,
            related_id=payload.related_id,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info(
        "Admin %s created notification %s (targeted=%s)",
        admin.id,
        notification.id,
        notification.user_id is not None,
    )
    return notification_to_schema(notification)
