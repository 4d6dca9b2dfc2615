"""Use case for creating targeted and broadcast notifications."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from tourney_hub.domain.entities import (
    NOTIFICATION_TYPE_BROADCAST,
    NOTIFICATION_TYPE_PERSONAL,
    NOTIFICATION_TYPES,
    Notification,
)
from tourney_hub.infrastructure.notifications import (
    NotificationPublisher,
    notification_publisher,
)
from tourney_hub.infrastructure.repositories import NotificationRepository, UserRepository
from tourney_hub.utils import now_in_app_timezone

from .events import publish_unread_counts

logger = logging.getLogger(__name__)


def create_notification(
    session: Session,
    *,
    title: str,
    message: str,
    notification_type: str = NOTIFICATION_TYPE_BROADCAST,
    user_id: int | None = None,
    user_ids: Sequence[int] | None = None,
    related_id: int | None = None,
    publisher: NotificationPublisher | None = None,
) -> list[Notification]:
    """Persist notifications and push fresh unread counts to their recipients.

    When ``user_ids`` is non-empty one ``personal`` notification is created per
    user. Otherwise a single notification is created for ``user_id``, or for
    everybody when ``user_id`` is ``None``.
    """

    publisher = publisher or notification_publisher
    title = (title or "").strip()
    message = (message or "").strip()
    if not title or not message:
        raise ValueError("Title and message are required")

    notification_type = (notification_type or NOTIFICATION_TYPE_BROADCAST).strip().lower()
    if notification_type not in NOTIFICATION_TYPES:
        raise ValueError(f"Unknown notification type '{notification_type}'")

    if user_ids:
        recipients = list(dict.fromkeys(int(uid) for uid in user_ids))
        _ensure_users_exist(session, recipients)
        notifications = [
            _persist(
                session,
                user_id=recipient,
                title=title,
                message=message,
                notification_type=NOTIFICATION_TYPE_PERSONAL,
                related_id=related_id,
            )
            for recipient in recipients
        ]
        publish_unread_counts(session, recipients, publisher=publisher)
        logger.info(
            "Created %s personal notifications titled %r", len(notifications), title
        )
        return notifications

    if user_id is not None:
        _ensure_users_exist(session, [user_id])

    notification = _persist(
        session,
        user_id=user_id,
        title=title,
        message=message,
        notification_type=notification_type,
        related_id=related_id,
    )
    if user_id is None:
        publish_unread_counts(session, publisher.connected_user_ids(), publisher=publisher)
    else:
        publish_unread_counts(session, [user_id], publisher=publisher)
    logger.info(
        "Created notification %s (%s) for %s",
        notification.id,
        notification.type,
        "all users" if user_id is None else f"user {user_id}",
    )
    return [notification]


def _persist(
    session: Session,
    *,
    user_id: int | None,
    title: str,
    message: str,
    notification_type: str,
    related_id: int | None,
) -> Notification:
    notification = Notification(
        id=None,
        user_id=user_id,
        title=title,
        message=message,
        type=notification_type,
        related_id=related_id,
        is_read=False,
        created_at=now_in_app_timezone(),
    )
    return NotificationRepository(session).create(notification)


def _ensure_users_exist(session: Session, user_ids: Sequence[int]) -> None:
    found = UserRepository(session).get_map_by_ids(user_ids)
    missing = [user_id for user_id in user_ids if user_id not in found]
    if missing:
        raise ValueError(f"Unknown user ids: {', '.join(str(uid) for uid in missing)}")
