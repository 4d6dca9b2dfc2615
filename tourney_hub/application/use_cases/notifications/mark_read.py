"""Use cases that mark notifications as read."""

from __future__ import annotations

from sqlalchemy.orm import Session

from tourney_hub.domain.entities import Notification, User
from tourney_hub.infrastructure.notifications import NotificationPublisher
from tourney_hub.infrastructure.repositories import NotificationRepository

from .errors import NotificationAccessError, NotificationNotFoundError
from .events import publish_unread_counts


def mark_notification_read(
    session: Session,
    user: User,
    notification_id: int,
    *,
    publisher: NotificationPublisher | None = None,
) -> Notification:
    """Mark ``notification_id`` as read for ``user`` and return it.

    Marking an already read notification succeeds without side effects.
    """

    repository = NotificationRepository(session)
    notification = repository.get(notification_id, user_id=user.id)
    if notification is None:
        raise NotificationNotFoundError("Notification not found")
    if not notification.is_visible_to(user.id):
        raise NotificationAccessError("Access denied")

    if repository.mark_as_read(notification_id, user_id=user.id):
        publish_unread_counts(session, [user.id], publisher=publisher)
    notification.is_read = True
    return notification


def mark_all_notifications_read(
    session: Session,
    user: User,
    *,
    publisher: NotificationPublisher | None = None,
) -> int:
    """Mark every visible notification as read; returns how many changed."""

    changed = NotificationRepository(session).mark_all_as_read(user.id)
    publish_unread_counts(session, [user.id], publisher=publisher)
    return changed
