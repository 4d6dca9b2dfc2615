"""Use cases that remove notifications from a user's view."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from tourney_hub.domain.entities import User
from tourney_hub.infrastructure.notifications import (
    NotificationPublisher,
    notification_publisher,
)
from tourney_hub.infrastructure.repositories import NotificationRepository

from .events import publish_unread_counts

logger = logging.getLogger(__name__)


def hide_notifications(
    session: Session,
    user: User,
    *,
    publisher: NotificationPublisher | None = None,
) -> int:
    """Hide every notification currently visible to ``user``.

    Nothing is deleted. The user's other open sessions receive a hide action
    so they clear their lists too. Returns the number of hidden notifications.
    """

    publisher = publisher or notification_publisher
    hidden = NotificationRepository(session).hide_all(user.id)
    publisher.publish_count(user.id, 0, is_hide_action=True)
    logger.info("User %s hid %s notifications", user.id, hidden)
    return hidden


def delete_user_notifications(
    session: Session,
    user: User,
    *,
    publisher: NotificationPublisher | None = None,
) -> int:
    """Delete the notifications addressed to ``user``; broadcasts survive.

    The recomputed count goes out as a hide action so the user's sessions
    keep their cleared lists even though surviving broadcasts still count.
    """

    deleted = NotificationRepository(session).delete_all_for_user(user.id)
    publish_unread_counts(
        session, [user.id], publisher=publisher, is_hide_action=True
    )
    logger.info("Deleted %s notifications for user %s", deleted, user.id)
    return deleted
