"""Helpers to push recomputed unread counts to connected users."""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy.orm import Session

from tourney_hub.infrastructure.notifications import (
    NotificationPublisher,
    notification_publisher,
)
from tourney_hub.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def publish_unread_counts(
    session: Session,
    user_ids: Iterable[int | None],
    *,
    publisher: NotificationPublisher | None = None,
    is_hide_action: bool = False,
) -> dict[int, int]:
    """Send each connected user in ``user_ids`` their own unread count.

    Users without an open push connection are skipped without touching the
    database. ``is_hide_action`` marks the push as the reply to a clear so
    clients keep their dismissed lists. Returns the counts that were
    published, keyed by user id.
    """

    publisher = publisher or notification_publisher
    connected = set(publisher.connected_user_ids())
    repository = NotificationRepository(session)

    published: dict[int, int] = {}
    for user_id in user_ids:
        if not user_id or user_id in published or user_id not in connected:
            continue
        count = repository.count_unread(user_id)
        publisher.publish_count(user_id, count, is_hide_action=is_hide_action)
        published[user_id] = count

    if published:
        logger.debug("Published unread counts %s", published)
    return published


def publish_to_all_connected(
    session: Session, *, publisher: NotificationPublisher | None = None
) -> dict[int, int]:
    """Send every connected user their own unread count."""

    publisher = publisher or notification_publisher
    return publish_unread_counts(
        session, publisher.connected_user_ids(), publisher=publisher
    )


__all__ = ["publish_unread_counts", "publish_to_all_connected"]
