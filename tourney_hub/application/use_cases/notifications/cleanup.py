"""Use case for pruning old notifications."""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from tourney_hub.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def cleanup_old_notifications(session: Session, *, older_than: datetime) -> int:
    """Delete notifications created before ``older_than``; returns the count."""

    removed = NotificationRepository(session).delete_older_than(older_than)
    logger.info(
        "Notification cleanup removed %s notifications older than %s",
        removed,
        older_than.isoformat(),
    )
    return removed
