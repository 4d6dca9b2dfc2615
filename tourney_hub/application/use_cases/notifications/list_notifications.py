"""Use cases for reading a user's notifications."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from tourney_hub.domain.entities import Notification, User
from tourney_hub.infrastructure.repositories import NotificationRepository


def list_notifications(session: Session, user: User) -> Sequence[Notification]:
    """Return the notifications visible to ``user``, newest first."""

    return NotificationRepository(session).list_for_user(user.id)


def get_unread_count(session: Session, user: User) -> int:
    """Return how many visible notifications ``user`` has not read yet."""

    return NotificationRepository(session).count_unread(user.id)
