"""Domain entity representing a notification as seen by one user."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_TYPE_GENERAL = "general"
NOTIFICATION_TYPE_TOURNAMENT = "tournament"
NOTIFICATION_TYPE_ANNOUNCEMENT = "announcement"
NOTIFICATION_TYPE_IMPORTANT = "important"
NOTIFICATION_TYPE_BROADCAST = "broadcast"
NOTIFICATION_TYPE_PERSONAL = "personal"

NOTIFICATION_TYPES = frozenset(
    {
        NOTIFICATION_TYPE_GENERAL,
        NOTIFICATION_TYPE_TOURNAMENT,
        NOTIFICATION_TYPE_ANNOUNCEMENT,
        NOTIFICATION_TYPE_IMPORTANT,
        NOTIFICATION_TYPE_BROADCAST,
        NOTIFICATION_TYPE_PERSONAL,
    }
)


@dataclass
class Notification:
    """Message delivered to one user, or to everybody when ``user_id`` is ``None``.

    ``is_read`` is resolved for the viewing user: broadcasts are read per
    recipient, never globally.
    """

    id: int | None
    user_id: int | None
    title: str
    message: str
    type: str = NOTIFICATION_TYPE_GENERAL
    related_id: int | None = None
    is_read: bool = False
    created_at: datetime | None = None

    @property
    def is_broadcast(self) -> bool:
        return self.user_id is None

    def is_visible_to(self, user_id: int) -> bool:
        """Return ``True`` when ``user_id`` is a recipient of this notification."""

        return self.user_id is None or self.user_id == user_id


__all__ = [
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_GENERAL",
    "NOTIFICATION_TYPE_TOURNAMENT",
    "NOTIFICATION_TYPE_ANNOUNCEMENT",
    "NOTIFICATION_TYPE_IMPORTANT",
    "NOTIFICATION_TYPE_BROADCAST",
    "NOTIFICATION_TYPE_PERSONAL",
]
