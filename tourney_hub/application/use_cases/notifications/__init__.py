"""Public helpers for reading, mutating and emitting notifications."""

from .cleanup import cleanup_old_notifications
from .create_notification import create_notification
from .dismiss import delete_user_notifications, hide_notifications
from .errors import NotificationAccessError, NotificationNotFoundError
from .events import publish_to_all_connected, publish_unread_counts
from .list_notifications import get_unread_count, list_notifications
from .mark_read import mark_all_notifications_read, mark_notification_read

__all__ = [
    "cleanup_old_notifications",
    "create_notification",
    "delete_user_notifications",
    "hide_notifications",
    "NotificationAccessError",
    "NotificationNotFoundError",
    "publish_to_all_connected",
    "publish_unread_counts",
    "get_unread_count",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
