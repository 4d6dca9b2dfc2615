"""Domain entities exposed by the application."""

from .notification import (
    NOTIFICATION_TYPE_ANNOUNCEMENT,
    NOTIFICATION_TYPE_BROADCAST,
    NOTIFICATION_TYPE_GENERAL,
    NOTIFICATION_TYPE_IMPORTANT,
    NOTIFICATION_TYPE_PERSONAL,
    NOTIFICATION_TYPE_TOURNAMENT,
    NOTIFICATION_TYPES,
    Notification,
)
from .push_event import (
    PUSH_EVENT_NOTIFICATION_UPDATE,
    PUSH_MESSAGE_AUTH,
    PushEvent,
    auth_message,
)
from .user import ROLE_ADMIN, ROLE_USER, User

__all__ = [
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_GENERAL",
    "NOTIFICATION_TYPE_TOURNAMENT",
    "NOTIFICATION_TYPE_ANNOUNCEMENT",
    "NOTIFICATION_TYPE_IMPORTANT",
    "NOTIFICATION_TYPE_BROADCAST",
    "NOTIFICATION_TYPE_PERSONAL",
    "PushEvent",
    "PUSH_EVENT_NOTIFICATION_UPDATE",
    "PUSH_MESSAGE_AUTH",
    "auth_message",
    "User",
    "ROLE_USER",
    "ROLE_ADMIN",
]
