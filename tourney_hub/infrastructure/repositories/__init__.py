"""Repository implementations for infrastructure layer."""

from .user_repository import UserRepository
from .notification_repository import DEFAULT_LIST_LIMIT, NotificationRepository

__all__ = [
    "UserRepository",
    "NotificationRepository",
    "DEFAULT_LIST_LIMIT",
]
