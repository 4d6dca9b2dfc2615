"""ORM models used by the application infrastructure."""

from .user import UserModel
from .notification import NotificationModel
from .notification_read import NotificationReadModel
from .notification_hide import NotificationHideModel

__all__ = [
    "UserModel",
    "NotificationModel",
    "NotificationReadModel",
    "NotificationHideModel",
]
