"""Errors raised by notification use cases."""


class NotificationNotFoundError(ValueError):
    """The requested notification does not exist."""


class NotificationAccessError(ValueError):
    """The notification is addressed to a different user."""


__all__ = ["NotificationNotFoundError", "NotificationAccessError"]
