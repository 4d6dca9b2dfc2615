"""Message exchanged over the notification push channel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PUSH_EVENT_NOTIFICATION_UPDATE = "notification_update"
PUSH_MESSAGE_AUTH = "auth"


@dataclass(frozen=True)
class PushEvent:
    """Unread count change delivered to a connected client."""

    count: int
    is_hide_action: bool = False
    type: str = PUSH_EVENT_NOTIFICATION_UPDATE

    def to_message(self) -> dict[str, Any]:
        """Return the JSON wire representation of the event."""

        message: dict[str, Any] = {"type": self.type, "count": self.count}
        if self.is_hide_action:
            message["isHideAction"] = True
        return message

    @classmethod
    def from_message(cls, message: Any) -> "PushEvent | None":
        """Parse a wire message, returning ``None`` when it is not an update.

        Raises ``ValueError`` when the message claims to be an update but its
        ``count`` is not a non-negative integer.
        """

        if not isinstance(message, dict):
            return None
        if message.get("type") != PUSH_EVENT_NOTIFICATION_UPDATE:
            return None

        count = message.get("count")
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"Invalid notification count: {count!r}")
        return cls(count=count, is_hide_action=message.get("isHideAction") is True)


def auth_message(user_id: int) -> dict[str, Any]:
    """Return the handshake sent by a client right after connecting."""

    return {"type": PUSH_MESSAGE_AUTH, "userId": user_id}


__all__ = [
    "PushEvent",
    "PUSH_EVENT_NOTIFICATION_UPDATE",
    "PUSH_MESSAGE_AUTH",
    "auth_message",
]
