"""Pydantic models describing notification payloads.

Notification payloads use camelCase field names on the wire
(``isRead``, ``createdAt``...) and accept snake_case when parsing.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NotificationRead(_CamelModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: int | None = None
    title: str
    message: str
    type: str
    related_id: int | None = None
    is_read: bool = False
    created_at: datetime | None = None


class UnreadCountRead(BaseModel):
    count: int = Field(..., ge=0)


class NotificationCreateRequest(_CamelModel):
    """Admin payload to broadcast, target one user, or target several users."""

    title: str | None = None
    message: str | None = None
    type: str = "broadcast"
    user_id: int | None = None
    user_ids: list[int] = Field(default_factory=list)


class AdminNotificationCreate(_CamelModel):
    """Admin payload creating a single, optionally targeted, notification."""

    title: str | None = None
    message: str | None = None
    type: str = "general"
    user_id: int | None = None
    related_id: int | None = None


class NotificationBatchCreated(_CamelModel):
    success: bool = True
    notifications_created: int
    notifications: list[NotificationRead]


class OperationResult(BaseModel):
    success: bool = True
    hidden: int | None = None
    deleted: int | None = None
    updated: int | None = None


__all__ = [
    "AdminNotificationCreate",
    "NotificationBatchCreated",
    "NotificationCreateRequest",
    "NotificationRead",
    "OperationResult",
    "UnreadCountRead",
]
