from .auth import LoginRequest, RegisterRequest, SessionResponse
from .notification import (
    AdminNotificationCreate,
    NotificationBatchCreated,
    NotificationCreateRequest,
    NotificationRead,
    OperationResult,
    UnreadCountRead,
)
from .user import UserRead

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "SessionResponse",
    "AdminNotificationCreate",
    "NotificationBatchCreated",
    "NotificationCreateRequest",
    "NotificationRead",
    "OperationResult",
    "UnreadCountRead",
    "UserRead",
]
