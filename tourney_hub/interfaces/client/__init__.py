"""Client-side notification synchronization."""

from .cache import NotificationListCache
from .channel import PushChannel, build_ws_url
from .config import ClearMode, ClientSettings
from .counter import UnreadCounter, format_badge
from .dismissal import DismissalFlag
from .errors import ClientResponseError, ClientTransportError, NotificationClientError
from .http import NotificationApi
from .panel import MutationState, NotificationPanel, PanelView
from .session import NotificationSession
from .storage import JsonFileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "ClearMode",
    "ClientResponseError",
    "ClientSettings",
    "ClientTransportError",
    "DismissalFlag",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "MutationState",
    "NotificationApi",
    "NotificationClientError",
    "NotificationListCache",
    "NotificationPanel",
    "NotificationSession",
    "PanelView",
    "PushChannel",
    "UnreadCounter",
    "build_ws_url",
    "format_badge",
]
