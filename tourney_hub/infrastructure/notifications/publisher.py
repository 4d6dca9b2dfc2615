"""Utility helpers to push unread count updates to websocket subscribers."""

from __future__ import annotations

import asyncio
from typing import Any

from anyio import from_thread

from tourney_hub.domain.entities import PushEvent

from .manager import NotificationConnectionManager, notification_manager


class NotificationPublisher:
    """Serialize push events and schedule their delivery."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    @property
    def manager(self) -> NotificationConnectionManager:
        return self._manager

    def connected_user_ids(self) -> list[int]:
        return self._manager.connected_user_ids()

    def publish_count(self, user_id: int, count: int, *, is_hide_action: bool = False) -> None:
        """Schedule a ``notification_update`` carrying ``count`` for ``user_id``."""

        if not user_id or not self._manager.connection_count(user_id):
            return
        event = PushEvent(count=count, is_hide_action=is_hide_action)
        self._schedule_send(user_id, event.to_message())

    def _schedule_send(self, user_id: int, message: dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Called from a threadpool worker running a sync endpoint.
            from_thread.run(self._manager.send_to_user, user_id, message)
        else:
            loop.create_task(self._manager.send_to_user(user_id, message))


notification_publisher = NotificationPublisher(notification_manager)


__all__ = ["NotificationPublisher", "notification_publisher"]
