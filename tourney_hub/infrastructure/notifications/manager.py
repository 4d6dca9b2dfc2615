"""Connection management helpers for the notification push channel."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Track push channel sockets grouped by the user they authenticated as.

    A socket is *pending* between ``accept`` and ``authenticate``; pending
    sockets never receive count updates.
    """

    def __init__(self) -> None:
        self._connections: DefaultDict[int, Set[WebSocket]] = defaultdict(set)
        self._pending: Set[WebSocket] = set()
        self._owners: dict[WebSocket, int] = {}

    async def accept(self, websocket: WebSocket) -> None:
        """Accept the websocket connection and keep it pending until auth."""

        await websocket.accept()
        self._pending.add(websocket)

    def authenticate(self, user_id: int, websocket: WebSocket) -> None:
        """Register ``websocket`` as a connection of ``user_id``."""

        previous = self._owners.get(websocket)
        if previous is not None and previous != user_id:
            self._discard(previous, websocket)
        self._pending.discard(websocket)
        self._connections[user_id].add(websocket)
        self._owners[websocket] = user_id

    def disconnect(self, websocket: WebSocket) -> None:
        """Forget ``websocket``; calling this more than once is harmless."""

        self._pending.discard(websocket)
        user_id = self._owners.pop(websocket, None)
        if user_id is not None:
            self._discard(user_id, websocket)

    def connected_user_ids(self) -> list[int]:
        """Return the ids of users with at least one authenticated socket."""

        return sorted(self._connections)

    def connection_count(self, user_id: int | None = None) -> int:
        if user_id is None:
            return sum(len(sockets) for sockets in self._connections.values())
        return len(self._connections.get(user_id, ()))

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> None:
        """Send ``message`` to every active connection for ``user_id``."""

        connections = list(self._connections.get(user_id, set()))
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception as exc:
                logger.warning(
                    "Dropping push connection for user %s after failed send: %s",
                    user_id,
                    exc,
                )
                self.disconnect(connection)

    def _discard(self, user_id: int, websocket: WebSocket) -> None:
        connections = self._connections.get(user_id)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._connections.pop(user_id, None)


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
