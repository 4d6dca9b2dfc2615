"""Client side of the notification push channel."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from typing import Any, Awaitable, Callable, Mapping
from urllib.parse import urlsplit, urlunsplit

from websockets.asyncio.client import connect as websocket_connect
from websockets.exceptions import ConnectionClosed, WebSocketException

from tourney_hub.domain.entities import PushEvent, auth_message

logger = logging.getLogger(__name__)

PushHandler = Callable[[PushEvent], "Awaitable[None] | None"]


def build_ws_url(base_url: str, path: str = "/ws") -> str:
    """Turn the API base URL into the push endpoint URL."""

    parts = urlsplit(base_url)
    scheme = {"http": "ws", "https": "wss"}.get(parts.scheme, parts.scheme or "ws")
    prefix = parts.path.rstrip("/")
    return urlunsplit((scheme, parts.netloc, f"{prefix}{path}", "", ""))


class PushChannel:
    """Single websocket connection delivering unread count updates.

    The channel never reconnects on its own; whoever owns it opens it once
    and closes it when the session ends.
    """

    def __init__(
        self,
        url: str,
        user_id: int,
        on_event: PushHandler,
        *,
        connect: Callable[..., Awaitable[Any]] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.url = url
        self.user_id = user_id
        self._on_event = on_event
        self._connect = connect or websocket_connect
        self._headers = dict(headers or {})
        self._connection: Any = None
        self._listener: asyncio.Task | None = None
        self._closing: asyncio.Task | None = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._connection is not None and not self._closed

    async def open(self) -> None:
        if self._closed:
            raise RuntimeError("Push channel already closed")
        if self._connection is not None:
            return

        kwargs: dict[str, Any] = {}
        if self._headers:
            kwargs["additional_headers"] = self._headers
        self._connection = await self._connect(self.url, **kwargs)
        await self._connection.send(json.dumps(auth_message(self.user_id)))
        logger.info("Push channel opened for user %s", self.user_id)

    async def start(self) -> bool:
        """Open the connection and listen in the background.

        Returns ``False`` when the connection could not be established.
        """

        try:
            await self.open()
        except (OSError, WebSocketException) as exc:
            logger.warning("Unable to open push channel: %s", exc)
            return False
        self._listener = asyncio.get_running_loop().create_task(self.run())
        return True

    async def run(self) -> None:
        connection = self._connection
        if connection is None:
            return
        try:
            async for raw in connection:
                await self.handle_raw(raw)
        except ConnectionClosed as exc:
            logger.info("Push channel closed: %s", exc)
        finally:
            if self._connection is connection:
                self._connection = None
                await connection.close()

    async def handle_raw(self, raw: str | bytes) -> PushEvent | None:
        try:
            message = json.loads(raw)
        except ValueError:
            logger.warning("Discarding malformed push payload: %r", raw)
            return None

        try:
            event = PushEvent.from_message(message)
        except ValueError as exc:
            logger.warning("Discarding push payload: %s", exc)
            return None
        if event is None:
            logger.debug("Ignoring push message %r", message)
            return None

        try:
            result = self._on_event(event)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Push event handler failed")
        return event

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        listener, self._listener = self._listener, None
        if listener is not None and not listener.done():
            listener.cancel()

        connection, self._connection = self._connection, None
        if connection is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._closing = loop.create_task(connection.close())

    async def wait_closed(self) -> None:
        if self._closing is not None:
            await self._closing


__all__ = ["PushChannel", "PushHandler", "build_ws_url"]
