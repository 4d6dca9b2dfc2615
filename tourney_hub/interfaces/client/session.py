"""Authenticated notification session wiring the client pieces together."""

from __future__ import annotations

import logging
from typing import Callable

from .channel import PushChannel, PushHandler, build_ws_url
from .config import ClientSettings
from .dismissal import DismissalFlag
from .http import NotificationApi
from .panel import NotificationPanel
from .storage import JsonFileStorage, KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)


class NotificationSession:
    """Owns the API client, push channel and panel for one logged-in user.

    ``start`` logs in and mounts the panel; ``stop`` unmounts it and closes
    the HTTP client. The push channel lives exactly as long as the session.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        api: NotificationApi | None = None,
        storage: KeyValueStorage | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self.api = api or NotificationApi(
            self.settings.base_url, timeout=self.settings.request_timeout_seconds
        )
        if storage is None:
            storage = (
                JsonFileStorage(self.settings.storage_path)
                if self.settings.storage_path is not None
                else MemoryStorage()
            )
        self.storage = storage
        self.on_error = on_error
        self.panel: NotificationPanel | None = None

    async def start(self, username: str, password: str) -> NotificationPanel:
        payload = await self.api.login(username, password)
        user_id = int(payload["user"]["id"])
        logger.info("Notification session started for user %s", user_id)

        self.panel = NotificationPanel.for_api(
            self.api,
            user_id=user_id,
            flag=DismissalFlag(self.storage),
            on_error=self.on_error,
            clear_mode=self.settings.clear_mode,
            channel_factory=lambda handler: self._build_channel(user_id, handler),
            poll_interval=self.settings.poll_interval_seconds,
        )
        await self.panel.mount()
        return self.panel

    def _build_channel(self, user_id: int, handler: PushHandler) -> PushChannel:
        headers = {}
        cookie = self.api.cookie_header()
        if cookie:
            headers["Cookie"] = cookie
        return PushChannel(
            build_ws_url(self.settings.base_url), user_id, handler, headers=headers
        )

    async def stop(self) -> None:
        if self.panel is not None:
            await self.panel.unmount()
            self.panel = None
        await self.api.aclose()

    async def __aenter__(self) -> "NotificationSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()


__all__ = ["NotificationSession"]
