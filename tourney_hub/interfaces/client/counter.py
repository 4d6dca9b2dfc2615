"""Client-side unread notification counter."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from tourney_hub.domain.entities import PushEvent

from .errors import NotificationClientError

logger = logging.getLogger(__name__)

BADGE_LIMIT = 9


def format_badge(count: int) -> str:
    """Return the badge text for ``count``: empty, the number, or ``9+``."""

    if count <= 0:
        return ""
    if count > BADGE_LIMIT:
        return f"{BADGE_LIMIT}+"
    return str(count)


class UnreadCounter:
    """Holds the unread count shown on the notification badge.

    The value is replaced by whichever arrives last: an authoritative fetch,
    a push event, or a local optimistic update.
    """

    def __init__(
        self,
        fetch_count: Callable[[], Awaitable[int]],
        *,
        initial: int = 0,
        poll_interval: float = 30.0,
    ) -> None:
        self._fetch_count = fetch_count
        self._count = max(0, initial)
        self._poll_interval = poll_interval
        self._poll_task: asyncio.Task | None = None

    def current_count(self) -> int:
        return self._count

    def badge_label(self) -> str:
        return format_badge(self._count)

    async def refresh(self) -> int:
        try:
            count = await self._fetch_count()
        except NotificationClientError as exc:
            logger.warning("Unable to refresh unread count: %s", exc)
            return self._count
        self._count = max(0, int(count))
        return self._count

    def apply_push(self, event: PushEvent) -> None:
        self._count = max(0, event.count)

    def set_local(self, count: int) -> None:
        self._count = max(0, count)

    @property
    def polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    def start_polling(self, interval: float | None = None) -> None:
        if self.polling:
            return
        if interval is not None:
            self._poll_interval = interval
        self._poll_task = asyncio.get_running_loop().create_task(self._poll_loop())

    async def stop_polling(self) -> None:
        task, self._poll_task = self._poll_task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _poll_loop(self) -> None:
        while True:
            await asyncio.sleep(self._poll_interval)
            await self.refresh()


__all__ = ["UnreadCounter", "format_badge", "BADGE_LIMIT"]
