"""Cache of the most recent notification page."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence

from tourney_hub.interfaces.api.schemas import NotificationRead

logger = logging.getLogger(__name__)


class NotificationListCache:
    """Notification rows as last returned by the server.

    Fetches only happen while the cache is enabled. Each invalidation bumps a
    generation number; a fetch that was started under an older generation
    is dropped when it resolves.
    """

    def __init__(self, fetch_page: Callable[[], Awaitable[Sequence[NotificationRead]]]) -> None:
        self._fetch_page = fetch_page
        self._items: list[NotificationRead] = []
        self._loaded = False
        self._stale = True
        self._enabled = False
        self._generation = 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_stale(self) -> bool:
        return self._stale

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def items(self) -> list[NotificationRead]:
        return list(self._items)

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False
        self._generation += 1

    def invalidate(self) -> None:
        self._stale = True
        self._generation += 1

    def replace(self, items: Sequence[NotificationRead]) -> None:
        """Overwrite the rows locally without touching staleness."""

        self._items = list(items)

    async def fetch_page(self) -> list[NotificationRead]:
        if not self._enabled:
            return self.items

        generation = self._generation
        items = await self._fetch_page()
        if generation != self._generation:
            logger.debug("Discarding notification page fetched before invalidation")
            return self.items

        self._items = list(items)
        self._loaded = True
        self._stale = False
        return self.items

    async def ensure_fresh(self) -> list[NotificationRead]:
        if self._stale:
            return await self.fetch_page()
        return self.items


__all__ = ["NotificationListCache"]
