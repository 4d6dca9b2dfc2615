"""Notification dropdown state: badge, rows and optimistic user actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

from tourney_hub.domain.entities import PushEvent
from tourney_hub.interfaces.api.schemas import NotificationRead

from .cache import NotificationListCache
from .channel import PushChannel, PushHandler
from .config import ClearMode
from .counter import UnreadCounter, format_badge
from .dismissal import DismissalFlag
from .errors import NotificationClientError
from .http import NotificationApi

logger = logging.getLogger(__name__)

ChannelFactory = Callable[[PushHandler], PushChannel]


class MutationState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True)
class PanelView:
    badge_count: int
    badge_label: str
    open: bool
    loading: bool
    rows: tuple[NotificationRead, ...] | None
    empty: bool


class NotificationPanel:
    """Keeps the badge and the dropdown list in sync with the server.

    Every user action updates the local state first, then calls the API and
    rolls the local state back when the call fails.
    """

    def __init__(
        self,
        api: NotificationApi,
        *,
        user_id: int,
        counter: UnreadCounter,
        cache: NotificationListCache,
        flag: DismissalFlag,
        on_error: Callable[[str], None] | None = None,
        clear_mode: ClearMode = ClearMode.HIDE,
        channel_factory: ChannelFactory | None = None,
        poll_interval: float = 30.0,
    ) -> None:
        self.api = api
        self.user_id = user_id
        self.counter = counter
        self.cache = cache
        self.flag = flag
        self.clear_mode = ClearMode(clear_mode)
        self._on_error = on_error
        self._channel_factory = channel_factory
        self._poll_interval = poll_interval
        self._channel: PushChannel | None = None
        self._open = False
        self._loading = False
        self._mutations: dict[str, MutationState] = {}

    @classmethod
    def for_api(
        cls,
        api: NotificationApi,
        *,
        user_id: int,
        flag: DismissalFlag,
        **kwargs,
    ) -> "NotificationPanel":
        """Build a panel whose counter and cache read from ``api``."""

        return cls(
            api,
            user_id=user_id,
            counter=UnreadCounter(api.fetch_unread_count),
            cache=NotificationListCache(api.fetch_notifications),
            flag=flag,
            **kwargs,
        )

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def dismissed(self) -> bool:
        return self.flag.is_set(self.user_id)

    @property
    def channel(self) -> PushChannel | None:
        return self._channel

    def mutation_state(self, key: str) -> MutationState:
        return self._mutations.get(key, MutationState.IDLE)

    # lifecycle

    async def mount(self) -> None:
        await self.counter.refresh()
        self.counter.start_polling(self._poll_interval)
        if self._channel_factory is not None and self._channel is None:
            self._channel = self._channel_factory(self.handle_push)
            await self._channel.start()

    async def unmount(self) -> None:
        await self.counter.stop_polling()
        channel, self._channel = self._channel, None
        if channel is not None:
            channel.close()
            await channel.wait_closed()
        self._open = False
        self.cache.disable()

    async def open(self) -> PanelView:
        self._open = True
        self.cache.enable()
        self.cache.invalidate()
        if self.dismissed and self.counter.current_count() == 0:
            return self.render()
        await self._load()
        return self.render()

    def close(self) -> PanelView:
        self._open = False
        self.cache.disable()
        return self.render()

    def render(self) -> PanelView:
        count = self.counter.current_count()
        if not self._open:
            return PanelView(
                badge_count=count,
                badge_label=format_badge(count),
                open=False,
                loading=False,
                rows=None,
                empty=False,
            )

        dismissed = self.dismissed
        rows = () if dismissed else tuple(self.cache.items)
        loading = self._loading and not dismissed
        return PanelView(
            badge_count=count,
            badge_label=format_badge(count),
            open=True,
            loading=loading,
            rows=rows,
            empty=not loading and not rows,
        )

    # push

    async def handle_push(self, event: PushEvent) -> None:
        self.counter.apply_push(event)
        if event.is_hide_action:
            self.flag.set(self.user_id, self._boundary_with(self.cache.items))
            self.cache.replace([])

        if self._open:
            self.cache.invalidate()
            await self._load()
        elif not event.is_hide_action and event.count > 0 and self.dismissed:
            await self._verify_dismissal()

    # user actions

    async def mark_read(self, notification_id: int) -> bool:
        key = f"mark_read:{notification_id}"
        previous_items = self.cache.items
        previous_count = self.counter.current_count()

        target = next((item for item in previous_items if item.id == notification_id), None)
        if target is not None:
            self.cache.replace(
                [
                    item.model_copy(update={"is_read": True}) if item.id == notification_id else item
                    for item in previous_items
                ]
            )
            if not target.is_read:
                self.counter.set_local(previous_count - 1)

        return await self._run_mutation(
            key,
            lambda: self.api.mark_read(notification_id),
            previous_items=previous_items,
            previous_count=previous_count,
            failure_message="Failed to mark notification as read",
        )

    async def mark_all_read(self) -> bool:
        previous_items = self.cache.items
        previous_count = self.counter.current_count()
        self.cache.replace([item.model_copy(update={"is_read": True}) for item in previous_items])
        self.counter.set_local(0)

        return await self._run_mutation(
            "mark_all_read",
            self.api.mark_all_read,
            previous_items=previous_items,
            previous_count=previous_count,
            failure_message="Failed to mark all notifications as read",
        )

    async def clear_all(self) -> bool:
        previous_items = self.cache.items
        previous_count = self.counter.current_count()
        was_dismissed = self.dismissed
        previous_boundary = self.flag.dismissed_through(self.user_id)

        self.flag.set(self.user_id, self._boundary_with(previous_items))
        self.counter.set_local(0)
        self.cache.replace([])

        def restore_dismissal() -> None:
            if was_dismissed:
                self.flag.set(self.user_id, previous_boundary)
            else:
                self.flag.clear(self.user_id)

        return await self._run_mutation(
            "clear_all",
            self._clear_on_server,
            previous_items=previous_items,
            previous_count=previous_count,
            failure_message="Failed to clear notifications",
            on_rollback=restore_dismissal,
        )

    async def _clear_on_server(self) -> None:
        if self.clear_mode is ClearMode.HIDE:
            await self.api.hide_all()
        elif self.clear_mode is ClearMode.DELETE:
            await self.api.delete_all()

    # internals

    async def _run_mutation(
        self,
        key: str,
        call: Callable[[], Awaitable[object]],
        *,
        previous_items: list[NotificationRead],
        previous_count: int,
        failure_message: str,
        on_rollback: Callable[[], None] | None = None,
    ) -> bool:
        self._mutations[key] = MutationState.PENDING
        try:
            await call()
        except NotificationClientError as exc:
            self._mutations[key] = MutationState.ROLLED_BACK
            self.cache.replace(previous_items)
            self.counter.set_local(previous_count)
            if on_rollback is not None:
                on_rollback()
            self._report(failure_message, exc)
            await self._resync()
            return False

        self._mutations[key] = MutationState.CONFIRMED
        self.cache.invalidate()
        if self._open:
            await self._load()
        return True

    async def _resync(self) -> None:
        await self.counter.refresh()
        self.cache.invalidate()
        if self._open:
            await self._load()

    async def _load(self) -> None:
        self._loading = True
        try:
            items = await self.cache.ensure_fresh()
        except NotificationClientError as exc:
            self._report("Failed to load notifications", exc)
            return
        finally:
            self._loading = False

        if self.cache.is_stale:
            return
        self._check_dismissal(items)

    async def _verify_dismissal(self) -> None:
        """Fetch the list while closed to see whether anything newer arrived."""

        try:
            items = await self.api.fetch_notifications()
        except NotificationClientError as exc:
            logger.info("Could not verify dismissal for user %s: %s", self.user_id, exc)
            return
        self._check_dismissal(items)

    def _check_dismissal(self, items: list[NotificationRead]) -> None:
        if not self.dismissed:
            return
        boundary = self.flag.dismissed_through(self.user_id)
        if any(item.id > boundary for item in items):
            logger.debug("New notifications for user %s; clearing dismissal", self.user_id)
            self.flag.clear(self.user_id)

    def _boundary_with(self, items: list[NotificationRead]) -> int:
        return max([self.flag.dismissed_through(self.user_id), *(item.id for item in items)])

    def _report(self, message: str, exc: Exception) -> None:
        logger.warning("%s: %s", message, exc)
        if self._on_error is not None:
            self._on_error(message)


__all__ = ["NotificationPanel", "PanelView", "MutationState", "ChannelFactory"]
