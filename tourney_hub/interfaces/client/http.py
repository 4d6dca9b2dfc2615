"""JSON request helper and typed wrappers for the notification endpoints."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from tourney_hub.interfaces.api.schemas import NotificationRead

from .errors import ClientResponseError, ClientTransportError

logger = logging.getLogger(__name__)


class NotificationApi:
    """Thin async client for the notification REST API.

    Every call goes through :meth:`request_json`, which turns transport
    failures into :class:`ClientTransportError` and non-2xx answers into
    :class:`ClientResponseError`. The session cookie set by :meth:`login`
    is kept by the underlying :class:`httpx.AsyncClient`.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    def cookie_header(self) -> str:
        """Render the stored cookies as a ``Cookie`` header value."""

        return "; ".join(f"{name}={value}" for name, value in self._client.cookies.items())

    async def request_json(self, method: str, path: str, *, json: Any = None) -> Any:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ClientTransportError(f"{method} {path} failed: {exc}") from exc

        if response.status_code >= 400:
            raise ClientResponseError(response.status_code, _extract_detail(response))

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ClientResponseError(response.status_code, "Invalid JSON response") from exc

    async def login(self, username: str, password: str) -> dict[str, Any]:
        return await self.request_json(
            "POST", "/api/auth/login", json={"username": username, "password": password}
        )

    async def logout(self) -> None:
        await self.request_json("POST", "/api/auth/logout")

    async def fetch_notifications(self) -> list[NotificationRead]:
        payload = await self.request_json("GET", "/api/notifications")
        return [NotificationRead.model_validate(item) for item in payload or []]

    async def fetch_unread_count(self) -> int:
        payload = await self.request_json("GET", "/api/notifications/count")
        try:
            return int(payload["count"])
        except (TypeError, KeyError, ValueError) as exc:
            raise ClientResponseError(200, f"Unexpected count payload: {payload!r}") from exc

    async def mark_read(self, notification_id: int) -> NotificationRead:
        payload = await self.request_json("PATCH", f"/api/notifications/{notification_id}/read")
        return NotificationRead.model_validate(payload)

    async def mark_all_read(self) -> dict[str, Any]:
        return await self.request_json("POST", "/api/notifications/mark-all-read", json={})

    async def hide_all(self) -> dict[str, Any]:
        return await self.request_json("POST", "/api/notifications/hide", json={})

    async def delete_all(self) -> dict[str, Any]:
        return await self.request_json("DELETE", "/api/notifications/all")

    async def broadcast(
        self,
        title: str,
        message: str,
        *,
        notification_type: str = "broadcast",
        user_id: int | None = None,
        user_ids: Sequence[int] | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"title": title, "message": message, "type": notification_type}
        if user_id is not None:
            body["userId"] = user_id
        if user_ids:
            body["userIds"] = list(user_ids)
        return await self.request_json("POST", "/api/notifications", json=body)

    async def create_admin_notification(
        self,
        title: str,
        message: str,
        *,
        notification_type: str = "general",
        user_id: int | None = None,
        related_id: int | None = None,
    ) -> NotificationRead:
        body: dict[str, Any] = {"title": title, "message": message, "type": notification_type}
        if user_id is not None:
            body["userId"] = user_id
        if related_id is not None:
            body["relatedId"] = related_id
        payload = await self.request_json("POST", "/api/admin/notifications", json=body)
        return NotificationRead.model_validate(payload)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "NotificationApi":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _extract_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict):
        detail = payload.get("detail") or payload.get("message")
        if detail is not None:
            return detail if isinstance(detail, str) else str(detail)
    return str(payload)


__all__ = ["NotificationApi"]
