"""Tests for the HTTP wrapper and the push channel client."""

from __future__ import annotations

import json

import httpx
import pytest
from fakes import FakeConnection
from websockets.exceptions import ConnectionClosed

from tourney_hub.domain.entities import PushEvent
from tourney_hub.interfaces.client import (
    ClientResponseError,
    ClientSettings,
    ClientTransportError,
    NotificationApi,
    NotificationSession,
    PushChannel,
    build_ws_url,
)


def _api(handler) -> NotificationApi:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://hub.test"
    )
    return NotificationApi(client=client)


@pytest.mark.asyncio
async def test_fetch_notifications_parses_camel_case() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/notifications"
        return httpx.Response(
            200,
            json=[
                {
                    "id": 3,
                    "userId": None,
                    "title": "Finals",
                    "message": "Tonight",
                    "type": "broadcast",
                    "relatedId": None,
                    "isRead": True,
                    "createdAt": "2024-05-01T18:00:00+05:30",
                }
            ],
        )

    [row] = await _api(handler).fetch_notifications()

    assert row.id == 3
    assert row.is_read is True
    assert row.created_at.utcoffset().total_seconds() == 5.5 * 3600


@pytest.mark.asyncio
async def test_unread_count_and_mutations_hit_expected_routes() -> None:
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        if request.url.path.endswith("/count"):
            return httpx.Response(200, json={"count": 4})
        return httpx.Response(200, json={"success": True})

    api = _api(handler)
    assert await api.fetch_unread_count() == 4
    await api.mark_all_read()
    await api.hide_all()
    await api.delete_all()

    assert seen == [
        ("GET", "/api/notifications/count"),
        ("POST", "/api/notifications/mark-all-read"),
        ("POST", "/api/notifications/hide"),
        ("DELETE", "/api/notifications/all"),
    ]


@pytest.mark.asyncio
async def test_broadcast_sends_camel_case_body() -> None:
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"success": True, "notificationsCreated": 2})

    await _api(handler).broadcast("Slots", "Confirmed", user_ids=[1, 2])

    assert bodies == [
        {"title": "Slots", "message": "Confirmed", "type": "broadcast", "userIds": [1, 2]}
    ]


@pytest.mark.asyncio
async def test_error_status_raises_response_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"detail": "Notification not found"})

    with pytest.raises(ClientResponseError) as exc_info:
        await _api(handler).mark_read(99)

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Notification not found"


@pytest.mark.asyncio
async def test_transport_failure_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ClientTransportError):
        await _api(handler).fetch_unread_count()


@pytest.mark.parametrize(
    ("base_url", "expected"),
    [
        ("http://localhost:8000", "ws://localhost:8000/ws"),
        ("https://hub.example.com/", "wss://hub.example.com/ws"),
        ("https://hub.example.com/app", "wss://hub.example.com/app/ws"),
    ],
)
def test_build_ws_url(base_url, expected) -> None:
    assert build_ws_url(base_url) == expected


@pytest.mark.asyncio
async def test_channel_authenticates_and_dispatches_updates() -> None:
    connection = FakeConnection(
        [
            "not json",
            json.dumps({"type": "pong"}),
            json.dumps({"type": "notification_update", "count": -2}),
            json.dumps({"type": "notification_update", "count": 3}),
            json.dumps({"type": "notification_update", "count": 0, "isHideAction": True}),
        ]
    )
    connect_calls = []

    async def connect(url, **kwargs):
        connect_calls.append((url, kwargs))
        return connection

    events: list[PushEvent] = []
    channel = PushChannel(
        "ws://hub.test/ws",
        7,
        events.append,
        connect=connect,
        headers={"Cookie": "tourney_session=abc"},
    )

    await channel.open()
    await channel.run()

    assert connect_calls == [
        ("ws://hub.test/ws", {"additional_headers": {"Cookie": "tourney_session=abc"}})
    ]
    assert [json.loads(frame) for frame in connection.sent] == [{"type": "auth", "userId": 7}]
    assert events == [PushEvent(count=3), PushEvent(count=0, is_hide_action=True)]


@pytest.mark.asyncio
async def test_channel_handler_errors_do_not_stop_listening() -> None:
    connection = FakeConnection(
        [
            json.dumps({"type": "notification_update", "count": 1}),
            json.dumps({"type": "notification_update", "count": 2}),
        ]
    )
    seen: list[int] = []

    async def connect(url, **kwargs):
        return connection

    async def handler(event: PushEvent) -> None:
        seen.append(event.count)
        if event.count == 1:
            raise RuntimeError("render failed")

    channel = PushChannel("ws://hub.test/ws", 7, handler, connect=connect)
    await channel.open()
    await channel.run()

    assert seen == [1, 2]


@pytest.mark.asyncio
async def test_channel_resets_when_server_closes() -> None:
    class DroppedConnection(FakeConnection):
        async def _iterate(self):
            yield json.dumps({"type": "notification_update", "count": 1})
            raise ConnectionClosed(None, None)

    connection = DroppedConnection()

    async def connect(url, **kwargs):
        return connection

    seen: list[int] = []
    channel = PushChannel(
        "ws://hub.test/ws", 7, lambda event: seen.append(event.count), connect=connect
    )
    await channel.open()
    assert channel.is_open is True

    await channel.run()

    assert seen == [1]
    assert channel.is_open is False
    assert connection.closed is True


@pytest.mark.asyncio
async def test_channel_close_is_idempotent() -> None:
    connection = FakeConnection()

    async def connect(url, **kwargs):
        return connection

    never_opened = PushChannel("ws://hub.test/ws", 1, lambda event: None, connect=connect)
    never_opened.close()
    never_opened.close()

    channel = PushChannel("ws://hub.test/ws", 1, lambda event: None, connect=connect)
    assert await channel.start() is True
    channel.close()
    channel.close()
    await channel.wait_closed()

    assert connection.closed is True
    assert channel.is_open is False


@pytest.mark.asyncio
async def test_channel_start_reports_connection_failure() -> None:
    async def connect(url, **kwargs):
        raise ConnectionRefusedError("no server")

    channel = PushChannel("ws://hub.test/ws", 1, lambda event: None, connect=connect)

    assert await channel.start() is False
    assert channel.is_open is False


@pytest.mark.asyncio
async def test_session_channel_forwards_cookie() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    api = _api(handler)
    api.cookies.set("tourney_session", "abc")
    session = NotificationSession(ClientSettings(base_url="http://hub.test"), api=api)

    channel = session._build_channel(4, lambda event: None)

    assert channel.url == "ws://hub.test/ws"
    assert channel.user_id == 4
    assert channel._headers == {"Cookie": "tourney_session=abc"}
