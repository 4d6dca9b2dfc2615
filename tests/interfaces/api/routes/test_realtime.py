"""Tests for the websocket push channel."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect


def _token(headers: dict[str, str]) -> str:
    return headers["Authorization"].split(" ", 1)[1]


def _connect(client: TestClient, headers: dict[str, str]):
    return client.websocket_connect(f"/ws?token={_token(headers)}")


def _broadcast(client: TestClient, headers, **payload) -> None:
    response = client.post("/api/notifications", json=payload, headers=headers)
    assert response.status_code == 201, response.text


@pytest.fixture
def players(make_user):
    return make_user("organizer", role="admin"), make_user("alice"), make_user("bob")


def test_auth_receives_current_count(client, players, login) -> None:
    _, alice, _ = players
    admin_headers = login("organizer")
    alice_headers = login("alice")
    _broadcast(client, admin_headers, title="Warmup", message="Lobby opens at 8")

    with _connect(client, alice_headers) as ws:
        ws.send_json({"type": "auth", "userId": alice.id})
        assert ws.receive_json() == {"type": "notification_update", "count": 1}


def test_broadcast_reaches_every_connected_user(client, players, login) -> None:
    _, alice, bob = players
    admin_headers = login("organizer")
    alice_headers = login("alice")
    bob_headers = login("bob")
    _broadcast(client, admin_headers, title="Alice slot", message="Slot 4", userId=alice.id)

    with _connect(client, alice_headers) as alice_ws, _connect(client, bob_headers) as bob_ws:
        alice_ws.send_json({"type": "auth", "userId": alice.id})
        assert alice_ws.receive_json()["count"] == 1
        bob_ws.send_json({"type": "auth", "userId": bob.id})
        assert bob_ws.receive_json()["count"] == 0

        _broadcast(client, admin_headers, title="Finals", message="Starting now")

        assert alice_ws.receive_json() == {"type": "notification_update", "count": 2}
        assert bob_ws.receive_json() == {"type": "notification_update", "count": 1}


def test_mutations_push_new_counts(client, players, login) -> None:
    _, alice, _ = players
    admin_headers = login("organizer")
    alice_headers = login("alice")
    _broadcast(client, admin_headers, title="One", message="1")
    _broadcast(client, admin_headers, title="Two", message="2")
    first_id = client.get("/api/notifications", headers=alice_headers).json()[0]["id"]

    with _connect(client, alice_headers) as ws:
        ws.send_json({"type": "auth", "userId": alice.id})
        assert ws.receive_json()["count"] == 2

        client.patch(f"/api/notifications/{first_id}/read", headers=alice_headers)
        assert ws.receive_json() == {"type": "notification_update", "count": 1}

        client.post("/api/notifications/mark-all-read", headers=alice_headers)
        assert ws.receive_json() == {"type": "notification_update", "count": 0}

        client.post("/api/notifications/hide", headers=alice_headers)
        assert ws.receive_json() == {
            "type": "notification_update",
            "count": 0,
            "isHideAction": True,
        }


def test_auth_for_another_user_is_rejected(client, players, login) -> None:
    _, _, bob = players
    alice_headers = login("alice")

    with _connect(client, alice_headers) as ws:
        ws.send_json({"type": "auth", "userId": bob.id})
        with pytest.raises(WebSocketDisconnect) as exc_info:
            ws.receive_json()
    assert exc_info.value.code == 1008


def test_auth_without_session_is_rejected(client, players) -> None:
    _, alice, _ = players

    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "auth", "userId": alice.id})
        with pytest.raises(WebSocketDisconnect) as exc_info:
            ws.receive_json()
    assert exc_info.value.code == 1008


def test_malformed_frames_are_ignored(client, players, login) -> None:
    alice_headers = login("alice")

    with _connect(client, alice_headers) as ws:
        ws.send_text("not json")
        ws.send_json(["not", "an", "object"])
        ws.send_json({"type": "ping"})
        assert ws.receive_json() == {"type": "pong"}


def test_auth_by_user_id_when_session_not_required(client, players, monkeypatch) -> None:
    from tourney_hub.config import reset_settings_cache

    _, alice, _ = players
    monkeypatch.setenv("WS_REQUIRE_SESSION", "false")
    reset_settings_cache()

    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "auth", "userId": alice.id})
        assert ws.receive_json() == {"type": "notification_update", "count": 0}

    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "auth", "userId": 4242})
        with pytest.raises(WebSocketDisconnect) as exc_info:
            ws.receive_json()
    assert exc_info.value.code == 1008


def test_delete_all_pushes_surviving_count_as_hide_action(client, players, login) -> None:
    _, alice, _ = players
    admin_headers = login("organizer")
    alice_headers = login("alice")
    _broadcast(client, admin_headers, title="Finals", message="Starting now")
    _broadcast(client, admin_headers, title="Alice slot", message="Slot 4", userId=alice.id)

    with _connect(client, alice_headers) as ws:
        ws.send_json({"type": "auth", "userId": alice.id})
        assert ws.receive_json()["count"] == 2

        response = client.delete("/api/notifications/all", headers=alice_headers)
        assert response.status_code == 200, response.text
        assert ws.receive_json() == {
            "type": "notification_update",
            "count": 1,
            "isHideAction": True,
        }
