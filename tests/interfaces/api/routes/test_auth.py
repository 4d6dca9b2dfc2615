"""Integration tests for the session endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient


def test_register_sets_session_cookie(client: TestClient) -> None:
    response = client.post(
        "/api/auth/register",
        json={"username": "rusher", "email": "rusher@example.com", "password": "Secret123"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["username"] == "rusher"
    assert body["user"]["role"] == "user"
    assert "tourney_session" in response.cookies

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["email"] == "rusher@example.com"


def test_register_rejects_duplicates(client: TestClient, make_user) -> None:
    make_user("sniper")

    response = client.post(
        "/api/auth/register",
        json={"username": "SNIPER", "email": "other@example.com", "password": "Secret123"},
    )
    assert response.status_code == 400


def test_login_accepts_username_or_email(client: TestClient, make_user) -> None:
    make_user("medic")

    by_name = client.post("/api/auth/login", json={"username": "medic", "password": "Secret123"})
    assert by_name.status_code == 200
    assert by_name.json()["token_type"] == "bearer"

    by_email = client.post(
        "/api/auth/login", json={"username": "medic@example.com", "password": "Secret123"}
    )
    assert by_email.status_code == 200


def test_login_rejects_wrong_password(client: TestClient, make_user) -> None:
    make_user("scout")

    response = client.post("/api/auth/login", json={"username": "scout", "password": "nope"})
    assert response.status_code == 401


def test_me_requires_session(client: TestClient) -> None:
    assert client.get("/api/auth/me").status_code == 401
    assert (
        client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code
        == 401
    )


def test_logout_returns_success(client: TestClient, make_user, login) -> None:
    make_user("igl")
    headers = login("igl")

    response = client.post("/api/auth/logout", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}
