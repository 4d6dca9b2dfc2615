"""Shared fixtures: a throwaway SQLite database and a running application."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["SCHEDULER_ENABLED"] = "false"

PASSWORD = "Secret123"


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test empty tables."""

    from tourney_hub.config import reset_settings_cache
    from tourney_hub.infrastructure import database, models  # noqa: F401

    reset_settings_cache()
    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield
    reset_settings_cache()


@pytest.fixture
def db_session():
    from tourney_hub.infrastructure.database import SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db_session):
    """Return a factory creating users with the shared test password."""

    from tourney_hub.application.use_cases.users import create_user

    def factory(username: str, *, role: str = "user"):
        return create_user(
            db_session,
            username=username,
            email=f"{username}@example.com",
            password=PASSWORD,
            role=role,
        )

    return factory


@pytest.fixture
def client():
    pytest.importorskip("fastapi")
    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """Return a factory logging a user in and returning its bearer headers.

    The session cookie is dropped so each request carries only the headers
    it is given.
    """

    def factory(username: str, password: str = PASSWORD) -> dict[str, str]:
        response = client.post(
            "/api/auth/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return factory
