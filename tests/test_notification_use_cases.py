"""Tests for the notification repository and use cases."""

from __future__ import annotations

from datetime import timedelta

import pytest

from tourney_hub.application.use_cases.notifications import (
    NotificationAccessError,
    NotificationNotFoundError,
    cleanup_old_notifications,
    create_notification,
    delete_user_notifications,
    hide_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    publish_to_all_connected,
)
from tourney_hub.config import reset_settings_cache
from tourney_hub.domain.entities import Notification
from tourney_hub.infrastructure.repositories import NotificationRepository
from tourney_hub.infrastructure.scheduler import run_notification_cleanup
from tourney_hub.utils import now_in_app_timezone


class RecordingPublisher:
    """Publisher double remembering what would have been pushed."""

    def __init__(self, connected=()):
        self.connected = set(connected)
        self.events: list[tuple[int, int, bool]] = []

    def connected_user_ids(self):
        return sorted(self.connected)

    def publish_count(self, user_id, count, *, is_hide_action=False):
        if user_id in self.connected:
            self.events.append((user_id, count, is_hide_action))


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


def _notify(session, publisher, title="Match day", **kwargs):
    return create_notification(
        session, title=title, message=f"{title}!", publisher=publisher, **kwargs
    )


def test_broadcast_publishes_each_users_count(db_session, alice, bob) -> None:
    publisher = RecordingPublisher(connected=[alice.id, bob.id])
    _notify(db_session, publisher, title="Only alice", user_id=alice.id)
    publisher.events.clear()

    [notification] = _notify(db_session, publisher, title="Everyone")

    assert notification.is_broadcast
    assert notification.type == "broadcast"
    assert sorted(publisher.events) == sorted([(alice.id, 2, False), (bob.id, 1, False)])


def test_disconnected_users_are_not_published(db_session, alice, bob) -> None:
    publisher = RecordingPublisher(connected=[alice.id])

    _notify(db_session, publisher, user_ids=[alice.id, bob.id])

    assert publisher.events == [(alice.id, 1, False)]


def test_create_rejects_blank_and_unknown_type(db_session, alice) -> None:
    publisher = RecordingPublisher()
    with pytest.raises(ValueError):
        create_notification(db_session, title="  ", message="body", publisher=publisher)
    with pytest.raises(ValueError):
        create_notification(
            db_session,
            title="t",
            message="m",
            notification_type="spam",
            publisher=publisher,
        )


def test_mark_read_publishes_only_on_change(db_session, alice) -> None:
    publisher = RecordingPublisher(connected=[alice.id])
    [notification] = _notify(db_session, publisher)
    publisher.events.clear()

    result = mark_notification_read(db_session, alice, notification.id, publisher=publisher)
    assert result.is_read is True
    mark_notification_read(db_session, alice, notification.id, publisher=publisher)

    assert publisher.events == [(alice.id, 0, False)]


def test_mark_read_errors(db_session, alice, bob) -> None:
    publisher = RecordingPublisher()
    [foreign] = _notify(db_session, publisher, user_id=bob.id)

    with pytest.raises(NotificationNotFoundError):
        mark_notification_read(db_session, alice, 4242, publisher=publisher)
    with pytest.raises(NotificationAccessError):
        mark_notification_read(db_session, alice, foreign.id, publisher=publisher)


def test_unread_count_is_recomputable(db_session, alice, bob) -> None:
    publisher = RecordingPublisher()
    created = [_notify(db_session, publisher, title=f"N{i}")[0] for i in range(3)]
    _notify(db_session, publisher, title="Bob's", user_id=bob.id)
    repository = NotificationRepository(db_session)

    assert repository.mark_as_read(created[0].id, user_id=alice.id) is True
    assert repository.mark_as_read(created[0].id, user_id=alice.id) is False

    visible = repository.list_for_user(alice.id)
    assert [n.id for n in visible] == [n.id for n in reversed(created)]
    assert repository.count_unread(alice.id) == sum(1 for n in visible if not n.is_read) == 2
    assert repository.count_unread(bob.id) == 4


def test_mark_all_read_is_idempotent(db_session, alice) -> None:
    publisher = RecordingPublisher(connected=[alice.id])
    _notify(db_session, publisher)
    _notify(db_session, publisher)
    publisher.events.clear()

    assert mark_all_notifications_read(db_session, alice, publisher=publisher) == 2
    assert mark_all_notifications_read(db_session, alice, publisher=publisher) == 0
    assert publisher.events == [(alice.id, 0, False), (alice.id, 0, False)]


def test_hide_moves_watermark(db_session, alice, bob) -> None:
    publisher = RecordingPublisher(connected=[alice.id])
    _notify(db_session, publisher)
    _notify(db_session, publisher, user_id=alice.id)
    publisher.events.clear()
    repository = NotificationRepository(db_session)

    assert hide_notifications(db_session, alice, publisher=publisher) == 2
    assert publisher.events == [(alice.id, 0, True)]
    assert repository.list_for_user(alice.id) == []
    assert repository.count_unread(alice.id) == 0
    assert repository.count_unread(bob.id) == 1

    [fresh] = _notify(db_session, publisher, title="After hide")
    assert [n.id for n in repository.list_for_user(alice.id)] == [fresh.id]
    assert repository.hidden_through(alice.id) < fresh.id


def test_delete_user_notifications_keeps_broadcasts(db_session, alice) -> None:
    publisher = RecordingPublisher(connected={alice.id})
    [broadcast] = _notify(db_session, publisher)
    [targeted] = _notify(db_session, publisher, user_id=alice.id)
    NotificationRepository(db_session).mark_as_read(targeted.id, user_id=alice.id)
    publisher.events.clear()

    assert delete_user_notifications(db_session, alice, publisher=publisher) == 1
    remaining = NotificationRepository(db_session).list_for_user(alice.id)
    assert [n.id for n in remaining] == [broadcast.id]
    assert publisher.events == [(alice.id, 1, True)]


def test_cleanup_removes_old_notifications(db_session, alice) -> None:
    repository = NotificationRepository(db_session)
    old = repository.create(
        Notification(
            id=None,
            user_id=None,
            title="Last season",
            message="Archived",
            created_at=now_in_app_timezone() - timedelta(hours=48),
        )
    )
    repository.mark_as_read(old.id, user_id=alice.id)
    [recent] = _notify(db_session, RecordingPublisher())

    removed = cleanup_old_notifications(
        db_session, older_than=now_in_app_timezone() - timedelta(hours=24)
    )

    assert removed == 1
    assert [n.id for n in repository.list_for_user(alice.id)] == [recent.id]


def test_scheduled_cleanup_uses_retention_window(db_session, alice, monkeypatch) -> None:
    monkeypatch.setenv("NOTIFICATION_RETENTION_HOURS", "1")
    reset_settings_cache()
    repository = NotificationRepository(db_session)
    repository.create(
        Notification(
            id=None,
            user_id=alice.id,
            title="Stale",
            message="Two hours old",
            created_at=now_in_app_timezone() - timedelta(hours=2),
        )
    )

    assert run_notification_cleanup() == 1
    assert repository.list_for_user(alice.id) == []


def test_publish_to_all_connected(db_session, alice, bob) -> None:
    publisher = RecordingPublisher()
    _notify(db_session, publisher)
    publisher.connected = {bob.id}

    assert publish_to_all_connected(db_session, publisher=publisher) == {bob.id: 1}
