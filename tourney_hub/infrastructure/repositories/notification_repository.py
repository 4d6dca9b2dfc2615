"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from tourney_hub.domain.entities import Notification
from tourney_hub.infrastructure.models import (
    NotificationHideModel,
    NotificationModel,
    NotificationReadModel,
)
from tourney_hub.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)

DEFAULT_LIST_LIMIT = 50


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects.

    Read state and dismissal are tracked per user, so every query that
    returns notifications is scoped to the viewing ``user_id``.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int, *, user_id: int | None = None) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return None
        is_read = False
        if user_id is not None:
            is_read = self._read_row(notification_id, user_id) is not None
        return self._to_entity(model, is_read=is_read)

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int | None = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Notification]:
        query = self._visible_query(user_id, NotificationModel, NotificationReadModel.id)
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [
            self._to_entity(model, is_read=read_id is not None)
            for model, read_id in query.all()
        ]

    def count_unread(self, user_id: int) -> int:
        query = self._visible_query(user_id, func.count(NotificationModel.id))
        return int(query.filter(NotificationReadModel.id.is_(None)).scalar() or 0)

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            user_id=notification.user_id,
            title=notification.title,
            message=notification.message,
            type=notification.type,
            related_id=notification.related_id,
            created_at=ensure_app_naive_datetime(notification.created_at)
            or now_in_app_naive_datetime(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model, is_read=False)

    def mark_as_read(self, notification_id: int, *, user_id: int) -> bool:
        """Record ``notification_id`` as read by ``user_id``.

        Returns ``True`` when the notification transitioned to read and
        ``False`` when it already was.
        """

        if self._read_row(notification_id, user_id) is not None:
            return False
        self.session.add(
            NotificationReadModel(user_id=user_id, notification_id=notification_id)
        )
        try:
            self.session.commit()
        except IntegrityError:
            # A concurrent request recorded the same read first.
            self.session.rollback()
            return False
        return True

    def mark_all_as_read(self, user_id: int) -> int:
        query = self._visible_query(user_id, NotificationModel.id).filter(
            NotificationReadModel.id.is_(None)
        )
        unread_ids = [notification_id for (notification_id,) in query.all()]
        if not unread_ids:
            return 0
        now = now_in_app_naive_datetime()
        self.session.add_all(
            NotificationReadModel(
                user_id=user_id, notification_id=notification_id, created_at=now
            )
            for notification_id in unread_ids
        )
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            return self.mark_all_as_read(user_id)
        return len(unread_ids)

    def hide_all(self, user_id: int) -> int:
        """Move the dismissal watermark past every notification visible now."""

        count, max_id = self._visible_query(
            user_id, func.count(NotificationModel.id), func.max(NotificationModel.id)
        ).one()
        if not count:
            return 0

        hide = self.session.get(NotificationHideModel, user_id)
        if hide is None:
            hide = NotificationHideModel(user_id=user_id, hidden_through_id=max_id)
        else:
            hide.hidden_through_id = max(hide.hidden_through_id or 0, max_id)
            hide.updated_at = now_in_app_naive_datetime()
        self.session.add(hide)
        self.session.commit()
        return int(count)

    def hidden_through(self, user_id: int) -> int:
        hide = self.session.get(NotificationHideModel, user_id)
        return int(hide.hidden_through_id) if hide is not None else 0

    def delete_all_for_user(self, user_id: int) -> int:
        """Delete notifications targeted at ``user_id``; broadcasts are kept."""

        ids = [
            notification_id
            for (notification_id,) in self.session.query(NotificationModel.id)
            .filter(NotificationModel.user_id == user_id)
            .all()
        ]
        return self._delete_ids(ids)

    def delete_older_than(self, cutoff: datetime) -> int:
        naive_cutoff = ensure_app_naive_datetime(cutoff)
        ids = [
            notification_id
            for (notification_id,) in self.session.query(NotificationModel.id)
            .filter(NotificationModel.created_at < naive_cutoff)
            .all()
        ]
        return self._delete_ids(ids)

    def _delete_ids(self, ids: Sequence[int]) -> int:
        if not ids:
            return 0
        self.session.query(NotificationReadModel).filter(
            NotificationReadModel.notification_id.in_(ids)
        ).delete(synchronize_session=False)
        deleted = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id.in_(ids))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return int(deleted)

    def _visible_query(self, user_id: int, *entities) -> Query:
        """Notifications addressed to ``user_id`` above its dismissal watermark.

        The query is outer-joined with the user's read rows so callers can
        filter or inspect ``NotificationReadModel.id``.
        """

        return (
            self.session.query(*entities)
            .select_from(NotificationModel)
            .outerjoin(
                NotificationReadModel,
                and_(
                    NotificationReadModel.notification_id == NotificationModel.id,
                    NotificationReadModel.user_id == user_id,
                ),
            )
            .filter(
                or_(
                    NotificationModel.user_id == user_id,
                    NotificationModel.user_id.is_(None),
                )
            )
            .filter(NotificationModel.id > self.hidden_through(user_id))
        )

    def _read_row(self, notification_id: int, user_id: int) -> NotificationReadModel | None:
        return (
            self.session.query(NotificationReadModel)
            .filter(NotificationReadModel.notification_id == notification_id)
            .filter(NotificationReadModel.user_id == user_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: NotificationModel, *, is_read: bool) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            message=model.message,
            type=model.type,
            related_id=model.related_id,
            is_read=is_read,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository", "DEFAULT_LIST_LIMIT"]
