"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from tourney_hub.domain.entities import User
from tourney_hub.infrastructure.models import UserModel
from tourney_hub.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.username) == username.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, user_ids: Sequence[int]) -> dict[int, User]:
        if not user_ids:
            return {}

        unique_ids = {int(user_id) for user_id in user_ids}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def create(self, user: User) -> User:
        model = UserModel(
            username=user.username,
            email=user.email,
            password=user.password,
            role=user.role,
            is_active=user.is_active,
        )
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password=model.password,
            role=model.role,
            is_active=model.is_active,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
