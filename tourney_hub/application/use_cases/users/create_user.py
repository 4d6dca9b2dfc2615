"""Use case for creating users."""

from sqlalchemy.orm import Session

from tourney_hub.domain.entities import ROLE_ADMIN, ROLE_USER, User
from tourney_hub.infrastructure.repositories import UserRepository
from tourney_hub.infrastructure.security import get_password_hash
from tourney_hub.utils import now_in_app_timezone

from .validators import normalize_username

_ALLOWED_ROLES = {ROLE_USER, ROLE_ADMIN}


def create_user(
    session: Session,
    *,
    username: str,
    email: str,
    password: str,
    role: str = ROLE_USER,
) -> User:
    """Create a new user ensuring unique usernames and email addresses."""

    repository = UserRepository(session)
    username = normalize_username(username)
    email = email.strip().lower()

    if repository.get_by_username(username):
        raise ValueError("Username is already taken")

    if repository.get_by_email(email):
        raise ValueError("Email is already registered")

    role = role.lower()
    if role not in _ALLOWED_ROLES:
        raise ValueError("Role not allowed")

    user = User(
        id=None,
        username=username,
        email=email,
        password=get_password_hash(password),
        role=role,
        is_active=True,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
