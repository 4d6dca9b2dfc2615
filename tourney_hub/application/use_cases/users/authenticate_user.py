"""Use case for authenticating a user."""

from enum import Enum, auto

from sqlalchemy.orm import Session

from tourney_hub.domain.entities import User
from tourney_hub.infrastructure.repositories import UserRepository
from tourney_hub.infrastructure.security import verify_password


class AuthenticationStatus(Enum):
    """Possible outcomes when attempting to authenticate a user."""

    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    INACTIVE = auto()


def authenticate_user(
    session: Session, username: str, password: str
) -> tuple[User | None, AuthenticationStatus]:
    """Return the authentication result along with the user when possible.

    ``username`` may also be the account's email address.
    """

    repository = UserRepository(session)
    user = repository.get_by_username(username)
    if user is None and "@" in username:
        user = repository.get_by_email(username)

    if not user:
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if not verify_password(password, user.password):
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if not user.is_active:
        return user, AuthenticationStatus.INACTIVE

    return user, AuthenticationStatus.SUCCESS
