"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from starlette.requests import HTTPConnection

from tourney_hub.config import get_settings
from tourney_hub.domain.entities import User
from tourney_hub.infrastructure.database import get_db
from tourney_hub.infrastructure.repositories import UserRepository
from tourney_hub.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_session_token(
    connection: HTTPConnection, credentials: HTTPAuthorizationCredentials | None = None
) -> str | None:
    """Return the session token from the cookie, a bearer header or ``?token=``."""

    token = connection.cookies.get(get_settings().session_cookie_name)
    if token:
        return token
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return connection.query_params.get("token") or None


def resolve_current_user(token: str | None, db: Session) -> User:
    """Resolve the authenticated user for the provided session token."""

    if not token:
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized() from exc

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise _unauthorized() from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the session cookie or bearer token."""

    return resolve_current_user(extract_session_token(request, credentials), db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
