"""Endpoints for session login, logout and registration."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from tourney_hub.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    create_user,
)
from tourney_hub.config import get_settings
from tourney_hub.domain.entities import User
from tourney_hub.infrastructure.database import get_db
from tourney_hub.infrastructure.security import create_access_token
from tourney_hub.interfaces.api.dependencies import get_current_active_user
from tourney_hub.interfaces.api.schemas import (
    LoginRequest,
    OperationResult,
    RegisterRequest,
    SessionResponse,
    UserRead,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _start_session(response: Response, user: User) -> SessionResponse:
    """Issue a session token for ``user`` and attach it as a cookie."""

    settings = get_settings()
    expires = timedelta(minutes=settings.access_token_expire_minutes)
    token = create_access_token(
        data={"sub": str(user.id), "role": user.role}, expires_delta=expires
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=int(expires.total_seconds()),
        httponly=True,
        samesite="lax",
    )
    return SessionResponse(user=UserRead.model_validate(user), access_token=token)


@router.post("/login", response_model=SessionResponse)
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
) -> SessionResponse:
    """Authenticate by username (or email) and password."""

    user, auth_status = authenticate_user(db, payload.username, payload.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    if auth_status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive",
        )

    return _start_session(response, user)


@router.post(
    "/register",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
) -> SessionResponse:
    """Create a regular account and sign it in."""

    try:
        user = create_user(
            db,
            username=payload.username,
            email=payload.email,
            password=payload.password,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("Registered user %s (%s)", user.id, user.username)
    return _start_session(response, user)


@router.post("/logout", response_model=OperationResult, response_model_exclude_none=True)
def logout(response: Response) -> OperationResult:
    """Drop the session cookie."""

    response.delete_cookie(get_settings().session_cookie_name)
    return OperationResult()


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)) -> UserRead:
    return UserRead.model_validate(current_user)
