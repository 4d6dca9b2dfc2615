"""Websocket push channel delivering unread count updates."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect, status

from tourney_hub.application.use_cases.users import get_user
from tourney_hub.config import get_settings
from tourney_hub.domain.entities import PUSH_MESSAGE_AUTH, PushEvent
from tourney_hub.infrastructure.database import SessionLocal
from tourney_hub.infrastructure.notifications import notification_manager
from tourney_hub.infrastructure.repositories import NotificationRepository
from tourney_hub.interfaces.api.dependencies import (
    extract_session_token,
    resolve_current_user,
)

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)


def _session_user_id(websocket: WebSocket) -> int | None:
    """Return the id of the user owning the handshake's session, if any."""

    token = extract_session_token(websocket)
    if not token:
        return None
    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
    except HTTPException:
        return None
    finally:
        session.close()
    return user.id if user.is_active else None


def _coerce_user_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        user_id = int(value)
    except (TypeError, ValueError):
        return None
    return user_id if user_id > 0 else None


def _authorize(user_id: int, session_user_id: int | None) -> bool:
    if get_settings().ws_require_session:
        return session_user_id is not None and user_id == session_user_id

    session = SessionLocal()
    try:
        get_user(session, user_id)
    except ValueError:
        return False
    finally:
        session.close()
    return True


def _unread_count(user_id: int) -> int:
    session = SessionLocal()
    try:
        return NotificationRepository(session).count_unread(user_id)
    finally:
        session.close()


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Accept a push connection and bind it to a user after the auth message.

    Clients send ``{"type": "auth", "userId": <id>}`` once connected. The
    server answers with the current unread count and afterwards pushes a
    ``notification_update`` whenever that count changes.
    """

    session_user_id = _session_user_id(websocket)
    await notification_manager.accept(websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except (ValueError, KeyError):
                logger.debug("Ignoring malformed push channel frame")
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type != PUSH_MESSAGE_AUTH:
                continue

            user_id = _coerce_user_id(message.get("userId"))
            if user_id is None or not _authorize(user_id, session_user_id):
                logger.warning("Rejected push channel auth for user %r", message.get("userId"))
                await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
                return

            notification_manager.authenticate(user_id, websocket)
            logger.info("Push channel authenticated for user %s", user_id)
            await websocket.send_json(PushEvent(count=_unread_count(user_id)).to_message())
    except WebSocketDisconnect:
        pass
    finally:
        notification_manager.disconnect(websocket)
