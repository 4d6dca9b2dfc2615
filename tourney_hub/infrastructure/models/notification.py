"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from tourney_hub.infrastructure.database import Base
from tourney_hub.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user and broadcast notifications.

    A ``NULL`` ``user_id`` marks a broadcast visible to every user.
    """

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(30), nullable=False, default="general")
    related_id = Column(Integer, nullable=True)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )


__all__ = ["NotificationModel"]
