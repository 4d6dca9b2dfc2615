"""SQLAlchemy model tracking which user has read which notification."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint

from tourney_hub.infrastructure.database import Base
from tourney_hub.utils import now_in_app_naive_datetime


class NotificationReadModel(Base):
    """One row per (user, notification) pair that has been read."""

    __tablename__ = "notification_reads"
    __table_args__ = (
        UniqueConstraint("user_id", "notification_id", name="user_notification_unique"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    notification_id = Column(
        Integer,
        ForeignKey("notifications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationReadModel"]
