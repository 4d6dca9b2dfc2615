"""SQLAlchemy model storing the per-user notification dismissal watermark."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer

from tourney_hub.infrastructure.database import Base
from tourney_hub.utils import now_in_app_naive_datetime


class NotificationHideModel(Base):
    """Notifications with ``id <= hidden_through_id`` are hidden from ``user_id``."""

    __tablename__ = "notification_hides"

    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    hidden_through_id = Column(Integer, nullable=False, default=0)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["NotificationHideModel"]
