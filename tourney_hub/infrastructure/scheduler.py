"""Background jobs scheduled alongside the web application."""

from __future__ import annotations

import logging
from datetime import timedelta

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from tourney_hub.application.use_cases.notifications import cleanup_old_notifications
from tourney_hub.config import get_settings
from tourney_hub.infrastructure.database import SessionLocal
from tourney_hub.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

CLEANUP_JOB_ID = "notification_cleanup"

scheduler = AsyncIOScheduler()


def run_notification_cleanup() -> int:
    """Delete notifications older than the configured retention window."""

    settings = get_settings()
    cutoff = now_in_app_timezone() - timedelta(hours=settings.notification_retention_hours)
    session = SessionLocal()
    try:
        return cleanup_old_notifications(session, older_than=cutoff)
    except Exception:
        session.rollback()
        logger.exception("Error cleaning up old notifications")
        return 0
    finally:
        session.close()


def start_scheduler() -> None:
    settings = get_settings()
    if not settings.scheduler_enabled:
        logger.info("Scheduler disabled by configuration")
        return

    if not scheduler.running:
        scheduler.add_job(
            run_notification_cleanup,
            "interval",
            hours=settings.notification_cleanup_interval_hours,
            id=CLEANUP_JOB_ID,
            name="Remove old notifications",
            replace_existing=True,
        )
        scheduler.start()
        logger.info(
            "Scheduler started; notification cleanup every %s hours",
            settings.notification_cleanup_interval_hours,
        )


def stop_scheduler() -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")


__all__ = ["run_notification_cleanup", "start_scheduler", "stop_scheduler", "scheduler"]
