"""Timestamps for notifications, pinned to the hub's local timezone.

Columns are plain ``DATETIME`` so values are written as naive local time and
get the zone re-attached when they are read back.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tourney_hub.config import get_settings

FALLBACK_TIMEZONE = "Asia/Kolkata"

logger = logging.getLogger(__name__)


def get_app_timezone() -> tzinfo:
    """Return the zone named by ``APP_TIMEZONE`` (``Asia/Kolkata`` when blank)."""

    return _zone_for((get_settings().app_timezone or "").strip() or FALLBACK_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current local time as stored in the database."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert ``value`` to the hub timezone; naive values are local."""

    if value is None:
        return None
    zone = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Convert ``value`` to local time and drop the offset for storage."""

    if value is None:
        return None
    return ensure_app_timezone(value).replace(tzinfo=None)


@lru_cache(maxsize=8)
def _zone_for(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        pass

    offset = _parse_utc_offset(name)
    if offset is not None:
        try:
            return timezone(offset)
        except ValueError:
            pass

    logger.warning("Unknown timezone %r, using %s", name, FALLBACK_TIMEZONE)
    return ZoneInfo(FALLBACK_TIMEZONE)


def _parse_utc_offset(name: str) -> timedelta | None:
    """Parse ``UTC+5:30`` / ``GMT-04`` style names into an offset."""

    upper = name.upper()
    if not upper.startswith(("UTC", "GMT")) or len(upper) < 5:
        return None
    sign, rest = upper[3], upper[4:]
    if sign not in "+-":
        return None

    hours, _, minutes = rest.partition(":")
    if not minutes and len(hours) == 4:
        hours, minutes = hours[:2], hours[2:]
    if not hours.isdigit() or (minutes and not minutes.isdigit()):
        return None

    offset = timedelta(hours=int(hours), minutes=int(minutes or 0))
    return -offset if sign == "-" else offset
