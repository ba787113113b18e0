from __future__ import annotations

from datetime import date, datetime, timezone

from zoneinfo import ZoneInfo

# Default farm timezone; ages roll over at local midnight, not UTC
DEFAULT_TIMEZONE_NAME = "America/Lima"
DEFAULT_TZ = ZoneInfo(DEFAULT_TIMEZONE_NAME)


def local_today(tz_name: str | None = None) -> date:
    """Return today's date in the farm timezone (DEFAULT_TZ when not given)."""
    tz = ZoneInfo(tz_name) if tz_name else DEFAULT_TZ
    return datetime.now(timezone.utc).astimezone(tz).date()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
