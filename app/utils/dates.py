"""
Date helpers.

Timestamps are stored as naive UTC ISO strings so SQLite and PostgreSQL
sort and parse them the same way. Application deadlines are calendar
dates on campus, so "today" is taken in settings.campus_timezone.
"""

from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.config import get_settings


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_db_timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="microseconds")


def to_db_date(value: date) -> str:
    return value.isoformat()


def today(now: Optional[datetime] = None) -> date:
    """Campus-local date for a naive UTC instant (default: now)."""
    instant = (now or utc_now()).replace(tzinfo=timezone.utc)
    return instant.astimezone(ZoneInfo(get_settings().campus_timezone)).date()
