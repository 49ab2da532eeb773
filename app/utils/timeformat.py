import re
from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from app.config import settings
from app.schemas.class_session import DAYS


_AMPM_RE = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)$", re.IGNORECASE)
_H24_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def now_local() -> datetime:
    return datetime.now(local_tz())


def to_minutes(value: Optional[str]) -> Optional[int]:
    """
    "14:00" / "2:00 PM" / "02:00 pm" -> 840
    Anything else -> None
    """
    if not value:
        return None
    s = value.strip()

    m = _AMPM_RE.match(s)
    if m:
        h = int(m.group(1))
        minute = int(m.group(2))
        meridiem = m.group(3).upper()
        if meridiem == "PM" and h != 12:
            h += 12
        if meridiem == "AM" and h == 12:
            h = 0
        return h * 60 + minute

    m = _H24_RE.match(s)
    if m:
        return int(m.group(1)) * 60 + int(m.group(2))

    return None


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Backend ISO timestamp -> aware datetime in the institute timezone."""
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=local_tz())
    return dt.astimezone(local_tz())


def format_time_24h(value: Optional[str]) -> str:
    # unparsable values are kept as-is, to_minutes() rejects them later
    dt = parse_timestamp(value)
    if dt is None:
        return value or ""
    return dt.strftime("%H:%M")


def format_time_12h(value: Optional[str]) -> str:
    dt = parse_timestamp(value)
    if dt is None:
        return value or ""
    return dt.strftime("%I:%M %p")


def to_iso_utc(dt: datetime) -> str:
    """2025-01-06T03:30:00.000Z"""
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def next_day_of_week(day: str, time_str: str, now: Optional[datetime] = None) -> datetime:
    """
    Next occurrence of `day` at `time_str` (HH:MM), today included.
    """
    now = (now or now_local()).astimezone(local_tz())
    day_index = DAYS.index(day)
    hours, minutes = (int(p) for p in time_str.split(":")[:2])

    today_index = (now.weekday() + 1) % 7     # Sunday = 0
    offset = (day_index - today_index + 7) % 7
    result = now.replace(hour=hours, minute=minutes, second=0, microsecond=0)
    return result + timedelta(days=offset)


def weekday_name(dt: datetime) -> str:
    return DAYS[(dt.astimezone(local_tz()).weekday() + 1) % 7]


def is_evening(dt: Optional[datetime]) -> bool:
    if dt is None:
        return False
    hour = dt.astimezone(local_tz()).hour
    return 18 <= hour < 23
