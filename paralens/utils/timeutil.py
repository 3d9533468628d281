"""
Time helpers shared by the analytics components.

Vault metadata carries timestamps in several shapes (epoch milliseconds,
ISO strings, YAML dates). Everything is coerced to timezone-aware datetimes
here; unparseable values become None.
"""

import math
import re
from datetime import UTC, date, datetime, time, timedelta, tzinfo

SECONDS_PER_DAY = 24 * 3600

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_NUMERIC_RE = re.compile(r"^-?\d+(\.\d+)?$")


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def from_epoch_ms(value: float) -> datetime | None:
    """Convert epoch milliseconds to a UTC datetime."""
    if not math.isfinite(value):
        return None
    try:
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def parse_iso_date(value: str | None) -> date | None:
    """
    Parse a strict YYYY-MM-DD calendar date.

    Args:
        value: Candidate date string

    Returns:
        date, or None when the string is not a valid calendar date
    """
    if not value or not _ISO_DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def to_datetime(value) -> datetime | None:
    """
    Coerce a raw timestamp value into an aware datetime.

    Accepts datetime, date (UTC midnight), epoch milliseconds as int/float or
    numeric string, ISO date and ISO datetime strings.

    Returns:
        Aware datetime, or None when the value cannot be interpreted
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return ensure_aware(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    if isinstance(value, int | float):
        return from_epoch_ms(float(value))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if _NUMERIC_RE.match(text):
            return from_epoch_ms(float(text))
        calendar_date = parse_iso_date(text)
        if calendar_date is not None:
            return datetime.combine(calendar_date, time.min, tzinfo=UTC)
        try:
            return ensure_aware(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def days_between(start: datetime, end: datetime) -> float:
    """Fractional days from start to end (negative when end precedes start)."""
    return (ensure_aware(end) - ensure_aware(start)).total_seconds() / SECONDS_PER_DAY


def zone_of(now: datetime) -> tzinfo:
    """Timezone used for calendar-day bucketing."""
    return now.tzinfo or UTC


def local_date(value: datetime, tz: tzinfo) -> date:
    """Calendar date of a timestamp in the given timezone."""
    return ensure_aware(value).astimezone(tz).date()


def day_midpoint(day: date, tz: tzinfo) -> datetime:
    """Local noon of a calendar day."""
    return datetime.combine(day, time(12, 0), tzinfo=tz)


def window_dates(today: date, window_days: int) -> list[date]:
    """Calendar dates of a window ending today, oldest first."""
    if window_days <= 0:
        return []
    return [today - timedelta(days=offset) for offset in range(window_days - 1, -1, -1)]


def week_start(day: date) -> date:
    """Monday of the week containing day."""
    return day - timedelta(days=day.weekday())
