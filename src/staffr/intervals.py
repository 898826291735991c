import calendar
import logging
import math
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Union

logger = logging.getLogger(__name__)

ENDING_SOON_WINDOW = timedelta(days=7)
_DAY = timedelta(days=1)

InstantLike = Union[str, date, datetime]


class AssignmentStatus(str, Enum):
    COMPLETED = "completed"
    ENDING_SOON = "ending_soon"
    ACTIVE = "active"


def to_instant(value: InstantLike) -> datetime:
    """
    Normalises a date, datetime or ISO-8601 string to an aware UTC datetime.
    Date-only values land on UTC midnight; naive datetimes are taken as UTC.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"): text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Unparseable date: {value!r}") from None
    else:
        raise ValueError(f"Unsupported date value: {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def duration_days(start: InstantLike, end: InstantLike) -> int:
    """Whole days between start and end, rounded up. Reversed ranges are 0."""
    start, end = to_instant(start), to_instant(end)
    if end < start:
        logger.warning("Reversed date range %s -> %s treated as zero duration", start.isoformat(), end.isoformat())
        return 0
    return math.ceil((end - start) / _DAY)


def contains_instant(start: InstantLike, end: InstantLike, instant: InstantLike) -> bool:
    return to_instant(start) <= to_instant(instant) <= to_instant(end)


def is_on_or_after(value: InstantLike, reference: InstantLike) -> bool:
    return to_instant(value) >= to_instant(reference)


def progress_fraction(start: InstantLike, end: InstantLike, now: InstantLike) -> float:
    start, end, now = to_instant(start), to_instant(end), to_instant(now)
    if end < start:
        logger.warning("Reversed date range %s -> %s treated as zero duration", start.isoformat(), end.isoformat())
        return 1.0
    if end == start:
        return 1.0
    fraction = (now - start) / (end - start)
    return min(max(fraction, 0.0), 1.0)


def assignment_status(end: InstantLike, now: InstantLike) -> AssignmentStatus:
    end, now = to_instant(end), to_instant(now)
    if end < now: return AssignmentStatus.COMPLETED
    if end - now < ENDING_SOON_WINDOW: return AssignmentStatus.ENDING_SOON
    return AssignmentStatus.ACTIVE


# --- CALENDAR HELPERS ---

def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def day_instant(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def month_start(year: int, month: int) -> datetime:
    return day_instant(year, month, 1)


def add_months(year: int, month: int, offset: int) -> tuple:
    """Shifts a (year, month) pair by offset months, rolling over years."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1
