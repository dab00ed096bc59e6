from datetime import date, datetime, timezone
from typing import Any


def utc_now() -> datetime:
    """Read the clock once; callers thread the value through the analytics."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    # Naive datetimes are already UTC.
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value: Any) -> datetime | None:
    """Resolve a stored timestamp to a naive UTC datetime, or None if it is unusable.

    Accepts datetimes, dates and ISO-8601 strings (a trailing "Z" included).
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, datetime):
            return to_utc_naive(value)
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            if text[-1] in "zZ":
                text = text[:-1] + "+00:00"
            return to_utc_naive(datetime.fromisoformat(text))
    except (ValueError, OverflowError):
        return None
    return None
