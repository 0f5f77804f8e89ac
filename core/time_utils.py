import calendar
from datetime import date, datetime, time, timezone


def now_utc() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def now_local() -> datetime:
    """Naive local wall-clock time, the reference for "today" in the views."""
    return datetime.now()


def to_local_naive(dt: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive input is returned as is."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp as written by a datetime-local input or JSON.

    Accepts a bare date ("2025-01-15"), minutes precision ("2025-01-15T10:00")
    and a trailing "Z". Raises ValueError on anything else.
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO-8601 string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_local_naive(datetime.fromisoformat(text))


def format_iso(dt: datetime) -> str:
    return dt.isoformat(timespec="seconds")


def coerce_datetime(value) -> datetime:
    """Accept a datetime, a date or an ISO string."""
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return parse_iso(value)


def _as_date(value) -> date:
    """Accept a datetime, a date or an ISO string."""
    if isinstance(value, str):
        return coerce_datetime(value).date()
    if isinstance(value, datetime):
        return to_local_naive(value).date()
    return value


def start_of_day(value) -> datetime:
    return datetime.combine(_as_date(value), time.min)


def start_of_month(value) -> datetime:
    return datetime.combine(_as_date(value).replace(day=1), time.min)


def end_of_month(value) -> datetime:
    """Last instant of the month containing value."""
    d = _as_date(value)
    last_day = calendar.monthrange(d.year, d.month)[1]
    return datetime.combine(d.replace(day=last_day), time.max)


def is_same_day(left, right) -> bool:
    return _as_date(left) == _as_date(right)
