"""Calendar-day and wall-clock helpers.

Every date that crosses the API boundary goes through ``normalize_date`` so
log upserts, interval writes and streak walks all compare the same plain
``datetime.date`` values. No timezone conversion is ever applied: an ISO
timestamp keeps the calendar day written in it.
"""

import re
from datetime import date, datetime, time
from typing import Union

from habitlog.errors import InvalidInputError

WEEKDAY_KEYS = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]

_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

DateLike = Union[date, datetime, str]


def normalize_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError("Date is required")

    raw = value.strip()
    try:
        if _DAY_RE.match(raw):
            return date.fromisoformat(raw)
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        return datetime.fromisoformat(raw).date()
    except ValueError as exc:
        raise InvalidInputError(f"Invalid date: {value!r}") from exc


def parse_clock(value: str) -> time:
    """Parse a same-day ``HH:MM`` (24h) wall-clock value."""
    match = _CLOCK_RE.match((value or "").strip())
    if not match:
        raise InvalidInputError(f"Invalid time: {value!r}, expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidInputError(f"Invalid time: {value!r}, expected HH:MM")
    return time(hour, minute)


def format_clock(value: time) -> str:
    return value.strftime("%H:%M")


def minutes_between(start: time, end: time) -> int:
    anchor = date(2000, 1, 1)
    delta = datetime.combine(anchor, end) - datetime.combine(anchor, start)
    return round(delta.total_seconds() / 60)


def weekday_key(day: date) -> str:
    return WEEKDAY_KEYS[day.weekday()]
