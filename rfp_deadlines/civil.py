"""Civil date/time helpers anchored to the reference timezone.

Deadlines are stored as bare calendar dates (no time-of-day, no offset) plus an
optional wall-clock time.  Every "what day is it" question is answered in
``Europe/London`` rather than UTC or the host's local zone: the two disagree
about midnight for half the year.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

REFERENCE_TIMEZONE = "Europe/London"
REFERENCE_TZ = ZoneInfo(REFERENCE_TIMEZONE)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")


def is_civil_date(value: str) -> bool:
    """True when *value* is a valid ``YYYY-MM-DD`` calendar date."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_wall_time(value: str) -> bool:
    """True when *value* is a valid 24h ``HH:MM`` wall-clock time."""
    if not isinstance(value, str) or not _TIME_RE.match(value):
        return False
    hours, minutes = (int(p) for p in value.split(":"))
    return hours < 24 and minutes < 60


def parse_civil_date(value: date | str) -> date:
    """Return *value* as a :class:`date`.

    Accepts ``YYYY-MM-DD`` strings and ``date`` objects.  An aware
    ``datetime`` is first moved into the reference timezone; a naive one is
    taken at face value.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(REFERENCE_TZ)
        return value.date()
    if isinstance(value, date):
        return value
    if not is_civil_date(value):
        raise ValueError(f"Not a YYYY-MM-DD date: {value!r}")
    return date.fromisoformat(value)


def parse_wall_time(value: time | str | None) -> time | None:
    """Return ``HH:MM`` (or a :class:`time`) as a :class:`time`; ``None``/``""`` stay ``None``."""
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    if not is_wall_time(value):
        raise ValueError(f"Not an HH:MM time: {value!r}")
    hours, minutes = (int(p) for p in value.split(":"))
    return time(hours, minutes)


def to_reference(now: datetime) -> datetime:
    """Convert an instant to reference-timezone wall time.

    Naive datetimes are interpreted as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(REFERENCE_TZ)


def civil_today(now: datetime) -> date:
    """The reference-timezone calendar day containing the instant *now*."""
    return to_reference(now).date()


def localize(day: date, wall: time) -> datetime:
    """Combine a civil date and wall-clock time into an aware reference datetime."""
    return datetime.combine(day, wall, tzinfo=REFERENCE_TZ)
