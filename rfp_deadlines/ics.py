"""Render calendar events as RFC 5545 (iCalendar) text.

Timed events reference the Europe/London zone by ``TZID`` and the calendar
carries the matching ``VTIMEZONE``.  All-day events use ``VALUE=DATE`` with an
exclusive ``DTEND`` (the day after the deadline).
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

from .civil import REFERENCE_TIMEZONE, REFERENCE_TZ
from .errors import InvalidArgument
from .models import CalendarEvent

CALENDAR_NAME = "RFP Deadline Tracker"
PRODUCT_ID = "-//rfp-deadlines//ics//EN"
ICS_CONTENT_TYPE = "text/calendar; charset=utf-8"
BULK_EXPORT_FILENAME = "rfp-deadlines.ics"

_MAX_LINE_OCTETS = 75

# Europe/London: BST from the last Sunday of March 01:00 UTC to the last
# Sunday of October 01:00 UTC.
_LONDON_VTIMEZONE = [
    "BEGIN:VTIMEZONE",
    f"TZID:{REFERENCE_TIMEZONE}",
    "BEGIN:DAYLIGHT",
    "TZOFFSETFROM:+0000",
    "TZOFFSETTO:+0100",
    "TZNAME:BST",
    "DTSTART:19700329T010000",
    "RRULE:FREQ=YEARLY;BYMONTH=3;BYDAY=-1SU",
    "END:DAYLIGHT",
    "BEGIN:STANDARD",
    "TZOFFSETFROM:+0100",
    "TZOFFSETTO:+0000",
    "TZNAME:GMT",
    "DTSTART:19701025T020000",
    "RRULE:FREQ=YEARLY;BYMONTH=10;BYDAY=-1SU",
    "END:STANDARD",
    "END:VTIMEZONE",
]


# ---------------------------------------------------------------------------
# Value encoding
# ---------------------------------------------------------------------------

def escape_text(value: str) -> str:
    """Escape a TEXT property value (RFC 5545 §3.3.11)."""
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
        .replace("\r", "")
    )


def fold_line(line: str) -> str:
    """Fold a content line into CRLF-joined pieces of at most 75 octets.

    Never splits inside a multi-byte UTF-8 character.
    """
    if len(line.encode("utf-8")) <= _MAX_LINE_OCTETS:
        return line

    pieces: list[str] = []
    current = ""
    size = 0
    for char in line:
        width = len(char.encode("utf-8"))
        if size + width > _MAX_LINE_OCTETS:
            pieces.append(current)
            # Continuation lines start with a space, which counts.
            current, size = " ", 1
        current += char
        size += width
    pieces.append(current)
    return "\r\n".join(pieces)


def format_duration(value: timedelta) -> str:
    """Encode a duration as an iCalendar DURATION (``P1D``, ``PT30M``, ...)."""
    total = int(value.total_seconds())
    sign = "-" if total < 0 else ""
    total = abs(total)
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    out = f"{sign}P"
    if days:
        out += f"{days}D"
    if hours or minutes or seconds or not days:
        out += "T"
        if hours:
            out += f"{hours}H"
        if minutes:
            out += f"{minutes}M"
        if seconds or not (hours or minutes):
            out += f"{seconds}S"
    return out


def _format_date(value: date) -> str:
    return value.strftime("%Y%m%d")


def _format_local(value: datetime) -> str:
    return value.astimezone(REFERENCE_TZ).strftime("%Y%m%dT%H%M%S")


def _format_utc(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------

def _event_lines(event: CalendarEvent, stamp: datetime) -> list[str]:
    lines = [
        "BEGIN:VEVENT",
        f"UID:{event.uid}",
        f"DTSTAMP:{_format_utc(stamp)}",
        f"SUMMARY:{escape_text(event.title)}",
    ]
    if event.description:
        lines.append(f"DESCRIPTION:{escape_text(event.description)}")

    if event.all_day:
        lines.append(f"DTSTART;VALUE=DATE:{_format_date(event.start)}")
        lines.append(f"DTEND;VALUE=DATE:{_format_date(event.end + timedelta(days=1))}")
    else:
        lines.append(f"DTSTART;TZID={REFERENCE_TIMEZONE}:{_format_local(event.start)}")
        lines.append(f"DTEND;TZID={REFERENCE_TIMEZONE}:{_format_local(event.end)}")

    lines += [
        "BEGIN:VALARM",
        "ACTION:DISPLAY",
        "DESCRIPTION:Deadline reminder",
        f"TRIGGER:{format_duration(-event.reminder)}",
        "END:VALARM",
        "END:VEVENT",
    ]
    return lines


def _calendar(events: list[CalendarEvent], calendar_name: str | None, stamp: datetime | None) -> str:
    if stamp is None:
        stamp = datetime.now(timezone.utc)

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODUCT_ID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    if calendar_name:
        lines.append(f"X-WR-CALNAME:{escape_text(calendar_name)}")
    if any(not ev.all_day for ev in events):
        lines += _LONDON_VTIMEZONE
    for ev in events:
        lines += _event_lines(ev, stamp)
    lines.append("END:VCALENDAR")

    return "".join(fold_line(line) + "\r\n" for line in lines)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def serialize_one(event: CalendarEvent, *, stamp: datetime | None = None) -> str:
    """Render a single event as a complete calendar.

    *stamp* is written as ``DTSTAMP``; it defaults to the current UTC time.
    """
    return _calendar([event], None, stamp)


def serialize_many(
    events: list[CalendarEvent],
    calendar_name: str = CALENDAR_NAME,
    *,
    stamp: datetime | None = None,
) -> str:
    """Render several events as one named calendar.

    Raises :class:`InvalidArgument` for an empty list: callers filter to the
    deadlines worth exporting first.
    """
    events = list(events)
    if not events:
        raise InvalidArgument("Cannot generate ICS for empty deadline list")
    return _calendar(events, calendar_name, stamp)


def export_filename(label: str) -> str:
    """Download filename for a single deadline, e.g. ``proposal-due.ics``."""
    slug = re.sub(r"[^a-z0-9]+", "-", label.lower()).strip("-")
    return f"{slug or 'deadline'}.ics"
