"""Build calendar events from deadlines.

The same :class:`CalendarEvent` feeds the ``.ics`` serializer and the Google
Calendar body, so both exports agree on dates and times.
"""

from __future__ import annotations

import uuid
from datetime import timedelta

from .civil import localize
from .models import CalendarEvent, Deadline

EVENT_DURATION = timedelta(hours=1)
REMINDER_BEFORE = timedelta(days=1)

# Fixed namespace so a deadline keeps its UID across exports.
_UID_NAMESPACE = uuid.UUID("6f1c2a0e-8d4b-5e7a-9c3f-2b8d1e4a7c60")


def event_uid(deadline: Deadline) -> str:
    """Stable identifier derived from the RFP name, date and label."""
    name = f"{deadline.rfp_name}|{deadline.date.isoformat()}|{deadline.label}"
    return f"{uuid.uuid5(_UID_NAMESPACE, name)}@rfp-deadlines"


def build_calendar_event(deadline: Deadline) -> CalendarEvent:
    """Convert a :class:`Deadline` into a one-hour timed or an all-day event."""
    if deadline.time is not None:
        start = localize(deadline.date, deadline.time)
        end = start + EVENT_DURATION
        all_day = False
    else:
        start = end = deadline.date
        all_day = True

    return CalendarEvent(
        uid=event_uid(deadline),
        title=f"{deadline.label} - {deadline.rfp_name}",
        description=deadline.context or None,
        all_day=all_day,
        start=start,
        end=end,
        reminder=REMINDER_BEFORE,
    )
