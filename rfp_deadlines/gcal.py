"""Push deadline calendar events to Google Calendar.

Event bodies are derived from the same :class:`CalendarEvent` the ``.ics``
export uses.  Each body carries the event UID as a private extended property
so repeated syncs update the existing event instead of adding a duplicate.
"""

from __future__ import annotations

import json
import os
from datetime import timedelta

from google.oauth2 import service_account
from googleapiclient.discovery import build

from .civil import REFERENCE_TIMEZONE, REFERENCE_TZ
from .errors import CalendarNotConnected
from .models import CalendarEvent

SCOPES = ["https://www.googleapis.com/auth/calendar"]

# Extended property key used for de-duplication in Google Calendar.
_EXT_PROP_KEY = "rfp_deadline_uid"


# ---------------------------------------------------------------------------
# Google Calendar helpers
# ---------------------------------------------------------------------------

def build_calendar_service():
    """Return an authenticated Google Calendar service using a service account.

    Raises :class:`CalendarNotConnected` when ``GOOGLE_SA_JSON`` is unset.
    """
    sa_json = os.environ.get("GOOGLE_SA_JSON", "").strip()
    if not sa_json:
        raise CalendarNotConnected("Not connected to Google Calendar: GOOGLE_SA_JSON is not set")
    sa_info = json.loads(sa_json)
    credentials = service_account.Credentials.from_service_account_info(
        sa_info, scopes=SCOPES,
    )
    return build("calendar", "v3", credentials=credentials)


def _event_datetime(event: CalendarEvent) -> tuple[dict, dict]:
    """Return (start, end) dicts for a Google Calendar event."""
    if not event.all_day:
        start_local = event.start.astimezone(REFERENCE_TZ).replace(tzinfo=None)
        end_local = event.end.astimezone(REFERENCE_TZ).replace(tzinfo=None)
        start = {"dateTime": start_local.isoformat(), "timeZone": REFERENCE_TIMEZONE}
        end = {"dateTime": end_local.isoformat(), "timeZone": REFERENCE_TIMEZONE}
    else:
        # Google treats the end date as exclusive.
        start = {"date": event.start.isoformat()}
        end = {"date": (event.end + timedelta(days=1)).isoformat()}
    return start, end


def build_gcal_event(event: CalendarEvent) -> dict:
    """Convert a :class:`CalendarEvent` to a Google Calendar event body."""
    start, end = _event_datetime(event)

    gcal: dict = {
        "summary": event.title,
        "start": start,
        "end": end,
        "reminders": {
            "useDefault": False,
            "overrides": [
                {
                    "method": "popup",
                    "minutes": int(event.reminder.total_seconds() // 60),
                },
            ],
        },
        "extendedProperties": {
            "private": {
                _EXT_PROP_KEY: event.uid,
            }
        },
    }
    if event.description:
        gcal["description"] = event.description
    return gcal


def create_calendar_event(service, calendar_id: str, event: CalendarEvent) -> str:
    """Insert *event* and return the Google event id."""
    created = service.events().insert(
        calendarId=calendar_id,
        body=build_gcal_event(event),
    ).execute()
    event_id = created.get("id")
    if not event_id:
        raise RuntimeError("Failed to create calendar event")
    return event_id


def update_calendar_event(
    service, calendar_id: str, google_event_id: str, event: CalendarEvent,
) -> None:
    service.events().update(
        calendarId=calendar_id,
        eventId=google_event_id,
        body=build_gcal_event(event),
    ).execute()


def delete_calendar_event(service, calendar_id: str, google_event_id: str) -> None:
    service.events().delete(
        calendarId=calendar_id,
        eventId=google_event_id,
    ).execute()


def get_existing_events(service, calendar_id: str) -> dict[str, str]:
    """Return a mapping of deadline UID → Google Calendar event id."""
    mapping: dict[str, str] = {}
    page_token = None

    while True:
        result = (
            service.events()
            .list(
                calendarId=calendar_id,
                singleEvents=True,
                pageToken=page_token,
            )
            .execute()
        )
        for item in result.get("items", []):
            uid = (
                item.get("extendedProperties", {})
                .get("private", {})
                .get(_EXT_PROP_KEY)
            )
            if uid:
                mapping[uid] = item["id"]
        page_token = result.get("nextPageToken")
        if not page_token:
            break

    return mapping


def upsert_event(
    service, calendar_id: str, event: CalendarEvent, existing: dict[str, str],
) -> str:
    """Create or update a Google Calendar event.  Returns ``'created'`` or ``'updated'``."""
    if event.uid in existing:
        update_calendar_event(service, calendar_id, existing[event.uid], event)
        return "updated"
    existing[event.uid] = create_calendar_event(service, calendar_id, event)
    return "created"
