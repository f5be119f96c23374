"""Extract RFP deadlines from documents and export them as calendar events."""

from __future__ import annotations

from .calendar_event import build_calendar_event
from .chunking import chunk_text
from .extraction import dedupe_candidates, extract_deadlines, extract_deadlines_from_image
from .ics import serialize_many, serialize_one
from .models import CalendarEvent, CanonicalCandidate, Deadline, RawCandidate, UrgencyLevel
from .urgency import classify_urgency

__all__ = [
    "CalendarEvent",
    "CanonicalCandidate",
    "Deadline",
    "RawCandidate",
    "UrgencyLevel",
    "build_calendar_event",
    "chunk_text",
    "classify_urgency",
    "dedupe_candidates",
    "extract_deadlines",
    "extract_deadlines_from_image",
    "serialize_many",
    "serialize_one",
]
