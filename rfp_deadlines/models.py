"""Data shapes shared by the extraction pipeline and the calendar exporters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any

from .civil import parse_civil_date, parse_wall_time


@dataclass(frozen=True, slots=True)
class RawCandidate:
    """A deadline proposed by the extractor for one chunk or image.

    Not yet deduplicated: overlapping chunks routinely report the same
    deadline twice.
    """

    date: str                        # YYYY-MM-DD
    label: str                       # e.g. "Proposal submission"
    time: str | None = None          # HH:MM (24h), None when not stated
    context: str | None = None       # Surrounding requirement text

    @property
    def key(self) -> tuple[str, str]:
        """Identity used for deduplication."""
        return (self.date, self.label)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "time": self.time,
            "label": self.label,
            "context": self.context,
        }


# After deduplication the shape is unchanged; only uniqueness of ``key`` holds.
CanonicalCandidate = RawCandidate


@dataclass(frozen=True, slots=True)
class Deadline:
    """A reviewed, persisted deadline as handed over by the storage layer."""

    date: date
    label: str
    rfp_name: str
    time: time | None = None
    context: str | None = None
    completed: bool = False

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Deadline":
        """Build from the JSON shape used by exports (``rfpName`` or ``rfp_name``)."""
        rfp_name = raw.get("rfpName", raw.get("rfp_name"))
        if not raw.get("label") or not rfp_name:
            raise ValueError(f"Deadline needs a label and an RFP name: {raw!r}")
        return cls(
            date=parse_civil_date(raw["date"]),
            label=str(raw["label"]),
            rfp_name=str(rfp_name),
            time=parse_wall_time(raw.get("time")),
            context=raw.get("context") or None,
            completed=bool(raw.get("completed", False)),
        )


class UrgencyLevel(str, Enum):
    OVERDUE = "overdue"
    CRITICAL = "critical"
    WARNING = "warning"
    SAFE = "safe"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    """Source-agnostic calendar event derived from a :class:`Deadline`.

    All-day events carry bare dates with ``start == end``; exporters turn
    that into whatever end-exclusive form their format requires.  Timed
    events carry aware datetimes in the reference timezone.
    """

    uid: str
    title: str
    all_day: bool
    start: date | datetime
    end: date | datetime
    reminder: timedelta              # how long before start the alarm fires
    description: str | None = None


@dataclass(frozen=True, slots=True)
class DeadlineSummary:
    """Counts shown on the dashboard summary cards."""

    overdue: int = 0
    this_week: int = 0
    upcoming: int = 0
