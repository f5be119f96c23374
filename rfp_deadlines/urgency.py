"""Urgency levels and dashboard counts for deadlines.

Every comparison happens on Europe/London calendar days.  Subtracting
instants and dividing by 24 hours would come out a day short or long around
daylight-saving transitions, so both sides are reduced to civil dates first.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from .civil import civil_today, parse_civil_date
from .models import Deadline, DeadlineSummary, UrgencyLevel

CRITICAL_WITHIN_DAYS = 3
WARNING_WITHIN_DAYS = 7
UPCOMING_WINDOW_DAYS = 7


def days_until(deadline_date: date | str, now: datetime) -> int:
    """Whole reference-timezone days from today to *deadline_date* (negative if past)."""
    return (parse_civil_date(deadline_date) - civil_today(now)).days


def classify_urgency(deadline_date: date | str, completed: bool, now: datetime) -> UrgencyLevel:
    """Classify a deadline relative to the instant *now*.

    - completed deadlines are always ``COMPLETED``
    - before today: ``OVERDUE``
    - today up to 3 days away: ``CRITICAL``
    - 4 to 7 days away: ``WARNING``
    - further out: ``SAFE``
    """
    if completed:
        return UrgencyLevel.COMPLETED

    days = days_until(deadline_date, now)
    if days < 0:
        return UrgencyLevel.OVERDUE
    if days <= CRITICAL_WITHIN_DAYS:
        return UrgencyLevel.CRITICAL
    if days <= WARNING_WITHIN_DAYS:
        return UrgencyLevel.WARNING
    return UrgencyLevel.SAFE


def deadline_urgency(deadline: Deadline, now: datetime) -> UrgencyLevel:
    return classify_urgency(deadline.date, deadline.completed, now)


def urgent_deadlines(deadlines: Iterable[Deadline], now: datetime) -> list[Deadline]:
    """Deadlines that are overdue or critical, in input order."""
    return [
        d for d in deadlines
        if deadline_urgency(d, now) in (UrgencyLevel.OVERDUE, UrgencyLevel.CRITICAL)
    ]


def summarize_deadlines(deadlines: Iterable[Deadline], now: datetime) -> DeadlineSummary:
    """Count incomplete deadlines for the dashboard cards.

    ``this_week`` uses the Monday-to-Sunday week containing today;
    ``upcoming`` covers today through seven days from today, inclusive.
    """
    today = civil_today(now)
    week_start = today - timedelta(days=today.weekday())
    week_end = week_start + timedelta(days=6)
    upcoming_end = today + timedelta(days=UPCOMING_WINDOW_DAYS)

    overdue = this_week = upcoming = 0
    for deadline in deadlines:
        if deadline.completed:
            continue
        day = deadline.date
        if day < today:
            overdue += 1
        if week_start <= day <= week_end:
            this_week += 1
        if today <= day <= upcoming_end:
            upcoming += 1

    return DeadlineSummary(overdue=overdue, this_week=this_week, upcoming=upcoming)
