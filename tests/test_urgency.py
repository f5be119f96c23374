"""Tests for urgency classification in Europe/London civil days."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from rfp_deadlines.models import Deadline, DeadlineSummary, UrgencyLevel
from rfp_deadlines.urgency import (
    classify_urgency,
    days_until,
    summarize_deadlines,
    urgent_deadlines,
)

NOON_UTC = datetime(2026, 2, 15, 12, 0, tzinfo=timezone.utc)


def _deadline(day: date, completed: bool = False, label: str = "Submission") -> Deadline:
    return Deadline(date=day, label=label, rfp_name="NHS RFP", completed=completed)


class TestClassifyUrgency:

    def test_same_london_day_is_critical(self) -> None:
        assert classify_urgency("2026-02-15", False, NOON_UTC) == UrgencyLevel.CRITICAL

    def test_yesterday_is_overdue(self) -> None:
        assert classify_urgency("2026-02-14", False, NOON_UTC) == UrgencyLevel.OVERDUE

    def test_accepts_date_objects(self) -> None:
        assert classify_urgency(date(2026, 2, 14), False, NOON_UTC) == UrgencyLevel.OVERDUE

    @pytest.mark.parametrize(
        "offset, expected",
        [
            (-30, UrgencyLevel.OVERDUE),
            (-1, UrgencyLevel.OVERDUE),
            (0, UrgencyLevel.CRITICAL),
            (3, UrgencyLevel.CRITICAL),
            (4, UrgencyLevel.WARNING),
            (7, UrgencyLevel.WARNING),
            (8, UrgencyLevel.SAFE),
            (365, UrgencyLevel.SAFE),
        ],
    )
    def test_boundaries(self, offset: int, expected: UrgencyLevel) -> None:
        day = date(2026, 2, 15) + timedelta(days=offset)
        assert classify_urgency(day, False, NOON_UTC) == expected

    @pytest.mark.parametrize("offset", range(-10, 20))
    def test_completed_takes_precedence(self, offset: int) -> None:
        day = date(2026, 2, 15) + timedelta(days=offset)
        assert classify_urgency(day, True, NOON_UTC) == UrgencyLevel.COMPLETED

    def test_naive_now_is_utc(self) -> None:
        naive = datetime(2026, 7, 14, 23, 30)
        assert classify_urgency("2026-07-14", False, naive) == UrgencyLevel.OVERDUE

    def test_levels_are_strings(self) -> None:
        assert UrgencyLevel.WARNING == "warning"
        assert UrgencyLevel("safe") is UrgencyLevel.SAFE


class TestLondonDayBoundaries:
    """UTC midnight and London midnight differ whenever BST is in force."""

    def test_bst_today_in_london_yesterday_in_utc(self) -> None:
        # 23:30 UTC on 14 July is 00:30 BST on 15 July.
        now = datetime(2026, 7, 14, 23, 30, tzinfo=timezone.utc)
        assert classify_urgency("2026-07-15", False, now) == UrgencyLevel.CRITICAL
        assert classify_urgency("2026-07-14", False, now) == UrgencyLevel.OVERDUE

    def test_day_after_spring_forward(self) -> None:
        # Clocks go forward on 29 March 2026; 23:30 UTC is 00:30 BST on the 30th.
        now = datetime(2026, 3, 29, 23, 30, tzinfo=timezone.utc)
        assert days_until("2026-03-30", now) == 0
        assert classify_urgency("2026-03-30", False, now) == UrgencyLevel.CRITICAL
        assert classify_urgency("2026-03-29", False, now) == UrgencyLevel.OVERDUE

    def test_week_spanning_spring_forward(self) -> None:
        # The window contains a 23-hour day; counting stays in whole days.
        now = datetime(2026, 3, 26, 0, 30, tzinfo=timezone.utc)
        assert days_until("2026-04-02", now) == 7
        assert classify_urgency("2026-04-02", False, now) == UrgencyLevel.WARNING
        assert classify_urgency("2026-04-03", False, now) == UrgencyLevel.SAFE

    def test_week_spanning_fall_back(self) -> None:
        # Clocks go back on 25 October 2026: that day has 25 hours.
        now = datetime(2026, 10, 21, 23, 30, tzinfo=timezone.utc)  # 00:30 BST on the 22nd
        assert days_until("2026-10-25", now) == 3
        assert classify_urgency("2026-10-25", False, now) == UrgencyLevel.CRITICAL
        assert classify_urgency("2026-10-26", False, now) == UrgencyLevel.WARNING

    def test_other_offset_instants(self) -> None:
        # 20:00 in New York on 14 July is 01:00 BST on 15 July.
        from zoneinfo import ZoneInfo

        now = datetime(2026, 7, 14, 20, 0, tzinfo=ZoneInfo("America/New_York"))
        assert days_until("2026-07-15", now) == 0


class TestUrgentDeadlines:

    def test_overdue_and_critical_only_in_input_order(self) -> None:
        deadlines = [
            _deadline(date(2026, 2, 25), label="safe"),
            _deadline(date(2026, 2, 16), label="critical"),
            _deadline(date(2026, 2, 10), label="overdue"),
            _deadline(date(2026, 2, 10), completed=True, label="done"),
            _deadline(date(2026, 2, 20), label="warning"),
        ]
        assert [d.label for d in urgent_deadlines(deadlines, NOON_UTC)] == ["critical", "overdue"]

    def test_none_urgent(self) -> None:
        assert urgent_deadlines([_deadline(date(2026, 6, 1))], NOON_UTC) == []


class TestSummarizeDeadlines:

    def test_counts(self) -> None:
        now = datetime(2026, 2, 18, 12, 0, tzinfo=timezone.utc)  # Wednesday
        deadlines = [
            _deadline(date(2026, 2, 10)),                  # overdue
            _deadline(date(2026, 2, 16)),                  # overdue, this week (Monday)
            _deadline(date(2026, 2, 18)),                  # this week, upcoming
            _deadline(date(2026, 2, 22)),                  # this week (Sunday), upcoming
            _deadline(date(2026, 2, 25)),                  # upcoming (today + 7)
            _deadline(date(2026, 2, 26)),                  # none
            _deadline(date(2026, 2, 17), completed=True),  # ignored
        ]
        assert summarize_deadlines(deadlines, now) == DeadlineSummary(
            overdue=2, this_week=3, upcoming=3,
        )

    def test_empty(self) -> None:
        assert summarize_deadlines([], NOON_UTC) == DeadlineSummary()
