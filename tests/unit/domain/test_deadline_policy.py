"""Tests for due-date arithmetic and deadline levels."""

from datetime import date, datetime, timezone

from territory_hub.domain.policies.deadlines import (
    compute_due_date,
    days_remaining,
    deadline_level,
)
from territory_hub.domain.value_objects.enums import DeadlineLevel

TODAY = date(2025, 6, 1)


def _due(day: int, month: int = 6) -> datetime:
    return datetime(2025, month, day, 9, 30, tzinfo=timezone.utc)


def test_due_date_is_thirty_days_after_assignment():
    assigned = datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc)
    assert compute_due_date(assigned) == datetime(2025, 7, 1, 8, 0, tzinfo=timezone.utc)


def test_due_date_period_is_configurable():
    assigned = datetime(2025, 6, 1, tzinfo=timezone.utc)
    assert compute_due_date(assigned, period_days=7) == datetime(2025, 6, 8, tzinfo=timezone.utc)


def test_days_remaining_counts_calendar_days():
    assert days_remaining(_due(11), TODAY) == 10
    assert days_remaining(_due(1), TODAY) == 0
    assert days_remaining(_due(30, month=5), TODAY) == -2


def test_days_remaining_without_due_date():
    assert days_remaining(None, TODAY) is None


def test_levels():
    assert deadline_level(_due(30, month=5), TODAY) == DeadlineLevel.OVERDUE
    assert deadline_level(_due(1), TODAY) == DeadlineLevel.URGENT
    assert deadline_level(_due(6), TODAY) == DeadlineLevel.URGENT
    assert deadline_level(_due(7), TODAY) == DeadlineLevel.SOON
    assert deadline_level(_due(16), TODAY) == DeadlineLevel.SOON
    assert deadline_level(_due(17), TODAY) == DeadlineLevel.ON_TRACK


def test_missing_due_date_reads_as_overdue():
    assert deadline_level(None, TODAY) == DeadlineLevel.OVERDUE
