"""DeadlinePolicy: due-date arithmetic for assigned territories."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from territory_hub.domain.value_objects.clock import as_utc, utcnow
from territory_hub.domain.value_objects.enums import DeadlineLevel

DEFAULT_ASSIGNMENT_DAYS = 30
URGENT_DAYS = 5
SOON_DAYS = 15


def compute_due_date(assigned_at: datetime, period_days: int = DEFAULT_ASSIGNMENT_DAYS) -> datetime:
    return assigned_at + timedelta(days=period_days)


def days_remaining(due_date: datetime | None, today: date | None = None) -> int | None:
    """Whole calendar days from *today* until the due date (negative when late)."""
    if due_date is None:
        return None
    today = today or utcnow().date()
    return (as_utc(due_date).date() - today).days


def deadline_level(due_date: datetime | None, today: date | None = None) -> DeadlineLevel:
    remaining = days_remaining(due_date, today)
    if remaining is None or remaining < 0:
        return DeadlineLevel.OVERDUE
    if remaining <= URGENT_DAYS:
        return DeadlineLevel.URGENT
    if remaining <= SOON_DAYS:
        return DeadlineLevel.SOON
    return DeadlineLevel.ON_TRACK
