"""TriagePolicy: display order of territories by availability and rest period."""

from __future__ import annotations

import re
from datetime import datetime, timedelta

from territory_hub.domain.entities.territory import Territory
from territory_hub.domain.value_objects.clock import utcnow
from territory_hub.domain.value_objects.enums import TerritoryStatus

DEFAULT_REST_DAYS = 60

_DIGITS = re.compile(r"(\d+)")


def natural_key(name: str) -> tuple:
    """Case-insensitive, numeric-aware sort key: "T2" sorts before "T10"."""
    parts = _DIGITS.split(name.strip().lower())
    return tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in parts if p)


def is_resting(
    territory: Territory,
    now: datetime | None = None,
    rest_days: int = DEFAULT_REST_DAYS,
) -> bool:
    """True if the latest completion is less than *rest_days* in the past.

    Territories that were never worked are never resting.
    """
    last = territory.last_worked_at()
    if last is None:
        return False
    now = now or utcnow()
    return now - last < timedelta(days=rest_days)


def triage_key(
    territory: Territory,
    now: datetime | None = None,
    rest_days: int = DEFAULT_REST_DAYS,
) -> tuple:
    """Composite key, in priority order:

    1. in-use territories last
    2. never-worked territories first
    3. not-recently-closed before resting ones
    4. oldest last-work date first
    5. numeric-aware name
    """
    last = territory.last_worked_at()
    return (
        territory.is_in_use(),
        last is not None,
        is_resting(territory, now, rest_days),
        last.timestamp() if last else 0.0,
        natural_key(territory.name),
    )


def sort_for_triage(
    territories: list[Territory],
    now: datetime | None = None,
    rest_days: int = DEFAULT_REST_DAYS,
) -> list[Territory]:
    now = now or utcnow()
    return sorted(territories, key=lambda t: triage_key(t, now, rest_days))


def available_for_assignment(territories: list[Territory]) -> list[Territory]:
    """AVAILABLE territories sorted by name, as offered in the assignment picker."""
    available = [t for t in territories if t.status == TerritoryStatus.AVAILABLE]
    return sorted(available, key=lambda t: natural_key(t.name))
