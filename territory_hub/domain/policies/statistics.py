"""Dashboard statistics over the territory list."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from territory_hub.domain.entities.territory import Territory
from territory_hub.domain.value_objects.clock import as_utc, utcnow
from territory_hub.domain.value_objects.enums import TerritoryStatus

INACTIVE_TOP_N = 3


@dataclass
class InactiveTerritory:
    territory_id: int | None
    name: str
    days_inactive: int


@dataclass
class TerritoryStatistics:
    total: int
    available: int
    in_use: int
    closed: int
    requested: int
    longest_inactive: list[InactiveTerritory] = field(default_factory=list)


def compute_statistics(
    territories: list[Territory],
    now: datetime | None = None,
    top_n: int = INACTIVE_TOP_N,
) -> TerritoryStatistics:
    now = now or utcnow()
    counts = {status: 0 for status in TerritoryStatus}
    for t in territories:
        counts[t.status] += 1

    idle = []
    for t in territories:
        if t.status not in (TerritoryStatus.AVAILABLE, TerritoryStatus.CLOSED):
            continue
        since = t.last_worked_at() or as_utc(t.created_at)
        idle.append((now - since, t))
    idle.sort(key=lambda pair: pair[0], reverse=True)

    return TerritoryStatistics(
        total=len(territories),
        available=counts[TerritoryStatus.AVAILABLE],
        in_use=counts[TerritoryStatus.IN_USE],
        closed=counts[TerritoryStatus.CLOSED],
        requested=counts[TerritoryStatus.REQUESTED],
        longest_inactive=[
            InactiveTerritory(territory_id=t.id, name=t.name, days_inactive=delta.days)
            for delta, t in idle[:top_n]
        ],
    )
