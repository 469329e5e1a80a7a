"""Territory entity: a map-backed geographic unit worked by publishers."""

from dataclasses import dataclass, field
from datetime import datetime

from territory_hub.domain.value_objects.clock import as_utc, utcnow
from territory_hub.domain.value_objects.enums import TerritoryStatus


@dataclass
class HistoryEntry:
    """One completed work cycle on a territory."""

    user_id: int
    user_name: str
    completed_date: datetime
    assignment_date: datetime | None = None
    notes: str = ""


@dataclass
class Territory:
    id: int | None
    name: str
    map_url: str
    status: TerritoryStatus = TerritoryStatus.AVAILABLE
    created_at: datetime = field(default_factory=utcnow)
    assigned_to: int | None = None
    assigned_to_name: str | None = None
    assignment_date: datetime | None = None
    due_date: datetime | None = None
    history: list[HistoryEntry] = field(default_factory=list)
    permanent_notes: str = ""

    def is_in_use(self) -> bool:
        return self.status == TerritoryStatus.IN_USE

    def is_deletable(self) -> bool:
        return self.status in (TerritoryStatus.AVAILABLE, TerritoryStatus.CLOSED)

    def last_history_entry(self) -> HistoryEntry | None:
        if not self.history:
            return None
        return max(self.history, key=lambda h: as_utc(h.completed_date))

    def last_worked_at(self) -> datetime | None:
        entry = self.last_history_entry()
        return as_utc(entry.completed_date) if entry else None

    def assign(self, user_id: int, user_name: str, assigned_at: datetime, due_date: datetime) -> None:
        self.status = TerritoryStatus.IN_USE
        self.assigned_to = user_id
        self.assigned_to_name = user_name
        self.assignment_date = assigned_at
        self.due_date = due_date

    def release(self) -> None:
        """Clear the current assignment and make the territory available again."""
        self.status = TerritoryStatus.AVAILABLE
        self.assigned_to = None
        self.assigned_to_name = None
        self.assignment_date = None
        self.due_date = None

    def complete(self, notes: str, completed_at: datetime) -> HistoryEntry:
        entry = HistoryEntry(
            user_id=self.assigned_to,
            user_name=self.assigned_to_name or "Publicador",
            completed_date=completed_at,
            assignment_date=self.assignment_date,
            notes=notes,
        )
        self.history.append(entry)
        self.release()
        return entry
