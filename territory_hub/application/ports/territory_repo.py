"""Port interface for territory persistence."""

from abc import ABC, abstractmethod

from territory_hub.domain.entities.territory import HistoryEntry, Territory


class TerritoryRepository(ABC):
    @abstractmethod
    async def save(self, territory: Territory) -> Territory:
        ...

    @abstractmethod
    async def get_by_id(self, territory_id: int) -> Territory | None:
        ...

    @abstractmethod
    async def get_for_update(self, territory_id: int) -> Territory | None:
        """Read a territory holding a row lock until the transaction ends."""
        ...

    @abstractmethod
    async def get_all(self) -> list[Territory]:
        ...

    @abstractmethod
    async def get_in_use_by_user(self, user_id: int) -> Territory | None:
        ...

    @abstractmethod
    async def update(self, territory: Territory) -> Territory:
        """Persist scalar fields (name, status, assignment, notes)."""
        ...

    @abstractmethod
    async def add_history(self, territory_id: int, entry: HistoryEntry) -> None:
        ...

    @abstractmethod
    async def delete(self, territory_id: int) -> None:
        ...
