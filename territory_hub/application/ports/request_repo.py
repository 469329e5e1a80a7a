"""Port interface for territory request persistence."""

from abc import ABC, abstractmethod

from territory_hub.domain.entities.territory_request import TerritoryRequest
from territory_hub.domain.value_objects.enums import RequestStatus


class RequestRepository(ABC):
    @abstractmethod
    async def save(self, request: TerritoryRequest) -> TerritoryRequest:
        ...

    @abstractmethod
    async def get_for_update(self, request_id: int) -> TerritoryRequest | None:
        """Read a request holding a row lock until the transaction ends."""
        ...

    @abstractmethod
    async def get_pending(self) -> list[TerritoryRequest]:
        """Pending requests, newest first."""
        ...

    @abstractmethod
    async def get_pending_by_user(self, user_id: int) -> TerritoryRequest | None:
        ...

    @abstractmethod
    async def update_status(self, request_id: int, status: RequestStatus) -> None:
        ...
