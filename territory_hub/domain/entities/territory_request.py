"""TerritoryRequest entity: a publisher's ask for a new territory."""

from dataclasses import dataclass, field
from datetime import datetime

from territory_hub.domain.value_objects.clock import utcnow
from territory_hub.domain.value_objects.enums import RequestStatus


@dataclass
class TerritoryRequest:
    id: int | None
    user_id: int
    user_name: str
    request_date: datetime = field(default_factory=utcnow)
    status: RequestStatus = RequestStatus.PENDING

    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING
