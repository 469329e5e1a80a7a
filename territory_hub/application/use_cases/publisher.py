"""Publisher self-service: request, complete, and view the current territory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from territory_hub.application.ports.request_repo import RequestRepository
from territory_hub.application.ports.territory_repo import TerritoryRepository
from territory_hub.domain.entities.territory import HistoryEntry, Territory
from territory_hub.domain.entities.territory_request import TerritoryRequest
from territory_hub.domain.entities.user import User
from territory_hub.domain.errors import ConflictError, NotFoundError, ValidationError
from territory_hub.domain.policies.deadlines import days_remaining, deadline_level
from territory_hub.domain.value_objects.clock import utcnow
from territory_hub.domain.value_objects.enums import DeadlineLevel

logger = logging.getLogger(__name__)


@dataclass
class PublisherDashboard:
    territory: Territory | None
    has_pending_request: bool
    days_remaining: int | None = None
    deadline_level: DeadlineLevel | None = None


class RequestTerritoryUseCase:
    def __init__(self, territories: TerritoryRepository, requests: RequestRepository):
        self._territories = territories
        self._requests = requests

    async def execute(self, user: User) -> TerritoryRequest:
        if await self._requests.get_pending_by_user(user.id):
            raise ConflictError("You already have a pending request")
        if await self._territories.get_in_use_by_user(user.id):
            raise ConflictError("Return your current territory before requesting another")

        request = TerritoryRequest(id=None, user_id=user.id, user_name=user.display_name())
        await self._requests.save(request)
        logger.info("User %s requested a territory (request %s)", user.id, request.id)
        return request


class SubmitReportUseCase:
    """Close the publisher's work cycle and return the territory to the pool."""

    def __init__(self, territories: TerritoryRepository):
        self._territories = territories

    async def execute(self, user: User, notes: str, now: datetime | None = None) -> HistoryEntry:
        if not notes or not notes.strip():
            raise ValidationError("Report notes are required")

        held = await self._territories.get_in_use_by_user(user.id)
        if held is None:
            raise NotFoundError("You have no territory in use")

        # re-read under row lock
        territory = await self._territories.get_for_update(held.id)
        if territory is None or not territory.is_in_use() or territory.assigned_to != user.id:
            raise ConflictError("Territory is no longer assigned to you")

        if not territory.assigned_to_name:
            territory.assigned_to_name = user.display_name()
        entry = territory.complete(notes.strip(), now or utcnow())
        await self._territories.add_history(territory.id, entry)
        await self._territories.update(territory)
        logger.info("User %s completed territory %s", user.id, territory.name)
        return entry


class PublisherDashboardUseCase:
    def __init__(self, territories: TerritoryRepository, requests: RequestRepository):
        self._territories = territories
        self._requests = requests

    async def execute(self, user: User, today: date | None = None) -> PublisherDashboard:
        territory = await self._territories.get_in_use_by_user(user.id)
        pending = await self._requests.get_pending_by_user(user.id)
        dashboard = PublisherDashboard(territory=territory, has_pending_request=pending is not None)
        if territory is not None:
            dashboard.days_remaining = days_remaining(territory.due_date, today)
            dashboard.deadline_level = deadline_level(territory.due_date, today)
        return dashboard
