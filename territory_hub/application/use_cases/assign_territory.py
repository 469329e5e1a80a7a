"""AssignTerritoryUseCase: approve a pending request by handing out a territory."""

from __future__ import annotations

import logging
from datetime import datetime

from territory_hub.application.ports.notification_repo import NotificationRepository
from territory_hub.application.ports.request_repo import RequestRepository
from territory_hub.application.ports.territory_repo import TerritoryRepository
from territory_hub.domain.entities.notification import Notification
from territory_hub.domain.entities.territory import Territory
from territory_hub.domain.entities.territory_request import TerritoryRequest
from territory_hub.domain.errors import ConflictError, NotFoundError
from territory_hub.domain.policies.deadlines import DEFAULT_ASSIGNMENT_DAYS, compute_due_date
from territory_hub.domain.value_objects.clock import utcnow
from territory_hub.domain.value_objects.enums import (
    NotificationType,
    RequestStatus,
    TerritoryStatus,
)

logger = logging.getLogger(__name__)


class AssignTerritoryUseCase:
    """Read-modify-write over request + territory + notification.

    Both rows are read with a row lock. Nothing is written until every check
    passes, and the caller commits the session once, so the three writes land
    together or not at all.
    """

    def __init__(
        self,
        territories: TerritoryRepository,
        requests: RequestRepository,
        notifications: NotificationRepository,
        period_days: int = DEFAULT_ASSIGNMENT_DAYS,
    ):
        self._territories = territories
        self._requests = requests
        self._notifications = notifications
        self._period_days = period_days

    async def execute(
        self, request_id: int, territory_id: int, now: datetime | None = None
    ) -> Territory:
        request = await self._requests.get_for_update(request_id)
        territory = await self._territories.get_for_update(territory_id)
        if request is None or territory is None:
            raise NotFoundError("Request or territory not found")
        if not request.is_pending():
            raise ConflictError(f"Request is already {request.status.value}")
        if territory.is_in_use():
            raise ConflictError(f'Territory "{territory.name}" is already in use')
        if territory.status == TerritoryStatus.CLOSED:
            raise ConflictError(f'Territory "{territory.name}" is closed; reopen it first')

        now = now or utcnow()
        territory.assign(
            user_id=request.user_id,
            user_name=request.user_name or "Publicador",
            assigned_at=now,
            due_date=compute_due_date(now, self._period_days),
        )
        await self._territories.update(territory)
        await self._requests.update_status(request.id, RequestStatus.APPROVED)
        request.status = RequestStatus.APPROVED

        await self._notifications.save(
            Notification(
                id=None,
                user_id=request.user_id,
                message=f'O território "{territory.name}" foi atribuído a você.',
                type=NotificationType.SUCCESS,
                created_at=now,
            )
        )

        logger.info(
            "Territory %s → user %s (request %s, due %s)",
            territory.name, request.user_id, request.id, territory.due_date.date(),
        )
        return territory


class RejectRequestUseCase:
    def __init__(self, requests: RequestRepository):
        self._requests = requests

    async def execute(self, request_id: int) -> TerritoryRequest:
        request = await self._requests.get_for_update(request_id)
        if request is None:
            raise NotFoundError("Request not found")
        if not request.is_pending():
            raise ConflictError(f"Request is already {request.status.value}")
        await self._requests.update_status(request.id, RequestStatus.REJECTED)
        request.status = RequestStatus.REJECTED
        logger.info("Request %s from user %s rejected", request.id, request.user_id)
        return request


class ListPendingRequestsUseCase:
    def __init__(self, requests: RequestRepository):
        self._requests = requests

    async def execute(self) -> list[TerritoryRequest]:
        return await self._requests.get_pending()
