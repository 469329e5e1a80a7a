"""Administrator use cases over the territory catalogue."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import PurePath
from typing import BinaryIO

from territory_hub.application.ports.map_storage_port import MapStoragePort
from territory_hub.application.ports.notification_repo import NotificationRepository
from territory_hub.application.ports.territory_repo import TerritoryRepository
from territory_hub.domain.entities.notification import Notification
from territory_hub.domain.entities.territory import HistoryEntry, Territory
from territory_hub.domain.entities.user import User
from territory_hub.domain.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from territory_hub.domain.policies.statistics import TerritoryStatistics, compute_statistics
from territory_hub.domain.policies.triage import (
    DEFAULT_REST_DAYS,
    available_for_assignment,
    sort_for_triage,
)
from territory_hub.domain.value_objects.clock import as_utc, utcnow
from territory_hub.domain.value_objects.enums import NotificationType, TerritoryStatus

logger = logging.getLogger(__name__)

MAP_EXTENSIONS = {".pdf", ".png", ".jpg", ".jpeg", ".gif", ".webp"}


async def _require_territory(territories: TerritoryRepository, territory_id: int) -> Territory:
    territory = await territories.get_by_id(territory_id)
    if territory is None:
        raise NotFoundError("Territory not found")
    return territory


def _clean_name(name: str | None) -> str:
    if not name or not name.strip():
        raise ValidationError("Territory name is required")
    return name.strip()


class ListTerritoriesUseCase:
    """Read-side queries for the administrator dashboard."""

    def __init__(self, territories: TerritoryRepository, rest_days: int = DEFAULT_REST_DAYS):
        self._territories = territories
        self._rest_days = rest_days

    async def execute(
        self,
        search: str | None = None,
        status: TerritoryStatus | None = None,
        now: datetime | None = None,
    ) -> list[Territory]:
        """All territories in triage order, optionally filtered by name and status."""
        items = await self._territories.get_all()
        if search and search.strip():
            needle = search.strip().lower()
            items = [t for t in items if needle in t.name.lower()]
        if status is not None:
            items = [t for t in items if t.status == status]
        return sort_for_triage(items, now=now, rest_days=self._rest_days)

    async def available(self) -> list[Territory]:
        return available_for_assignment(await self._territories.get_all())

    async def statistics(self, now: datetime | None = None) -> TerritoryStatistics:
        return compute_statistics(await self._territories.get_all(), now=now)


class GetTerritoryUseCase:
    """Territory detail and history. Publishers may only see the one they hold."""

    def __init__(self, territories: TerritoryRepository):
        self._territories = territories

    async def execute(self, territory_id: int, viewer: User) -> Territory:
        territory = await _require_territory(self._territories, territory_id)
        if not viewer.is_admin() and territory.assigned_to != viewer.id:
            raise PermissionDeniedError("Territory is not assigned to you")
        return territory

    async def history(self, territory_id: int, viewer: User) -> list[HistoryEntry]:
        territory = await self.execute(territory_id, viewer)
        return sorted(territory.history, key=lambda h: as_utc(h.completed_date), reverse=True)


class CreateTerritoryUseCase:
    def __init__(self, territories: TerritoryRepository, storage: MapStoragePort):
        self._territories = territories
        self._storage = storage

    async def execute(
        self,
        name: str,
        filename: str | None = None,
        content: BinaryIO | None = None,
        map_url: str | None = None,
    ) -> Territory:
        """Create a territory from an uploaded map file or an external link."""
        name = _clean_name(name)

        if content is not None and filename:
            suffix = PurePath(filename).suffix.lower()
            if suffix not in MAP_EXTENSIONS:
                raise ValidationError(f"Unsupported map file type: {suffix or filename}")
            url = await self._storage.save(filename, content)
        elif map_url and map_url.strip():
            url = map_url.strip()
            if not url.startswith(("http://", "https://")):
                raise ValidationError("Map link must be an http(s) URL")
        else:
            raise ValidationError("A map file or a map link is required")

        territory = Territory(id=None, name=name, map_url=url)
        try:
            await self._territories.save(territory)
        except Exception:
            await self.discard_map(territory)
            raise
        logger.info("Territory %s created (id=%s)", territory.name, territory.id)
        return territory

    async def discard_map(self, territory: Territory) -> None:
        """Drop the stored map of a territory whose insert did not commit."""
        try:
            await self._storage.delete(territory.map_url)
        except OSError:
            logger.exception("Could not remove orphaned map %s", territory.map_url)


class UpdateTerritoryUseCase:
    def __init__(self, territories: TerritoryRepository):
        self._territories = territories

    async def execute(
        self,
        territory_id: int,
        name: str | None = None,
        permanent_notes: str | None = None,
    ) -> Territory:
        territory = await _require_territory(self._territories, territory_id)
        if name is not None:
            territory.name = _clean_name(name)
        if permanent_notes is not None:
            territory.permanent_notes = permanent_notes.strip()
        return await self._territories.update(territory)


class DeleteTerritoryUseCase:
    def __init__(self, territories: TerritoryRepository, storage: MapStoragePort):
        self._territories = territories
        self._storage = storage

    async def execute(self, territory_id: int) -> Territory:
        """Delete the row. Call remove_map once the deletion is committed."""
        territory = await _require_territory(self._territories, territory_id)
        if not territory.is_deletable():
            raise ConflictError("Only available or closed territories can be deleted")

        await self._territories.delete(territory_id)
        logger.info("Territory %s deleted", territory.name)
        return territory

    async def remove_map(self, territory: Territory) -> None:
        if not territory.map_url:
            return
        try:
            await self._storage.delete(territory.map_url)
        except OSError:
            logger.exception("Could not delete map file for territory %s", territory.id)


class ChangeTerritoryStatusUseCase:
    """Reclaim, close and reopen territories."""

    def __init__(self, territories: TerritoryRepository, notifications: NotificationRepository):
        self._territories = territories
        self._notifications = notifications

    async def reclaim(self, territory_id: int) -> Territory:
        """Take an in-use territory back from its publisher without recording work."""
        territory = await self._territories.get_for_update(territory_id)
        if territory is None:
            raise NotFoundError("Territory not found")
        if not territory.is_in_use():
            raise ConflictError("Territory is not in use")

        former_user = territory.assigned_to
        territory.release()
        await self._territories.update(territory)
        await self._notifications.save(
            Notification(
                id=None,
                user_id=former_user,
                message=f'O território "{territory.name}" foi recolhido pelo administrador.',
                type=NotificationType.WARNING,
                created_at=utcnow(),
            )
        )
        logger.info("Territory %s reclaimed from user %s", territory.name, former_user)
        return territory

    async def close(self, territory_id: int) -> Territory:
        territory = await _require_territory(self._territories, territory_id)
        if territory.is_in_use():
            raise ConflictError("Reclaim the territory before closing it")
        territory.status = TerritoryStatus.CLOSED
        return await self._territories.update(territory)

    async def reopen(self, territory_id: int) -> Territory:
        territory = await _require_territory(self._territories, territory_id)
        if territory.status != TerritoryStatus.CLOSED:
            raise ConflictError("Only closed territories can be reopened")
        territory.status = TerritoryStatus.AVAILABLE
        return await self._territories.update(territory)
