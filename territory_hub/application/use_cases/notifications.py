"""Notification inbox of the current user."""

from __future__ import annotations

from territory_hub.application.ports.notification_repo import NotificationRepository
from territory_hub.domain.entities.notification import Notification
from territory_hub.domain.entities.user import User

DEFAULT_LIMIT = 20


class NotificationsUseCase:
    def __init__(self, notifications: NotificationRepository, limit: int = DEFAULT_LIMIT):
        self._notifications = notifications
        self._limit = limit

    async def list_recent(self, user: User) -> list[Notification]:
        return await self._notifications.get_recent_by_user(user.id, self._limit)

    async def mark_read(self, user: User, notification_ids: list[int]) -> int:
        if not notification_ids:
            return 0
        return await self._notifications.mark_read(user.id, notification_ids)
