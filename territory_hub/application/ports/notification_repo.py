"""Port interface for notification persistence."""

from abc import ABC, abstractmethod

from territory_hub.domain.entities.notification import Notification


class NotificationRepository(ABC):
    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        ...

    @abstractmethod
    async def get_recent_by_user(self, user_id: int, limit: int) -> list[Notification]:
        """Newest first, at most *limit* entries."""
        ...

    @abstractmethod
    async def mark_read(self, user_id: int, notification_ids: list[int]) -> int:
        """Mark the user's own notifications as read. Returns rows touched."""
        ...
