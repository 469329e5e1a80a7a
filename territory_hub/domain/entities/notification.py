"""Notification entity: a message stored for a user to read later."""

from dataclasses import dataclass, field
from datetime import datetime

from territory_hub.domain.value_objects.clock import utcnow
from territory_hub.domain.value_objects.enums import NotificationType


@dataclass
class Notification:
    id: int | None
    user_id: int
    message: str
    type: NotificationType = NotificationType.INFO
    read: bool = False
    created_at: datetime = field(default_factory=utcnow)
