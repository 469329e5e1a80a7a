"""User entity: a publisher or administrator of the congregation."""

from dataclasses import dataclass, field
from datetime import datetime

from territory_hub.domain.value_objects.clock import utcnow
from territory_hub.domain.value_objects.enums import UserRole


@dataclass
class User:
    id: int | None
    email: str
    name: str
    role: UserRole = UserRole.PUBLISHER
    password_hash: str = ""
    active: bool = True
    created_at: datetime = field(default_factory=utcnow)

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def display_name(self) -> str:
        if self.name and self.name.strip():
            return self.name.strip()
        local_part = self.email.split("@")[0] if self.email else ""
        return local_part or "Publicador"
