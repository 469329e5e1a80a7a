"""Port interface for user persistence."""

from abc import ABC, abstractmethod

from territory_hub.domain.entities.user import User
from territory_hub.domain.value_objects.enums import UserRole


class UserRepository(ABC):
    @abstractmethod
    async def save(self, user: User) -> User:
        ...

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[User]:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def update_role(self, user_id: int, role: UserRole) -> None:
        ...
