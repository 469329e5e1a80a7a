"""Administrator use cases over user accounts."""

from __future__ import annotations

import logging

from territory_hub.application.ports.user_repo import UserRepository
from territory_hub.domain.entities.user import User
from territory_hub.domain.errors import NotFoundError, PermissionDeniedError
from territory_hub.domain.value_objects.enums import UserRole

logger = logging.getLogger(__name__)


class ListUsersUseCase:
    def __init__(self, users: UserRepository):
        self._users = users

    async def execute(self) -> list[User]:
        users = await self._users.get_all()
        return sorted(users, key=lambda u: (u.display_name().lower(), u.id or 0))


class ChangeUserRoleUseCase:
    """Promote a publisher to admin or demote an admin to publisher."""

    def __init__(self, users: UserRepository):
        self._users = users

    async def execute(self, acting_user: User, user_id: int, role: UserRole) -> User:
        if acting_user.id == user_id:
            raise PermissionDeniedError("You cannot change your own role")
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        if user.role != role:
            await self._users.update_role(user_id, role)
            logger.info(
                "User %s changed role of %s: %s → %s",
                acting_user.id, user_id, user.role.value, role.value,
            )
            user.role = role
        return user
