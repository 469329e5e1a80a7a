"""User management endpoints (administrator)."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from territory_hub.adapters.persistence.database import get_session
from territory_hub.application.use_cases.manage_users import (
    ChangeUserRoleUseCase,
    ListUsersUseCase,
)
from territory_hub.domain.entities.user import User
from territory_hub.infrastructure.api.dependencies import (
    get_change_role_uc,
    get_list_users_uc,
    require_admin,
)
from territory_hub.infrastructure.api.schemas import RoleIn, UserOut

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserOut])
async def list_users(
    uc: ListUsersUseCase = Depends(get_list_users_uc),
    _admin: User = Depends(require_admin),
):
    return [UserOut.model_validate(u) for u in await uc.execute()]


@router.patch("/{user_id}/role", response_model=UserOut)
async def change_role(
    user_id: int,
    body: RoleIn,
    uc: ChangeUserRoleUseCase = Depends(get_change_role_uc),
    session: AsyncSession = Depends(get_session),
    admin: User = Depends(require_admin),
):
    user = await uc.execute(admin, user_id, body.role)
    await session.commit()
    return UserOut.model_validate(user)
