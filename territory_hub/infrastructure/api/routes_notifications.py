"""Notification endpoints for the logged-in user."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from territory_hub.adapters.persistence.database import get_session
from territory_hub.application.use_cases.notifications import NotificationsUseCase
from territory_hub.domain.entities.user import User
from territory_hub.infrastructure.api.dependencies import get_current_user, get_notifications_uc
from territory_hub.infrastructure.api.schemas import MarkReadIn, NotificationOut

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationOut])
async def list_notifications(
    uc: NotificationsUseCase = Depends(get_notifications_uc),
    user: User = Depends(get_current_user),
):
    return [NotificationOut.model_validate(n) for n in await uc.list_recent(user)]


@router.post("/read")
async def mark_read(
    body: MarkReadIn,
    uc: NotificationsUseCase = Depends(get_notifications_uc),
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
):
    updated = await uc.mark_read(user, body.ids)
    await session.commit()
    return {"status": "ok", "updated": updated}
