"""Pending request endpoints: administrator approves or rejects."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from territory_hub.adapters.persistence.database import get_session
from territory_hub.application.use_cases.assign_territory import (
    AssignTerritoryUseCase,
    ListPendingRequestsUseCase,
    RejectRequestUseCase,
)
from territory_hub.domain.entities.user import User
from territory_hub.infrastructure.api.dependencies import (
    get_assign_territory_uc,
    get_pending_requests_uc,
    get_reject_request_uc,
    require_admin,
)
from territory_hub.infrastructure.api.schemas import (
    AssignIn,
    TerritoryOut,
    TerritoryRequestOut,
)

router = APIRouter(prefix="/requests", tags=["requests"])


@router.get("", response_model=list[TerritoryRequestOut])
async def list_pending(
    uc: ListPendingRequestsUseCase = Depends(get_pending_requests_uc),
    _admin: User = Depends(require_admin),
):
    """Pending requests, newest first."""
    return [TerritoryRequestOut.model_validate(r) for r in await uc.execute()]


@router.post("/{request_id}/assign", response_model=TerritoryOut)
async def assign(
    request_id: int,
    body: AssignIn,
    uc: AssignTerritoryUseCase = Depends(get_assign_territory_uc),
    session: AsyncSession = Depends(get_session),
    _admin: User = Depends(require_admin),
):
    """Approve the request by assigning a territory (single transaction)."""
    territory = await uc.execute(request_id, body.territory_id)
    await session.commit()
    return TerritoryOut.model_validate(territory)


@router.post("/{request_id}/reject", response_model=TerritoryRequestOut)
async def reject(
    request_id: int,
    uc: RejectRequestUseCase = Depends(get_reject_request_uc),
    session: AsyncSession = Depends(get_session),
    _admin: User = Depends(require_admin),
):
    request = await uc.execute(request_id)
    await session.commit()
    return TerritoryRequestOut.model_validate(request)
