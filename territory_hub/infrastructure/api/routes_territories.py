"""Territory endpoints: administrator catalogue plus detail/history."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from territory_hub.adapters.persistence.database import get_session
from territory_hub.application.use_cases.manage_territories import (
    ChangeTerritoryStatusUseCase,
    CreateTerritoryUseCase,
    DeleteTerritoryUseCase,
    GetTerritoryUseCase,
    ListTerritoriesUseCase,
    UpdateTerritoryUseCase,
)
from territory_hub.domain.entities.user import User
from territory_hub.domain.value_objects.enums import TerritoryStatus
from territory_hub.infrastructure.api.dependencies import (
    get_create_territory_uc,
    get_current_user,
    get_delete_territory_uc,
    get_list_territories_uc,
    get_territory_status_uc,
    get_territory_uc,
    get_update_territory_uc,
    require_admin,
)
from territory_hub.infrastructure.api.schemas import (
    HistoryEntryOut,
    StatisticsOut,
    TerritoryOut,
    TerritoryUpdateIn,
)

router = APIRouter(prefix="/territories", tags=["territories"])


@router.get("", response_model=list[TerritoryOut])
async def list_territories(
    search: str | None = None,
    status: TerritoryStatus | None = None,
    uc: ListTerritoriesUseCase = Depends(get_list_territories_uc),
    _admin: User = Depends(require_admin),
):
    """All territories in triage order (available, rested and oldest first)."""
    items = await uc.execute(search=search, status=status)
    return [TerritoryOut.model_validate(t) for t in items]


@router.get("/available", response_model=list[TerritoryOut])
async def list_available(
    uc: ListTerritoriesUseCase = Depends(get_list_territories_uc),
    _admin: User = Depends(require_admin),
):
    return [TerritoryOut.model_validate(t) for t in await uc.available()]


@router.get("/statistics", response_model=StatisticsOut)
async def statistics(
    uc: ListTerritoriesUseCase = Depends(get_list_territories_uc),
    _admin: User = Depends(require_admin),
):
    return StatisticsOut.model_validate(await uc.statistics())


@router.post("", response_model=TerritoryOut, status_code=status.HTTP_201_CREATED)
async def create_territory(
    name: str = Form(...),
    file: UploadFile | None = File(None),
    map_url: str | None = Form(None),
    uc: CreateTerritoryUseCase = Depends(get_create_territory_uc),
    session: AsyncSession = Depends(get_session),
    _admin: User = Depends(require_admin),
):
    """Create a territory from an uploaded PDF/image or an external map link."""
    if file is not None and file.filename:
        territory = await uc.execute(name, filename=file.filename, content=file.file)
    else:
        territory = await uc.execute(name, map_url=map_url)
    try:
        await session.commit()
    except SQLAlchemyError:
        await uc.discard_map(territory)
        raise
    return TerritoryOut.model_validate(territory)


@router.get("/{territory_id}", response_model=TerritoryOut)
async def get_territory(
    territory_id: int,
    uc: GetTerritoryUseCase = Depends(get_territory_uc),
    user: User = Depends(get_current_user),
):
    return TerritoryOut.model_validate(await uc.execute(territory_id, user))


@router.get("/{territory_id}/history", response_model=list[HistoryEntryOut])
async def territory_history(
    territory_id: int,
    uc: GetTerritoryUseCase = Depends(get_territory_uc),
    user: User = Depends(get_current_user),
):
    """History entries, newest first."""
    return [HistoryEntryOut.model_validate(h) for h in await uc.history(territory_id, user)]


@router.patch("/{territory_id}", response_model=TerritoryOut)
async def update_territory(
    territory_id: int,
    body: TerritoryUpdateIn,
    uc: UpdateTerritoryUseCase = Depends(get_update_territory_uc),
    session: AsyncSession = Depends(get_session),
    _admin: User = Depends(require_admin),
):
    territory = await uc.execute(
        territory_id, name=body.name, permanent_notes=body.permanent_notes
    )
    await session.commit()
    return TerritoryOut.model_validate(territory)


@router.delete("/{territory_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_territory(
    territory_id: int,
    uc: DeleteTerritoryUseCase = Depends(get_delete_territory_uc),
    session: AsyncSession = Depends(get_session),
    _admin: User = Depends(require_admin),
):
    territory = await uc.execute(territory_id)
    await session.commit()
    await uc.remove_map(territory)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{territory_id}/reclaim", response_model=TerritoryOut)
async def reclaim_territory(
    territory_id: int,
    uc: ChangeTerritoryStatusUseCase = Depends(get_territory_status_uc),
    session: AsyncSession = Depends(get_session),
    _admin: User = Depends(require_admin),
):
    territory = await uc.reclaim(territory_id)
    await session.commit()
    return TerritoryOut.model_validate(territory)


@router.post("/{territory_id}/close", response_model=TerritoryOut)
async def close_territory(
    territory_id: int,
    uc: ChangeTerritoryStatusUseCase = Depends(get_territory_status_uc),
    session: AsyncSession = Depends(get_session),
    _admin: User = Depends(require_admin),
):
    territory = await uc.close(territory_id)
    await session.commit()
    return TerritoryOut.model_validate(territory)


@router.post("/{territory_id}/reopen", response_model=TerritoryOut)
async def reopen_territory(
    territory_id: int,
    uc: ChangeTerritoryStatusUseCase = Depends(get_territory_status_uc),
    session: AsyncSession = Depends(get_session),
    _admin: User = Depends(require_admin),
):
    territory = await uc.reopen(territory_id)
    await session.commit()
    return TerritoryOut.model_validate(territory)
