"""Publisher self-service endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from territory_hub.adapters.persistence.database import get_session
from territory_hub.application.use_cases.publisher import (
    PublisherDashboardUseCase,
    RequestTerritoryUseCase,
    SubmitReportUseCase,
)
from territory_hub.domain.entities.user import User
from territory_hub.infrastructure.api.dependencies import (
    get_current_user,
    get_publisher_dashboard_uc,
    get_request_territory_uc,
    get_submit_report_uc,
)
from territory_hub.infrastructure.api.schemas import (
    HistoryEntryOut,
    PublisherDashboardOut,
    ReportIn,
    TerritoryRequestOut,
)

router = APIRouter(prefix="/publisher", tags=["publisher"])


@router.get("/dashboard", response_model=PublisherDashboardOut)
async def dashboard(
    uc: PublisherDashboardUseCase = Depends(get_publisher_dashboard_uc),
    user: User = Depends(get_current_user),
):
    """Current territory (with deadline info) and pending-request flag."""
    return PublisherDashboardOut.model_validate(await uc.execute(user))


@router.post("/requests", response_model=TerritoryRequestOut, status_code=status.HTTP_201_CREATED)
async def request_territory(
    uc: RequestTerritoryUseCase = Depends(get_request_territory_uc),
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
):
    request = await uc.execute(user)
    await session.commit()
    return TerritoryRequestOut.model_validate(request)


@router.post("/territory/report", response_model=HistoryEntryOut)
async def submit_report(
    body: ReportIn,
    uc: SubmitReportUseCase = Depends(get_submit_report_uc),
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Complete the current territory and return it to the pool."""
    entry = await uc.execute(user, body.notes)
    await session.commit()
    return HistoryEntryOut.model_validate(entry)
