"""Health check endpoint."""

from pathlib import Path

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from territory_hub.adapters.persistence.database import get_session
from territory_hub.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """Report database connectivity and whether the map directory exists yet."""
    checks = {"database": "connected", "map_storage": "ready"}
    try:
        await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        checks["database"] = f"error: {e}"

    if not Path(settings.map_storage_path).is_dir():
        # created on first upload
        checks["map_storage"] = "empty"

    return {
        "status": "ok" if checks["database"] == "connected" else "degraded",
        "service": "Territory Hub",
        **checks,
    }
