"""Territory Hub: FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from territory_hub.adapters.persistence.database import engine
from territory_hub.config import settings
from territory_hub.domain.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    TerritoryHubError,
    ValidationError,
)
from territory_hub.infrastructure.api.routes_auth import router as auth_router
from territory_hub.infrastructure.api.routes_health import router as health_router
from territory_hub.infrastructure.api.routes_notifications import router as notifications_router
from territory_hub.infrastructure.api.routes_publisher import router as publisher_router
from territory_hub.infrastructure.api.routes_requests import router as requests_router
from territory_hub.infrastructure.api.routes_territories import router as territories_router
from territory_hub.infrastructure.api.routes_users import router as users_router

logger = logging.getLogger(__name__)

_ERROR_STATUS: dict[type[TerritoryHubError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


async def domain_error_handler(request: Request, exc: TerritoryHubError) -> JSONResponse:
    code = next(
        (c for cls, c in _ERROR_STATUS.items() if isinstance(exc, cls)),
        status.HTTP_400_BAD_REQUEST,
    )
    logger.info("%s %s → %d: %s", request.method, request.url.path, code, exc)
    return JSONResponse(status_code=code, content={"detail": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Territory Hub",
        description="Congregation territory requests, assignment and work history",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TerritoryHubError, domain_error_handler)

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    app.include_router(territories_router, prefix="/api")
    app.include_router(requests_router, prefix="/api")
    app.include_router(publisher_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(notifications_router, prefix="/api")

    # Uploaded map files
    app.mount(
        settings.map_public_prefix,
        StaticFiles(directory=settings.map_storage_path, check_dir=False),
        name="maps",
    )

    return app


app = create_app()
