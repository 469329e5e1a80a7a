"""FastAPI dependency injection: wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from territory_hub.adapters.persistence.database import get_session
from territory_hub.adapters.persistence.repositories import (
    SqlNotificationRepository,
    SqlRequestRepository,
    SqlTerritoryRepository,
    SqlUserRepository,
)
from territory_hub.adapters.security.passwords import BcryptPasswordHasher
from territory_hub.adapters.security.tokens import JwtTokenIssuer
from territory_hub.adapters.storage.local_storage import LocalMapStorage
from territory_hub.application.ports.map_storage_port import MapStoragePort
from territory_hub.application.ports.notification_repo import NotificationRepository
from territory_hub.application.ports.request_repo import RequestRepository
from territory_hub.application.ports.security_port import PasswordHasher, TokenIssuer
from territory_hub.application.ports.territory_repo import TerritoryRepository
from territory_hub.application.ports.user_repo import UserRepository
from territory_hub.application.use_cases.assign_territory import (
    AssignTerritoryUseCase,
    ListPendingRequestsUseCase,
    RejectRequestUseCase,
)
from territory_hub.application.use_cases.auth import LoginUseCase, SignUpUseCase
from territory_hub.application.use_cases.manage_territories import (
    ChangeTerritoryStatusUseCase,
    CreateTerritoryUseCase,
    DeleteTerritoryUseCase,
    GetTerritoryUseCase,
    ListTerritoriesUseCase,
    UpdateTerritoryUseCase,
)
from territory_hub.application.use_cases.manage_users import (
    ChangeUserRoleUseCase,
    ListUsersUseCase,
)
from territory_hub.application.use_cases.notifications import NotificationsUseCase
from territory_hub.application.use_cases.publisher import (
    PublisherDashboardUseCase,
    RequestTerritoryUseCase,
    SubmitReportUseCase,
)
from territory_hub.config import settings
from territory_hub.domain.entities.user import User
from territory_hub.domain.errors import AuthenticationError


# Singleton adapters (stateless)
_hasher = BcryptPasswordHasher()
_tokens = JwtTokenIssuer()
_storage = LocalMapStorage()

_bearer = HTTPBearer(auto_error=False)


def get_password_hasher() -> PasswordHasher:
    return _hasher


def get_token_issuer() -> TokenIssuer:
    return _tokens


def get_map_storage() -> MapStoragePort:
    return _storage


# ─── Repositories ────────────────────────────────────────────────────


def get_user_repo(session: AsyncSession = Depends(get_session)) -> UserRepository:
    return SqlUserRepository(session)


def get_territory_repo(session: AsyncSession = Depends(get_session)) -> TerritoryRepository:
    return SqlTerritoryRepository(session)


def get_request_repo(session: AsyncSession = Depends(get_session)) -> RequestRepository:
    return SqlRequestRepository(session)


def get_notification_repo(
    session: AsyncSession = Depends(get_session),
) -> NotificationRepository:
    return SqlNotificationRepository(session)


# ─── Identity ────────────────────────────────────────────────────────


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    tokens: TokenIssuer = Depends(get_token_issuer),
    users: UserRepository = Depends(get_user_repo),
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = tokens.decode(credentials.credentials)
        user_id = int(claims["sub"])
    except (AuthenticationError, KeyError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e) or "Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    user = await users.get_by_id(user_id)
    if user is None or not user.active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


# ─── Use cases ───────────────────────────────────────────────────────


def get_signup_uc(
    users: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> SignUpUseCase:
    return SignUpUseCase(users=users, hasher=hasher, tokens=tokens)


def get_login_uc(
    users: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> LoginUseCase:
    return LoginUseCase(users=users, hasher=hasher, tokens=tokens)


def get_list_territories_uc(
    territories: TerritoryRepository = Depends(get_territory_repo),
) -> ListTerritoriesUseCase:
    return ListTerritoriesUseCase(territories, rest_days=settings.rest_period_days)


def get_territory_uc(
    territories: TerritoryRepository = Depends(get_territory_repo),
) -> GetTerritoryUseCase:
    return GetTerritoryUseCase(territories)


def get_create_territory_uc(
    territories: TerritoryRepository = Depends(get_territory_repo),
    storage: MapStoragePort = Depends(get_map_storage),
) -> CreateTerritoryUseCase:
    return CreateTerritoryUseCase(territories, storage)


def get_update_territory_uc(
    territories: TerritoryRepository = Depends(get_territory_repo),
) -> UpdateTerritoryUseCase:
    return UpdateTerritoryUseCase(territories)


def get_delete_territory_uc(
    territories: TerritoryRepository = Depends(get_territory_repo),
    storage: MapStoragePort = Depends(get_map_storage),
) -> DeleteTerritoryUseCase:
    return DeleteTerritoryUseCase(territories, storage)


def get_territory_status_uc(
    territories: TerritoryRepository = Depends(get_territory_repo),
    notifications: NotificationRepository = Depends(get_notification_repo),
) -> ChangeTerritoryStatusUseCase:
    return ChangeTerritoryStatusUseCase(territories, notifications)


def get_assign_territory_uc(
    territories: TerritoryRepository = Depends(get_territory_repo),
    requests: RequestRepository = Depends(get_request_repo),
    notifications: NotificationRepository = Depends(get_notification_repo),
) -> AssignTerritoryUseCase:
    return AssignTerritoryUseCase(
        territories=territories,
        requests=requests,
        notifications=notifications,
        period_days=settings.assignment_period_days,
    )


def get_reject_request_uc(
    requests: RequestRepository = Depends(get_request_repo),
) -> RejectRequestUseCase:
    return RejectRequestUseCase(requests)


def get_pending_requests_uc(
    requests: RequestRepository = Depends(get_request_repo),
) -> ListPendingRequestsUseCase:
    return ListPendingRequestsUseCase(requests)


def get_request_territory_uc(
    territories: TerritoryRepository = Depends(get_territory_repo),
    requests: RequestRepository = Depends(get_request_repo),
) -> RequestTerritoryUseCase:
    return RequestTerritoryUseCase(territories, requests)


def get_submit_report_uc(
    territories: TerritoryRepository = Depends(get_territory_repo),
) -> SubmitReportUseCase:
    return SubmitReportUseCase(territories)


def get_publisher_dashboard_uc(
    territories: TerritoryRepository = Depends(get_territory_repo),
    requests: RequestRepository = Depends(get_request_repo),
) -> PublisherDashboardUseCase:
    return PublisherDashboardUseCase(territories, requests)


def get_list_users_uc(users: UserRepository = Depends(get_user_repo)) -> ListUsersUseCase:
    return ListUsersUseCase(users)


def get_change_role_uc(users: UserRepository = Depends(get_user_repo)) -> ChangeUserRoleUseCase:
    return ChangeUserRoleUseCase(users)


def get_notifications_uc(
    notifications: NotificationRepository = Depends(get_notification_repo),
) -> NotificationsUseCase:
    return NotificationsUseCase(notifications, limit=settings.notification_limit)
