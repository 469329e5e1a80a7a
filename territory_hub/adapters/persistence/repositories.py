"""SQLAlchemy repository implementations."""

from __future__ import annotations

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from territory_hub.adapters.persistence.models import (
    NotificationModel,
    TerritoryHistoryModel,
    TerritoryModel,
    TerritoryRequestModel,
    UserModel,
)
from territory_hub.application.ports.notification_repo import NotificationRepository
from territory_hub.application.ports.request_repo import RequestRepository
from territory_hub.application.ports.territory_repo import TerritoryRepository
from territory_hub.application.ports.user_repo import UserRepository
from territory_hub.domain.entities.notification import Notification
from territory_hub.domain.entities.territory import HistoryEntry, Territory
from territory_hub.domain.entities.territory_request import TerritoryRequest
from territory_hub.domain.entities.user import User
from territory_hub.domain.errors import ConflictError
from territory_hub.domain.value_objects.enums import (
    NotificationType,
    RequestStatus,
    TerritoryStatus,
    UserRole,
)

# ─── Mappers ─────────────────────────────────────────────────────────


def _user_to_domain(m: UserModel) -> User:
    return User(
        id=m.id,
        email=m.email,
        name=m.name,
        role=UserRole(m.role),
        password_hash=m.password_hash,
        active=m.active,
        created_at=m.created_at,
    )


def _history_to_domain(m: TerritoryHistoryModel) -> HistoryEntry:
    return HistoryEntry(
        user_id=m.user_id,
        user_name=m.user_name,
        completed_date=m.completed_date,
        assignment_date=m.assignment_date,
        notes=m.notes,
    )


def _territory_to_domain(m: TerritoryModel) -> Territory:
    return Territory(
        id=m.id,
        name=m.name,
        map_url=m.map_url,
        status=TerritoryStatus(m.status),
        created_at=m.created_at,
        assigned_to=m.assigned_to,
        assigned_to_name=m.assigned_to_name,
        assignment_date=m.assignment_date,
        due_date=m.due_date,
        history=[_history_to_domain(h) for h in m.history],
        permanent_notes=m.permanent_notes or "",
    )


def _request_to_domain(m: TerritoryRequestModel) -> TerritoryRequest:
    return TerritoryRequest(
        id=m.id,
        user_id=m.user_id,
        user_name=m.user_name,
        request_date=m.request_date,
        status=RequestStatus(m.status),
    )


def _notification_to_domain(m: NotificationModel) -> Notification:
    return Notification(
        id=m.id,
        user_id=m.user_id,
        message=m.message,
        type=NotificationType(m.type),
        read=m.read,
        created_at=m.created_at,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, user: User) -> User:
        m = UserModel(
            email=user.email,
            name=user.name,
            role=user.role.value,
            password_hash=user.password_hash,
            active=user.active,
            created_at=user.created_at,
        )
        self._s.add(m)
        await self._s.flush()
        user.id = m.id
        return user

    async def get_by_id(self, user_id: int) -> User | None:
        m = await self._s.get(UserModel, user_id)
        return _user_to_domain(m) if m else None

    async def get_by_email(self, email: str) -> User | None:
        result = await self._s.execute(select(UserModel).where(UserModel.email == email))
        m = result.scalar_one_or_none()
        return _user_to_domain(m) if m else None

    async def get_all(self) -> list[User]:
        result = await self._s.execute(select(UserModel).order_by(UserModel.name))
        return [_user_to_domain(m) for m in result.scalars()]

    async def count(self) -> int:
        return (await self._s.execute(select(func.count(UserModel.id)))).scalar() or 0

    async def update_role(self, user_id: int, role: UserRole) -> None:
        await self._s.execute(
            update(UserModel).where(UserModel.id == user_id).values(role=role.value)
        )
        await self._s.flush()


class SqlTerritoryRepository(TerritoryRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, territory: Territory) -> Territory:
        m = TerritoryModel(
            name=territory.name,
            status=territory.status.value,
            map_url=territory.map_url,
            permanent_notes=territory.permanent_notes,
            assigned_to=territory.assigned_to,
            assigned_to_name=territory.assigned_to_name,
            assignment_date=territory.assignment_date,
            due_date=territory.due_date,
            created_at=territory.created_at,
            history=[],
        )
        self._s.add(m)
        await self._s.flush()
        territory.id = m.id
        return territory

    async def get_by_id(self, territory_id: int) -> Territory | None:
        m = await self._s.get(TerritoryModel, territory_id)
        return _territory_to_domain(m) if m else None

    async def get_for_update(self, territory_id: int) -> Territory | None:
        result = await self._s.execute(
            select(TerritoryModel)
            .where(TerritoryModel.id == territory_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        m = result.scalar_one_or_none()
        return _territory_to_domain(m) if m else None

    async def get_all(self) -> list[Territory]:
        result = await self._s.execute(select(TerritoryModel).order_by(TerritoryModel.id))
        return [_territory_to_domain(m) for m in result.scalars()]

    async def get_in_use_by_user(self, user_id: int) -> Territory | None:
        result = await self._s.execute(
            select(TerritoryModel)
            .where(
                TerritoryModel.assigned_to == user_id,
                TerritoryModel.status == TerritoryStatus.IN_USE.value,
            )
            .order_by(TerritoryModel.assignment_date.desc())
            .limit(1)
        )
        m = result.scalar_one_or_none()
        return _territory_to_domain(m) if m else None

    async def update(self, territory: Territory) -> Territory:
        await self._s.execute(
            update(TerritoryModel)
            .where(TerritoryModel.id == territory.id)
            .values(
                name=territory.name,
                status=territory.status.value,
                map_url=territory.map_url,
                permanent_notes=territory.permanent_notes,
                assigned_to=territory.assigned_to,
                assigned_to_name=territory.assigned_to_name,
                assignment_date=territory.assignment_date,
                due_date=territory.due_date,
            )
            .execution_options(synchronize_session="fetch")
        )
        await self._s.flush()
        return territory

    async def add_history(self, territory_id: int, entry: HistoryEntry) -> None:
        m = await self._s.get(TerritoryModel, territory_id)
        if m is None:
            return
        m.history.append(
            TerritoryHistoryModel(
                user_id=entry.user_id,
                user_name=entry.user_name,
                assignment_date=entry.assignment_date,
                completed_date=entry.completed_date,
                notes=entry.notes,
            )
        )
        await self._s.flush()

    async def delete(self, territory_id: int) -> None:
        m = await self._s.get(TerritoryModel, territory_id)
        if m is not None:
            await self._s.delete(m)
            await self._s.flush()


class SqlRequestRepository(RequestRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, request: TerritoryRequest) -> TerritoryRequest:
        m = TerritoryRequestModel(
            user_id=request.user_id,
            user_name=request.user_name,
            status=request.status.value,
            request_date=request.request_date,
        )
        self._s.add(m)
        try:
            await self._s.flush()
        except IntegrityError as e:
            raise ConflictError("You already have a pending request") from e
        request.id = m.id
        return request

    async def get_for_update(self, request_id: int) -> TerritoryRequest | None:
        result = await self._s.execute(
            select(TerritoryRequestModel)
            .where(TerritoryRequestModel.id == request_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        m = result.scalar_one_or_none()
        return _request_to_domain(m) if m else None

    async def get_pending(self) -> list[TerritoryRequest]:
        result = await self._s.execute(
            select(TerritoryRequestModel)
            .where(TerritoryRequestModel.status == RequestStatus.PENDING.value)
            .order_by(TerritoryRequestModel.request_date.desc(), TerritoryRequestModel.id.desc())
        )
        return [_request_to_domain(m) for m in result.scalars()]

    async def get_pending_by_user(self, user_id: int) -> TerritoryRequest | None:
        result = await self._s.execute(
            select(TerritoryRequestModel)
            .where(
                TerritoryRequestModel.user_id == user_id,
                TerritoryRequestModel.status == RequestStatus.PENDING.value,
            )
            .limit(1)
        )
        m = result.scalar_one_or_none()
        return _request_to_domain(m) if m else None

    async def update_status(self, request_id: int, status: RequestStatus) -> None:
        await self._s.execute(
            update(TerritoryRequestModel)
            .where(TerritoryRequestModel.id == request_id)
            .values(status=status.value)
            .execution_options(synchronize_session="fetch")
        )
        await self._s.flush()


class SqlNotificationRepository(NotificationRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, notification: Notification) -> Notification:
        m = NotificationModel(
            user_id=notification.user_id,
            message=notification.message,
            type=notification.type.value,
            read=notification.read,
            created_at=notification.created_at,
        )
        self._s.add(m)
        await self._s.flush()
        notification.id = m.id
        return notification

    async def get_recent_by_user(self, user_id: int, limit: int) -> list[Notification]:
        result = await self._s.execute(
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .limit(limit)
        )
        return [_notification_to_domain(m) for m in result.scalars()]

    async def mark_read(self, user_id: int, notification_ids: list[int]) -> int:
        result = await self._s.execute(
            update(NotificationModel)
            .where(
                NotificationModel.user_id == user_id,
                NotificationModel.id.in_(notification_ids),
            )
            .values(read=True)
            .execution_options(synchronize_session=False)
        )
        await self._s.flush()
        return result.rowcount or 0


async def purge_all(session: AsyncSession) -> None:
    """Delete every row, children first. Used by the seed tool's --drop."""
    for model in (
        NotificationModel,
        TerritoryRequestModel,
        TerritoryHistoryModel,
        TerritoryModel,
        UserModel,
    ):
        await session.execute(delete(model))
    await session.flush()
