"""Tests for the SQLAlchemy repositories against a throwaway SQLite file."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from territory_hub.adapters.persistence.database import Base
from territory_hub.adapters.persistence.repositories import (
    SqlNotificationRepository,
    SqlRequestRepository,
    SqlTerritoryRepository,
    SqlUserRepository,
    purge_all,
)
from territory_hub.application.use_cases.assign_territory import AssignTerritoryUseCase
from territory_hub.application.use_cases.publisher import SubmitReportUseCase
from territory_hub.domain.entities.notification import Notification
from territory_hub.domain.entities.territory import HistoryEntry, Territory
from territory_hub.domain.entities.territory_request import TerritoryRequest
from territory_hub.domain.entities.user import User
from territory_hub.domain.errors import ConflictError
from territory_hub.domain.value_objects.clock import as_utc
from territory_hub.domain.value_objects.enums import (
    NotificationType,
    RequestStatus,
    TerritoryStatus,
    UserRole,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@asynccontextmanager
async def _database(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield async_sessionmaker(engine, expire_on_commit=False)
    finally:
        await engine.dispose()


async def _seed_users(session):
    users = SqlUserRepository(session)
    admin = await users.save(User(id=None, email="ana@x.org", name="Ana", role=UserRole.ADMIN, password_hash="h"))
    publisher = await users.save(User(id=None, email="paulo@x.org", name="Paulo", password_hash="h"))
    return admin, publisher


# ─── Users ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_user_round_trip_and_role_update(tmp_path):
    async with _database(tmp_path) as factory:
        async with factory() as s:
            _, publisher = await _seed_users(s)
            await s.commit()

        async with factory() as s:
            users = SqlUserRepository(s)
            assert await users.count() == 2
            found = await users.get_by_email("paulo@x.org")
            assert found.id == publisher.id
            assert found.role == UserRole.PUBLISHER
            assert await users.get_by_email("nobody@x.org") is None

            await users.update_role(publisher.id, UserRole.ADMIN)
            await s.commit()

        async with factory() as s:
            assert (await SqlUserRepository(s).get_by_id(publisher.id)).role == UserRole.ADMIN


# ─── Territories ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_territory_save_update_and_history(tmp_path):
    async with _database(tmp_path) as factory:
        async with factory() as s:
            _, publisher = await _seed_users(s)
            repo = SqlTerritoryRepository(s)
            t = await repo.save(Territory(id=None, name="Centro 1", map_url="/maps/c1.pdf", created_at=NOW))
            t.assign(publisher.id, "Paulo", NOW, NOW + timedelta(days=30))
            await repo.update(t)
            await repo.add_history(
                t.id,
                HistoryEntry(user_id=7, user_name="Ana", completed_date=NOW - timedelta(days=90), notes="ok"),
            )
            await s.commit()

        async with factory() as s:
            repo = SqlTerritoryRepository(s)
            loaded = await repo.get_by_id(t.id)
            assert loaded.status == TerritoryStatus.IN_USE
            assert loaded.assigned_to == publisher.id
            assert as_utc(loaded.due_date) == NOW + timedelta(days=30)
            assert [h.user_name for h in loaded.history] == ["Ana"]
            assert loaded.history[0].notes == "ok"

            held = await repo.get_in_use_by_user(publisher.id)
            assert held.id == t.id
            assert await repo.get_in_use_by_user(999) is None


@pytest.mark.asyncio
async def test_territory_delete_cascades_history(tmp_path):
    async with _database(tmp_path) as factory:
        async with factory() as s:
            repo = SqlTerritoryRepository(s)
            t = await repo.save(Territory(id=None, name="T", map_url="/maps/t.pdf"))
            await repo.add_history(t.id, HistoryEntry(user_id=1, user_name="A", completed_date=NOW))
            await s.commit()

        async with factory() as s:
            repo = SqlTerritoryRepository(s)
            await repo.delete(t.id)
            await s.commit()

        async with factory() as s:
            repo = SqlTerritoryRepository(s)
            assert await repo.get_by_id(t.id) is None
            assert await repo.get_all() == []


# ─── Requests / notifications ───────────────────────────────────────


@pytest.mark.asyncio
async def test_pending_requests(tmp_path):
    async with _database(tmp_path) as factory:
        async with factory() as s:
            admin, publisher = await _seed_users(s)
            repo = SqlRequestRepository(s)
            older = await repo.save(TerritoryRequest(
                id=None, user_id=admin.id, user_name="Ana", request_date=NOW - timedelta(days=2),
            ))
            newer = await repo.save(TerritoryRequest(
                id=None, user_id=publisher.id, user_name="Paulo", request_date=NOW,
            ))
            await repo.update_status(older.id, RequestStatus.REJECTED)
            await s.commit()

        async with factory() as s:
            repo = SqlRequestRepository(s)
            assert [r.id for r in await repo.get_pending()] == [newer.id]
            assert (await repo.get_pending_by_user(publisher.id)).id == newer.id
            assert await repo.get_pending_by_user(admin.id) is None
            assert (await repo.get_for_update(older.id)).status == RequestStatus.REJECTED


@pytest.mark.asyncio
async def test_one_pending_request_per_user(tmp_path):
    async with _database(tmp_path) as factory:
        async with factory() as s:
            _, publisher = await _seed_users(s)
            repo = SqlRequestRepository(s)
            first = await repo.save(TerritoryRequest(id=None, user_id=publisher.id, user_name="Paulo"))
            await repo.update_status(first.id, RequestStatus.REJECTED)
            # a handled request does not block a new one
            await repo.save(TerritoryRequest(id=None, user_id=publisher.id, user_name="Paulo"))
            await s.commit()

        async with factory() as s:
            with pytest.raises(ConflictError):
                await SqlRequestRepository(s).save(
                    TerritoryRequest(id=None, user_id=publisher.id, user_name="Paulo")
                )
            await s.rollback()

        async with factory() as s:
            assert len(await SqlRequestRepository(s).get_pending()) == 1


@pytest.mark.asyncio
async def test_notifications_recent_and_mark_read(tmp_path):
    async with _database(tmp_path) as factory:
        async with factory() as s:
            admin, publisher = await _seed_users(s)
            repo = SqlNotificationRepository(s)
            ids = []
            for i in range(3):
                n = await repo.save(Notification(
                    id=None, user_id=publisher.id, message=f"m{i}", created_at=NOW + timedelta(minutes=i),
                ))
                ids.append(n.id)
            foreign = await repo.save(Notification(id=None, user_id=admin.id, message="x"))
            await s.commit()

        async with factory() as s:
            repo = SqlNotificationRepository(s)
            recent = await repo.get_recent_by_user(publisher.id, limit=2)
            assert [n.message for n in recent] == ["m2", "m1"]
            assert await repo.mark_read(publisher.id, [ids[0], foreign.id]) == 1
            await s.commit()

        async with factory() as s:
            recent = await SqlNotificationRepository(s).get_recent_by_user(publisher.id, limit=5)
            assert [n.read for n in recent] == [False, False, True]


# ─── Use cases over SQL ─────────────────────────────────────────────


@pytest.mark.asyncio
async def test_assign_then_report_over_sql(tmp_path):
    async with _database(tmp_path) as factory:
        async with factory() as s:
            _, publisher = await _seed_users(s)
            territory = await SqlTerritoryRepository(s).save(
                Territory(id=None, name="Centro 1", map_url="/maps/c1.pdf")
            )
            request = await SqlRequestRepository(s).save(
                TerritoryRequest(id=None, user_id=publisher.id, user_name="Paulo")
            )
            await s.commit()

        async with factory() as s:
            uc = AssignTerritoryUseCase(
                SqlTerritoryRepository(s), SqlRequestRepository(s), SqlNotificationRepository(s)
            )
            await uc.execute(request.id, territory.id, now=NOW)
            await s.commit()

        async with factory() as s:
            entry = await SubmitReportUseCase(SqlTerritoryRepository(s)).execute(
                publisher, "Concluído", now=NOW + timedelta(days=10)
            )
            await s.commit()
            assert entry.user_name == "Paulo"

        async with factory() as s:
            loaded = await SqlTerritoryRepository(s).get_by_id(territory.id)
            assert loaded.status == TerritoryStatus.AVAILABLE
            assert loaded.assigned_to is None
            assert len(loaded.history) == 1
            assert as_utc(loaded.history[0].assignment_date) == NOW
            assert (await SqlRequestRepository(s).get_for_update(request.id)).status == RequestStatus.APPROVED
            notes = await SqlNotificationRepository(s).get_recent_by_user(publisher.id, 10)
            assert [n.type for n in notes] == [NotificationType.SUCCESS]


@pytest.mark.asyncio
async def test_purge_all(tmp_path):
    async with _database(tmp_path) as factory:
        async with factory() as s:
            await _seed_users(s)
            await SqlTerritoryRepository(s).save(Territory(id=None, name="T", map_url="/maps/t.pdf"))
            await s.commit()

        async with factory() as s:
            await purge_all(s)
            await s.commit()

        async with factory() as s:
            assert await SqlUserRepository(s).count() == 0
            assert await SqlTerritoryRepository(s).get_all() == []
