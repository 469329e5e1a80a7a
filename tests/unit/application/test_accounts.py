"""Tests for sign-up, log-in, role management and notifications."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import pytest

from territory_hub.application.use_cases.auth import LoginUseCase, SignUpUseCase
from territory_hub.application.use_cases.manage_users import (
    ChangeUserRoleUseCase,
    ListUsersUseCase,
)
from territory_hub.application.use_cases.notifications import NotificationsUseCase
from territory_hub.domain.entities.notification import Notification
from territory_hub.domain.entities.user import User
from territory_hub.domain.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from territory_hub.domain.value_objects.enums import UserRole
from tests.fakes import (
    FakeNotificationRepo,
    FakeTokenIssuer,
    FakeUserRepo,
    PlainPasswordHasher,
)


def _signup(users):
    return SignUpUseCase(users, PlainPasswordHasher(), FakeTokenIssuer())


def _login(users):
    return LoginUseCase(users, PlainPasswordHasher(), FakeTokenIssuer())


class ThreadRecordingHasher(PlainPasswordHasher):
    def __init__(self):
        self.threads: list[int] = []

    def hash(self, password):
        self.threads.append(threading.get_ident())
        return super().hash(password)

    def verify(self, password, password_hash):
        self.threads.append(threading.get_ident())
        return super().verify(password, password_hash)


# ─── Sign-up / log-in ───────────────────────────────────────────────


@pytest.mark.asyncio
async def test_first_user_becomes_admin_then_publishers():
    users = FakeUserRepo()
    first = await _signup(users).execute("Ana", "Ana@Example.org ", "secret1")
    second = await _signup(users).execute("Paulo", "paulo@example.org", "secret2")

    assert first.user.role == UserRole.ADMIN
    assert first.user.email == "ana@example.org"
    assert first.access_token == "token-1"
    assert second.user.role == UserRole.PUBLISHER
    assert users.users[2].password_hash == "plain:secret2"


@pytest.mark.asyncio
async def test_signup_name_defaults_to_email_local_part():
    result = await _signup(FakeUserRepo()).execute("  ", "joana@example.org", "secret1")
    assert result.user.name == "joana"


@pytest.mark.asyncio
async def test_signup_duplicate_email():
    users = FakeUserRepo()
    await _signup(users).execute("Ana", "ana@example.org", "secret1")
    with pytest.raises(ConflictError):
        await _signup(users).execute("Outra", "ANA@example.org", "secret1")


@pytest.mark.asyncio
@pytest.mark.parametrize("email,password", [("not-an-email", "secret1"), ("a@b.org", "123")])
async def test_signup_validation(email, password):
    users = FakeUserRepo()
    with pytest.raises(ValidationError):
        await _signup(users).execute("X", email, password)
    assert users.users == {}


@pytest.mark.asyncio
async def test_login_success():
    users = FakeUserRepo()
    await _signup(users).execute("Ana", "ana@example.org", "secret1")
    result = await _login(users).execute(" ANA@example.org", "secret1")
    assert result.user.id == 1
    assert result.access_token == "token-1"


@pytest.mark.asyncio
async def test_login_wrong_password_or_unknown_email():
    users = FakeUserRepo()
    await _signup(users).execute("Ana", "ana@example.org", "secret1")
    with pytest.raises(AuthenticationError):
        await _login(users).execute("ana@example.org", "wrong")
    with pytest.raises(AuthenticationError):
        await _login(users).execute("nobody@example.org", "secret1")


@pytest.mark.asyncio
async def test_login_disabled_account():
    users = FakeUserRepo([
        User(id=1, email="a@b.org", name="A", password_hash="plain:secret1", active=False),
    ])
    with pytest.raises(AuthenticationError):
        await _login(users).execute("a@b.org", "secret1")


@pytest.mark.asyncio
async def test_password_hashing_runs_off_the_event_loop():
    users, hasher = FakeUserRepo(), ThreadRecordingHasher()
    await SignUpUseCase(users, hasher, FakeTokenIssuer()).execute("Ana", "ana@example.org", "secret1")
    await LoginUseCase(users, hasher, FakeTokenIssuer()).execute("ana@example.org", "secret1")

    assert len(hasher.threads) == 2
    assert threading.get_ident() not in hasher.threads


# ─── Users ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_users_sorted_by_display_name(admin_user):
    users = FakeUserRepo([
        admin_user,
        User(id=2, email="zeca@b.org", name="Zeca"),
        User(id=3, email="bruno@b.org", name=""),
    ])
    listed = await ListUsersUseCase(users).execute()
    assert [u.id for u in listed] == [1, 3, 2]


@pytest.mark.asyncio
async def test_promote_publisher(admin_user, publisher_user):
    users = FakeUserRepo([admin_user, publisher_user])
    user = await ChangeUserRoleUseCase(users).execute(admin_user, 2, UserRole.ADMIN)
    assert user.role == UserRole.ADMIN
    assert users.users[2].role == UserRole.ADMIN


@pytest.mark.asyncio
async def test_cannot_change_own_role(admin_user):
    users = FakeUserRepo([admin_user])
    with pytest.raises(PermissionDeniedError):
        await ChangeUserRoleUseCase(users).execute(admin_user, 1, UserRole.PUBLISHER)
    assert users.users[1].role == UserRole.ADMIN


@pytest.mark.asyncio
async def test_change_role_unknown_user(admin_user):
    with pytest.raises(NotFoundError):
        await ChangeUserRoleUseCase(FakeUserRepo([admin_user])).execute(admin_user, 9, UserRole.ADMIN)


# ─── Notifications ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_recent_notifications_newest_first_and_limited(publisher_user):
    repo = FakeNotificationRepo()
    base = datetime(2025, 6, 1, tzinfo=timezone.utc)
    for i in range(5):
        await repo.save(Notification(id=None, user_id=2, message=f"m{i}", created_at=base + timedelta(hours=i)))
    await repo.save(Notification(id=None, user_id=1, message="other", created_at=base))

    recent = await NotificationsUseCase(repo, limit=3).list_recent(publisher_user)
    assert [n.message for n in recent] == ["m4", "m3", "m2"]


@pytest.mark.asyncio
async def test_mark_read_only_touches_own(publisher_user):
    repo = FakeNotificationRepo()
    mine = await repo.save(Notification(id=None, user_id=2, message="a"))
    other = await repo.save(Notification(id=None, user_id=1, message="b"))

    updated = await NotificationsUseCase(repo).mark_read(publisher_user, [mine.id, other.id])

    assert updated == 1
    assert mine.read is True
    assert other.read is False


@pytest.mark.asyncio
async def test_mark_read_empty_list(publisher_user):
    assert await NotificationsUseCase(FakeNotificationRepo()).mark_read(publisher_user, []) == 0
