"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from territory_hub.domain.entities.user import User
from territory_hub.domain.value_objects.enums import UserRole


@pytest.fixture
def now():
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def admin_user():
    return User(id=1, email="admin@example.org", name="Ana Admin", role=UserRole.ADMIN)


@pytest.fixture
def publisher_user():
    return User(id=2, email="paulo@example.org", name="Paulo", role=UserRole.PUBLISHER)
