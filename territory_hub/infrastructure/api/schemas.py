"""Request / response schemas for the HTTP API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from territory_hub.domain.value_objects.enums import (
    DeadlineLevel,
    NotificationType,
    RequestStatus,
    TerritoryStatus,
    UserRole,
)

# ── Auth ────────────────────────────────────────────────────────────


class SignUpIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=255)
    password: str


class LoginIn(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: UserRole
    active: bool
    created_at: datetime


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class RoleIn(BaseModel):
    role: UserRole


# ── Territories ─────────────────────────────────────────────────────


class HistoryEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int | None
    user_name: str
    assignment_date: datetime | None
    completed_date: datetime
    notes: str


class TerritoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    status: TerritoryStatus
    map_url: str
    created_at: datetime
    assigned_to: int | None
    assigned_to_name: str | None
    assignment_date: datetime | None
    due_date: datetime | None
    permanent_notes: str
    history: list[HistoryEntryOut]


class TerritoryUpdateIn(BaseModel):
    name: str | None = None
    permanent_notes: str | None = None


class InactiveTerritoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    territory_id: int | None
    name: str
    days_inactive: int


class StatisticsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    available: int
    in_use: int
    closed: int
    requested: int
    longest_inactive: list[InactiveTerritoryOut]


# ── Requests ────────────────────────────────────────────────────────


class TerritoryRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    user_name: str
    request_date: datetime
    status: RequestStatus


class AssignIn(BaseModel):
    territory_id: int


# ── Publisher ───────────────────────────────────────────────────────


class PublisherDashboardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    territory: TerritoryOut | None
    has_pending_request: bool
    days_remaining: int | None
    deadline_level: DeadlineLevel | None


class ReportIn(BaseModel):
    notes: str


# ── Notifications ───────────────────────────────────────────────────


class NotificationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    message: str
    type: NotificationType
    read: bool
    created_at: datetime


class MarkReadIn(BaseModel):
    ids: list[int]
