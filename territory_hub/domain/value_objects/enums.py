"""Domain enums: pure Python, no external dependencies."""

from enum import Enum


class TerritoryStatus(str, Enum):
    AVAILABLE = "disponivel"
    REQUESTED = "solicitado"
    IN_USE = "em_uso"
    CLOSED = "fechado"


class RequestStatus(str, Enum):
    PENDING = "pendente"
    APPROVED = "aprovado"
    REJECTED = "rejeitado"


class UserRole(str, Enum):
    ADMIN = "admin"
    PUBLISHER = "publicador"


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"


class DeadlineLevel(str, Enum):
    OVERDUE = "overdue"
    URGENT = "urgent"
    SOON = "soon"
    ON_TRACK = "on_track"
