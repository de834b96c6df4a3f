"""Enums and type aliases for tenantorders."""

from enum import StrEnum


class OrderStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Role(StrEnum):
    ADMIN = "admin"
    STAFF = "staff"


class DenialReason(StrEnum):
    CROSS_TENANT_ACCESS = "cross_tenant_access"
    PERMISSION_DENIED = "permission_denied"
