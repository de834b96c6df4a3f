"""SQLModel database table models."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


def _utc_now() -> datetime:
    """Return current UTC time as naive datetime for TIMESTAMP WITHOUT TIME ZONE columns."""
    return datetime.now(UTC).replace(tzinfo=None)


def _new_uuid() -> str:
    return str(uuid.uuid4())


class TenantRow(SQLModel, table=True):
    __tablename__ = "tenants"

    id: str = Field(primary_key=True)
    name: str
    created_at: datetime = Field(default_factory=_utc_now)


class OrderRow(SQLModel, table=True):
    __tablename__ = "orders"

    id: str = Field(default_factory=_new_uuid, primary_key=True)
    # No foreign key: the store is shared and isolation is enforced by policy
    tenant_id: str = Field(index=True)
    customer_name: str
    status: str = Field(default="pending")  # pending | in_progress | completed
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)
