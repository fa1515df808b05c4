"""Declarative bases for the shared database and for tenant databases."""

import uuid
from datetime import datetime, UTC

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the TIMESTAMP columns in every database."""
    return datetime.now(UTC).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Shared database: admins and companies (tenant records)."""

    pass


class TenantBase(DeclarativeBase):
    """
    Tenant databases: one copy of this metadata per company.

    Never created with create_all at startup; the provisioner issues the
    DDL explicitly, see velora.tenancy.provisioner.
    """

    pass


class IdMixin:
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )
