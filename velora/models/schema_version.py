from datetime import datetime

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from velora.models.base import TenantBase, utcnow


class SchemaVersion(TenantBase):
    """
    Migration log inside each tenant database.

    One row per applied tenant migration; the highest version is the
    tenant's current schema version.
    """

    __tablename__ = "schema_version"

    version: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    applied_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
