"""Company model: the tenant record kept in the shared database."""

from sqlalchemy import String, Boolean, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from velora.models.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from velora.models.admin import Admin


class Company(Base, IdMixin, TimestampMixin):
    """
    One tenant of the system.

    Every company owns a dedicated database named by db_name. The name is
    generated once at creation time and never changes; it is also the key
    under which the tenant connection handle is cached.

    Deleting a company removes this record only. The tenant database is
    left in place (no cascading teardown).
    """

    __tablename__ = "companies"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    logo: Mapped[str | None] = mapped_column(String(500), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    pin_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    gst_number: Mapped[str | None] = mapped_column(String(20), nullable=True)

    db_name: Mapped[str] = mapped_column(String(63), unique=True, nullable=False)
    admin_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("admins.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Relationships
    admin: Mapped["Admin"] = relationship("Admin", back_populates="companies")

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name='{self.name}', db_name='{self.db_name}')>"
