from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from velora.models.base import TenantBase, IdMixin, TimestampMixin


class CustomerMaster(TenantBase, IdMixin, TimestampMixin):
    """Customer billed by a tenant"""

    __tablename__ = "customer_masters"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
