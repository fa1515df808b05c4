from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from velora.models.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from velora.models.company import Company


class Admin(Base, IdMixin, TimestampMixin):
    """
    Operator of the admin panel.

    An admin creates companies and only ever sees the companies they created.
    """

    __tablename__ = "admins"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    companies: Mapped[list["Company"]] = relationship("Company", back_populates="admin")

    def __repr__(self) -> str:
        return f"<Admin(id={self.id}, email='{self.email}')>"
