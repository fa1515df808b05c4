"""Lookup tables referenced by items: categories, tax rates and units."""

from sqlalchemy import String, Float
from sqlalchemy.orm import Mapped, mapped_column

from velora.models.base import TenantBase, IdMixin, TimestampMixin


class Category(TenantBase, IdMixin, TimestampMixin):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), nullable=False)


class TaxRate(TenantBase, IdMixin, TimestampMixin):
    """Tax percentage, e.g. 18.0 for 18% GST"""

    __tablename__ = "taxes"

    rate: Mapped[float] = mapped_column(Float, nullable=False)


class Unit(TenantBase, IdMixin, TimestampMixin):
    """Unit of measure, e.g. 'kg', 'pcs'"""

    __tablename__ = "units"

    symbol: Mapped[str] = mapped_column(String(50), nullable=False)
