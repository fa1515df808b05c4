from sqlalchemy import String, Float, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING, Optional
from velora.models.base import TenantBase, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from velora.models.master_data import Category, TaxRate, Unit


class ItemMaster(TenantBase, IdMixin, TimestampMixin):
    """
    Sellable item in a tenant's catalogue.

    tax is the display percentage used for billing. When tax_id links a
    TaxRate the item service copies that rate into tax.
    """

    __tablename__ = "item_masters"

    item_code: Mapped[str] = mapped_column(String(50), nullable=False)
    item_name: Mapped[str] = mapped_column(String(255), nullable=False)
    tax: Mapped[float] = mapped_column(Float, nullable=False)
    purchase_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    selling_rate: Mapped[float] = mapped_column(Float, nullable=False)
    mrp: Mapped[float] = mapped_column(Float, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    category_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey(
            "categories.id",
            name="item_masters_category_id_fkey",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
    )
    tax_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey(
            "taxes.id",
            name="item_masters_tax_id_fkey",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
    )
    unit_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey(
            "units.id",
            name="item_masters_unit_id_fkey",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
    )

    # Relationships
    category: Mapped[Optional["Category"]] = relationship("Category")
    tax_rate: Mapped[Optional["TaxRate"]] = relationship("TaxRate")
    unit: Mapped[Optional["Unit"]] = relationship("Unit")

    __table_args__ = (Index("item_masters_item_code_key", "item_code", unique=True),)
