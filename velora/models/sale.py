from sqlalchemy import String, Integer, Float, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from velora.models.base import TenantBase, IdMixin, TimestampMixin, new_id

if TYPE_CHECKING:
    from velora.models.customer import CustomerMaster
    from velora.models.item import ItemMaster


class Sale(TenantBase, IdMixin, TimestampMixin):
    """
    Invoice header.

    total_amount is computed by the sale service from the lines at creation
    time and stored; it is never accepted from the client.
    """

    __tablename__ = "sales"

    total_amount: Mapped[float] = mapped_column(Float, nullable=False)
    customer_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey(
            "customer_masters.id",
            name="sales_customer_id_fkey",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
    )

    # Relationships
    customer: Mapped["CustomerMaster"] = relationship("CustomerMaster")
    lines: Mapped[list["SaleItem"]] = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",  # Lines live and die with the sale
        order_by="SaleItem.line_no",
    )


class SaleItem(TenantBase):
    """One item/quantity/discount line of a sale. discount is a percentage."""

    __tablename__ = "sale_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    line_no: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    discount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    sale_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey(
            "sales.id",
            name="sale_items_sale_id_fkey",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    item_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey(
            "item_masters.id",
            name="sale_items_item_id_fkey",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
    )

    # Relationships
    sale: Mapped["Sale"] = relationship("Sale", back_populates="lines")
    item: Mapped["ItemMaster"] = relationship("ItemMaster")
