from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from velora.core.exceptions import NotFoundException
from velora.core.logging import get_logger
from velora.models.sale import Sale, SaleItem
from velora.repositories.customer_repository import CustomerRepository
from velora.repositories.item_repository import ItemRepository
from velora.repositories.sale_repository import SaleRepository
from velora.schemas.sale_schemas import SaleCreate

logger = get_logger(__name__)


@dataclass(frozen=True)
class LineAmounts:
    subtotal: float
    discount_amount: float
    tax_amount: float
    total: float


def calculate_line(quantity: int, rate: float, discount: float, tax: float) -> LineAmounts:
    """
    Canonical sale-line formula.

    subtotal        = quantity * rate
    discount_amount = subtotal * discount% / 100
    tax_amount      = (subtotal - discount_amount) * tax% / 100
    total           = subtotal - discount_amount + tax_amount

    Discount is applied before tax. Every amount is rounded to 2 places.
    """
    subtotal = quantity * rate
    discount_amount = subtotal * discount / 100
    taxable = subtotal - discount_amount
    tax_amount = taxable * tax / 100
    return LineAmounts(
        subtotal=round(subtotal, 2),
        discount_amount=round(discount_amount, 2),
        tax_amount=round(tax_amount, 2),
        total=round(taxable + tax_amount, 2),
    )


def line_amounts(line: SaleItem) -> LineAmounts:
    """Amounts for a stored sale line, priced at its item's current rate and tax"""
    return calculate_line(line.quantity, line.item.selling_rate, line.discount, line.item.tax)


class SaleService:
    """Service layer for sales entry and the sales report"""

    def __init__(self, db: Session):
        self.db = db
        self.sale_repo = SaleRepository(db)
        self.customer_repo = CustomerRepository(db)
        self.item_repo = ItemRepository(db)

    def create_sale(self, data: SaleCreate) -> Sale:
        """
        Create a sale with its lines and a server-computed total.

        Args:
            data: Customer and lines (item, quantity, discount %)

        Returns:
            Created sale with customer and lines loaded

        Raises:
            NotFoundException: If the customer or any item doesn't exist
        """
        if not self.customer_repo.get_by_id(data.customer_id):
            raise NotFoundException(f"Customer {data.customer_id} not found")

        items = self.item_repo.get_by_ids([line.item_id for line in data.items])
        missing = [line.item_id for line in data.items if line.item_id not in items]
        if missing:
            raise NotFoundException(f"Item {missing[0]} not found")

        lines = []
        total = 0.0
        for line_no, line in enumerate(data.items, start=1):
            item = items[line.item_id]
            amounts = calculate_line(line.quantity, item.selling_rate, line.discount, item.tax)
            total += amounts.total
            lines.append(
                SaleItem(
                    line_no=line_no,
                    item_id=item.id,
                    quantity=line.quantity,
                    discount=line.discount,
                )
            )

        sale = Sale(customer_id=data.customer_id, total_amount=round(total, 2), lines=lines)
        sale = self.sale_repo.create(sale)
        logger.info("sale_created", sale_id=sale.id, lines=len(lines), total_amount=sale.total_amount)
        return self.sale_repo.get_by_id(sale.id)

    def get_sale(self, sale_id: str) -> Sale:
        sale = self.sale_repo.get_by_id(sale_id)
        if not sale:
            raise NotFoundException("Sale not found")
        return sale

    def get_report(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> tuple[list[Sale], float]:
        """
        Returns:
            Tuple of (sales newest first, grand total of their amounts)
        """
        sales = self.sale_repo.get_report(start, end)
        grand_total = round(sum(sale.total_amount for sale in sales), 2)
        return sales, grand_total
