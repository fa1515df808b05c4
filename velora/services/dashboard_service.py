from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from velora.models.base import utcnow
from velora.repositories.customer_repository import CustomerRepository
from velora.repositories.item_repository import ItemRepository
from velora.repositories.sale_repository import SaleRepository
from velora.schemas.sale_schemas import DashboardStatsResponse


def month_start(year: int, month: int) -> datetime:
    # Normalise month overflow/underflow, e.g. (2026, 0) -> Dec 2025
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return datetime(year, month, 1)


def growth_percent(current: float, previous: float) -> float:
    """Month-over-month growth; 100 when there was nothing last month, 0 when nothing at all"""
    if previous > 0:
        growth = (current - previous) / previous * 100
    elif current > 0:
        growth = 100.0
    else:
        growth = 0.0
    return round(growth, 2)


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self.sale_repo = SaleRepository(db)
        self.customer_repo = CustomerRepository(db)
        self.item_repo = ItemRepository(db)

    def get_stats(self, now: Optional[datetime] = None) -> DashboardStatsResponse:
        now = now or utcnow()
        current_month = month_start(now.year, now.month)
        previous_month = month_start(now.year, now.month - 1)
        next_month = month_start(now.year, now.month + 1)

        current_total = self.sale_repo.sum_total(current_month, next_month)
        previous_total = self.sale_repo.sum_total(previous_month, current_month)

        return DashboardStatsResponse(
            total_sales=round(self.sale_repo.sum_total(), 2),
            total_customers=self.customer_repo.count(),
            total_items=self.item_repo.count(),
            monthly_growth=growth_percent(current_total, previous_total),
        )
