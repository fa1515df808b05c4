from datetime import datetime
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from velora.models.sale import Sale, SaleItem


class SaleRepository:
    """Repository for Sale data access on a tenant session"""

    def __init__(self, db: Session):
        self.db = db

    def _with_details(self):
        return self.db.query(Sale).options(
            joinedload(Sale.customer),
            selectinload(Sale.lines).joinedload(SaleItem.item),
        )

    def create(self, sale: Sale) -> Sale:
        """Create a sale together with its lines (one commit)"""
        self.db.add(sale)
        self.db.commit()
        self.db.refresh(sale)
        return sale

    def get_by_id(self, sale_id: str) -> Optional[Sale]:
        """Get sale with customer and lines (each with its item) loaded"""
        return self._with_details().filter(Sale.id == sale_id).first()

    def get_report(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Sale]:
        """
        Sales report, newest first.

        Args:
            start: Only sales created at or after this instant
            end: Only sales created before this instant

        Returns:
            Sales with customer and lines loaded
        """
        query = self._with_details()
        if start is not None:
            query = query.filter(Sale.created_at >= start)
        if end is not None:
            query = query.filter(Sale.created_at < end)
        return query.order_by(Sale.created_at.desc()).all()

    def sum_total(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> float:
        """Sum of total_amount in [start, end); 0.0 when there are no sales"""
        query = self.db.query(func.coalesce(func.sum(Sale.total_amount), 0.0))
        if start is not None:
            query = query.filter(Sale.created_at >= start)
        if end is not None:
            query = query.filter(Sale.created_at < end)
        return float(query.scalar())
