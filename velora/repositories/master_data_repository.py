"""Repositories for the category, tax-rate and unit lookup tables."""

from sqlalchemy.orm import Session
from velora.models.master_data import Category, TaxRate, Unit


class MasterDataRepository:
    """Shared CRUD for a lookup table; subclasses set model"""

    model = None

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list:
        return self.db.query(self.model).order_by(self.model.created_at).all()

    def get_by_id(self, record_id: str):
        return self.db.query(self.model).filter(self.model.id == record_id).first()

    def create(self, record):
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def update(self, record):
        self.db.commit()
        self.db.refresh(record)
        return record

    def delete(self, record) -> None:
        """Items referencing the record keep existing; their FK is set NULL"""
        self.db.delete(record)
        self.db.commit()


class CategoryRepository(MasterDataRepository):
    model = Category


class TaxRateRepository(MasterDataRepository):
    model = TaxRate


class UnitRepository(MasterDataRepository):
    model = Unit
