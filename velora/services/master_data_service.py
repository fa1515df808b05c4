"""Services for the category, tax-rate and unit lookup tables."""

from sqlalchemy.orm import Session

from velora.core.exceptions import NotFoundException
from velora.models.item import ItemMaster
from velora.models.master_data import Category, TaxRate, Unit
from velora.repositories.master_data_repository import (
    CategoryRepository,
    TaxRateRepository,
    UnitRepository,
)
from velora.schemas.master_data_schemas import TaxRateIn


class MasterDataService:
    """CRUD for one lookup table. Subclasses set repository_class, model and label."""

    repository_class = None
    model = None
    label = "Record"

    def __init__(self, db: Session):
        self.db = db
        self.repo = self.repository_class(db)

    def create(self, data):
        return self.repo.create(self.model(**data.model_dump()))

    def get_all(self) -> list:
        return self.repo.get_all()

    def get(self, record_id: str):
        record = self.repo.get_by_id(record_id)
        if not record:
            raise NotFoundException(f"{self.label} not found")
        return record

    def update(self, record_id: str, data):
        record = self.get(record_id)
        for field, value in data.model_dump().items():
            setattr(record, field, value)
        return self.repo.update(record)

    def delete(self, record_id: str) -> None:
        self.repo.delete(self.get(record_id))


class CategoryService(MasterDataService):
    repository_class = CategoryRepository
    model = Category
    label = "Category"


class UnitService(MasterDataService):
    repository_class = UnitRepository
    model = Unit
    label = "Unit"


class TaxRateService(MasterDataService):
    """
    Tax rates.

    Changing a rate re-syncs item.tax on every item linked to it, so an
    item's display tax never drifts from its linked rate.
    """

    repository_class = TaxRateRepository
    model = TaxRate
    label = "Tax rate"

    def update(self, record_id: str, data: TaxRateIn) -> TaxRate:
        tax_rate = self.get(record_id)
        tax_rate.rate = data.rate
        self.db.query(ItemMaster).filter(ItemMaster.tax_id == tax_rate.id).update(
            {ItemMaster.tax: data.rate}, synchronize_session=False
        )
        return self.repo.update(tax_rate)
