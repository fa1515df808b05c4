from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from velora.core.exceptions import ConflictException, NotFoundException, ValidationException
from velora.models.item import ItemMaster
from velora.repositories.item_repository import ItemRepository
from velora.repositories.master_data_repository import (
    CategoryRepository,
    TaxRateRepository,
    UnitRepository,
)
from velora.schemas.item_schemas import ItemCreate, ItemUpdate


class ItemService:
    """Service for item master data"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ItemRepository(db)
        self.category_repo = CategoryRepository(db)
        self.tax_repo = TaxRateRepository(db)
        self.unit_repo = UnitRepository(db)

    def create_item(self, data: ItemCreate) -> ItemMaster:
        """
        Create an item.

        Raises:
            ConflictException: If the item code already exists
            NotFoundException: If a referenced category/tax/unit doesn't exist
        """
        if self.repo.get_by_code(data.item_code):
            raise ConflictException("Item code already exists")

        item = ItemMaster(**data.model_dump())
        self._apply_links(item)
        return self._save(item, create=True)

    def get_items(self) -> list[ItemMaster]:
        return self.repo.get_all()

    def get_item(self, item_id: str) -> ItemMaster:
        item = self.repo.get_by_id(item_id)
        if not item:
            raise NotFoundException("Item not found")
        return item

    def update_item(self, item_id: str, data: ItemUpdate) -> ItemMaster:
        item = self.get_item(item_id)
        changes = data.model_dump(exclude_unset=True)

        new_code = changes.get("item_code")
        if new_code and new_code != item.item_code and self.repo.get_by_code(new_code):
            raise ConflictException("Item code already exists")

        for field, value in changes.items():
            if value is None and field not in ("category_id", "tax_id", "unit_id", "image_url"):
                continue
            setattr(item, field, value)

        self._apply_links(item)
        return self._save(item, create=False)

    def delete_item(self, item_id: str) -> None:
        """
        Raises:
            ValidationException: If the item appears on a recorded sale
        """
        item = self.get_item(item_id)
        try:
            self.repo.delete(item)
        except IntegrityError:
            self.db.rollback()
            raise ValidationException("Item is used in sales and cannot be deleted")

    def _apply_links(self, item: ItemMaster) -> None:
        """Check referenced lookups exist and copy the linked tax rate into item.tax"""
        if item.category_id and not self.category_repo.get_by_id(item.category_id):
            raise NotFoundException(f"Category {item.category_id} not found")
        if item.unit_id and not self.unit_repo.get_by_id(item.unit_id):
            raise NotFoundException(f"Unit {item.unit_id} not found")
        if item.tax_id:
            tax_rate = self.tax_repo.get_by_id(item.tax_id)
            if not tax_rate:
                raise NotFoundException(f"Tax rate {item.tax_id} not found")
            item.tax = tax_rate.rate

    def _save(self, item: ItemMaster, create: bool) -> ItemMaster:
        try:
            return self.repo.create(item) if create else self.repo.update(item)
        except IntegrityError:
            # Unique index item_masters_item_code_key lost a race
            self.db.rollback()
            raise ConflictException("Item code already exists")
