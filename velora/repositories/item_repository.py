from sqlalchemy.orm import Session
from velora.models.item import ItemMaster


class ItemRepository:
    """Repository for ItemMaster operations on a tenant session"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list[ItemMaster]:
        return self.db.query(ItemMaster).order_by(ItemMaster.item_code).all()

    def get_by_id(self, item_id: str) -> ItemMaster | None:
        return self.db.query(ItemMaster).filter(ItemMaster.id == item_id).first()

    def get_by_ids(self, item_ids: list[str]) -> dict[str, ItemMaster]:
        """Fetch several items at once, keyed by id"""
        if not item_ids:
            return {}
        items = self.db.query(ItemMaster).filter(ItemMaster.id.in_(item_ids)).all()
        return {item.id: item for item in items}

    def get_by_code(self, item_code: str) -> ItemMaster | None:
        return self.db.query(ItemMaster).filter(ItemMaster.item_code == item_code).first()

    def count(self) -> int:
        return self.db.query(ItemMaster).count()

    def create(self, item: ItemMaster) -> ItemMaster:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def update(self, item: ItemMaster) -> ItemMaster:
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete(self, item: ItemMaster) -> None:
        self.db.delete(item)
        self.db.commit()
