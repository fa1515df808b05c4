from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from velora.dependencies import get_tenant_db
from velora.services.item_service import ItemService
from velora.schemas.item_schemas import (
    ItemCreate,
    ItemUpdate,
    ItemResponse,
    ItemListResponse,
)

router = APIRouter()


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(data: ItemCreate, db: Session = Depends(get_tenant_db)):
    """Create an item in the company's catalogue"""
    service = ItemService(db)
    return service.create_item(data)


@router.get("", response_model=ItemListResponse)
def list_items(db: Session = Depends(get_tenant_db)):
    service = ItemService(db)
    items = service.get_items()
    return ItemListResponse(items=items, total=len(items))


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: str, db: Session = Depends(get_tenant_db)):
    service = ItemService(db)
    return service.get_item(item_id)


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(item_id: str, data: ItemUpdate, db: Session = Depends(get_tenant_db)):
    """Update item details. Linking a tax rate copies its rate into the item's tax."""
    service = ItemService(db)
    return service.update_item(item_id, data)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: str, db: Session = Depends(get_tenant_db)):
    """Delete an item that has not been sold"""
    service = ItemService(db)
    service.delete_item(item_id)
    return None
