from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional


class ItemCreate(BaseModel):
    """Schema for creating an item"""

    item_code: str = Field(..., min_length=1, max_length=50)
    item_name: str = Field(..., min_length=1, max_length=255)
    tax: float = Field(0.0, ge=0, le=100, description="Tax percentage; overridden by tax_id's rate")
    purchase_rate: float = Field(0.0, ge=0)
    selling_rate: float = Field(..., ge=0)
    mrp: float = Field(..., ge=0)
    category_id: Optional[str] = None
    tax_id: Optional[str] = None
    unit_id: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)


class ItemUpdate(BaseModel):
    """Schema for updating an item"""

    item_code: Optional[str] = Field(None, min_length=1, max_length=50)
    item_name: Optional[str] = Field(None, min_length=1, max_length=255)
    tax: Optional[float] = Field(None, ge=0, le=100)
    purchase_rate: Optional[float] = Field(None, ge=0)
    selling_rate: Optional[float] = Field(None, ge=0)
    mrp: Optional[float] = Field(None, ge=0)
    category_id: Optional[str] = None
    tax_id: Optional[str] = None
    unit_id: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)


class ItemResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    item_code: str
    item_name: str
    tax: float
    purchase_rate: float
    selling_rate: float
    mrp: float
    category_id: Optional[str]
    tax_id: Optional[str]
    unit_id: Optional[str]
    image_url: Optional[str]
    created_at: datetime
    updated_at: datetime


class ItemListResponse(BaseModel):
    items: list[ItemResponse]
    total: int
