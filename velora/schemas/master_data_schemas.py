from datetime import datetime
from pydantic import BaseModel, Field


class CategoryIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class CategoryResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class TaxRateIn(BaseModel):
    rate: float = Field(..., ge=0, le=100, description="Percentage, e.g. 18 for 18%")


class TaxRateResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    rate: float
    created_at: datetime
    updated_at: datetime


class UnitIn(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=50)


class UnitResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    symbol: str
    created_at: datetime
    updated_at: datetime
