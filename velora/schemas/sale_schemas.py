from datetime import datetime
from pydantic import BaseModel, Field

from velora.schemas.customer_schemas import CustomerResponse
from velora.schemas.item_schemas import ItemResponse


class SaleLineCreate(BaseModel):
    """One line of a new sale"""

    item_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    discount: float = Field(0.0, ge=0, le=100, description="Line discount percentage")


class SaleCreate(BaseModel):
    """
    Schema for creating a sale.

    The total is computed server-side from the items' current selling rate
    and tax; no client-supplied total is accepted.
    """

    customer_id: str = Field(..., min_length=1)
    items: list[SaleLineCreate] = Field(..., min_length=1, max_length=200)


class SaleLineResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    line_no: int
    item_id: str
    quantity: int
    discount: float
    item: ItemResponse


class SaleResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    customer_id: str
    total_amount: float
    created_at: datetime
    updated_at: datetime
    customer: CustomerResponse
    lines: list[SaleLineResponse]


class SaleReportResponse(BaseModel):
    """Sales report, newest first"""

    sales: list[SaleResponse]
    total: int
    grand_total: float


class DashboardStatsResponse(BaseModel):
    total_sales: float
    total_customers: int
    total_items: int
    monthly_growth: float = Field(..., description="Month-over-month change in percent")
