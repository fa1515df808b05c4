from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from velora.dependencies import get_tenant_db
from velora.services.invoice_service import render_invoice
from velora.services.sale_service import SaleService
from velora.schemas.sale_schemas import SaleCreate, SaleResponse, SaleReportResponse

router = APIRouter()


@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
def create_sale(data: SaleCreate, db: Session = Depends(get_tenant_db)):
    """
    Create a sale.

    Line amounts and the sale total are computed from each item's current
    selling rate and tax.
    """
    service = SaleService(db)
    return service.create_sale(data)


@router.get("", response_model=SaleReportResponse)
def sales_report(
    start: Optional[datetime] = Query(None, description="Inclusive lower bound on created_at"),
    end: Optional[datetime] = Query(None, description="Exclusive upper bound on created_at"),
    db: Session = Depends(get_tenant_db),
):
    """Sales report, newest first, with the grand total"""
    service = SaleService(db)
    sales, grand_total = service.get_report(start, end)
    return SaleReportResponse(sales=sales, total=len(sales), grand_total=grand_total)


@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(sale_id: str, db: Session = Depends(get_tenant_db)):
    service = SaleService(db)
    return service.get_sale(sale_id)


@router.get("/{sale_id}/invoice", response_class=PlainTextResponse)
def get_invoice(sale_id: str, db: Session = Depends(get_tenant_db)):
    """Fixed-width receipt text for the sale"""
    service = SaleService(db)
    return render_invoice(service.get_sale(sale_id))
