from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from velora.dependencies import get_tenant_db
from velora.services.dashboard_service import DashboardService
from velora.schemas.sale_schemas import DashboardStatsResponse

router = APIRouter()


@router.get("/stats", response_model=DashboardStatsResponse)
def dashboard_stats(db: Session = Depends(get_tenant_db)):
    """Totals and month-over-month sales growth for the company"""
    return DashboardService(db).get_stats()
