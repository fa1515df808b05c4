"""Routes for the category, tax-rate and unit lookup tables"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from velora.dependencies import get_tenant_db
from velora.services.master_data_service import CategoryService, TaxRateService, UnitService
from velora.schemas.master_data_schemas import (
    CategoryIn,
    CategoryResponse,
    TaxRateIn,
    TaxRateResponse,
    UnitIn,
    UnitResponse,
)

categories_router = APIRouter()
taxes_router = APIRouter()
units_router = APIRouter()


@categories_router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(data: CategoryIn, db: Session = Depends(get_tenant_db)):
    return CategoryService(db).create(data)


@categories_router.get("", response_model=list[CategoryResponse])
def list_categories(db: Session = Depends(get_tenant_db)):
    return CategoryService(db).get_all()


@categories_router.put("/{category_id}", response_model=CategoryResponse)
def update_category(category_id: str, data: CategoryIn, db: Session = Depends(get_tenant_db)):
    return CategoryService(db).update(category_id, data)


@categories_router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: str, db: Session = Depends(get_tenant_db)):
    """Delete a category; linked items keep existing without one"""
    CategoryService(db).delete(category_id)
    return None


@taxes_router.post("", response_model=TaxRateResponse, status_code=status.HTTP_201_CREATED)
def create_tax_rate(data: TaxRateIn, db: Session = Depends(get_tenant_db)):
    return TaxRateService(db).create(data)


@taxes_router.get("", response_model=list[TaxRateResponse])
def list_tax_rates(db: Session = Depends(get_tenant_db)):
    return TaxRateService(db).get_all()


@taxes_router.put("/{tax_id}", response_model=TaxRateResponse)
def update_tax_rate(tax_id: str, data: TaxRateIn, db: Session = Depends(get_tenant_db)):
    """Change a tax rate and every linked item's tax"""
    return TaxRateService(db).update(tax_id, data)


@taxes_router.delete("/{tax_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tax_rate(tax_id: str, db: Session = Depends(get_tenant_db)):
    TaxRateService(db).delete(tax_id)
    return None


@units_router.post("", response_model=UnitResponse, status_code=status.HTTP_201_CREATED)
def create_unit(data: UnitIn, db: Session = Depends(get_tenant_db)):
    return UnitService(db).create(data)


@units_router.get("", response_model=list[UnitResponse])
def list_units(db: Session = Depends(get_tenant_db)):
    return UnitService(db).get_all()


@units_router.put("/{unit_id}", response_model=UnitResponse)
def update_unit(unit_id: str, data: UnitIn, db: Session = Depends(get_tenant_db)):
    return UnitService(db).update(unit_id, data)


@units_router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_unit(unit_id: str, db: Session = Depends(get_tenant_db)):
    UnitService(db).delete(unit_id)
    return None
