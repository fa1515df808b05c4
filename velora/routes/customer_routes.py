from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from velora.dependencies import get_tenant_db
from velora.services.customer_service import CustomerService
from velora.schemas.customer_schemas import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerListResponse,
)

router = APIRouter()


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(data: CustomerCreate, db: Session = Depends(get_tenant_db)):
    service = CustomerService(db)
    return service.create_customer(data)


@router.get("", response_model=CustomerListResponse)
def list_customers(db: Session = Depends(get_tenant_db)):
    """Get all customers of the company"""
    service = CustomerService(db)
    customers = service.get_customers()
    return CustomerListResponse(customers=customers, total=len(customers))


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: str, db: Session = Depends(get_tenant_db)):
    service = CustomerService(db)
    return service.get_customer(customer_id)


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(customer_id: str, data: CustomerUpdate, db: Session = Depends(get_tenant_db)):
    service = CustomerService(db)
    return service.update_customer(customer_id, data)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: str, db: Session = Depends(get_tenant_db)):
    """Delete a customer without sales"""
    service = CustomerService(db)
    service.delete_customer(customer_id)
    return None
