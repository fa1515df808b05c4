from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from velora.database import get_db
from velora.dependencies import get_current_admin, get_provisioner, get_registry
from velora.models.admin import Admin
from velora.services.auth_service import AuthService
from velora.services.company_service import CompanyService
from velora.schemas.admin_schemas import (
    AdminRegister,
    AdminLogin,
    AdminResponse,
    AdminLoginResponse,
)
from velora.schemas.company_schemas import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
    CompanyDeleteResponse,
    MigrationRunResponse,
)
from velora.tenancy import migrations
from velora.tenancy.provisioner import TenantProvisioner
from velora.tenancy.registry import TenantConnectionRegistry

router = APIRouter()


@router.post("/register", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
def register(data: AdminRegister, db: Session = Depends(get_db)):
    """Register a new admin"""
    return AuthService(db).register_admin(data)


@router.post("/login", response_model=AdminLoginResponse)
def login(data: AdminLogin, db: Session = Depends(get_db)):
    """Admin login"""
    return AuthService(db).login_admin(data)


@router.post("/companies", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
def create_company(
    data: CompanyCreate,
    admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
    provisioner: TenantProvisioner = Depends(get_provisioner),
):
    """
    Create a company and provision its tenant database.

    - Generates the tenant database name (immutable afterwards)
    - Builds the full tenant schema; a failed build leaves no database behind
    """
    service = CompanyService(db, provisioner)
    return service.create_company(data, admin)


@router.get("/companies", response_model=list[CompanyResponse])
def list_companies(
    admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
    provisioner: TenantProvisioner = Depends(get_provisioner),
):
    """List the admin's companies, newest first"""
    return CompanyService(db, provisioner).list_companies(admin)


@router.put("/companies/{company_id}", response_model=CompanyResponse)
def update_company(
    company_id: str,
    data: CompanyUpdate,
    admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
    provisioner: TenantProvisioner = Depends(get_provisioner),
):
    """Update company details"""
    return CompanyService(db, provisioner).update_company(company_id, data, admin)


@router.delete("/companies/{company_id}", response_model=CompanyDeleteResponse)
def delete_company(
    company_id: str,
    admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
    provisioner: TenantProvisioner = Depends(get_provisioner),
):
    """Delete the company record. The tenant database is kept."""
    CompanyService(db, provisioner).delete_company(company_id, admin)
    return CompanyDeleteResponse(message="Company deleted successfully")


@router.patch("/companies/{company_id}/toggle-status", response_model=CompanyResponse)
def toggle_company_status(
    company_id: str,
    admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
    provisioner: TenantProvisioner = Depends(get_provisioner),
):
    """Flip the company's active flag"""
    return CompanyService(db, provisioner).toggle_status(company_id, admin)


@router.post("/migrations/run", response_model=MigrationRunResponse)
def run_tenant_migrations(
    admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
    registry: TenantConnectionRegistry = Depends(get_registry),
):
    """
    Apply pending schema migrations to every tenant database.

    Tenants that fail are reported with an error and do not stop the run.
    """
    results = migrations.migrate_all(db, registry)
    return MigrationRunResponse(latest_version=migrations.LATEST_VERSION, results=results)
