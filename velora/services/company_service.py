from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from velora.config import settings
from velora.core.exceptions import ConflictException, NotFoundException
from velora.core.logging import get_logger
from velora.core.security import hash_password
from velora.models.admin import Admin
from velora.models.company import Company
from velora.repositories.company_repository import CompanyRepository
from velora.schemas.company_schemas import CompanyCreate, CompanyUpdate
from velora.tenancy.identifiers import generate_db_name
from velora.tenancy.provisioner import TenantProvisioner

logger = get_logger(__name__)

# Columns that cannot be cleared through an update
_REQUIRED_FIELDS = {"email", "name", "is_active"}


class CompanyService:
    """Service layer for company (tenant) administration"""

    def __init__(self, db: Session, provisioner: TenantProvisioner):
        self.db = db
        self.repo = CompanyRepository(db)
        self.provisioner = provisioner

    def create_company(self, data: CompanyCreate, admin: Admin) -> Company:
        """
        Create a company and provision its tenant database.

        The database is provisioned before the record is written, so a
        company row never points at a database that failed to build. If the
        record cannot be written afterwards, the fresh database is dropped.

        Raises:
            ConflictException: If the company email already exists
            ProvisioningError: If the tenant database could not be built
        """
        if self.repo.get_by_email(data.email):
            raise ConflictException("Company email already exists")

        db_name = generate_db_name(settings.TENANT_DB_PREFIX)
        self.provisioner.provision(db_name)

        fields = data.model_dump(exclude={"password"})
        company = Company(
            **fields,
            password_hash=hash_password(data.password),
            db_name=db_name,
            admin_id=admin.id,
        )
        try:
            company = self.repo.create(company)
        except Exception as e:
            self.db.rollback()
            self.provisioner.drop(db_name)
            logger.error("company_record_failed", db_name=db_name, error=str(e))
            if isinstance(e, IntegrityError):
                raise ConflictException("Company email already exists") from e
            raise

        logger.info("company_created", company_id=company.id, db_name=db_name, admin_id=admin.id)
        return company

    def list_companies(self, admin: Admin) -> list[Company]:
        return self.repo.get_by_admin(admin.id)

    def get_company(self, company_id: str, admin: Admin) -> Company:
        """
        Raises:
            NotFoundException: If company not found or belongs to another admin
        """
        company = self.repo.get_by_id_and_admin(company_id, admin.id)
        if not company:
            raise NotFoundException("Company not found")
        return company

    def update_company(self, company_id: str, data: CompanyUpdate, admin: Admin) -> Company:
        company = self.get_company(company_id, admin)
        changes = data.model_dump(exclude_unset=True)

        password = changes.pop("password", None)
        if password:
            company.password_hash = hash_password(password)

        email = changes.get("email")
        if email and email != company.email and self.repo.get_by_email(email):
            raise ConflictException("Company email already exists")

        for field, value in changes.items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            setattr(company, field, value)

        return self.repo.update(company)

    def delete_company(self, company_id: str, admin: Admin) -> None:
        """
        Delete the company record and forget its cached connection.

        The tenant database itself is kept.
        """
        company = self.get_company(company_id, admin)
        db_name = company.db_name
        self.repo.delete(company)
        self.provisioner.registry.evict(db_name)
        logger.info("company_deleted", company_id=company_id, db_name=db_name)

    def toggle_status(self, company_id: str, admin: Admin) -> Company:
        company = self.get_company(company_id, admin)
        company.is_active = not company.is_active
        return self.repo.update(company)
