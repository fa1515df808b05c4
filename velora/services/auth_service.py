from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from velora.core.exceptions import ConflictException, UnauthorizedException
from velora.core.logging import get_logger
from velora.core.security import (
    ADMIN_TOKEN,
    COMPANY_TOKEN,
    create_access_token,
    hash_password,
    verify_password,
)
from velora.models.admin import Admin
from velora.repositories.admin_repository import AdminRepository
from velora.repositories.company_repository import CompanyRepository
from velora.schemas.admin_schemas import AdminRegister, AdminLogin, AdminLoginResponse
from velora.schemas.company_schemas import CompanyLogin, CompanyLoginResponse

logger = get_logger(__name__)


class AuthService:
    """Registration and login for admins and companies"""

    def __init__(self, db: Session):
        self.db = db
        self.admin_repo = AdminRepository(db)
        self.company_repo = CompanyRepository(db)

    def register_admin(self, data: AdminRegister) -> Admin:
        """
        Register a new operator.

        Raises:
            ConflictException: If the email is already registered
        """
        if self.admin_repo.get_by_email(data.email):
            raise ConflictException("Email already exists")

        admin = Admin(
            email=data.email,
            name=data.name,
            password_hash=hash_password(data.password),
            is_active=data.is_active,
        )
        try:
            admin = self.admin_repo.create(admin)
        except IntegrityError:
            self.db.rollback()
            raise ConflictException("Email already exists")

        logger.info("admin_registered", admin_id=admin.id)
        return admin

    def login_admin(self, data: AdminLogin) -> AdminLoginResponse:
        """
        Raises:
            UnauthorizedException: Unknown email, wrong password or inactive account
        """
        admin = self.admin_repo.get_by_email(data.email)
        if not admin or not verify_password(data.password, admin.password_hash):
            raise UnauthorizedException("Invalid credentials")
        if not admin.is_active:
            raise UnauthorizedException("Account is inactive")

        token = create_access_token(admin.id, ADMIN_TOKEN, {"email": admin.email})
        return AdminLoginResponse(access_token=token, admin=admin)

    def login_company(self, data: CompanyLogin) -> CompanyLoginResponse:
        """
        Company login.

        The issued token carries the company's db_name claim; every
        company-facing request is routed to that tenant database.

        Raises:
            UnauthorizedException: Unknown email, wrong password or inactive account
        """
        company = self.company_repo.get_by_email(data.email)
        if not company or not verify_password(data.password, company.password_hash):
            raise UnauthorizedException("Invalid credentials")
        if not company.is_active:
            raise UnauthorizedException("Account is inactive")

        token = create_access_token(
            company.id,
            COMPANY_TOKEN,
            {"email": company.email, "db_name": company.db_name},
        )
        return CompanyLoginResponse(access_token=token, company=company)
