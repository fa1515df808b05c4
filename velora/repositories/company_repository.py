"""Repository for Company (tenant record) operations."""

from sqlalchemy.orm import Session
from velora.models.company import Company


class CompanyRepository:
    """Repository for Company model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list[Company]:
        """
        Get every company, across all admins.

        Used by the tenant migration runner.
        """
        return self.db.query(Company).order_by(Company.created_at).all()

    def get_by_admin(self, admin_id: str) -> list[Company]:
        """Get an admin's companies, newest first"""
        return (
            self.db.query(Company)
            .filter(Company.admin_id == admin_id)
            .order_by(Company.created_at.desc())
            .all()
        )

    def get_by_id_and_admin(self, company_id: str, admin_id: str) -> Company | None:
        """
        Get company ensuring it belongs to the admin.

        Returns None if company doesn't exist or belongs to another admin.
        """
        return (
            self.db.query(Company)
            .filter(Company.id == company_id, Company.admin_id == admin_id)
            .first()
        )

    def get_by_email(self, email: str) -> Company | None:
        return self.db.query(Company).filter(Company.email == email).first()

    def create(self, company: Company) -> Company:
        self.db.add(company)
        self.db.commit()
        self.db.refresh(company)
        return company

    def update(self, company: Company) -> Company:
        self.db.commit()
        self.db.refresh(company)
        return company

    def delete(self, company: Company) -> None:
        """
        Delete the company record.

        The tenant database named by company.db_name is NOT dropped.
        """
        self.db.delete(company)
        self.db.commit()
