from sqlalchemy.orm import Session
from velora.models.admin import Admin


class AdminRepository:
    """Repository for Admin model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, admin_id: str) -> Admin | None:
        return self.db.query(Admin).filter(Admin.id == admin_id).first()

    def get_by_email(self, email: str) -> Admin | None:
        return self.db.query(Admin).filter(Admin.email == email).first()

    def create(self, admin: Admin) -> Admin:
        self.db.add(admin)
        self.db.commit()
        self.db.refresh(admin)
        return admin
