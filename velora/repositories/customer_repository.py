from sqlalchemy.orm import Session
from velora.models.customer import CustomerMaster


class CustomerRepository:
    """Repository for CustomerMaster operations on a tenant session"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list[CustomerMaster]:
        return self.db.query(CustomerMaster).order_by(CustomerMaster.name).all()

    def get_by_id(self, customer_id: str) -> CustomerMaster | None:
        return self.db.query(CustomerMaster).filter(CustomerMaster.id == customer_id).first()

    def count(self) -> int:
        return self.db.query(CustomerMaster).count()

    def create(self, customer: CustomerMaster) -> CustomerMaster:
        self.db.add(customer)
        self.db.commit()
        self.db.refresh(customer)
        return customer

    def update(self, customer: CustomerMaster) -> CustomerMaster:
        self.db.commit()
        self.db.refresh(customer)
        return customer

    def delete(self, customer: CustomerMaster) -> None:
        self.db.delete(customer)
        self.db.commit()
