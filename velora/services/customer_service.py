from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from velora.core.exceptions import NotFoundException, ValidationException
from velora.models.customer import CustomerMaster
from velora.repositories.customer_repository import CustomerRepository
from velora.schemas.customer_schemas import CustomerCreate, CustomerUpdate


class CustomerService:
    """Service for customer master data"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CustomerRepository(db)

    def create_customer(self, data: CustomerCreate) -> CustomerMaster:
        return self.repo.create(CustomerMaster(**data.model_dump()))

    def get_customers(self) -> list[CustomerMaster]:
        return self.repo.get_all()

    def get_customer(self, customer_id: str) -> CustomerMaster:
        customer = self.repo.get_by_id(customer_id)
        if not customer:
            raise NotFoundException("Customer not found")
        return customer

    def update_customer(self, customer_id: str, data: CustomerUpdate) -> CustomerMaster:
        customer = self.get_customer(customer_id)

        if data.name is not None:
            customer.name = data.name
        if data.phone is not None:
            customer.phone = data.phone
        if "email" in data.model_fields_set:
            customer.email = data.email

        return self.repo.update(customer)

    def delete_customer(self, customer_id: str) -> None:
        """
        Raises:
            ValidationException: If the customer has sales (FK is RESTRICT)
        """
        customer = self.get_customer(customer_id)
        try:
            self.repo.delete(customer)
        except IntegrityError:
            self.db.rollback()
            raise ValidationException("Customer has sales and cannot be deleted")
