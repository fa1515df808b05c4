# Import every model so string relationships resolve on both metadata roots
from velora.models.base import Base, TenantBase
from velora.models.admin import Admin
from velora.models.company import Company
from velora.models.master_data import Category, TaxRate, Unit
from velora.models.item import ItemMaster
from velora.models.customer import CustomerMaster
from velora.models.sale import Sale, SaleItem
from velora.models.schema_version import SchemaVersion

__all__ = [
    "Base",
    "TenantBase",
    "Admin",
    "Company",
    "Category",
    "TaxRate",
    "Unit",
    "ItemMaster",
    "CustomerMaster",
    "Sale",
    "SaleItem",
    "SchemaVersion",
]
