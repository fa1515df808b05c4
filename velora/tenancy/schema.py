"""
Fixed DDL sequence for a tenant database.

Tables are created first, then indexes, then foreign keys as separate
ALTER TABLE statements, because a constraint can only be added once the
table it references exists. Dialects without ALTER ... ADD CONSTRAINT
(SQLite) get the foreign keys inline in CREATE TABLE instead; SQLite
accepts references to tables that are created later in the sequence.
"""

from sqlalchemy import Table
from sqlalchemy.engine import Dialect
from sqlalchemy.schema import AddConstraint, CreateIndex, CreateTable, ForeignKeyConstraint

import velora.models  # noqa: F401  (registers every tenant table)
from velora.models.base import TenantBase
from velora.models.schema_version import SchemaVersion

# items, customers, sales, sale-lines, categories, tax-rates, units
TABLE_ORDER = (
    "item_masters",
    "customer_masters",
    "sales",
    "sale_items",
    "categories",
    "taxes",
    "units",
)

FOREIGN_KEY_ORDER = (
    ("sale_items", "sale_items_sale_id_fkey"),
    ("sale_items", "sale_items_item_id_fkey"),
    ("item_masters", "item_masters_category_id_fkey"),
    ("item_masters", "item_masters_tax_id_fkey"),
    ("item_masters", "item_masters_unit_id_fkey"),
    ("sales", "sales_customer_id_fkey"),
)


def tenant_tables() -> list[Table]:
    return [TenantBase.metadata.tables[name] for name in TABLE_ORDER]


def _foreign_key(table_name: str, constraint_name: str) -> ForeignKeyConstraint:
    table = TenantBase.metadata.tables[table_name]
    for constraint in table.foreign_key_constraints:
        if constraint.name == constraint_name:
            return constraint
    raise KeyError(f"{table_name} has no foreign key {constraint_name}")


def ddl_plan(dialect: Dialect) -> list:
    """
    Ordered DDL statements that build a tenant schema on the given dialect.

    The last statement creates the schema_version table; the migration
    runner records the applied versions right after the plan executes.
    """
    inline_foreign_keys = not dialect.supports_alter

    plan = []
    for table in tenant_tables():
        plan.append(
            CreateTable(table, include_foreign_key_constraints=None if inline_foreign_keys else [])
        )

    for table in tenant_tables():
        for index in sorted(table.indexes, key=lambda i: i.name):
            plan.append(CreateIndex(index))

    if not inline_foreign_keys:
        for table_name, constraint_name in FOREIGN_KEY_ORDER:
            plan.append(AddConstraint(_foreign_key(table_name, constraint_name)))

    plan.append(CreateTable(SchemaVersion.__table__))
    return plan
