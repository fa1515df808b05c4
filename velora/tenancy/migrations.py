"""
Versioned schema migrations for tenant databases.

Each tenant database records applied migrations in its schema_version
table. A single runner walks every tenant and applies whatever is pending,
so all tenants converge on LATEST_VERSION instead of drifting apart.

Migrations must be safe to re-run against a database that already has the
change (check before altering): tenants provisioned with the current DDL
already contain every column and only need the version rows recorded.
"""

from dataclasses import dataclass, field
from typing import Callable

from sqlalchemy import func, inspect, select, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from velora.core.exceptions import VeloraException
from velora.core.logging import get_logger
from velora.models.base import utcnow
from velora.models.schema_version import SchemaVersion
from velora.repositories.company_repository import CompanyRepository
from velora.tenancy.registry import TenantConnectionRegistry, TenantHandle
from velora.tenancy.schema import TABLE_ORDER

logger = get_logger(__name__)

schema_version_table = SchemaVersion.__table__


class TenantMigrationError(VeloraException):
    """Raised when a tenant database cannot be migrated"""

    pass


@dataclass(frozen=True)
class TenantMigration:
    version: int
    description: str
    upgrade: Callable[[Connection], None]


def _baseline(connection: Connection) -> None:
    inspector = inspect(connection)
    missing = [name for name in TABLE_ORDER if not inspector.has_table(name)]
    if missing:
        raise TenantMigrationError(f"Tenant database is missing baseline tables: {', '.join(missing)}")


def _add_item_image_url(connection: Connection) -> None:
    columns = {column["name"] for column in inspect(connection).get_columns("item_masters")}
    if "image_url" not in columns:
        connection.execute(text("ALTER TABLE item_masters ADD COLUMN image_url VARCHAR(500)"))


MIGRATIONS: tuple[TenantMigration, ...] = (
    TenantMigration(1, "baseline tenant schema", _baseline),
    TenantMigration(2, "add item image url", _add_item_image_url),
)

LATEST_VERSION = MIGRATIONS[-1].version


@dataclass
class MigrationResult:
    """Outcome of migrating one tenant database"""

    db_name: str
    from_version: int
    to_version: int
    applied: list[int] = field(default_factory=list)
    error: str | None = None


def current_version(connection: Connection) -> int:
    """Highest recorded version; 0 for a tenant that predates schema_version."""
    if not inspect(connection).has_table(schema_version_table.name):
        return 0
    version = connection.execute(select(func.max(schema_version_table.c.version))).scalar()
    return version or 0


def pending(connection: Connection) -> list[TenantMigration]:
    version = current_version(connection)
    return [migration for migration in MIGRATIONS if migration.version > version]


def upgrade(connection: Connection) -> list[int]:
    """
    Apply pending migrations in order on an open connection.

    The caller owns the transaction. Returns the versions applied.
    """
    schema_version_table.create(connection, checkfirst=True)

    applied = []
    for migration in pending(connection):
        migration.upgrade(connection)
        connection.execute(
            schema_version_table.insert().values(
                version=migration.version,
                description=migration.description,
                applied_at=utcnow(),
            )
        )
        applied.append(migration.version)
    return applied


def migrate_tenant(handle: TenantHandle) -> MigrationResult:
    """Bring one tenant database to LATEST_VERSION in a single transaction."""
    with handle.engine.begin() as connection:
        from_version = current_version(connection)
        applied = upgrade(connection)

    to_version = applied[-1] if applied else from_version
    if applied:
        logger.info(
            "tenant_migrated",
            db_name=handle.db_name,
            from_version=from_version,
            to_version=to_version,
        )
    return MigrationResult(
        db_name=handle.db_name,
        from_version=from_version,
        to_version=to_version,
        applied=applied,
    )


def migrate_all(db: Session, registry: TenantConnectionRegistry) -> list[MigrationResult]:
    """
    Migrate every company's tenant database.

    A tenant that fails is reported in its MigrationResult.error and does
    not stop the remaining tenants.
    """
    results = []
    for company in CompanyRepository(db).get_all():
        try:
            results.append(migrate_tenant(registry.get(company.db_name)))
        except (SQLAlchemyError, VeloraException) as e:
            logger.error("tenant_migration_failed", db_name=company.db_name, error=str(e))
            results.append(
                MigrationResult(db_name=company.db_name, from_version=-1, to_version=-1, error=str(e))
            )
    return results
