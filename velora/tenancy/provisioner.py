"""
Tenant provisioning: create a database and build the tenant schema in it.

Sequence for provision(db_name):

1. validate db_name against the identifier allow-list
2. CREATE DATABASE (autocommit; not idempotent, fails if it exists)
3. get the tenant handle from the registry
4. in one transaction: run the fixed DDL plan, then record the migration
   log via the tenant migration runner
5. on any failure after step 2: evict the handle and drop the database,
   then raise ProvisioningError chained to the driver error

Step 5 means a half-built tenant database never survives a failed
provisioning attempt. On PostgreSQL the DDL in step 4 is transactional and
rolls back by itself. On SQLite it is not: pysqlite in its default
transaction handling runs CREATE TABLE outside the open transaction, so each
statement is committed as it runs and only the drop in step 5 removes them.
"""

from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Dialect, URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from velora.core.exceptions import ProvisioningError
from velora.core.logging import get_logger
from velora.tenancy import migrations
from velora.tenancy.identifiers import validate_db_name
from velora.tenancy.registry import TenantConnectionRegistry, sqlite_database_path
from velora.tenancy.schema import ddl_plan

logger = get_logger(__name__)


class SqliteDatabaseAdmin:
    """Creates and drops tenant databases as files beside the shared database."""

    def __init__(self, base_url: str | URL):
        self.base_url = make_url(base_url)

    def path_for(self, db_name: str) -> Path:
        return sqlite_database_path(self.base_url, db_name)

    def exists(self, db_name: str) -> bool:
        return self.path_for(db_name).exists()

    def create(self, db_name: str) -> None:
        path = self.path_for(db_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        # A zero-length file is a valid empty SQLite database
        path.touch(exist_ok=False)

    def drop(self, db_name: str) -> None:
        self.path_for(db_name).unlink(missing_ok=True)


class ServerDatabaseAdmin:
    """Creates and drops tenant databases on a PostgreSQL or MySQL server."""

    def __init__(self, base_url: str | URL):
        # CREATE/DROP DATABASE cannot run inside a transaction block
        self.engine = create_engine(base_url, isolation_level="AUTOCOMMIT", poolclass=NullPool)

    def _quoted(self, db_name: str) -> str:
        return self.engine.dialect.identifier_preparer.quote_identifier(validate_db_name(db_name))

    def exists(self, db_name: str) -> bool:
        if self.engine.dialect.name == "postgresql":
            query = text("SELECT 1 FROM pg_database WHERE datname = :name")
        else:
            query = text("SELECT 1 FROM information_schema.schemata WHERE schema_name = :name")
        with self.engine.connect() as connection:
            return connection.execute(query, {"name": db_name}).first() is not None

    def create(self, db_name: str) -> None:
        with self.engine.connect() as connection:
            connection.execute(text(f"CREATE DATABASE {self._quoted(db_name)}"))

    def drop(self, db_name: str) -> None:
        with self.engine.connect() as connection:
            connection.execute(text(f"DROP DATABASE IF EXISTS {self._quoted(db_name)}"))


def database_admin_for(base_url: str | URL) -> SqliteDatabaseAdmin | ServerDatabaseAdmin:
    if make_url(base_url).get_backend_name() == "sqlite":
        return SqliteDatabaseAdmin(base_url)
    return ServerDatabaseAdmin(base_url)


class TenantProvisioner:
    """Brings tenant databases into existence (and removes them)"""

    def __init__(self, registry: TenantConnectionRegistry, database_admin=None):
        self.registry = registry
        self.database_admin = database_admin or database_admin_for(registry.base_url)

    def ddl_plan(self, dialect: Dialect) -> list:
        return ddl_plan(dialect)

    def exists(self, db_name: str) -> bool:
        return self.database_admin.exists(validate_db_name(db_name))

    def provision(self, db_name: str) -> int:
        """
        Create the tenant database and its full schema.

        Args:
            db_name: Generated tenant database name

        Returns:
            Schema version the new tenant database is at

        Raises:
            InvalidTenantNameError: If db_name fails the allow-list (no SQL issued)
            ProvisioningError: If the database exists already or any DDL fails
        """
        validate_db_name(db_name)
        log = logger.bind(db_name=db_name)
        log.info("tenant_provisioning_started")

        try:
            self.database_admin.create(db_name)
        except (SQLAlchemyError, OSError) as e:
            # Nothing was created, so there is nothing to compensate
            log.error("tenant_database_create_failed", error=str(e))
            raise ProvisioningError(f"Could not create tenant database {db_name}", db_name) from e

        try:
            handle = self.registry.get(db_name)
            with handle.engine.begin() as connection:
                statements = self.ddl_plan(connection.dialect)
                for statement in statements:
                    connection.execute(statement)
                migrations.upgrade(connection)
                version = migrations.current_version(connection)
        except Exception as e:
            log.error("tenant_provisioning_failed", error=str(e))
            self._compensate(db_name)
            raise ProvisioningError(f"Could not build schema for tenant database {db_name}", db_name) from e

        log.info("tenant_provisioned", statements=len(statements), schema_version=version)
        return version

    def drop(self, db_name: str) -> None:
        """Evict the cached handle and drop the tenant database if it exists."""
        validate_db_name(db_name)
        self.registry.evict(db_name)
        self.database_admin.drop(db_name)
        logger.info("tenant_database_dropped", db_name=db_name)

    def _compensate(self, db_name: str) -> None:
        try:
            self.drop(db_name)
        except (SQLAlchemyError, OSError) as e:
            logger.error("tenant_compensation_failed", db_name=db_name, error=str(e))
