"""Command-line entry points.

Usage:
    velora-migrate            # migrate every tenant database
    velora-migrate --dry-run  # list tenants and their pending versions
"""

import argparse
import sys

from velora.config import settings
from velora.core.logging import configure_logging, get_logger
from velora.database import SessionLocal
from velora.repositories.company_repository import CompanyRepository
from velora.tenancy import migrations
from velora.tenancy.registry import TenantConnectionRegistry

logger = get_logger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="velora-migrate",
        description="Bring every company database to the latest tenant schema version",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report pending versions per tenant without applying them",
    )
    return parser.parse_args(argv)


def _dry_run(db, registry: TenantConnectionRegistry) -> None:
    for company in CompanyRepository(db).get_all():
        with registry.get(company.db_name).engine.connect() as connection:
            versions = [migration.version for migration in migrations.pending(connection)]
        print(f"{company.db_name}: pending {versions or 'none'}")


def main(argv=None) -> int:
    """Main entry point. Exit status is 1 if any tenant failed."""
    args = parse_args(argv)
    configure_logging()

    registry = TenantConnectionRegistry(
        settings.DATABASE_URL,
        pool_size=settings.TENANT_POOL_SIZE,
        max_overflow=settings.TENANT_MAX_OVERFLOW,
    )
    db = SessionLocal()
    try:
        if args.dry_run:
            _dry_run(db, registry)
            return 0

        results = migrations.migrate_all(db, registry)
    finally:
        db.close()
        registry.close_all()

    failed = [result for result in results if result.error]
    for result in results:
        status = f"error: {result.error}" if result.error else f"v{result.from_version} -> v{result.to_version}"
        print(f"{result.db_name}: {status}")
    logger.info(
        "tenant_migration_run_finished",
        tenants=len(results),
        failed=len(failed),
        latest_version=migrations.LATEST_VERSION,
    )
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
