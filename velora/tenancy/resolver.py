from velora.core.exceptions import ForbiddenException, UnauthorizedException
from velora.core.security import COMPANY_TOKEN
from velora.tenancy.identifiers import is_valid_db_name
from velora.tenancy.registry import TenantConnectionRegistry, TenantHandle


class TenantResolver:
    """
    Maps an authenticated company token to its tenant connection handle.

    The db_name claim is written into the token at company login from
    Company.db_name. The resolver checks the claim is present and well
    formed, then delegates to the registry. It does not check that the
    database exists; a handle to a missing database fails on first query.
    """

    def __init__(self, registry: TenantConnectionRegistry):
        self.registry = registry

    def resolve(self, claims: dict) -> TenantHandle:
        """
        Args:
            claims: Decoded JWT payload

        Returns:
            Cached or newly created TenantHandle

        Raises:
            ForbiddenException: If the token is not a company token
            UnauthorizedException: If the tenant claim is missing/malformed
        """
        if claims.get("type") != COMPANY_TOKEN:
            raise ForbiddenException("Company token required")

        db_name = claims.get("db_name")
        if not is_valid_db_name(db_name):
            raise UnauthorizedException("Invalid tenant: missing or malformed tenant claim")

        return self.registry.get(db_name)
