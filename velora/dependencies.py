from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from velora.core.exceptions import ForbiddenException, UnauthorizedException
from velora.core.security import ADMIN_TOKEN, decode_jwt
from velora.database import get_db
from velora.models.admin import Admin
from velora.repositories.admin_repository import AdminRepository
from velora.tenancy.provisioner import TenantProvisioner
from velora.tenancy.registry import TenantConnectionRegistry, TenantHandle
from velora.tenancy.resolver import TenantResolver

security = HTTPBearer(auto_error=False)


def get_registry(request: Request) -> TenantConnectionRegistry:
    """The process-wide tenant registry created in the app lifespan"""
    return request.app.state.tenant_registry


def get_provisioner(request: Request) -> TenantProvisioner:
    """The provisioner created in the app lifespan, sharing the tenant registry"""
    return request.app.state.tenant_provisioner


def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict:
    """
    Validate the bearer token and return its claims.

    Raises:
        UnauthorizedException: If the header is missing or the token invalid
    """
    if credentials is None:
        raise UnauthorizedException("Not authenticated")
    return decode_jwt(credentials.credentials)


def get_current_admin(
    claims: dict = Depends(get_token_claims), db: Session = Depends(get_db)
) -> Admin:
    """
    FastAPI dependency resolving an admin token to an active Admin.

    Raises:
        ForbiddenException: If a company token is presented
        UnauthorizedException: If the admin no longer exists or is inactive
    """
    if claims.get("type") != ADMIN_TOKEN:
        raise ForbiddenException("Admin token required")

    admin = AdminRepository(db).get_by_id(claims["sub"])
    if not admin or not admin.is_active:
        raise UnauthorizedException("Admin account not found or inactive")
    return admin


def get_tenant_handle(
    claims: dict = Depends(get_token_claims),
    registry: TenantConnectionRegistry = Depends(get_registry),
) -> TenantHandle:
    """Resolve the company token's db_name claim to a tenant handle"""
    return TenantResolver(registry).resolve(claims)


def get_tenant_db(handle: TenantHandle = Depends(get_tenant_handle)) -> Session:
    """
    FastAPI dependency for tenant database sessions.

    Yields a session bound to the caller's tenant database and closes it
    after the request.

    Usage:
        @router.get("/items")
        def list_items(db: Session = Depends(get_tenant_db)):
            ...
    """
    db = handle.session()
    try:
        yield db
    finally:
        db.close()
