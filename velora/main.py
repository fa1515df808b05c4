from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from velora.config import settings
from velora.core.exceptions import (
    UnauthorizedException,
    NotFoundException,
    ForbiddenException,
    ValidationException,
    ConflictException,
    ProvisioningError,
)
from velora.core.logging import configure_logging, get_logger
from velora.routes import (
    admin_routes,
    company_routes,
    customer_routes,
    dashboard_routes,
    item_routes,
    master_data_routes,
    sale_routes,
)
from velora.tenancy.provisioner import TenantProvisioner
from velora.tenancy.registry import TenantConnectionRegistry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    app.state.tenant_registry = TenantConnectionRegistry(
        settings.DATABASE_URL,
        pool_size=settings.TENANT_POOL_SIZE,
        max_overflow=settings.TENANT_MAX_OVERFLOW,
    )
    app.state.tenant_provisioner = TenantProvisioner(app.state.tenant_registry)
    logger.info("app_started", app_name=settings.APP_NAME, version=settings.APP_VERSION)
    yield
    app.state.tenant_registry.close_all()
    logger.info("app_stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable in production
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# CORS middleware
cors_origins = settings.cors_origins_list
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Exception handlers
@app.exception_handler(UnauthorizedException)
async def unauthorized_exception_handler(request: Request, exc: UnauthorizedException):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ForbiddenException)
async def forbidden_exception_handler(request: Request, exc: ForbiddenException):
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(ConflictException)
async def conflict_exception_handler(request: Request, exc: ConflictException):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(ProvisioningError)
async def provisioning_exception_handler(request: Request, exc: ProvisioningError):
    logger.error("provisioning_failed", db_name=exc.db_name, error=str(exc.__cause__ or exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Failed to create company database"},
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.APP_VERSION}


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Velora Billing API",
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "Documentation disabled in production",
    }


# Include routers
app.include_router(admin_routes.router, prefix="/api/admin", tags=["Admin"])
app.include_router(company_routes.router, prefix="/api/company", tags=["Company"])
app.include_router(item_routes.router, prefix="/api/company/items", tags=["Items"])
app.include_router(customer_routes.router, prefix="/api/company/customers", tags=["Customers"])
app.include_router(
    master_data_routes.categories_router, prefix="/api/company/categories", tags=["Categories"]
)
app.include_router(master_data_routes.taxes_router, prefix="/api/company/taxes", tags=["Taxes"])
app.include_router(master_data_routes.units_router, prefix="/api/company/units", tags=["Units"])
app.include_router(sale_routes.router, prefix="/api/company/sales", tags=["Sales"])
app.include_router(dashboard_routes.router, prefix="/api/company/dashboard", tags=["Dashboard"])
