import os

# Settings are read at import time; provide the required values first
os.environ.setdefault("DATABASE_URL", "sqlite:///./velora_test.db")
os.environ.setdefault("SECRET_KEY", "velora-test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from velora.core.security import ADMIN_TOKEN, create_access_token, hash_password
from velora.database import get_db
from velora.dependencies import get_provisioner, get_registry
# Import all model classes to ensure they're registered with SQLAlchemy
from velora.models import Base, Admin, Company
from velora.tenancy.provisioner import TenantProvisioner
from velora.tenancy.registry import TenantConnectionRegistry
# Import FastAPI app AFTER model imports
from velora.main import app

from helpers import DEFAULT_PASSWORD, bearer, create_company, login_company

# Shared database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def session_factory():
    """Session factory bound to the shared test database"""
    return TestingSessionLocal


@pytest.fixture(scope="function")
def db_session():
    """Create fresh shared database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def registry(tmp_path):
    """Tenant registry whose SQLite tenant databases live in tmp_path"""
    tenant_registry = TenantConnectionRegistry(f"sqlite:///{tmp_path / 'velora.db'}")
    yield tenant_registry
    tenant_registry.close_all()


@pytest.fixture
def provisioner(registry):
    return TenantProvisioner(registry)


@pytest.fixture(scope="function")
def client(db_session, registry, provisioner):
    """FastAPI test client with test shared database and tenant registry"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_provisioner] = lambda: provisioner
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db_session):
    """Active admin in the shared database"""
    admin = Admin(
        email="owner@velora.io",
        name="Velora Owner",
        password_hash=hash_password(DEFAULT_PASSWORD),
        is_active=True,
    )
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


@pytest.fixture
def admin_headers(admin):
    """Authorization headers for the admin"""
    return bearer(create_access_token(admin.id, ADMIN_TOKEN, {"email": admin.email}))


@pytest.fixture
def other_admin_headers(db_session):
    """Authorization headers for a second, unrelated admin"""
    other = Admin(
        email="second@velora.io",
        name="Second Admin",
        password_hash=hash_password(DEFAULT_PASSWORD),
    )
    db_session.add(other)
    db_session.commit()
    return bearer(create_access_token(other.id, ADMIN_TOKEN, {"email": other.email}))


@pytest.fixture
def company(client, admin_headers):
    """Company with a provisioned tenant database"""
    return create_company(client, admin_headers, "billing@acme.com")


@pytest.fixture
def company_headers(client, company):
    """Authorization headers for the company (token carries its db_name)"""
    return login_company(client, company["email"])


@pytest.fixture
def second_company(client, admin_headers):
    return create_company(client, admin_headers, "billing@globex.com", name="Globex Stores")


@pytest.fixture
def second_company_headers(client, second_company):
    return login_company(client, second_company["email"])


@pytest.fixture
def tenant_db(provisioner, registry):
    """Session on a freshly provisioned tenant database, for service-level tests"""
    provisioner.provision("acme_service_test")
    db = registry.get("acme_service_test").session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def customer(client, company_headers):
    response = client.post(
        "/api/company/customers",
        headers=company_headers,
        json={"name": "Ravi Kumar", "phone": "9000000001"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def tax_rate(client, company_headers):
    response = client.post("/api/company/taxes", headers=company_headers, json={"rate": 18})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def item(client, company_headers, tax_rate):
    """Item selling at 100.00 with 18% tax"""
    response = client.post(
        "/api/company/items",
        headers=company_headers,
        json={
            "item_code": "SKU-001",
            "item_name": "Basmati Rice 1kg",
            "purchase_rate": 80,
            "selling_rate": 100,
            "mrp": 120,
            "tax_id": tax_rate["id"],
        },
    )
    assert response.status_code == 201
    return response.json()
