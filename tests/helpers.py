from datetime import datetime, timedelta, UTC

from jose import jwt

from velora.config import settings
from velora.core.security import ADMIN_TOKEN

DEFAULT_PASSWORD = "secret123"


def create_test_token(
    subject: str = "test-admin-123",
    token_type: str = ADMIN_TOKEN,
    expired: bool = False,
    **claims,
) -> str:
    """
    Generate JWT token for testing.

    Args:
        subject: ID to embed in 'sub' claim
        token_type: 'admin' or 'company'
        expired: If True, create expired token
        claims: Extra claims, e.g. db_name

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"sub": subject, "type": token_type, "exp": exp, "iat": datetime.now(UTC), **claims}

    token = jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")
    return token


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_company(client, admin_headers, email: str, name: str = "Acme Traders") -> dict:
    """Create a company (and its tenant database) through the admin API"""
    response = client.post(
        "/api/admin/companies",
        headers=admin_headers,
        json={"email": email, "name": name, "password": DEFAULT_PASSWORD, "city": "Pune"},
    )
    assert response.status_code == 201, response.text
    return response.json()


def login_company(client, email: str) -> dict:
    response = client.post("/api/company/login", json={"email": email, "password": DEFAULT_PASSWORD})
    assert response.status_code == 200, response.text
    return bearer(response.json()["access_token"])
