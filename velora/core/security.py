from datetime import datetime, timedelta, UTC

import bcrypt
from jose import JWTError, jwt

from velora.config import settings
from velora.core.exceptions import UnauthorizedException

ADMIN_TOKEN = "admin"
COMPANY_TOKEN = "company"


def hash_password(password: str) -> str:
    """Return a bcrypt hash of the plain-text password."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    subject: str, token_type: str, extra_claims: dict | None = None
) -> str:
    """
    Mint a signed access token.

    Args:
        subject: Admin or company ID (stored in 'sub')
        token_type: ADMIN_TOKEN or COMPANY_TOKEN (stored in 'type')
        extra_claims: Additional claims, e.g. 'email' and 'db_name'

    Returns:
        Encoded JWT
    """
    now = datetime.now(UTC)
    payload = {
        "sub": subject,
        "type": token_type,
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    if extra_claims:
        payload.update(extra_claims)
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_jwt(token: str) -> dict:
    """
    Decode and validate JWT token using SECRET_KEY.

    Args:
        token: JWT access token from Authorization header

    Returns:
        Decoded token payload with 'sub', 'type', 'exp', etc.

    Raises:
        UnauthorizedException: If token invalid, expired, or malformed
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {str(e)}")

    # Validate expiration (jose checks the value automatically)
    if payload.get("exp") is None:
        raise UnauthorizedException("Token missing expiration")

    if payload.get("sub") is None:
        raise UnauthorizedException("Token missing subject identifier")

    if payload.get("type") not in (ADMIN_TOKEN, COMPANY_TOKEN):
        raise UnauthorizedException("Token missing or unknown type")

    return payload
