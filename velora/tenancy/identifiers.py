"""
Tenant database names.

Database names are interpolated into DDL (CREATE DATABASE / DROP DATABASE)
where bind parameters are not available, so every name is checked against
a strict allow-list before it reaches SQL text.
"""

import re
import secrets
import string
import time

from velora.core.exceptions import InvalidTenantNameError

# Lowercase start, then lowercase/digits/underscore; 63 is the PostgreSQL limit
DB_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]{0,62}$")

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def is_valid_db_name(db_name: object) -> bool:
    return isinstance(db_name, str) and DB_NAME_PATTERN.fullmatch(db_name) is not None


def validate_db_name(db_name: str) -> str:
    """
    Return db_name unchanged if it is a safe tenant database name.

    Raises:
        InvalidTenantNameError: If the name fails the allow-list
    """
    if not is_valid_db_name(db_name):
        raise InvalidTenantNameError(f"Invalid tenant database name: {db_name!r}")
    return db_name


def generate_db_name(prefix: str = "company") -> str:
    """
    Generate a fresh tenant database name.

    Format: <prefix>_<epoch millis>_<9 random [a-z0-9]>, e.g.
    company_1756976026448_ud7kxomgm
    """
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(9))
    return validate_db_name(f"{prefix}_{int(time.time() * 1000)}_{suffix}")
