from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from velora.config import settings


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # SQLite-specific settings
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
    }


# Engine for the shared database (admins and companies)
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using
    echo=settings.DEBUG,  # Log SQL queries in debug mode
    **_engine_options(settings.DATABASE_URL),
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """
    FastAPI dependency for global database sessions.

    Yields a database session and ensures it's closed after use.
    Tenant data is never reachable through this session; see
    velora.dependencies.get_tenant_db.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
