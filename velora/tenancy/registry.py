"""
Tenant connection registry.

Maps a tenant database name to a live SQLAlchemy engine, created on first
access and reused for the life of the process (or until evicted). The
registry is an explicit object owned by the application and injected into
request handlers; it is never a module-level map.
"""

import threading
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, URL, make_url
from sqlalchemy.orm import sessionmaker, Session

from velora.core.logging import get_logger
from velora.tenancy.identifiers import validate_db_name

logger = get_logger(__name__)

EngineFactory = Callable[[URL], Engine]


def sqlite_database_path(base_url: str | URL, db_name: str) -> Path:
    """
    File backing a SQLite tenant database.

    Tenant files live next to the shared database file, named <db_name>.db.
    """
    database = make_url(base_url).database or ""
    database = database.removeprefix("file:").split("?", 1)[0]
    if database in ("", ":memory:"):
        directory = Path.cwd()
    else:
        directory = Path(database).parent
    return directory.resolve() / f"{validate_db_name(db_name)}.db"


def build_tenant_url(base_url: str | URL, db_name: str) -> URL:
    """
    Substitute the database segment of the shared URL with db_name.

    postgresql://u:p@host:5432/velora -> postgresql://u:p@host:5432/<db_name>

    SQLite tenant files are opened read-write without create, so a handle to
    a database that was never provisioned fails on first query instead of
    silently creating an empty file.
    """
    validate_db_name(db_name)
    url = make_url(base_url)
    if url.get_backend_name() == "sqlite":
        path = sqlite_database_path(url, db_name)
        return url.set(database=f"file:{path}", query={"mode": "rw", "uri": "true"})
    return url.set(database=db_name)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_tenant_engine(url: URL, pool_size: int = 5, max_overflow: int = 5) -> Engine:
    """Default engine factory for tenant databases. Does not connect."""
    if url.get_backend_name() == "sqlite":
        engine = create_engine(url, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
    )


@dataclass
class TenantHandle:
    """Process-lifetime handle on one tenant database."""

    db_name: str
    engine: Engine
    session_factory: sessionmaker = field(init=False, repr=False)

    def __post_init__(self):
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def close(self) -> None:
        self.engine.dispose()


class TenantConnectionRegistry:
    """
    Lock-protected get-or-create map of tenant database name -> TenantHandle.

    - get(): returns the cached handle or builds exactly one, even when many
      threads ask for the same uncached name at once
    - evict(): disposes and forgets one handle
    - close_all(): disposes everything (application shutdown)

    There is no upper bound on cached handles, no idle eviction and no
    health check before a cached handle is returned. Errors raised while
    building an engine propagate to the caller unchanged.
    """

    def __init__(
        self,
        base_url: str | URL,
        engine_factory: EngineFactory | None = None,
        pool_size: int = 5,
        max_overflow: int = 5,
    ):
        self.base_url = make_url(base_url)
        self._engine_factory = engine_factory or partial(
            create_tenant_engine, pool_size=pool_size, max_overflow=max_overflow
        )
        self._handles: dict[str, TenantHandle] = {}
        self._lock = threading.Lock()

    def url_for(self, db_name: str) -> URL:
        return build_tenant_url(self.base_url, db_name)

    def get(self, db_name: str) -> TenantHandle:
        handle = self._handles.get(db_name)
        if handle is not None:
            return handle

        with self._lock:
            # Another thread may have built it while we waited for the lock
            handle = self._handles.get(db_name)
            if handle is None:
                engine = self._engine_factory(self.url_for(db_name))
                handle = TenantHandle(db_name=db_name, engine=engine)
                self._handles[db_name] = handle
                logger.info("tenant_handle_opened", db_name=db_name, cached=len(self._handles))
        return handle

    def evict(self, db_name: str) -> bool:
        """Dispose and remove a cached handle. Returns False if none was cached."""
        with self._lock:
            handle = self._handles.pop(db_name, None)
        if handle is None:
            return False
        handle.close()
        logger.info("tenant_handle_evicted", db_name=db_name)
        return True

    def close_all(self) -> None:
        with self._lock:
            handles = list(self._handles.values())
            self._handles.clear()
        for handle in handles:
            handle.close()
        logger.info("tenant_handles_closed", count=len(handles))

    def __contains__(self, db_name: object) -> bool:
        return db_name in self._handles

    def __len__(self) -> int:
        return len(self._handles)
