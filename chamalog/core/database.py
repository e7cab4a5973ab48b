"""Database client: engine and session factory, owned by the application.

A ``Database`` is constructed once at process start (``create_app`` or a test),
stored on ``app.state.db`` and disposed when the app shuts down. Request
handlers receive sessions through the ``get_db`` dependency.
"""

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _is_sqlite_memory(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


class Database:
    """Owns the SQLAlchemy engine and hands out sessions."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        if url.startswith("sqlite"):
            options: dict = {"connect_args": {"check_same_thread": False}}
            if _is_sqlite_memory(url):
                # An in-memory database lives in a single connection; share it.
                options["poolclass"] = StaticPool
            self.engine: Engine = create_engine(url, echo=echo, **options)
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        else:
            self.engine = create_engine(url, pool_pre_ping=True, echo=echo)
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    def session(self) -> Session:
        return self.session_factory()

    def create_all(self) -> None:
        """Create every mapped table (local runs and tests; prod uses Alembic)."""
        from chamalog.models import Base

        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        logger.info("Closing database engine")
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.warning("Database connectivity check failed", exc_info=True)
        return False


def missing_tables(db: Session) -> list[str]:
    """Mapped tables that do not exist in the connected database, sorted by name."""
    from chamalog.models import Base

    existing = set(inspect(db.get_bind()).get_table_names())
    return sorted(name for name in Base.metadata.tables if name not in existing)
