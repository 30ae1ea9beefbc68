"""Database session configuration."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from tally_stage.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Execution option that asks for SQLite's write lock at BEGIN.
WRITE_LOCK_OPTION = "tally_write_lock"


def configure_sqlite(engine: Engine) -> Engine:
    """Serialize SQLite writers without making readers wait on them.

    pysqlite defers ``BEGIN`` until the first write, so two increments could
    both read the counter before either writes it. Transactions opened with
    the :data:`WRITE_LOCK_OPTION` execution option start with ``BEGIN
    IMMEDIATE`` and take the write lock up front; everything else gets a
    plain deferred ``BEGIN``. File databases run in WAL mode so an open
    read transaction never blocks a writer's commit.
    """
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        try:
            # In-memory databases answer "memory" and stay as they are.
            cursor.execute("PRAGMA journal_mode=WAL")
        finally:
            cursor.close()

    @event.listens_for(engine, "begin")
    def _begin(conn) -> None:  # pragma: no cover - driver hook
        if conn.get_execution_options().get(WRITE_LOCK_OPTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")

    return engine


def begin_write(db: Session) -> None:
    """Open the session's next transaction as a write transaction.

    A read transaction still open on ``db`` is ended first so the write lock
    is taken by a fresh ``BEGIN``.
    """
    if db.in_transaction():
        db.rollback()
    db.connection(execution_options={WRITE_LOCK_OPTION: True})


# Ensure model modules are imported so that metadata is populated when create_all runs.
import tally_stage.models  # noqa: E402,F401

engine = configure_sqlite(
    create_engine(
        settings.effective_database_url,
        pool_pre_ping=True,
        echo=settings.sql_debug,
    )
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=engine)
