"""Database setup and session management."""

import logging
from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from config import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def _engine_kwargs(database_url: str) -> dict:
    """Return dialect-specific ``create_engine`` arguments."""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    # Serverless hosts recycle idle connections aggressively
    return {"pool_pre_ping": True}


def enable_sqlite_savepoints(engine) -> None:
    """Let pysqlite run SAVEPOINTs inside SQLAlchemy-managed transactions.

    pysqlite defers BEGIN on its own; hand transaction control to
    SQLAlchemy so ``Session.begin_nested()`` behaves as on Postgres.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


@lru_cache
def get_engine():
    """Get or create the database engine (cached)."""
    database_url = get_settings().DATABASE_URL
    engine = create_engine(database_url, echo=False, **_engine_kwargs(database_url))
    if engine.url.get_backend_name() == "sqlite":
        enable_sqlite_savepoints(engine)
    logger.info("Database engine created for %s", engine.url.get_backend_name())
    return engine


def get_session_local():
    """Get a sessionmaker bound to the engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db():
    """Dependency that provides a database session.

    Transaction conventions:
    - Default: services ``flush()``, API layer ``commit()``
    - Exceptions that commit internally:
      - ``TransactionSyncService.sync_account()``: commits once after the batch
      - ``BankConnectionService.exchange_public_token()``: commits the bank row
        before the best-effort account import
    """
    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
