"""Store Connector: opens the SQLite pool, creates the file on first use, migrates.

Invariants:
    - The store file path is computed once (resolve_store_path) and used for both
      opening and creating
    - The file is opened read-write without implicit creation, so a missing file is
      a distinguishable SQLITE_CANTOPEN failure
    - A missing file is created and the open retried exactly once; any other
      failure is surfaced immediately as BootstrapError
    - Migrations run before open_store() returns; a Store is never handed out
      against an unmigrated schema
    - At most `pool_size` (default 5) concurrent connections, no overflow
    - Every session auto-rolls-back on exception; SQLAlchemy errors map to PersistenceError

Design Decisions:
    - Store is passed explicitly (app.state, then FastAPI dependency), not a module global
    - The engine reference sits behind an aiorwlock.RWLock: sessions take the shared
      reader lock only while checking out a connection, replace_engine takes the writer lock
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import logging
import sqlite3
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import aiorwlock
from sqlalchemy import event, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from choreboard.config import Settings
from choreboard.core.errors import BootstrapError, PersistenceError, ErrorContext
from choreboard.infrastructure.migrations import apply_migrations

logger = logging.getLogger(__name__)

STORE_EXTENSION = ".db"
DEFAULT_POOL_SIZE = 5


def resolve_store_path(logical_name: str) -> Path:
    """Map a logical database name to its file, e.g. 'house.' -> 'house.db'."""
    name = logical_name.strip().rstrip("./\\")
    if not name:
        raise ValueError(f"'{logical_name}' does not name a database file")
    if not name.endswith(STORE_EXTENSION):
        name += STORE_EXTENSION
    return Path(name)


def store_url(path: Path) -> URL:
    """aiosqlite URL opening `path` read-write, never creating it."""
    return URL.create(
        "sqlite+aiosqlite",
        database=f"file:{path.resolve().as_posix()}",
        query={"mode": "rw", "uri": "true"},
    )


def create_store_engine(path: Path, pool_size: int = DEFAULT_POOL_SIZE) -> AsyncEngine:
    engine = create_async_engine(
        store_url(path),
        pool_size=pool_size,
        max_overflow=0,
        pool_pre_ping=True,
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    return engine


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def is_missing_database(exc: DBAPIError, path: Path) -> bool:
    """True when the open failed only because the store file does not exist."""
    if path.exists():
        return False
    code = getattr(exc.orig, "sqlite_errorcode", None)
    if code is not None:
        return code == sqlite3.SQLITE_CANTOPEN
    return "unable to open database file" in str(exc.orig)


async def verify_connection(engine: AsyncEngine) -> None:
    """Check out one connection and read the schema header."""
    async with engine.connect() as conn:
        await conn.execute(text("PRAGMA schema_version"))


class Store:
    """Pooled handle to the relational store, shared by every request."""

    def __init__(
        self, engine: AsyncEngine, path: Path | None = None, created: bool = False,
    ):
        self._engine = engine
        self._session_factory = self._make_session_factory(engine)
        self._lock = aiorwlock.RWLock()
        self.path = path
        self.created = created

    @staticmethod
    def _make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        async with self._lock.reader_lock:
            session = self._session_factory()
            try:
                await session.connection()
            except SQLAlchemyError as e:
                await session.close()
                logger.error(f"DB connection checkout failed: {e}")
                raise PersistenceError("Could not acquire a connection", "connect") from e
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise PersistenceError(
                "Integrity constraint violated", "commit",
                ErrorContext(debug_info={"detail": str(e.orig)}),
            ) from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise PersistenceError("Connection or operational error", "execute") from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise PersistenceError("Database driver error", "query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise PersistenceError("Database operation failed", "unknown") from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def replace_engine(self, engine: AsyncEngine) -> None:
        """Swap the underlying pool; sessions already checked out finish on the old one."""
        async with self._lock.writer_lock:
            old = self._engine
            self._engine = engine
            self._session_factory = self._make_session_factory(engine)
        await old.dispose()
        logger.info("Store engine replaced")

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        async with self._lock.writer_lock:
            await self._engine.dispose()


async def open_store(settings: Settings) -> Store:
    """Bootstrap: open (creating once if missing) and migrate the configured store."""
    path = resolve_store_path(settings.database)
    engine = create_store_engine(path, settings.database_pool_size)
    log_extra = {"database": str(path)}
    created = False

    try:
        await verify_connection(engine)
    except DBAPIError as e:
        if not is_missing_database(e, path):
            await engine.dispose()
            raise BootstrapError(f"Could not open database '{path}': {e.orig}") from e

        logger.info("Database does not exist, creating", extra=log_extra)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch(exist_ok=True)
        except OSError as create_error:
            await engine.dispose()
            raise BootstrapError(
                f"Could not create database file '{path}': {create_error}",
            ) from create_error
        created = True

        try:
            await verify_connection(engine)
        except DBAPIError as retry_error:
            await engine.dispose()
            raise BootstrapError(
                f"Could not open newly created database '{path}': {retry_error.orig}",
            ) from retry_error

    try:
        await apply_migrations(engine)
    except Exception as e:
        await engine.dispose()
        logger.error(f"Migrations failed: {e}", extra=log_extra)
        raise BootstrapError(f"Failed to run migrations on '{path}': {e}") from e

    if created:
        logger.info("Created and migrated new database", extra=log_extra)
    else:
        logger.info("Connected to database", extra=log_extra)
    return Store(engine, path=path, created=created)
