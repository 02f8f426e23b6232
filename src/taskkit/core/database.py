"""Async SQLAlchemy database connection manager."""

from __future__ import annotations

import sqlite3
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Self

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import ConnectionPoolEntry

from .logging import get_logger

logger = get_logger(__name__)


def _install_sqlite_connect_pragmas(engine: AsyncEngine) -> None:
    """Install SQLite connection pragmas for referential integrity and reliability."""

    def on_connect(dbapi_conn: sqlite3.Connection, _conn_record: ConnectionPoolEntry) -> None:
        """Configure SQLite pragmas on connection."""
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA synchronous=NORMAL;")
        cur.execute("PRAGMA busy_timeout=30000;")  # 30s
        cur.execute("PRAGMA temp_store=MEMORY;")
        cur.close()

    event.listen(engine.sync_engine, "connect", on_connect)


class Database:
    """Async SQLAlchemy database connection manager."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        """Initialize database with connection URL."""
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, future=True)
        if self.is_sqlite:
            _install_sqlite_connect_pragmas(self.engine)
        self._session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @property
    def is_sqlite(self) -> bool:
        """Return True when the URL targets SQLite."""
        return self.url.startswith("sqlite")

    @property
    def is_in_memory(self) -> bool:
        """Return True for in-memory SQLite databases."""
        return self.is_sqlite and ":memory:" in self.url

    async def init(self) -> None:
        """Create all tables registered on the declarative base."""
        # Import Base and models here to avoid circular import at module level
        from taskkit.core.models import Base
        from taskkit.modules.task.models import Task  # noqa: F401
        from taskkit.modules.user.models import User  # noqa: F401

        if self.is_sqlite and not self.is_in_memory:
            async with self.engine.begin() as conn:
                await conn.exec_driver_sql("PRAGMA journal_mode=WAL;")

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.debug("database.initialized", url=self.engine.url.render_as_string(hide_password=True))

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Create a database session context manager."""
        async with self._session_factory() as s:
            yield s

    async def dispose(self) -> None:
        """Dispose of database engine and connection pool."""
        await self.engine.dispose()


class SqliteDatabaseBuilder:
    """Fluent builder for SQLite-backed Database instances."""

    def __init__(self, url: str) -> None:
        """Initialize builder with a SQLite connection URL."""
        self._url = url
        self._echo = False

    @classmethod
    def in_memory(cls) -> Self:
        """Start a builder for a private in-memory database."""
        return cls("sqlite+aiosqlite:///:memory:")

    @classmethod
    def from_file(cls, path: str | Path) -> Self:
        """Start a builder for a file-backed database."""
        return cls(f"sqlite+aiosqlite:///{Path(path)}")

    def with_echo(self, enabled: bool = True) -> Self:
        """Echo emitted SQL through the engine logger."""
        self._echo = enabled
        return self

    def build(self) -> Database:
        """Build the configured Database."""
        return Database(self._url, echo=self._echo)
