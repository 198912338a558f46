"""
Database layer for TaskPad.

TaskPad keeps its whole task collection as one JSON value in a small
key-value table. This module defines that table and owns the async SQLite
engine, handing out short-lived sessions that commit on success.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from taskpad.logging_config import get_logger

logger = get_logger(__name__)

SQLITE_URL_PREFIX = "sqlite+aiosqlite:///"
MEMORY_DATABASE = ":memory:"

_DEFAULT_DB_PATH = Path.home() / ".taskpad" / "taskpad.db"


def database_url_for(path: Path) -> str:
    """Build the aiosqlite URL for a database file."""
    return f"{SQLITE_URL_PREFIX}{path}"


_DEFAULT_DB_URL = database_url_for(_DEFAULT_DB_PATH)


class Base(DeclarativeBase):
    pass


class KeyValueORM(Base):
    """
    One stored value.

    The task collection lives under a single key as serialized JSON; the
    table itself knows nothing about tasks.
    """
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<KeyValueORM(key={self.key}, size={len(self.value)})>"


class DatabaseManager:
    """
    Owns the SQLite engine for one database URL.

    Call initialize() once before asking for sessions and close() at shutdown.
    A closed manager can be initialized again, which reopens the same file.
    """

    def __init__(self, database_url: str = _DEFAULT_DB_URL):
        """
        Args:
            database_url: aiosqlite URL; defaults to ~/.taskpad/taskpad.db
        """
        self.database_url = database_url
        self.engine: Optional[AsyncEngine] = None
        self.session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def database_path(self) -> Optional[Path]:
        """File behind a file-backed SQLite URL, None for memory or other URLs."""
        if not self.database_url.startswith(SQLITE_URL_PREFIX):
            return None
        location = self.database_url[len(SQLITE_URL_PREFIX):]
        if not location or location == MEMORY_DATABASE:
            return None
        return Path(location).expanduser()

    async def initialize(self) -> None:
        """
        Open the engine and make sure the key-value table exists.

        The directory holding a file database is created first.
        """
        logger.info(f"Opening database: {self.database_url}")
        try:
            path = self.database_path
            if path is not None:
                path.parent.mkdir(parents=True, exist_ok=True)

            self.engine = create_async_engine(self.database_url, echo=False)
            self.session_maker = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception as e:
            logger.error(f"Could not open database {self.database_url}: {e}", exc_info=True)
            raise

        logger.info("Database ready")

    async def close(self) -> None:
        """Dispose of the engine. Safe to call when not initialized."""
        if self.engine is None:
            return

        logger.info("Closing database")
        engine, self.engine, self.session_maker = self.engine, None, None
        try:
            await engine.dispose()
        except Exception as e:
            logger.error(f"Error while closing database: {e}", exc_info=True)
            raise

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session that commits when the block exits cleanly.

        Any exception inside the block rolls the session back and is
        re-raised to the caller.

        Example:
            async with db_manager.get_session() as session:
                row = await session.get(KeyValueORM, "tasks")
        """
        if self.session_maker is None:
            raise RuntimeError("DatabaseManager not initialized. Call initialize() first.")

        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logger.warning(f"Rolling back session after error: {e}")
                await session.rollback()
                raise


# Process-wide manager used by the app
_db_manager: Optional[DatabaseManager] = None


def get_database_manager(database_url: str = _DEFAULT_DB_URL) -> DatabaseManager:
    """
    Return the process-wide manager, creating it on first use.

    The URL only matters on the first call; later calls get the existing
    manager whatever URL they pass.
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(database_url)
    return _db_manager
