"""
Storage service for TaskPad.

Persists the whole task collection as one JSON value in the key-value table.
The collection is loaded once at startup and rewritten after every change.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskpad.database import DatabaseManager, KeyValueORM
from taskpad.logging_config import get_logger
from taskpad.models import Task, tasks_from_json, tasks_to_json

logger = get_logger(__name__)

TASKS_KEY = "tasks"


class StorageError(Exception):
    """Raised when the task collection cannot be read or written."""
    pass


class KeyValueStore:
    """String key-value access on top of an async session."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the store with a database session.

        Args:
            session: Active async database session
        """
        self.session = session

    async def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            Stored string, or None if the key is absent
        """
        row = await self.session.get(KeyValueORM, key)
        return row.value if row else None

    async def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any existing value.

        Args:
            key: Storage key
            value: String to store
        """
        row = await self.session.get(KeyValueORM, key)
        now = datetime.utcnow()
        if row is None:
            self.session.add(KeyValueORM(key=key, value=value, updated_at=now))
        else:
            row.value = value
            row.updated_at = now
        await self.session.flush()


class TaskStorage:
    """Loads and saves the task collection under a single storage key."""

    def __init__(self, db_manager: DatabaseManager, key: str = TASKS_KEY) -> None:
        """
        Initialize task storage.

        Args:
            db_manager: Initialized database manager
            key: Storage key holding the serialized collection
        """
        self.db_manager = db_manager
        self.key = key

    async def load(self) -> Optional[List[Task]]:
        """
        Load the persisted task collection.

        Returns:
            List of tasks in stored order, or None if nothing was saved yet

        Raises:
            StorageError: If the value cannot be read or parsed
        """
        try:
            async with self.db_manager.get_session() as session:
                payload = await KeyValueStore(session).get_item(self.key)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read '{self.key}': {e}") from e

        if payload is None:
            logger.debug(f"No saved value under '{self.key}'")
            return None

        try:
            tasks = tasks_from_json(payload)
        except ValueError as e:
            raise StorageError(f"Stored value under '{self.key}' is not a task list: {e}") from e

        logger.info(f"Loaded {len(tasks)} tasks from storage")
        return tasks

    async def save(self, tasks: Sequence[Task]) -> None:
        """
        Write the full task collection.

        Args:
            tasks: Collection to persist, in store order

        Raises:
            StorageError: If the write fails
        """
        payload = tasks_to_json(tasks)
        try:
            async with self.db_manager.get_session() as session:
                await KeyValueStore(session).set_item(self.key, payload)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write '{self.key}': {e}") from e

        logger.debug(f"Saved {len(tasks)} tasks to storage")
