"""
Pytest configuration and fixtures for TaskPad tests.

Provides database fixtures, a fake clock, service fixtures and task factories.
"""

import pytest
import pytest_asyncio

from taskpad.database import DatabaseManager
from taskpad.models import Priority, Task
from taskpad.services.notification_service import NotificationService
from taskpad.services.storage_service import TaskStorage
from taskpad.services.task_store import TaskStore


@pytest_asyncio.fixture
async def db_manager():
    """
    Create an in-memory SQLite database for testing.

    Yields:
        DatabaseManager instance with in-memory database
    """
    manager = DatabaseManager("sqlite+aiosqlite:///:memory:")
    await manager.initialize()

    yield manager

    await manager.close()


@pytest_asyncio.fixture
async def db_session(db_manager):
    """Provide a database session for tests."""
    async with db_manager.get_session() as session:
        yield session


@pytest.fixture
def storage(db_manager):
    """Task storage backed by the in-memory database."""
    return TaskStorage(db_manager)


class RecordingSink:
    """Notification sink that remembers everything delivered to it."""

    def __init__(self):
        self.delivered = []

    def __call__(self, title: str, body: str) -> None:
        self.delivered.append((title, body))


@pytest.fixture
def sink():
    """Recording notification sink."""
    return RecordingSink()


@pytest.fixture
def notifications(sink):
    """Enabled notification service delivering to the recording sink."""
    service = NotificationService(sink=sink)
    yield service
    service.cancel_all()


class FakeClock:
    """Deterministic time source for task id generation."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    """Frozen clock; every id derived from it starts at the same millisecond."""
    return FakeClock()


@pytest.fixture
def memory_store(notifications, clock):
    """Task store without persistence."""
    return TaskStore(notifications, clock=clock)


@pytest.fixture
def store(notifications, storage, clock):
    """Task store persisting to the in-memory database."""
    return TaskStore(notifications, storage=storage, clock=clock)


@pytest.fixture
def make_task():
    """
    Factory for Task models.

    Example:
        def test_something(make_task):
            task = make_task(text="Buy milk", priority=Priority.HIGH)
    """
    counter = {"next": 1}

    def _make(**kwargs) -> Task:
        defaults = {
            "id": str(counter["next"]),
            "text": f"Task {counter['next']}",
            "completed": False,
            "priority": Priority.MEDIUM,
        }
        counter["next"] += 1
        defaults.update(kwargs)
        return Task(**defaults)

    return _make
