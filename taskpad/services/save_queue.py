"""
Single-writer save queue.

Task store mutations request a save of the full collection without waiting
for it. The queue keeps at most one write in flight; requests that arrive in
the meantime replace the waiting snapshot, so the newest state is what gets
written next and the stored collection ends up matching the latest one in
memory.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence

from taskpad.logging_config import get_logger
from taskpad.models import Task

logger = get_logger(__name__)

Writer = Callable[[List[Task]], Awaitable[None]]


class SaveQueue:
    """Serializes collection writes, latest snapshot wins."""

    def __init__(self, writer: Writer) -> None:
        """
        Initialize the queue.

        Args:
            writer: Coroutine function that persists a task list
        """
        self._writer = writer
        self._pending: Optional[List[Task]] = None
        self._worker: Optional[asyncio.Task] = None
        self.writes_completed = 0
        self.writes_failed = 0
        self.requests_superseded = 0

    @property
    def is_idle(self) -> bool:
        """True when nothing is being written or waiting to be written."""
        return self._pending is None and (self._worker is None or self._worker.done())

    def request_save(self, tasks: Sequence[Task]) -> None:
        """
        Queue a snapshot of the collection for writing.

        Must be called from within the running event loop.

        Args:
            tasks: Current collection; copied before returning
        """
        if self._pending is not None:
            self.requests_superseded += 1
        self._pending = [task.model_copy() for task in tasks]

        if self._worker is None or self._worker.done():
            self._worker = asyncio.get_running_loop().create_task(self._drain())

    async def _drain(self) -> None:
        """Write snapshots one at a time until none is waiting."""
        while self._pending is not None:
            snapshot, self._pending = self._pending, None
            try:
                await self._writer(snapshot)
                self.writes_completed += 1
            except Exception as e:
                # Keep draining; a later snapshot carries the same state forward
                self.writes_failed += 1
                logger.error(f"Failed to save {len(snapshot)} tasks: {e}", exc_info=True)

    async def flush(self) -> None:
        """Wait until every requested snapshot has been written or has failed."""
        while self._worker is not None and not self._worker.done():
            await asyncio.shield(self._worker)
