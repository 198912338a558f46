"""
Task store for TaskPad.

Owns the in-memory task collection and the four operations that change it:
add, toggle-complete, edit and delete. Each change schedules or cancels
reminders through the notification service and hands a snapshot of the whole
collection to the save queue. Neither collaborator is transactional with the
other; a failure in one never rolls back the other.
"""

import time
from typing import Callable, List, Optional, Union

from taskpad.logging_config import get_logger
from taskpad.models import (
    DEFAULT_PRIORITY,
    Priority,
    Task,
    sort_by_priority,
)
from taskpad.services.notification_service import (
    DEFAULT_DELAY_SECONDS,
    REMINDER_TITLE,
    NotificationError,
    NotificationService,
    reminder_body,
)
from taskpad.services.save_queue import SaveQueue
from taskpad.services.storage_service import StorageError, TaskStorage

logger = get_logger(__name__)

EMPTY_TASK_MESSAGE = "Task cannot be empty"


class TaskServiceError(Exception):
    """Base exception for task store errors."""
    pass


class ValidationError(TaskServiceError):
    """Raised when task input is rejected before the store is changed."""
    pass


class TaskStore:
    """
    Ordered in-memory collection of tasks.

    New tasks are prepended, so the underlying order is newest first. The
    active and completed views sort by priority for display only; the stored
    order is never rearranged.
    """

    def __init__(
        self,
        notifications: NotificationService,
        storage: Optional[TaskStorage] = None,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        reschedule_on_reopen: bool = False,
        cancel_on_delete: bool = True,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the task store.

        Args:
            notifications: Service used to schedule and cancel reminders
            storage: Persistence for the collection; None keeps it in memory only
            delay_seconds: Delay between creating a task and its reminder
            reschedule_on_reopen: Schedule a new reminder when a completed
                task is marked incomplete again
            cancel_on_delete: Cancel a deleted task's pending reminder
            clock: Time source used to derive new task ids
        """
        self.notifications = notifications
        self.storage = storage
        self.delay_seconds = delay_seconds
        self.reschedule_on_reopen = reschedule_on_reopen
        self.cancel_on_delete = cancel_on_delete
        self._clock = clock
        self._tasks: List[Task] = []
        self._save_queue: Optional[SaveQueue] = SaveQueue(storage.save) if storage else None

        self.notifications.add_fired_listener(self._on_notification_fired)

    # ==============================================================================
    # QUERIES
    # ==============================================================================

    @property
    def tasks(self) -> List[Task]:
        """All tasks in store order (newest first)."""
        return list(self._tasks)

    @property
    def save_queue(self) -> Optional[SaveQueue]:
        """Queue writing snapshots to storage, if storage is configured."""
        return self._save_queue

    def get_task(self, task_id: str) -> Optional[Task]:
        """
        Look up a task by id.

        Args:
            task_id: Task identifier

        Returns:
            The task, or None if no task has that id
        """
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def active_tasks(self) -> List[Task]:
        """Incomplete tasks, High priority first."""
        return sort_by_priority(task for task in self._tasks if not task.completed)

    def completed_tasks(self) -> List[Task]:
        """Completed tasks, High priority first."""
        return sort_by_priority(task for task in self._tasks if task.completed)

    # ==============================================================================
    # LIFECYCLE
    # ==============================================================================

    async def load(self) -> int:
        """
        Replace the collection with the persisted one.

        A missing or unreadable value leaves the store empty. Reminder handles
        the notification service is not tracking belong to an earlier run and
        are cleared.

        Returns:
            Number of tasks loaded
        """
        if self.storage is None:
            return 0

        try:
            loaded = await self.storage.load()
        except StorageError as e:
            logger.error(f"Could not load saved tasks, starting empty: {e}")
            loaded = None

        self._tasks = loaded or []
        logger.info(f"Task store loaded with {len(self._tasks)} tasks")

        stale = 0
        for task in self._tasks:
            if task.notification_id is not None and not self.notifications.is_pending(task.notification_id):
                task.notification_id = None
                stale += 1
        if stale:
            logger.info(f"Cleared {stale} stale reminder handles")
            self._persist()

        return len(self._tasks)

    async def flush(self) -> None:
        """Wait for every requested save to finish."""
        if self._save_queue is not None:
            await self._save_queue.flush()

    async def close(self) -> None:
        """
        Cancel the reminders of every task, then wait for the final save.

        Handles are cleared before saving so the stored collection never
        refers to a reminder that no longer exists.
        """
        cleared = 0
        for task in self._tasks:
            if task.notification_id is not None:
                await self._cancel_reminder(task.notification_id)
                task.notification_id = None
                cleared += 1

        if cleared:
            logger.info(f"Cancelled {cleared} reminders on close")
            self._persist()

        await self.flush()

    # ==============================================================================
    # OPERATIONS
    # ==============================================================================

    async def add(self, text: str, priority: Union[Priority, str] = DEFAULT_PRIORITY) -> Task:
        """
        Create a task and schedule its reminder.

        The text is stored as entered; only its trimmed form has to be
        non-empty. A reminder that cannot be scheduled leaves the task
        without a notification handle.

        Args:
            text: Task text
            priority: Priority level

        Returns:
            The new task, now first in store order

        Raises:
            ValidationError: If the text is blank or the priority unknown
        """
        self._validate_text(text)
        priority = self._coerce_priority(priority)

        notification_id = await self._schedule_reminder(text)

        task = Task(
            id=self._new_task_id(),
            text=text,
            completed=False,
            priority=priority,
            notification_id=notification_id,
        )
        self._tasks.insert(0, task)
        logger.info(
            f"Task added: id={task.id}, priority={task.priority.value}, "
            f"has_notification={task.has_pending_notification}"
        )

        self._persist()
        return task

    async def toggle_complete(self, task_id: str) -> None:
        """
        Flip a task between active and completed.

        Completing a task cancels its pending reminder and clears the handle.
        Reopening a task only schedules a new reminder when
        reschedule_on_reopen is set. Unknown ids are ignored.

        Args:
            task_id: Task identifier
        """
        task = self.get_task(task_id)
        if task is None:
            logger.debug(f"Toggle ignored, no task with id {task_id}")
            return

        if not task.completed:
            if task.notification_id is not None:
                await self._cancel_reminder(task.notification_id)
            task.completed = True
            task.notification_id = None
        else:
            task.completed = False
            if self.reschedule_on_reopen and task.notification_id is None:
                task.notification_id = await self._schedule_reminder(task.text)

        logger.info(f"Task toggled: id={task.id}, completed={task.completed}")
        self._persist()

    async def edit(self, task_id: str, text: str, priority: Union[Priority, str]) -> None:
        """
        Replace a task's text and priority.

        Completion state and any pending reminder are left untouched. Unknown
        ids are ignored.

        Args:
            task_id: Task identifier
            text: New text
            priority: New priority level

        Raises:
            ValidationError: If the text is blank or the priority unknown
        """
        self._validate_text(text)
        priority = self._coerce_priority(priority)

        task = self.get_task(task_id)
        if task is None:
            logger.debug(f"Edit ignored, no task with id {task_id}")
            return

        task.text = text
        task.priority = priority
        logger.info(f"Task edited: id={task.id}, priority={task.priority.value}")

        self._persist()

    async def delete(self, task_id: str) -> None:
        """
        Remove a task permanently.

        Its pending reminder is cancelled when cancel_on_delete is set.
        Unknown ids are ignored.

        Args:
            task_id: Task identifier
        """
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                break
        else:
            logger.debug(f"Delete ignored, no task with id {task_id}")
            return

        removed = self._tasks.pop(index)
        if self.cancel_on_delete and removed.notification_id is not None:
            await self._cancel_reminder(removed.notification_id)

        logger.info(f"Task deleted: id={removed.id}")
        self._persist()

    # ==============================================================================
    # PRIVATE HELPERS
    # ==============================================================================

    @staticmethod
    def _validate_text(text: str) -> None:
        """Reject text that is empty after trimming."""
        if not text or not text.strip():
            logger.warning("Rejected empty task text")
            raise ValidationError(EMPTY_TASK_MESSAGE)

    @staticmethod
    def _coerce_priority(priority: Union[Priority, str]) -> Priority:
        """Accept a Priority or its display name."""
        try:
            return Priority(priority)
        except ValueError:
            raise ValidationError(f"Unknown priority: {priority!r}")

    def _new_task_id(self) -> str:
        """Derive an id from the current time in milliseconds, skipping ids in use."""
        candidate = int(self._clock() * 1000)
        existing = {task.id for task in self._tasks}
        while str(candidate) in existing:
            candidate += 1
        return str(candidate)

    async def _schedule_reminder(self, text: str) -> Optional[str]:
        """Schedule a reminder for a task text, returning None on failure."""
        try:
            return await self.notifications.schedule(
                REMINDER_TITLE,
                reminder_body(text),
                self.delay_seconds,
            )
        except NotificationError as e:
            logger.warning(f"Notification scheduling failed: {e}")
            return None

    async def _cancel_reminder(self, handle: str) -> None:
        """Cancel a reminder, logging failures."""
        try:
            await self.notifications.cancel(handle)
        except NotificationError as e:
            logger.warning(f"Notification cancellation failed for {handle}: {e}")

    def _on_notification_fired(self, handle: str) -> None:
        """Drop the handle of a delivered reminder from its task."""
        for task in self._tasks:
            if task.notification_id == handle:
                task.notification_id = None
                logger.debug(f"Cleared fired notification from task {task.id}")
                self._persist()
                return

    def _persist(self) -> None:
        """Hand the current collection to the save queue."""
        if self._save_queue is not None:
            self._save_queue.request_save(self._tasks)
