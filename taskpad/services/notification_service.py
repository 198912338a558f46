"""
Local reminder notifications for TaskPad.

Schedules one-shot alerts on the running asyncio loop and delivers them to a
sink when their delay elapses. Every scheduled alert is identified by an
opaque handle that can be used to cancel it before it fires.
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
from uuid import uuid4

from taskpad.logging_config import get_logger

logger = get_logger(__name__)

REMINDER_TITLE = "Task Reminder"
DEFAULT_DELAY_SECONDS = 10.0

NotificationSink = Callable[[str, str], None]
FiredListener = Callable[[str], None]


class NotificationError(Exception):
    """Base exception for notification errors."""
    pass


class NotificationSchedulingError(NotificationError):
    """Raised when a reminder cannot be scheduled."""
    pass


class NotificationCancellationError(NotificationError):
    """Raised when a reminder cannot be cancelled."""
    pass


def reminder_body(text: str) -> str:
    """Build the reminder body for a task text."""
    return f"Time to complete: {text}"


@dataclass(slots=True)
class ScheduledNotification:
    """A reminder waiting for its delay to elapse."""

    handle: str
    title: str
    body: str
    fire_at: float
    timer: asyncio.TimerHandle


class NotificationService:
    """
    Schedules and cancels one-shot local notifications.

    Fired notifications go to the sink, then every fired-listener is told the
    handle so owners can drop it. Errors raised by the sink or listeners are
    logged and never reach the event loop.
    """

    def __init__(self, sink: Optional[NotificationSink] = None, enabled: bool = True) -> None:
        """
        Initialize the notification service.

        Args:
            sink: Callable receiving (title, body) when a notification fires
            enabled: When False, every schedule request fails
        """
        self._sink = sink
        self.enabled = enabled
        self._scheduled: Dict[str, ScheduledNotification] = {}
        self._fired_listeners: List[FiredListener] = []

    def set_sink(self, sink: Optional[NotificationSink]) -> None:
        """Replace the delivery sink."""
        self._sink = sink

    def add_fired_listener(self, listener: FiredListener) -> None:
        """Register a callable told the handle of every delivered notification."""
        self._fired_listeners.append(listener)

    async def schedule(self, title: str, body: str, delay_seconds: float = DEFAULT_DELAY_SECONDS) -> str:
        """
        Schedule a one-shot notification.

        Args:
            title: Notification title
            body: Notification body
            delay_seconds: Seconds from now until delivery

        Returns:
            Handle identifying the scheduled notification

        Raises:
            NotificationSchedulingError: If notifications are disabled, the
                delay is invalid, or no event loop is running
        """
        if not self.enabled:
            raise NotificationSchedulingError("Notifications are disabled")
        if delay_seconds < 0:
            raise NotificationSchedulingError(f"Invalid delay: {delay_seconds}")

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise NotificationSchedulingError("No running event loop") from e

        handle = str(uuid4())
        timer = loop.call_later(delay_seconds, self._fire, handle)
        self._scheduled[handle] = ScheduledNotification(
            handle=handle,
            title=title,
            body=body,
            fire_at=loop.time() + delay_seconds,
            timer=timer,
        )
        logger.info(f"Scheduled notification {handle} in {delay_seconds}s")
        return handle

    async def cancel(self, handle: str) -> None:
        """
        Cancel a scheduled notification.

        Args:
            handle: Handle returned by schedule()

        Raises:
            NotificationCancellationError: If no notification is pending for the handle
        """
        scheduled = self._scheduled.pop(handle, None)
        if scheduled is None:
            raise NotificationCancellationError(f"No pending notification with handle {handle}")
        scheduled.timer.cancel()
        logger.info(f"Cancelled notification {handle}")

    def cancel_all(self) -> int:
        """
        Cancel every pending notification.

        Returns:
            Number of notifications cancelled
        """
        count = len(self._scheduled)
        for scheduled in self._scheduled.values():
            scheduled.timer.cancel()
        self._scheduled.clear()
        if count:
            logger.info(f"Cancelled {count} pending notifications")
        return count

    def is_pending(self, handle: str) -> bool:
        """Check whether a notification is still waiting to fire."""
        return handle in self._scheduled

    def pending_handles(self) -> List[str]:
        """Handles of all notifications still waiting to fire."""
        return list(self._scheduled)

    def _fire(self, handle: str) -> None:
        """Deliver a notification whose delay has elapsed."""
        scheduled = self._scheduled.pop(handle, None)
        if scheduled is None:
            return

        logger.info(f"Delivering notification {handle}")
        if self._sink is not None:
            try:
                self._sink(scheduled.title, scheduled.body)
            except Exception as e:
                logger.error(f"Notification sink failed for {handle}: {e}", exc_info=True)
        else:
            logger.debug(f"No sink configured, notification {handle} dropped")

        for listener in list(self._fired_listeners):
            try:
                listener(handle)
            except Exception as e:
                logger.error(f"Fired listener failed for {handle}: {e}", exc_info=True)
