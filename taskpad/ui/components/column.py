"""Column widget for displaying one filtered view of the task store.

TaskPad shows two columns, active and completed tasks. Each column renders
the tasks it is given in order, tracks the selected row and reports clicks.
"""

from typing import List, Optional

from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static

from taskpad.logging_config import get_logger
from taskpad.models import Task
from taskpad.ui.components.task_item import TaskItem
from taskpad.ui.constants import EMPTY_LIST_MESSAGE
from taskpad.ui.theme import (
    ACCENT_COLOR,
    BORDER,
    COMMENT,
)

logger = get_logger(__name__)


class TaskColumn(Widget):
    """A focusable column listing tasks.

    Manages:
    - TaskItem rows for the tasks it was given
    - Selection state and up/down navigation
    - Empty state message
    """

    can_focus = True

    DEFAULT_CSS = f"""
    TaskColumn {{
        border: round {BORDER};
        padding: 0 1;
        margin: 0 1;
        height: 1fr;
    }}

    TaskColumn:focus {{
        border: round {ACCENT_COLOR};
    }}

    TaskColumn .column-header {{
        width: 100%;
        height: 1;
        text-style: bold;
        margin-bottom: 1;
    }}

    TaskColumn .column-content {{
        width: 100%;
        height: 1fr;
    }}

    TaskColumn .empty-message {{
        width: 100%;
        color: {COMMENT};
        text-align: center;
        padding: 1;
    }}
    """

    header_title: reactive[str] = reactive("Tasks")
    selected_task_id: reactive[Optional[str]] = reactive(None)

    def __init__(
        self,
        column_id: str,
        title: str,
        empty_message: str = EMPTY_LIST_MESSAGE,
        **kwargs
    ) -> None:
        """Initialize a TaskColumn widget.

        Args:
            column_id: Unique identifier for this column
            title: Column header title
            empty_message: Message to show when column is empty
            **kwargs: Additional keyword arguments for Widget
        """
        super().__init__(**kwargs)
        self.column_id = column_id
        self.header_title = title
        self.empty_message = empty_message
        self._tasks: List[Task] = []
        self._selected_index: int = -1

    def compose(self):
        """Compose the column layout."""
        yield Static(self.header_title, classes="column-header", id=f"{self.column_id}-header")
        with VerticalScroll(classes="column-content", id=f"{self.column_id}-content"):
            yield Static(self.empty_message, classes="empty-message", id=f"{self.column_id}-empty")

    @property
    def tasks(self) -> List[Task]:
        """Tasks currently shown, in display order."""
        return list(self._tasks)

    async def set_tasks(self, tasks: List[Task]) -> None:
        """Replace the shown tasks, keeping the selection on the same task if possible.

        When the selected task is gone the selection stays at the same row
        index, clamped to the new length.

        Args:
            tasks: Tasks to display, already in display order
        """
        logger.debug(f"{self.column_id}: set_tasks() called with {len(tasks)} tasks")

        previous_id = self.selected_task_id
        previous_index = self._selected_index
        self._tasks = list(tasks)

        if not self._tasks:
            self._selected_index = -1
        elif previous_id is not None and any(task.id == previous_id for task in self._tasks):
            self._selected_index = next(
                i for i, task in enumerate(self._tasks) if task.id == previous_id
            )
        elif previous_index >= 0:
            self._selected_index = min(previous_index, len(self._tasks) - 1)
        else:
            self._selected_index = -1

        self.selected_task_id = (
            self._tasks[self._selected_index].id if self._selected_index >= 0 else None
        )

        await self._render_tasks()

    async def _render_tasks(self) -> None:
        """Rebuild the TaskItem rows."""
        try:
            content = self.query_one(f"#{self.column_id}-content", VerticalScroll)
            empty_message = self.query_one(f"#{self.column_id}-empty", Static)
        except NoMatches:
            logger.debug(f"{self.column_id}: Container not ready, skipping render")
            return

        await content.remove_children(TaskItem)
        empty_message.display = not self._tasks
        if not self._tasks:
            return

        items = []
        for i, task in enumerate(self._tasks):
            item = TaskItem(task=task, id=f"task-{task.id}")
            item.selected = i == self._selected_index
            items.append(item)
        await content.mount_all(items)

    def navigate_up(self) -> None:
        """Select the previous task in the list."""
        if self._tasks and self._selected_index > 0:
            self._update_selection(self._selected_index - 1)

    def navigate_down(self) -> None:
        """Select the next task in the list."""
        if self._tasks and self._selected_index < len(self._tasks) - 1:
            self._update_selection(self._selected_index + 1)

    def _update_selection(self, new_index: int) -> None:
        """Move the selection highlight to a new row.

        Args:
            new_index: New selection index
        """
        if not self._tasks or new_index < 0 or new_index >= len(self._tasks):
            return

        for item in self.query(TaskItem):
            item.selected = False

        self._selected_index = new_index
        new_task = self._tasks[new_index]
        self.selected_task_id = new_task.id

        try:
            new_item = self.query_one(f"#task-{new_task.id}", TaskItem)
        except NoMatches:
            return
        new_item.selected = True
        new_item.scroll_visible()

    def select_task(self, task_id: str) -> bool:
        """Select the row showing a task.

        Args:
            task_id: Task identifier

        Returns:
            True if the task is shown in this column
        """
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                self._update_selection(i)
                return True
        return False

    def get_selected_task(self) -> Optional[Task]:
        """Get the currently selected task, or None."""
        if 0 <= self._selected_index < len(self._tasks):
            return self._tasks[self._selected_index]
        return None

    def on_focus(self) -> None:
        """Select the first row when focus arrives with nothing selected."""
        if self._tasks and self._selected_index == -1:
            self._update_selection(0)

    def on_task_item_pressed(self, message: TaskItem.Pressed) -> None:
        """Turn a row click into a selection plus a press message."""
        message.stop()
        if self.select_task(message.task_id):
            self.focus()
            self.post_message(self.TaskPressed(self._tasks[self._selected_index], self.column_id))

    class TaskPressed(Message):
        """Message emitted when a task row in the column is clicked."""

        def __init__(self, task: Task, column_id: str) -> None:
            super().__init__()
            self.task = task
            self.column_id = column_id
