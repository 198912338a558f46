"""TaskItem widget for displaying a single task row.

Renders `text (Priority)` in the priority's colour, struck through and dimmed
once the task is completed.
"""

from typing import Optional

from rich.text import Text
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget

from taskpad.models import Task
from taskpad.ui.theme import (
    COMPLETE_OPACITY,
    FOREGROUND,
    HOVER_OPACITY,
    SELECTION,
    get_priority_color,
    with_alpha,
)


class TaskItem(Widget):
    """A widget representing a single task in a task column.

    Clicking a row selects it and asks for its completion to be toggled,
    the same as pressing the row in a touch list.
    """

    DEFAULT_CSS = f"""
    TaskItem {{
        height: 1;
        width: 100%;
        background: transparent;
    }}

    TaskItem:hover {{
        background: {with_alpha(SELECTION, HOVER_OPACITY)};
    }}

    TaskItem.selected {{
        background: {SELECTION};
    }}

    TaskItem.completed {{
        opacity: {COMPLETE_OPACITY};
    }}
    """

    selected: reactive[bool] = reactive(False)
    task_id: reactive[Optional[str]] = reactive(None)

    def __init__(self, task: Task, **kwargs) -> None:
        """Initialize a TaskItem widget.

        Args:
            task: The Task model to display
            **kwargs: Additional keyword arguments for Widget
        """
        super().__init__(**kwargs)
        self._task_model = task
        self.task_id = task.id
        self.set_class(task.completed, "completed")

    @property
    def task(self) -> Task:
        """The task shown by this row."""
        return self._task_model

    def render(self) -> Text:
        """Render the row as Rich Text.

        Selected rows use the foreground colour for contrast; every other row
        uses its priority colour. Completed rows are struck through.

        Returns:
            Rich Text object with formatted task display
        """
        task = self._task_model
        color = FOREGROUND if self.selected else get_priority_color(task.priority)
        style = f"strike {color}" if task.completed else color

        text = Text()
        text.append(f"{task.text} ({task.priority.value})", style=style)

        if self.selected:
            text.stylize(f"on {SELECTION}")

        return text

    def on_click(self) -> None:
        """Handle click event on the task item."""
        self.selected = True
        self.post_message(self.Pressed(self.task_id))

    def watch_selected(self, selected: bool) -> None:
        """React to selection state changes."""
        self.set_class(selected, "selected")
        self.refresh()

    class Pressed(Message):
        """Message emitted when a task row is clicked."""

        def __init__(self, task_id: str) -> None:
            super().__init__()
            self.task_id = task_id
