"""Keyboard shortcuts for TaskPad.

Row actions (toggle, edit, delete) apply to the selected task of the focused
column. While the new-task input has focus it consumes printable keys, so
these bindings only fire once a column is focused. Tab and Shift+Tab use
Textual's normal focus cycling.
"""

from textual.binding import Binding


# Row selection inside the focused column
NAVIGATION_BINDINGS = [
    Binding("up", "navigate_up", "Navigate Up", show=False),
    Binding("down", "navigate_down", "Navigate Down", show=False),
]

# Creating and changing tasks
TASK_ACTION_BINDINGS = [
    Binding("n,N", "focus_new_task", "New Task", show=True),
    Binding("space", "toggle_completion", "Toggle Complete", show=True),
    Binding("enter", "toggle_completion", "Toggle Complete", show=False),
    Binding("e,E", "edit_task", "Edit Task", show=True),
    Binding("delete,backspace", "delete_task", "Delete Task", show=True),
    Binding("p,P", "cycle_priority", "Priority", show=True),
]

# App-wide keys
APP_CONTROL_BINDINGS = [
    Binding("ctrl+q", "quit", "Quit", priority=True, show=True),
    Binding("question_mark", "help", "Help", show=True),
]

# Column identifiers
ACTIVE_COLUMN_ID = "active-column"
COMPLETED_COLUMN_ID = "completed-column"


def get_all_bindings() -> list[Binding]:
    """Bindings for TaskPad.BINDINGS, in footer order."""
    return NAVIGATION_BINDINGS + TASK_ACTION_BINDINGS + APP_CONTROL_BINDINGS
