"""Reusable widgets and dialogs for the TaskPad UI."""

from taskpad.ui.components.alert_modal import AlertModal
from taskpad.ui.components.column import TaskColumn
from taskpad.ui.components.priority_selector import PrioritySelector
from taskpad.ui.components.task_item import TaskItem
from taskpad.ui.components.task_modal import TaskEditModal

__all__ = [
    "AlertModal",
    "PrioritySelector",
    "TaskColumn",
    "TaskEditModal",
    "TaskItem",
]
