"""
Pydantic models for TaskPad.

Defines the task entity, its priority levels, the editor session used by the
edit dialog, and the JSON form the task collection is persisted in.
"""

import json
from enum import Enum
from typing import Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from taskpad.logging_config import get_logger

logger = get_logger(__name__)


class Priority(str, Enum):
    """Urgency level of a task, used for display order and colour."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        """Sort rank: High sorts first, Low last."""
        return PRIORITY_ORDER.index(self)


PRIORITY_ORDER = [Priority.HIGH, Priority.MEDIUM, Priority.LOW]
DEFAULT_PRIORITY = Priority.MEDIUM


class Task(BaseModel):
    """
    A single to-do item.

    `notification_id` holds the handle of a pending reminder and is only
    present while that reminder is outstanding and the task is active. It is
    serialized under the `notificationId` key.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "1736848800000",
                "text": "Buy milk",
                "completed": False,
                "notificationId": "0b6f3c1e-6a43-4f1b-9f0e-5a1f2d3c4b5a",
                "priority": "High",
            }
        },
    )

    id: str = Field(..., min_length=1, description="Unique identifier, stable for the task's lifetime")
    text: str = Field(..., min_length=1, description="Display text")
    completed: bool = Field(default=False, description="Whether the task is completed")
    priority: Priority = Field(default=DEFAULT_PRIORITY, description="Priority level")
    notification_id: Optional[str] = Field(
        default=None,
        alias="notificationId",
        description="Handle of the pending reminder, if any",
    )

    @property
    def has_pending_notification(self) -> bool:
        """True while a reminder handle is stored on the task."""
        return self.notification_id is not None

    def to_record(self) -> dict:
        """Serialize to the persisted record form."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ==============================================================================
# EDITOR SESSION
# ==============================================================================


class NoActiveEdit(BaseModel):
    """No task is being edited."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


class EditingTask(BaseModel):
    """A task is open in the edit dialog with unsaved draft values."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["editing"] = "editing"
    task_id: str
    draft_text: str
    draft_priority: Priority

    @classmethod
    def for_task(cls, task: Task) -> "EditingTask":
        """Open an editor session seeded from the task's current values."""
        return cls(task_id=task.id, draft_text=task.text, draft_priority=task.priority)


EditorSession = Union[NoActiveEdit, EditingTask]


# ==============================================================================
# SERIALIZATION
# ==============================================================================


def sort_by_priority(tasks: Iterable[Task]) -> List[Task]:
    """Return tasks ordered High, Medium, Low, keeping the given order within a level."""
    return sorted(tasks, key=lambda task: task.priority.rank)


def tasks_to_json(tasks: Iterable[Task]) -> str:
    """Serialize a task collection to its persisted JSON form."""
    return json.dumps([task.to_record() for task in tasks])


def tasks_from_json(payload: str) -> List[Task]:
    """
    Deserialize a persisted task collection.

    Records that fail validation are skipped with a warning, as are records
    whose id repeats an earlier one.

    Args:
        payload: JSON text as written by tasks_to_json

    Returns:
        List of tasks in stored order

    Raises:
        ValueError: If the payload is not a JSON list
    """
    data = json.loads(payload)
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of task records, got {type(data).__name__}")

    tasks: List[Task] = []
    seen_ids = set()
    for index, record in enumerate(data):
        try:
            task = Task.model_validate(record)
        except ValidationError as e:
            logger.warning(f"Skipping invalid task record at index {index}: {e.error_count()} error(s)")
            continue
        if task.id in seen_ids:
            logger.warning(f"Skipping duplicate task id {task.id} at index {index}")
            continue
        seen_ids.add(task.id)
        tasks.append(task)
    return tasks
