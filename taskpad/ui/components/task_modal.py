"""Task editing modal for TaskPad.

This module provides the dialog opened by a long press (the `e` key) on a
task row. It shows:
- Text input pre-filled with the task's text
- Priority selector pre-set to the task's priority
- Save / Cancel buttons (Enter saves, Escape cancels)

All editing state lives in one EditingTask value. The dialog replaces it on
every keystroke or priority change and reports each new value to the app,
which owns the current editor session.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from taskpad.logging_config import get_logger
from taskpad.models import EditingTask
from taskpad.services.task_store import EMPTY_TASK_MESSAGE
from taskpad.ui.base_styles import BUTTON_BASE_CSS, MODAL_BASE_CSS
from taskpad.ui.components.alert_modal import AlertModal
from taskpad.ui.components.priority_selector import PrioritySelector
from taskpad.ui.constants import EMPTY_TASK_ALERT_TITLE

logger = get_logger(__name__)


class TaskEditModal(ModalScreen):
    """Modal screen for editing a task's text and priority.

    Messages:
        DraftChanged: Emitted with the updated session after each edit
        EditSaved: Emitted with the final editor session when Save succeeds
        EditCancelled: Emitted when the dialog is closed without saving
    """

    DEFAULT_CSS = MODAL_BASE_CSS + BUTTON_BASE_CSS + """
    TaskEditModal > Container {
        width: 70;
        height: auto;
        max-height: 90%;
    }

    TaskEditModal .modal-header {
        width: 100%;
        height: 3;
        content-align: center middle;
        margin-bottom: 1;
    }

    TaskEditModal Input {
        width: 100%;
        margin-bottom: 1;
    }

    TaskEditModal .button-container {
        width: 100%;
        height: 3;
        align: center middle;
        margin-top: 1;
        layout: horizontal;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("ctrl+s", "save", "Save", priority=True),
    ]

    def __init__(self, session: EditingTask, **kwargs) -> None:
        """Initialize the edit modal.

        Args:
            session: Editor session holding the task id and starting drafts
            **kwargs: Additional keyword arguments for ModalScreen
        """
        super().__init__(**kwargs)
        self.editor_session = session

    def compose(self) -> ComposeResult:
        with Container():
            yield Static("Edit Task", classes="modal-header")
            yield Label("Task:", classes="field-label")
            yield Input(
                placeholder="Enter task text...",
                value=self.editor_session.draft_text,
                id="edit-text-input",
            )
            yield PrioritySelector(selected=self.editor_session.draft_priority, id="edit-priority")
            with Container(classes="button-container"):
                yield Button("Save [Enter]", id="save-button", classes="success")
                yield Button("Cancel [Esc]", id="cancel-button", classes="error")

    def on_mount(self) -> None:
        logger.info(f"TaskEditModal: Opened for task_id={self.editor_session.task_id}")
        self.query_one("#edit-text-input", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Keep the draft text in step with the input."""
        if event.input.id == "edit-text-input":
            event.stop()
            self._update_draft(draft_text=event.value)

    def on_priority_selector_changed(self, event: PrioritySelector.Changed) -> None:
        """Keep the draft priority in step with the selector."""
        event.stop()
        self._update_draft(draft_priority=event.priority)

    def _update_draft(self, **changes) -> None:
        """Replace the session and report it to the app."""
        session = self.editor_session.model_copy(update=changes)
        if session == self.editor_session:
            return
        self.editor_session = session
        self.post_message(self.DraftChanged(session))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in the text input saves."""
        if event.input.id == "edit-text-input":
            event.stop()
            self.action_save()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-button":
            event.stop()
            self.action_save()
        elif event.button.id == "cancel-button":
            event.stop()
            self.action_cancel()

    def validate_draft(self) -> bool:
        """True when the draft text is non-empty after trimming."""
        return bool(self.editor_session.draft_text.strip())

    def action_save(self) -> None:
        """Post the edited session and close, or alert on empty text.

        The dialog stays open after the alert so the user can correct it.
        """
        if not self.validate_draft():
            logger.warning(f"TaskEditModal: Save rejected, empty text (task_id={self.editor_session.task_id})")
            self.app.push_screen(AlertModal(EMPTY_TASK_ALERT_TITLE, EMPTY_TASK_MESSAGE))
            return

        logger.info(
            f"TaskEditModal: Saved task_id={self.editor_session.task_id}, "
            f"priority={self.editor_session.draft_priority.value}"
        )
        self.post_message(self.EditSaved(self.editor_session))
        self.dismiss()

    def action_cancel(self) -> None:
        """Close without saving."""
        logger.info(f"TaskEditModal: Cancelled (task_id={self.editor_session.task_id})")
        self.post_message(self.EditCancelled(self.editor_session.task_id))
        self.dismiss()

    class DraftChanged(Message):
        """Message emitted whenever the draft text or priority changes."""

        def __init__(self, session: EditingTask) -> None:
            super().__init__()
            self.session = session

    class EditSaved(Message):
        """Message emitted when an edit is saved."""

        def __init__(self, session: EditingTask) -> None:
            super().__init__()
            self.session = session

    class EditCancelled(Message):
        """Message emitted when editing is cancelled."""

        def __init__(self, task_id: str) -> None:
            super().__init__()
            self.task_id = task_id
