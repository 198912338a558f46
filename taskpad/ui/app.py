"""Main Textual application for TaskPad.

Single screen layout:
- Input row: new task text, Add button and priority selector
- Column 1: Active tasks, High priority first
- Column 2: Completed tasks, High priority first

Reminders scheduled for new tasks are delivered as Textual notifications.
"""

from typing import Optional

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, Footer, Header, Input

from taskpad.config import Config
from taskpad.database import DatabaseManager, database_url_for, get_database_manager
from taskpad.logging_config import get_logger
from taskpad.models import DEFAULT_PRIORITY, EditingTask, EditorSession, NoActiveEdit, Task
from taskpad.services.notification_service import NotificationService
from taskpad.services.storage_service import TaskStorage
from taskpad.services.task_store import TaskStore, ValidationError
from taskpad.ui.components.alert_modal import AlertModal
from taskpad.ui.components.column import TaskColumn
from taskpad.ui.components.priority_selector import PrioritySelector
from taskpad.ui.components.task_modal import TaskEditModal
from taskpad.ui.constants import (
    ACTIVE_TITLE,
    APP_TITLE,
    COMPLETED_TITLE,
    EMPTY_TASK_ALERT_TITLE,
    MAX_TEXT_LENGTH_IN_NOTIFICATION,
    NOTIFICATION_TIMEOUT_LONG,
    NOTIFICATION_TIMEOUT_SHORT,
    REMINDER_TIMEOUT,
)
from taskpad.ui.keybindings import (
    ACTIVE_COLUMN_ID,
    COMPLETED_COLUMN_ID,
    get_all_bindings,
)
from taskpad.ui.theme import (
    ACCENT_COLOR,
    BACKGROUND,
    BORDER,
    SELECTION,
    SUCCESS_COLOR,
)

# Initialize logger for this module
logger = get_logger(__name__)


class TaskPad(App):
    """Main TaskPad application with an input row and two task columns."""

    CSS = f"""
    Screen {{
        background: {BACKGROUND};
        layout: vertical;
    }}

    #main-container {{
        width: 100%;
        height: 1fr;
        background: {BACKGROUND};
    }}

    #input-row {{
        width: 100%;
        height: 3;
        padding: 0 1;
    }}

    #new-task-input {{
        width: 1fr;
        border: round {BORDER};
    }}

    #new-task-input:focus {{
        border: round {ACCENT_COLOR};
    }}

    #add-button {{
        min-width: 8;
        margin-left: 1;
        color: {SUCCESS_COLOR};
    }}

    #columns-container {{
        width: 100%;
        height: 1fr;
        layout: horizontal;
    }}

    #{ACTIVE_COLUMN_ID}, #{COMPLETED_COLUMN_ID} {{
        width: 1fr;
        height: 100%;
    }}

    Footer {{
        background: {SELECTION};
    }}
    """

    BINDINGS = get_all_bindings()

    # ==============================================================================
    # LIFECYCLE METHODS
    # ==============================================================================

    def __init__(self, config: Optional[Config] = None, **kwargs) -> None:
        """Initialize the TaskPad application.

        Args:
            config: Configuration to use; defaults to ~/.taskpad/config.ini
            **kwargs: Additional keyword arguments for App
        """
        super().__init__(**kwargs)
        self.title = APP_TITLE
        self.sub_title = "Press ? for help"
        self._config = config or Config()
        self._db_manager: Optional[DatabaseManager] = None
        self._notifications: Optional[NotificationService] = None
        self._store: Optional[TaskStore] = None
        self._editor: EditorSession = NoActiveEdit()

    def compose(self) -> ComposeResult:
        """Compose the application layout.

        Yields:
            Widgets that make up the application
        """
        yield Header()

        with Container(id="main-container"):
            with Horizontal(id="input-row"):
                yield Input(placeholder="Enter a new task", id="new-task-input")
                yield Button("Add", id="add-button")
            yield PrioritySelector(selected=DEFAULT_PRIORITY, id="new-task-priority")

            with Horizontal(id="columns-container"):
                yield TaskColumn(
                    column_id=ACTIVE_COLUMN_ID,
                    title=ACTIVE_TITLE,
                    id=ACTIVE_COLUMN_ID,
                )
                yield TaskColumn(
                    column_id=COMPLETED_COLUMN_ID,
                    title=COMPLETED_TITLE,
                    id=COMPLETED_COLUMN_ID,
                )

        yield Footer()

    async def on_mount(self) -> None:
        """Open storage, load saved tasks and show them."""
        logger.info("TaskPad application mounted, initializing...")

        storage_config = self._config.get_storage_config()
        notification_config = self._config.get_notification_config()

        self._db_manager = get_database_manager(database_url_for(storage_config['database_path']))
        await self._db_manager.initialize()
        logger.info("Database initialized")

        self._notifications = NotificationService(
            sink=self._deliver_reminder,
            enabled=notification_config['enabled'],
        )
        self._store = TaskStore(
            notifications=self._notifications,
            storage=TaskStorage(self._db_manager),
            delay_seconds=notification_config['delay_seconds'],
            reschedule_on_reopen=notification_config['reschedule_on_reopen'],
            cancel_on_delete=notification_config['cancel_on_delete'],
        )
        await self._store.load()
        await self._refresh_ui()

        self.query_one("#new-task-input", Input).focus()
        logger.info("TaskPad application ready")

    async def on_unmount(self) -> None:
        """Stop pending reminders and let queued saves finish."""
        logger.info("TaskPad application shutting down")

        if self._store is not None:
            await self._store.close()
        # Reminders kept by deleted tasks when cancel_on_delete is off
        if self._notifications is not None:
            self._notifications.cancel_all()
        if self._db_manager is not None:
            await self._db_manager.close()

        logger.info("TaskPad application shutdown complete")

    # ==============================================================================
    # EVENT HANDLERS
    # ==============================================================================

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in the new-task input adds a task."""
        if event.input.id == "new-task-input":
            event.stop()
            await self._add_task_from_input()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Add button adds a task."""
        if event.button.id == "add-button":
            event.stop()
            await self._add_task_from_input()

    async def on_task_column_task_pressed(self, message: TaskColumn.TaskPressed) -> None:
        """A click on a row toggles its completion."""
        await self._toggle_task(message.task.id)

    def on_task_edit_modal_draft_changed(self, message: TaskEditModal.DraftChanged) -> None:
        """Track the drafts typed into the open edit dialog."""
        if isinstance(self._editor, EditingTask) and self._editor.task_id == message.session.task_id:
            self._editor = message.session

    async def on_task_edit_modal_edit_saved(self, message: TaskEditModal.EditSaved) -> None:
        """Apply a saved edit and close the editor session.

        Args:
            message: EditSaved message carrying the final session
        """
        session = message.session
        self._editor = NoActiveEdit()

        if self._store is None:
            return

        try:
            await self._store.edit(session.task_id, session.draft_text, session.draft_priority)
        except ValidationError as e:
            self._show_alert(str(e))
            return

        self._notify_task_success("updated", session.draft_text)
        await self._refresh_ui()

    def on_task_edit_modal_edit_cancelled(self, message: TaskEditModal.EditCancelled) -> None:
        """Close the editor session without changes."""
        self._editor = NoActiveEdit()

    # ==============================================================================
    # ACTION HANDLERS - NAVIGATION
    # ==============================================================================

    def action_navigate_up(self) -> None:
        """Navigate up within the current column."""
        column = self._get_focused_column()
        if column:
            column.navigate_up()

    def action_navigate_down(self) -> None:
        """Navigate down within the current column."""
        column = self._get_focused_column()
        if column:
            column.navigate_down()

    def action_focus_new_task(self) -> None:
        """Move focus to the new-task input (N key)."""
        self.query_one("#new-task-input", Input).focus()

    def action_cycle_priority(self) -> None:
        """Cycle the priority used for the next new task (P key)."""
        self.query_one("#new-task-priority", PrioritySelector).cycle()

    # ==============================================================================
    # ACTION HANDLERS - TASK OPERATIONS
    # ==============================================================================

    async def action_toggle_completion(self) -> None:
        """Toggle completion of the selected task (Space/Enter key)."""
        selected_task = self._get_selected_task()
        if not selected_task:
            logger.debug("No task selected for completion toggle")
            return
        await self._toggle_task(selected_task.id)

    def action_edit_task(self) -> None:
        """Edit the selected task (E key).

        Starts an editor session from the task's current text and priority
        and opens the edit dialog on it.
        """
        selected_task = self._get_selected_task()
        if not selected_task:
            return

        self._editor = EditingTask.for_task(selected_task)
        self.push_screen(TaskEditModal(self._editor))

    async def action_delete_task(self) -> None:
        """Delete the selected task permanently (Delete/Backspace key)."""
        selected_task = self._get_selected_task()
        if not selected_task or self._store is None:
            logger.debug("No task selected for delete")
            return

        await self._store.delete(selected_task.id)
        self._notify_task_success("deleted", selected_task.text)
        await self._refresh_ui()

    # ==============================================================================
    # ACTION HANDLERS - UTILITY
    # ==============================================================================

    def action_help(self) -> None:
        """Show help information."""
        self.notify(
            "Enter=Add, Space/Enter=Complete, E=Edit, Delete=Remove, P=Priority, N=New, Ctrl+Q=Quit",
            severity="information",
            timeout=NOTIFICATION_TIMEOUT_LONG
        )

    # ==============================================================================
    # PRIVATE HELPERS
    # ==============================================================================

    @property
    def editor(self) -> EditorSession:
        """Current editor session."""
        return self._editor

    @property
    def store(self) -> Optional[TaskStore]:
        """Task store, available once the app is mounted."""
        return self._store

    def _get_focused_column(self) -> Optional[TaskColumn]:
        """Get the task column holding focus, or None if focus is elsewhere."""
        node = self.focused
        while node is not None and not isinstance(node, TaskColumn):
            node = node.parent
        return node

    def _get_selected_task(self) -> Optional[Task]:
        column = self._get_focused_column()
        if column is None:
            return None
        return column.get_selected_task()

    async def _add_task_from_input(self) -> None:
        """Create a task from the input row, then reset the row."""
        if self._store is None:
            return

        text_input = self.query_one("#new-task-input", Input)
        selector = self.query_one("#new-task-priority", PrioritySelector)

        try:
            task = await self._store.add(text_input.value, selector.selected)
        except ValidationError as e:
            self._show_alert(str(e))
            return

        text_input.value = ""
        selector.select(DEFAULT_PRIORITY)
        self._notify_task_success("added", task.text)
        await self._refresh_ui()

    async def _toggle_task(self, task_id: str) -> None:
        if self._store is None:
            return
        await self._store.toggle_complete(task_id)
        await self._refresh_ui()

    async def _refresh_ui(self) -> None:
        """Re-render both columns from the store."""
        if self._store is None:
            return
        active = self.query_one(f"#{ACTIVE_COLUMN_ID}", TaskColumn)
        completed = self.query_one(f"#{COMPLETED_COLUMN_ID}", TaskColumn)
        await active.set_tasks(self._store.active_tasks())
        await completed.set_tasks(self._store.completed_tasks())

    def _show_alert(self, message: str) -> None:
        self.push_screen(AlertModal(EMPTY_TASK_ALERT_TITLE, message))

    def _deliver_reminder(self, title: str, body: str) -> None:
        """Show a fired reminder as a notification."""
        logger.info(f"Reminder delivered: {title}")
        self.notify(body, title=title, severity="information", timeout=REMINDER_TIMEOUT)

    def _notify_task_success(self, action: str, text: str) -> None:
        """Show success notification for task operation.

        Args:
            action: Action performed (e.g., "added", "deleted")
            text: Task text to display (will be truncated)
        """
        truncated = text[:MAX_TEXT_LENGTH_IN_NOTIFICATION]
        if len(text) > MAX_TEXT_LENGTH_IN_NOTIFICATION:
            truncated += "..."
        self.notify(
            f"✓ Task {action}: {truncated}",
            severity="information",
            timeout=NOTIFICATION_TIMEOUT_SHORT
        )
