"""Tests for the task edit modal and the alert dialog.

This module tests the TaskEditModal functionality including:
- Pre-filled text and priority from the editor session
- Draft tracking as the user types or picks a priority
- Keyboard shortcuts (Enter to save, Escape to cancel)
- Empty text validation through the alert dialog
"""

import pytest
from textual.app import App
from textual.widgets import Input

from taskpad.models import EditingTask, Priority
from taskpad.ui.components.alert_modal import AlertModal
from taskpad.ui.components.priority_selector import PrioritySelector
from taskpad.ui.components.task_modal import TaskEditModal


def make_session(**kwargs) -> EditingTask:
    defaults = {"task_id": "1", "draft_text": "Buy milk", "draft_priority": Priority.LOW}
    defaults.update(kwargs)
    return EditingTask(**defaults)


class ModalApp(App):
    """App that opens the edit modal on start and records its messages."""

    def __init__(self, session: EditingTask):
        super().__init__()
        self.edit_session = session
        self.saved = []
        self.cancelled = []
        self.drafts = []

    def on_mount(self) -> None:
        self.push_screen(TaskEditModal(self.edit_session))

    def on_task_edit_modal_draft_changed(self, message: TaskEditModal.DraftChanged) -> None:
        self.drafts.append(message.session)

    def on_task_edit_modal_edit_saved(self, message: TaskEditModal.EditSaved) -> None:
        self.saved.append(message.session)

    def on_task_edit_modal_edit_cancelled(self, message: TaskEditModal.EditCancelled) -> None:
        self.cancelled.append(message.task_id)


class TestTaskEditModalComposition:
    """Test modal composition from the editor session."""

    def test_modal_keeps_session(self):
        session = make_session()
        modal = TaskEditModal(session)

        assert modal.editor_session == session

    @pytest.mark.asyncio
    async def test_fields_prefilled(self):
        app = ModalApp(make_session())
        async with app.run_test() as pilot:
            await pilot.pause()
            modal = app.screen

            assert isinstance(modal, TaskEditModal)
            assert modal.query_one("#edit-text-input", Input).value == "Buy milk"
            assert modal.query_one(PrioritySelector).selected == Priority.LOW
            assert modal.focused is modal.query_one("#edit-text-input", Input)


class TestTaskEditModalDrafts:
    """Test draft changes reported while the dialog is open."""

    @pytest.mark.asyncio
    async def test_each_change_reported(self):
        app = ModalApp(make_session())
        async with app.run_test() as pilot:
            await pilot.pause()
            modal = app.screen
            modal.query_one("#edit-text-input", Input).value = "Buy oat milk"
            await pilot.pause()
            modal.query_one(PrioritySelector).select(Priority.HIGH)
            await pilot.pause()

            assert app.drafts[-1] == modal.editor_session
            assert app.drafts[-1].draft_text == "Buy oat milk"
            assert app.drafts[-1].draft_priority == Priority.HIGH

    @pytest.mark.asyncio
    async def test_opening_reports_nothing(self):
        app = ModalApp(make_session())
        async with app.run_test() as pilot:
            await pilot.pause()

            assert app.drafts == []


class TestTaskEditModalSave:
    """Test saving and cancelling."""

    @pytest.mark.asyncio
    async def test_enter_saves_edited_draft(self):
        app = ModalApp(make_session())
        async with app.run_test() as pilot:
            await pilot.pause()
            modal = app.screen
            modal.query_one("#edit-text-input", Input).value = "Buy oat milk"
            modal.query_one(PrioritySelector).select(Priority.HIGH)
            await pilot.pause()

            await pilot.press("enter")
            await pilot.pause()

            assert len(app.saved) == 1
            saved = app.saved[0]
            assert saved.task_id == "1"
            assert saved.draft_text == "Buy oat milk"
            assert saved.draft_priority == Priority.HIGH
            assert not isinstance(app.screen, TaskEditModal)

    @pytest.mark.asyncio
    async def test_save_button(self):
        app = ModalApp(make_session())
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.click("#save-button")
            await pilot.pause()

            assert [session.draft_text for session in app.saved] == ["Buy milk"]

    @pytest.mark.asyncio
    async def test_escape_cancels(self):
        app = ModalApp(make_session())
        async with app.run_test() as pilot:
            await pilot.pause()
            app.screen.query_one("#edit-text-input", Input).value = "changed"
            await pilot.pause()

            await pilot.press("escape")
            await pilot.pause()

            assert app.saved == []
            assert app.cancelled == ["1"]
            assert not isinstance(app.screen, TaskEditModal)

    @pytest.mark.asyncio
    async def test_empty_text_shows_alert_and_keeps_dialog(self):
        app = ModalApp(make_session())
        async with app.run_test() as pilot:
            await pilot.pause()
            app.screen.query_one("#edit-text-input", Input).value = "   "
            await pilot.pause()

            await pilot.press("enter")
            await pilot.pause()

            assert isinstance(app.screen, AlertModal)
            assert app.saved == []

            await pilot.press("enter")
            await pilot.pause()

            assert isinstance(app.screen, TaskEditModal)
            assert app.saved == []


class AlertApp(App):
    def on_mount(self) -> None:
        self.push_screen(AlertModal("Error", "Task cannot be empty"))


class TestAlertModal:
    @pytest.mark.asyncio
    async def test_shows_title_and_message(self):
        app = AlertApp()
        async with app.run_test() as pilot:
            await pilot.pause()
            alert = app.screen

            assert isinstance(alert, AlertModal)
            assert alert.alert_title == "Error"
            assert alert.message == "Task cannot be empty"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["enter", "escape"])
    async def test_key_dismisses(self, key):
        app = AlertApp()
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press(key)
            await pilot.pause()

            assert not isinstance(app.screen, AlertModal)

    @pytest.mark.asyncio
    async def test_ok_button_dismisses(self):
        app = AlertApp()
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.click("#ok-button")
            await pilot.pause()

            assert not isinstance(app.screen, AlertModal)
