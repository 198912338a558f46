"""
Tests for the TaskItem widget.

Tests cover:
- Row text rendering with priority label
- Priority colours and completed strike-through
- Selection state and CSS classes
- Click handling
"""

import pytest
from textual.app import App, ComposeResult

from taskpad.models import Priority
from taskpad.ui.components.task_item import TaskItem
from taskpad.ui.theme import FOREGROUND, PRIORITY_COLORS


def span_styles(rendered):
    return [str(span.style) for span in rendered.spans]


class TestTaskItemRendering:
    """Tests for TaskItem.render."""

    def test_renders_text_and_priority(self, make_task):
        item = TaskItem(task=make_task(text="Buy milk", priority=Priority.HIGH))

        assert item.render().plain == "Buy milk (High)"

    @pytest.mark.parametrize("priority", list(Priority))
    def test_uses_priority_colour(self, make_task, priority):
        item = TaskItem(task=make_task(priority=priority))

        assert PRIORITY_COLORS[priority] in span_styles(item.render())[0]

    def test_completed_is_struck_through(self, make_task):
        item = TaskItem(task=make_task(completed=True))

        assert "strike" in span_styles(item.render())[0]
        assert "completed" in item.classes

    def test_active_is_not_struck_through(self, make_task):
        item = TaskItem(task=make_task())

        assert "strike" not in span_styles(item.render())[0]
        assert "completed" not in item.classes


class TestTaskItemSelection:
    """Tests for selection state."""

    def test_not_selected_initially(self, make_task):
        item = TaskItem(task=make_task())

        assert item.selected is False
        assert "selected" not in item.classes

    def test_selected_toggles_class(self, make_task):
        item = TaskItem(task=make_task())

        item.selected = True
        assert "selected" in item.classes

        item.selected = False
        assert "selected" not in item.classes

    def test_selected_row_uses_foreground(self, make_task):
        item = TaskItem(task=make_task(priority=Priority.LOW))
        item.selected = True

        assert FOREGROUND in span_styles(item.render())[0]

    def test_task_id_reactive(self, make_task):
        task = make_task(id="42")
        assert TaskItem(task=task).task_id == "42"


class ItemApp(App):
    def __init__(self, task):
        super().__init__()
        self._item_task = task
        self.pressed = []

    def compose(self) -> ComposeResult:
        yield TaskItem(task=self._item_task, id="item")

    def on_task_item_pressed(self, message: TaskItem.Pressed) -> None:
        self.pressed.append(message.task_id)


class TestTaskItemClick:
    @pytest.mark.asyncio
    async def test_click_selects_and_posts_pressed(self, make_task):
        app = ItemApp(make_task(id="7"))
        async with app.run_test() as pilot:
            await pilot.click("#item")
            await pilot.pause()

            assert app.query_one("#item", TaskItem).selected is True
            assert app.pressed == ["7"]
