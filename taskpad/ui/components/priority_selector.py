"""Priority picker used by the new-task row and the edit dialog."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Button

from taskpad.logging_config import get_logger
from taskpad.models import DEFAULT_PRIORITY, PRIORITY_ORDER, Priority
from taskpad.ui.theme import BORDER, PRIORITY_COLORS, SELECTED_PRIORITY_ALPHA, with_alpha

logger = get_logger(__name__)


def _priority_css() -> str:
    """Per-priority button colours."""
    rules = []
    for priority, color in PRIORITY_COLORS.items():
        name = priority.value.lower()
        rules.append(f"""
    PrioritySelector Button.priority-{name} {{
        color: {color};
        border: round {BORDER};
        background: transparent;
    }}

    PrioritySelector Button.priority-{name}.active {{
        border: round {color};
        background: {with_alpha(color, SELECTED_PRIORITY_ALPHA)};
        text-style: bold;
    }}
""")
    return "".join(rules)


class PrioritySelector(Horizontal):
    """Row of High / Medium / Low buttons with one active choice."""

    DEFAULT_CSS = """
    PrioritySelector {
        width: 100%;
        height: 3;
        align: center middle;
    }

    PrioritySelector Button {
        min-width: 10;
        height: 3;
        margin: 0 1;
    }
    """ + _priority_css()

    selected: reactive[Priority] = reactive(DEFAULT_PRIORITY)

    def __init__(self, selected: Priority = DEFAULT_PRIORITY, **kwargs) -> None:
        """Initialize the selector.

        Args:
            selected: Initially active priority
            **kwargs: Additional keyword arguments for Horizontal
        """
        super().__init__(**kwargs)
        self.set_reactive(PrioritySelector.selected, Priority(selected))

    def compose(self) -> ComposeResult:
        for priority in PRIORITY_ORDER:
            button = Button(
                priority.value,
                classes=f"priority-{priority.value.lower()}",
                name=priority.value,
            )
            button.set_class(priority == self.selected, "active")
            yield button

    def watch_selected(self, selected: Priority) -> None:
        """Highlight the active priority button."""
        for button in self.query(Button):
            button.set_class(button.name == selected.value, "active")

    def select(self, priority: Priority) -> None:
        """Make a priority active and announce the change."""
        priority = Priority(priority)
        if priority != self.selected:
            logger.debug(f"Priority selected: {priority.value}")
        self.selected = priority
        self.post_message(self.Changed(self, priority))

    def cycle(self) -> Priority:
        """Advance to the next priority, wrapping from Low back to High."""
        index = PRIORITY_ORDER.index(self.selected)
        self.select(PRIORITY_ORDER[(index + 1) % len(PRIORITY_ORDER)])
        return self.selected

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.name:
            self.select(Priority(event.button.name))

    class Changed(Message):
        """Message emitted when the active priority changes."""

        def __init__(self, selector: "PrioritySelector", priority: Priority) -> None:
            super().__init__()
            self.selector = selector
            self.priority = priority

        @property
        def control(self) -> "PrioritySelector":
            return self.selector
