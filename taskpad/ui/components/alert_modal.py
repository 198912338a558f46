"""Blocking alert dialog with a single OK button."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from taskpad.logging_config import get_logger
from taskpad.ui.base_styles import BUTTON_BASE_CSS, MODAL_BASE_CSS
from taskpad.ui.theme import ERROR_COLOR

logger = get_logger(__name__)


class AlertModal(ModalScreen[None]):
    """Shows a title and message until the user acknowledges it."""

    DEFAULT_CSS = MODAL_BASE_CSS + BUTTON_BASE_CSS + f"""
    AlertModal > Container {{
        width: 50;
        height: auto;
        border: thick {ERROR_COLOR};
    }}

    AlertModal .modal-header {{
        width: 100%;
        color: {ERROR_COLOR};
        content-align: center middle;
    }}

    AlertModal .alert-message {{
        width: 100%;
        text-align: center;
        padding: 1 0;
    }}

    AlertModal .button-container {{
        width: 100%;
        height: 3;
        align: center middle;
    }}
    """

    BINDINGS = [
        Binding("escape", "dismiss_alert", "OK", priority=True),
        Binding("enter", "dismiss_alert", "OK", priority=True),
    ]

    def __init__(self, title: str, message: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.alert_title = title
        self.message = message

    def compose(self) -> ComposeResult:
        with Container():
            yield Static(self.alert_title, classes="modal-header")
            yield Static(self.message, classes="alert-message")
            with Container(classes="button-container"):
                yield Button("OK", id="ok-button", classes="error")

    def on_mount(self) -> None:
        logger.info(f"Alert shown: {self.alert_title} - {self.message}")
        self.query_one("#ok-button", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "ok-button":
            self.action_dismiss_alert()

    def action_dismiss_alert(self) -> None:
        self.dismiss(None)
