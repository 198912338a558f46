"""CSS shared by the TaskPad dialogs.

Both the edit dialog and the alert build on these and add their own
sizing in DEFAULT_CSS.
"""

from .theme import (
    ACCENT_COLOR,
    BACKGROUND,
    BORDER,
    ERROR_COLOR,
    FOREGROUND,
    MODAL_OVERLAY_BG,
    SELECTION,
    SUCCESS_COLOR,
)


MODAL_BASE_CSS = f"""
ModalScreen {{
    align: center middle;
    background: {MODAL_OVERLAY_BG};
}}

ModalScreen > Container {{
    background: {BACKGROUND};
    border: thick {ACCENT_COLOR};
    padding: 1 2;
}}

ModalScreen .modal-header {{
    color: {ACCENT_COLOR};
    text-style: bold;
    border-bottom: solid {BORDER};
    padding-bottom: 1;
}}

ModalScreen .field-label {{
    color: {FOREGROUND};
    padding-top: 1;
}}

ModalScreen Input {{
    background: {BORDER};
    color: {FOREGROUND};
    border: solid {SELECTION};
    padding: 0 1;
}}

ModalScreen Input:focus {{
    border: solid {ACCENT_COLOR};
}}
"""


# .success for save, .error for cancel and dismiss
BUTTON_BASE_CSS = f"""
Button {{
    height: 3;
    min-width: 10;
    margin: 0 1;
    background: {SELECTION};
    color: {FOREGROUND};
    border: solid {BORDER};
}}

Button:hover {{
    background: {BORDER};
    border: solid {ACCENT_COLOR};
}}

Button.success {{
    border: solid {SUCCESS_COLOR};
}}

Button.success:hover {{
    background: {SUCCESS_COLOR};
    color: {BACKGROUND};
}}

Button.error {{
    border: solid {ERROR_COLOR};
}}

Button.error:hover {{
    background: {ERROR_COLOR};
    color: {BACKGROUND};
}}
"""
