"""Colours for TaskPad.

A Monokai palette plus the fixed High/Medium/Low priority colours. Widgets
interpolate these into their CSS strings; rows also use the priority colour
directly when rendering their rich Text.
"""


from taskpad.models import Priority


# ============================================================================
# BASE COLORS
# ============================================================================

BACKGROUND = "#272822"  # Main application background (dark charcoal)
FOREGROUND = "#F8F8F2"  # Primary text color (off-white)
SELECTION = "#49483E"   # Selected item background (medium gray)
COMMENT = "#75715E"     # Secondary/dimmed text (muted brown-gray)
BORDER = "#3E3D32"      # Borders and dividers (dark gray-green)

ACCENT_COLOR = "#66D9EF"   # Focus and headers (cyan)
SUCCESS_COLOR = "#A6E22E"  # Save/confirm buttons (green)
ERROR_COLOR = "#F92672"    # Cancel/delete buttons and errors (pink)


# ============================================================================
# PRIORITY COLORS
# ============================================================================

PRIORITY_COLORS = {
    Priority.HIGH: "#e74c3c",
    Priority.MEDIUM: "#f39c12",
    Priority.LOW: "#27ae60",
}


# ============================================================================
# STATUS COLORS
# ============================================================================

COMPLETE_OPACITY = "0.6"  # Completed rows are dimmed


# ============================================================================
# INTERACTION STATES
# ============================================================================

MODAL_OVERLAY_BG = "#27282280"  # Semi-transparent dark overlay (50% opacity)
HOVER_OPACITY = "20"            # Hover effect transparency (hex: ~12% opacity)
SELECTED_PRIORITY_ALPHA = "33"  # Tint behind the active priority button


def get_priority_color(priority: Priority) -> str:
    """Get the display colour for a priority.

    Args:
        priority: Task priority

    Returns:
        Hex color string
    """
    return PRIORITY_COLORS[Priority(priority)]


def with_alpha(color: str, alpha: str) -> str:
    """Add alpha transparency to a hex color.

    Args:
        color: Base hex color string (e.g., '#272822')
        alpha: Alpha value as 2-digit hex string ('00'-'FF')

    Returns:
        Color with alpha channel appended (8-digit hex color code).

    Examples:
        >>> with_alpha(SELECTION, HOVER_OPACITY)
        '#49483E20'
    """
    return f"{color}{alpha}"
