"""TaskPad - a single-screen to-do list with priorities and reminders."""

__version__ = "0.1.0"
