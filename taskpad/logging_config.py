"""Logging setup for TaskPad.

Everything logs through the root logger into ~/.taskpad/logs/taskpad.log,
which rotates at 10MB. The level comes from TASKPAD_LOG_LEVEL unless the
caller passes one. During development the same records can also be routed
to `textual console`.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOG_DIR = Path.home() / ".taskpad" / "logs"
LOG_FILE = LOG_DIR / "taskpad.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5

LOG_LEVEL_ENV = "TASKPAD_LOG_LEVEL"


def _resolve_level(log_level: Optional[str]) -> tuple[str, int]:
    """Pick the level name and number; unknown names mean INFO."""
    name = (log_level or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return "INFO", logging.INFO
    return name, level


def _file_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        LOG_FILE,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_level: Optional[str] = None,
    use_textual_handler: bool = False
) -> None:
    """Configure the root logger for the app.

    Calling this again replaces the previous handlers.

    Args:
        log_level: Level name such as "DEBUG"; falls back to
                   TASKPAD_LOG_LEVEL, then INFO.
        use_textual_handler: Also send records to `textual console`.
    """
    level_name, level = _resolve_level(log_level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if use_textual_handler:
        from textual.logging import TextualHandler

        console = TextualHandler()
        console.setLevel(level)
        console.setFormatter(formatter)
        root_logger.addHandler(console)

    root_logger.addHandler(_file_handler(level, formatter))

    logging.getLogger(__name__).info(
        f"Logging to {LOG_FILE} at {level_name} (textual console: {use_textual_handler})"
    )


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; pass __name__."""
    return logging.getLogger(name)
