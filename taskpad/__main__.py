"""Command-line entry point: `taskpad` or `python -m taskpad`.

    taskpad [--config PATH] [--log-level LEVEL] [--dev]
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from taskpad import __version__
from taskpad.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='taskpad',
        description='Single-screen terminal to-do list with task reminders'
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Path to config file (default: ~/.taskpad/config.ini)'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        type=str.upper,
        default=None,
        help='Log level (default: TASKPAD_LOG_LEVEL or INFO)'
    )
    parser.add_argument(
        '--dev',
        action='store_true',
        help='Also send log records to `textual console`'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def main(args: Optional[list[str]] = None) -> int:
    """Run TaskPad until the user quits.

    Returns:
        0 when the app exits normally or is interrupted, 1 when it fails
    """
    options = build_parser().parse_args(args)

    setup_logging(log_level=options.log_level, use_textual_handler=options.dev)

    from taskpad.config import Config
    from taskpad.ui.app import TaskPad

    try:
        TaskPad(config=Config(options.config)).run()
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
        return 0
    except Exception:
        logger.error("TaskPad stopped with an error", exc_info=True)
        return 1

    logger.info("TaskPad exited")
    return 0


if __name__ == "__main__":
    sys.exit(main())
