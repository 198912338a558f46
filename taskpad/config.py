"""
Configuration management for TaskPad.

Loads settings from ~/.taskpad/config.ini with environment variable overrides.
"""

import configparser
import os
from pathlib import Path
from typing import Optional, Dict, Any

from taskpad.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".taskpad"
DEFAULT_NOTIFICATION_DELAY = 10


def _env_bool(name: str) -> Optional[bool]:
    """Read a true/false environment variable, None when unset."""
    value = os.getenv(name, '').strip().lower()
    if not value:
        return None
    return value in ('1', 'true', 'yes', 'on')


class Config:
    """Application configuration manager."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config file, defaults to ~/.taskpad/config.ini
        """
        self.config_path = config_path or self._default_config_path()
        self._config = configparser.ConfigParser()
        self._load()

    def _default_config_path(self) -> Path:
        """Get default config path."""
        return DEFAULT_DATA_DIR / "config.ini"

    def _load(self):
        """Load configuration from file."""
        if self.config_path.exists():
            try:
                self._config.read(self.config_path)
                logger.info(f"Loaded configuration from {self.config_path}")
            except configparser.Error as e:
                logger.warning(f"Failed to read config file: {e}. Using defaults.")
        else:
            logger.debug(f"Config file not found at {self.config_path}. Using defaults.")

    def get_storage_config(self) -> Dict[str, Any]:
        """
        Get storage configuration with environment overrides.

        Environment variables take precedence over config file:
        - TASKPAD_DATABASE_PATH

        Returns:
            Dictionary with storage configuration
        """
        database_path = (
            os.getenv('TASKPAD_DATABASE_PATH') or
            self._config.get('storage', 'database_path', fallback=str(DEFAULT_DATA_DIR / "taskpad.db"))
        )
        config = {
            'database_path': Path(database_path).expanduser(),
        }

        logger.debug(f"Storage config: database_path={config['database_path']}")

        return config

    def get_notification_config(self) -> Dict[str, Any]:
        """
        Get reminder notification configuration with environment overrides.

        Environment variables take precedence over config file:
        - TASKPAD_NOTIFICATIONS_ENABLED
        - TASKPAD_NOTIFICATION_DELAY

        Returns:
            Dictionary with notification configuration
        """
        enabled = _env_bool('TASKPAD_NOTIFICATIONS_ENABLED')
        if enabled is None:
            enabled = self._config.getboolean('notifications', 'enabled', fallback=True)

        delay_env = os.getenv('TASKPAD_NOTIFICATION_DELAY')
        try:
            delay_seconds = float(
                delay_env or
                self._config.get('notifications', 'delay_seconds', fallback=str(DEFAULT_NOTIFICATION_DELAY))
            )
        except ValueError:
            logger.warning("Invalid notification delay, using default")
            delay_seconds = float(DEFAULT_NOTIFICATION_DELAY)

        config = {
            'enabled': enabled,
            'delay_seconds': max(delay_seconds, 0.0),
            'reschedule_on_reopen': self._config.getboolean(
                'notifications', 'reschedule_on_reopen', fallback=False
            ),
            'cancel_on_delete': self._config.getboolean(
                'notifications', 'cancel_on_delete', fallback=True
            ),
        }

        logger.debug(f"Notification config: enabled={config['enabled']}, "
                     f"delay_seconds={config['delay_seconds']}, "
                     f"reschedule_on_reopen={config['reschedule_on_reopen']}, "
                     f"cancel_on_delete={config['cancel_on_delete']}")

        return config
