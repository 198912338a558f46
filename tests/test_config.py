"""
Tests for configuration management.

Tests the Config class and configuration loading from files and environment variables.
"""

from pathlib import Path

import pytest

from taskpad.config import DEFAULT_DATA_DIR, Config


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Keep the developer's environment out of config tests."""
    for name in (
        "TASKPAD_DATABASE_PATH",
        "TASKPAD_NOTIFICATIONS_ENABLED",
        "TASKPAD_NOTIFICATION_DELAY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_config(tmp_path):
    """Write an ini file and return its path."""
    def _write(content: str) -> Path:
        path = tmp_path / "config.ini"
        path.write_text(content)
        return path
    return _write


class TestConfig:
    """Tests for Config class."""

    def test_default_config_path(self):
        config = Config()
        assert config.config_path == Path.home() / ".taskpad" / "config.ini"

    def test_custom_config_path(self, tmp_path):
        custom_path = tmp_path / "custom.ini"
        config = Config(custom_path)
        assert config.config_path == custom_path

    def test_missing_config_file_uses_defaults(self, tmp_path):
        config = Config(tmp_path / "missing.ini")

        assert config.get_storage_config() == {'database_path': DEFAULT_DATA_DIR / "taskpad.db"}
        assert config.get_notification_config() == {
            'enabled': True,
            'delay_seconds': 10.0,
            'reschedule_on_reopen': False,
            'cancel_on_delete': True,
        }

    def test_config_file_parsing(self, write_config, tmp_path):
        path = write_config(f"""
[storage]
database_path = {tmp_path / 'custom.db'}

[notifications]
enabled = false
delay_seconds = 30
reschedule_on_reopen = yes
cancel_on_delete = no
""")
        config = Config(path)

        assert config.get_storage_config()['database_path'] == tmp_path / "custom.db"
        notification_config = config.get_notification_config()
        assert notification_config['enabled'] is False
        assert notification_config['delay_seconds'] == 30.0
        assert notification_config['reschedule_on_reopen'] is True
        assert notification_config['cancel_on_delete'] is False

    def test_database_path_expands_user(self, write_config):
        path = write_config("[storage]\ndatabase_path = ~/tasks.db\n")
        config = Config(path)

        assert config.get_storage_config()['database_path'] == Path.home() / "tasks.db"

    def test_environment_overrides_file(self, write_config, monkeypatch, tmp_path):
        path = write_config("""
[notifications]
enabled = true
delay_seconds = 30
""")
        monkeypatch.setenv("TASKPAD_DATABASE_PATH", str(tmp_path / "env.db"))
        monkeypatch.setenv("TASKPAD_NOTIFICATIONS_ENABLED", "false")
        monkeypatch.setenv("TASKPAD_NOTIFICATION_DELAY", "2.5")

        config = Config(path)

        assert config.get_storage_config()['database_path'] == tmp_path / "env.db"
        notification_config = config.get_notification_config()
        assert notification_config['enabled'] is False
        assert notification_config['delay_seconds'] == 2.5

    def test_invalid_delay_falls_back_to_default(self, write_config):
        path = write_config("[notifications]\ndelay_seconds = soon\n")
        config = Config(path)

        assert config.get_notification_config()['delay_seconds'] == 10.0

    def test_negative_delay_clamped(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TASKPAD_NOTIFICATION_DELAY", "-5")
        config = Config(tmp_path / "missing.ini")

        assert config.get_notification_config()['delay_seconds'] == 0.0

    def test_malformed_file_uses_defaults(self, write_config):
        path = write_config("this is not an ini file")
        config = Config(path)

        assert config.get_notification_config()['enabled'] is True
