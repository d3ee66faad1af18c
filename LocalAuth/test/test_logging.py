"""
Tests for logging and configuration helpers.
"""

import logging

from LocalAuth.config import Config
from LocalAuth.core.logging import (
    LogConfig,
    auto_configure,
    configure_logging,
    create_production_config,
    create_testing_config,
    get_logging_manager,
)


class TestLogging:
    """Tests for the logging manager."""

    def teardown_method(self):
        configure_logging(create_testing_config())

    def test_manager_is_singleton(self):
        assert get_logging_manager() is get_logging_manager()

    def test_reconfigure_replaces_handlers(self):
        configure_logging(create_testing_config())
        configure_logging(create_testing_config())
        manager = get_logging_manager()
        owned = [h for h in logging.getLogger().handlers if h in manager._handlers]
        assert len(owned) == 1

    def test_file_output(self, tmp_path):
        configure_logging(LogConfig(level="INFO", log_dir=str(tmp_path), console_output=False))
        logging.getLogger("LocalAuth.test").info("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello file" in (tmp_path / "localauth.log").read_text(encoding="utf-8")

    def test_auto_configure_testing(self):
        config = auto_configure("testing")
        assert config.file_output is False
        assert logging.getLogger().level == logging.DEBUG


class TestConfig:
    """Tests for configuration defaults."""

    def test_defaults(self):
        values = Config.get_config()
        assert values["USERS_KEY"] == "users"
        assert values["CURRENT_USER_KEY"] == "currentUser"
        assert values["MIN_PASSWORD_LENGTH"] == 6

    def test_run_logs_away_from_the_menus(self, monkeypatch):
        monkeypatch.setattr(Config, "ENV", "development")
        monkeypatch.setattr(Config, "INTERACTIVE_ENV", "production")
        assert Config.logging_env("run") == "production"
        assert Config.logging_env("users") == "development"
        assert Config.logging_env("run", "testing") == "testing"

    def test_production_profile_has_no_console(self):
        assert create_production_config().console_output is False
