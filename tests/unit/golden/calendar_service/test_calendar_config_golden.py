"""
Unit Golden Tests: Calendar Service Configuration and Logging

Tests environment-driven configuration and service logger setup.
"""
import logging

import pytest

from core.config import CalendarServiceConfig, LoggingConfig, get_settings, reload_settings
from core.logger import setup_service_logger

pytestmark = [pytest.mark.unit, pytest.mark.golden]


class TestCalendarServiceConfig:
    """Test CalendarServiceConfig.from_env"""

    def test_defaults(self, monkeypatch):
        for name in (
            "CALENDAR_MAX_ADVANCE_DAYS",
            "CALENDAR_MAX_ADVANCE_HOURS",
            "CALENDAR_MAX_IMPORT_BYTES",
            "CALENDAR_UPCOMING_DEFAULT",
            "CALENDAR_UPCOMING_MAX",
        ):
            monkeypatch.delenv(name, raising=False)
        config = CalendarServiceConfig.from_env()
        assert config.max_advance_days == 3650
        assert config.max_advance_hours == 87600
        assert config.max_import_bytes == 10 * 1024 * 1024
        assert (config.upcoming_events_default, config.upcoming_events_max) == (5, 20)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CALENDAR_MAX_ADVANCE_DAYS", "10")
        monkeypatch.setenv("CALENDAR_MAX_IMPORT_BYTES", "2048")
        monkeypatch.setenv("CALENDAR_DEFAULT_ERA_COLOR", "#123456")
        config = CalendarServiceConfig.from_env()
        assert config.max_advance_days == 10
        assert config.max_import_bytes == 2048
        assert config.default_era_color == "#123456"

    def test_invalid_numbers_fall_back(self, monkeypatch):
        monkeypatch.setenv("CALENDAR_UPCOMING_MAX", "lots")
        assert CalendarServiceConfig.from_env().upcoming_events_max == 20

    def test_reload_settings(self, monkeypatch):
        monkeypatch.setenv("CALENDAR_UPCOMING_DEFAULT", "7")
        try:
            assert reload_settings().upcoming_events_default == 7
            assert get_settings().upcoming_events_default == 7
        finally:
            monkeypatch.delenv("CALENDAR_UPCOMING_DEFAULT")
            reload_settings()


class TestLoggingConfig:
    """Test LoggingConfig.from_env"""

    def test_development_defaults_to_debug(self, monkeypatch):
        monkeypatch.setenv("ENV", "development")
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert LoggingConfig.from_env().log_level == "DEBUG"

    def test_explicit_level_and_console(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.setenv("LOG_CONSOLE", "false")
        config = LoggingConfig.from_env()
        assert config.log_level == "WARNING"
        assert config.enable_console is False


class TestServiceLogger:
    """Test setup_service_logger"""

    def test_level_applied(self):
        logger = setup_service_logger(
            "tests.calendar.level", LoggingConfig(log_level="WARNING", enable_console=False)
        )
        assert logger.level == logging.WARNING

    def test_handlers_installed_once(self):
        config = LoggingConfig(log_level="INFO")
        first = setup_service_logger("tests.calendar.once", config)
        count = len(first.handlers)
        second = setup_service_logger("tests.calendar.once", config)
        assert second is first
        assert count == 1
        assert len(second.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "calendar.log"
        config = LoggingConfig(log_file=str(log_file), enable_console=False)
        logger = setup_service_logger("tests.calendar.file", config)
        logger.warning("calendar ready")
        for handler in logger.handlers:
            handler.flush()
        assert "calendar ready" in log_file.read_text(encoding="utf-8")
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
