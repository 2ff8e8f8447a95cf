"""Tests for logging configuration."""

import logging

from swiftgate.logging_config import (
    ROOT_LOGGER_NAME,
    configure_logging,
    disable_logging,
    get_logger,
)


class TestConfigureLogging:

    def test_creates_log_file(self, tmp_path):
        log_dir = tmp_path / "logs"
        configure_logging(log_dir=str(log_dir), log_level="DEBUG")
        get_logger("test").info("hello from test")
        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.flush()
        assert "hello from test" in (log_dir / "swiftgate.log").read_text()

    def test_no_console_handler_by_default(self, tmp_path):
        root = configure_logging(log_dir=str(tmp_path))
        assert not any(type(h) is logging.StreamHandler for h in root.handlers)
        assert root.propagate is False

    def test_reconfigure_does_not_duplicate_handlers(self, tmp_path):
        configure_logging(log_dir=str(tmp_path))
        root = configure_logging(log_dir=str(tmp_path))
        assert len(root.handlers) == 1

    def test_unknown_level_name_uses_default(self, tmp_path):
        root = configure_logging(log_dir=str(tmp_path), log_level="CHATTY")
        assert root.level == logging.INFO

    def test_get_logger_namespace(self):
        assert get_logger("gate").name == "swiftgate.gate"


class TestDisableLogging:

    def test_only_null_handler_remains(self, tmp_path):
        configure_logging(log_dir=str(tmp_path))
        root = disable_logging()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.NullHandler)

