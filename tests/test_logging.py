"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from nxdecorate.core.observability.logging_config import _parse_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_unknown_falls_back_to_warning(self):
        assert _parse_level("chatty") == logging.WARNING
        assert _parse_level(None) == logging.WARNING


class TestSetupLogging:
    def test_console_level(self):
        setup_logging(level="INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_file_handler_lowers_root_level(self, tmp_path: Path):
        log_file = tmp_path / "decorate.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("nxdecorate.test").debug("linked ng")
        for handler in root.handlers:
            handler.flush()
        assert "linked ng" in log_file.read_text()

    def test_console_format_names_logger_when_verbose(self):
        setup_logging(level="INFO")
        console = logging.getLogger().handlers[0]
        record = logging.LogRecord("nxdecorate.x", logging.INFO, __file__, 1, "hi", None, None)
        assert console.format(record) == "INFO    nxdecorate.x: hi"

    def test_console_format_is_plain_by_default(self):
        setup_logging()
        console = logging.getLogger().handlers[0]
        record = logging.LogRecord("nxdecorate.x", logging.WARNING, __file__, 1, "hi", None, None)
        assert console.format(record) == "hi"
