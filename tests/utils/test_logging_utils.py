"""Tests for logging helpers."""

import json
import logging

import pytest

from clubportal.config.logging import ColoredFormatter
from clubportal.config.logging import JsonFormatter
from clubportal.config.logging import setup_logging
from clubportal.utils.logging_utils import EnhancedLoggerMixin
from clubportal.utils.logging_utils import log_execution


class Worker(EnhancedLoggerMixin):
    """Mixin user for tests."""

    @log_execution(level='INFO')
    def run(self, value):
        if value < 0:
            raise ValueError("negative")
        return value * 2


def test_log_execution_logs_timing(caplog):
    with caplog.at_level(logging.INFO):
        assert Worker().run(2) == 4
    assert "Calling Worker.run" in caplog.text
    assert "Worker.run completed in" in caplog.text


def test_log_execution_logs_failures(caplog):
    with caplog.at_level(logging.INFO):
        with pytest.raises(ValueError):
            Worker().run(-1)
    assert "Worker.run failed after" in caplog.text


def test_log_execution_reports_rejections(caplog):
    """Test that a False result is logged as a rejection."""
    class Gate(EnhancedLoggerMixin):
        @log_execution(level='INFO', include_args=True)
        def open(self, club_id, force=False):
            return force

    with caplog.at_level(logging.INFO):
        Gate().open(4)
        Gate().open(5, force=True)

    assert "Calling test_log_execution_reports_rejections.<locals>.Gate.open(club_id=4)" in caplog.text
    assert "Gate.open rejected in" in caplog.text
    assert "Calling test_log_execution_reports_rejections.<locals>.Gate.open(club_id=5, force=True)" in caplog.text
    assert "Gate.open completed in" in caplog.text


def test_mixin_context(caplog):
    """Test that context values are appended to messages."""
    worker = Worker()
    worker.set_log_context(slot="clubs")
    with caplog.at_level(logging.INFO):
        worker.info("Wrote slot", size=10)
        worker.clear_log_context()
        worker.info("Plain")
    assert "Wrote slot | Context: slot=clubs | size=10" in caplog.text
    assert caplog.records[-1].getMessage() == "Plain"


def test_json_formatter():
    record = logging.LogRecord("clubportal", logging.WARNING, __file__, 1, "Ignoring slot", None, None)
    record.extra_fields = {"slot": "clubs"}
    data = json.loads(JsonFormatter(include_timestamp=False).format(record))
    assert data == {"level": "WARNING", "logger": "clubportal", "message": "Ignoring slot", "slot": "clubs"}


def test_colored_formatter():
    record = logging.LogRecord("clubportal", logging.WARNING, __file__, 1, "Ignoring slot", None, None)
    record.extra_fields = {"slot": "clubs"}

    plain = ColoredFormatter(use_color=False).format(record)
    assert plain.endswith("WARNING  clubportal: Ignoring slot [slot=clubs]")
    assert "\033[" not in plain

    colored = ColoredFormatter(use_color=True).format(record)
    assert colored.startswith(ColoredFormatter.COLORS["WARNING"])
    assert colored.endswith(ColoredFormatter.RESET)


def test_setup_logging_with_file(tmp_path):
    """Test that a log file receives JSON lines."""
    log_file = tmp_path / "logs" / "portal.log"
    setup_logging(log_file=str(log_file))

    logging.getLogger("clubportal.test").debug("hello file")
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["message"] == "hello file"


@pytest.mark.parametrize("dev_mode,verbose,level", [
    (False, False, logging.WARNING),
    (True, False, logging.INFO),
    (False, True, logging.DEBUG),
])
def test_setup_logging_levels(dev_mode, verbose, level):
    setup_logging(dev_mode=dev_mode, verbose=verbose)
    assert logging.getLogger().level == level
