"""Tests for logging configuration and the timer-backed formatter."""

import logging
import os
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from conftest import MILLIS_DESCRIPTION

from logtime.logging_config import (
    UNKNOWN_TIME,
    TimerFormatter,
    configure_logging,
    get_log_level,
    get_logging_config,
)
from logtime.settings import TimerSettings
from logtime.timer import LocalTime


def _record(created: datetime, message: str = "hello") -> logging.LogRecord:
    record = logging.LogRecord("logtime.test", logging.INFO, __file__, 1, message, None, None)
    record.created = created.timestamp()
    return record


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def test_get_log_level_default():
    """Test that get_log_level returns INFO by default."""
    with patch.dict(os.environ, {}, clear=True):
        assert get_log_level() == "INFO"


def test_get_log_level_from_env():
    """Test that get_log_level reads from environment variable."""
    with patch.dict(os.environ, {"LOGTIME_LOG_LEVEL": "debug"}):
        assert get_log_level() == "DEBUG"


def test_get_log_level_empty_env():
    """Test that get_log_level handles empty environment variable."""
    with patch.dict(os.environ, {"LOGTIME_LOG_LEVEL": ""}):
        assert get_log_level() == "INFO"


def test_get_logging_config_structure():
    """Test that get_logging_config returns a valid logging dict."""
    config = get_logging_config(TimerSettings(offset="+08:00"))

    assert config["version"] == 1
    assert "root" in config
    assert "logtime" in config["loggers"]

    formatter = config["formatters"]["default"]
    assert formatter["()"] == "logtime.logging_config.TimerFormatter"
    assert "%(asctime)s" in formatter["fmt"]
    assert formatter["offset"] == "+08:00"
    assert formatter["time_format"] == "rfc3339"


def test_get_logging_config_reads_env():
    """Without explicit settings the environment is used."""
    env = {"LOGTIME_LOG_LEVEL": "DEBUG", "LOGTIME_TZ_OFFSET": "-05:00"}
    with patch.dict(os.environ, env, clear=True):
        config = get_logging_config()
    assert config["loggers"]["logtime"]["level"] == "DEBUG"
    assert config["formatters"]["default"]["offset"] == "-05:00"


def test_formatter_stamps_record_with_offset():
    """asctime is the record's creation time at the timer's offset."""
    timer = LocalTime.with_timezone(MILLIS_DESCRIPTION, (8, 0, 0))
    formatter = TimerFormatter("%(asctime)s %(message)s", timer=timer)
    record = _record(datetime(2024, 1, 1, 23, 30, 0, 500000, tzinfo=timezone.utc))
    assert formatter.format(record) == "2024-01-02 07:30:00.500 hello"


def test_formatter_builds_timer_from_strings():
    """offset and time_format build the timer when none is given."""
    formatter = TimerFormatter("%(asctime)s", offset="-05:00", time_format="[year]-[month]-[day] [hour]")
    record = _record(datetime(2024, 1, 1, 1, 0, tzinfo=timezone.utc))
    assert formatter.format(record) == "2023-12-31 20"


def test_formatter_defaults_to_utc_rfc3339():
    """With no arguments records are stamped in UTC RFC 3339."""
    formatter = TimerFormatter("%(asctime)s")
    record = _record(datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc))
    assert formatter.format(record) == "2024-01-01T00:00:00Z"


def test_formatter_uses_placeholder_on_failure():
    """A failing timer does not break the log line."""
    formatter = TimerFormatter("%(asctime)s %(message)s", timer=LocalTime.rfc_3339((5, 30, 15)))
    record = _record(datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert formatter.format(record) == f"{UNKNOWN_TIME} hello"


def test_configure_logging_sets_up_handlers():
    """Test that configure_logging installs the timer formatter."""
    configure_logging(TimerSettings(offset="+08:00"))

    handlers = logging.getLogger().handlers
    assert len(handlers) > 0
    formatter = handlers[0].formatter
    assert isinstance(formatter, TimerFormatter)
    assert formatter.timer.offset.total_seconds == 8 * 3600

    logtime_logger = logging.getLogger("logtime")
    assert logtime_logger.level in (logging.INFO, logging.DEBUG, logging.NOTSET)


def test_formatter_uses_placeholder_when_shift_overflows():
    """An instant that cannot be shifted still yields a log line."""
    formatter = TimerFormatter("%(asctime)s %(message)s", timer=LocalTime.rfc_3339((8, 0, 0)))
    record = _record(datetime(9999, 12, 31, 23, 0, tzinfo=timezone.utc))
    assert formatter.format(record) == f"{UNKNOWN_TIME} hello"
