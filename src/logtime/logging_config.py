"""Logging configuration that stamps records with a fixed-offset timer.

This module plugs :class:`~logtime.timer.LocalTime` into the standard
``logging`` package. ``%(asctime)s`` is rendered by the timer from the
record's creation time, at the configured offset, without looking at the
host's timezone.

Usage:
    At application startup:
    >>> from logtime.logging_config import configure_logging
    >>> configure_logging()

    Or with an explicit timer:
    >>> handler.setFormatter(TimerFormatter(timer=LocalTime.rfc_3339((8, 0, 0))))

Configuration:
    - Log level: Set via LOGTIME_LOG_LEVEL environment variable (default: INFO)
    - Offset: Set via LOGTIME_TZ_OFFSET (default: +00:00)
    - Time format: Set via LOGTIME_TIME_FORMAT (default: rfc3339)
    - Format: "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
"""

import io
import logging
import logging.config
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .errors import FormattingError
from .settings import RFC3339_NAME, TimerSettings
from .timer import LocalTime, UtcTime

LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"

# Written in place of the timestamp when the timer fails
UNKNOWN_TIME = "<unknown time>"


class TimerFormatter(logging.Formatter):
    """Formatter whose ``%(asctime)s`` comes from a logtime timer.

    ``datefmt`` is accepted for compatibility and ignored; the timer's
    format description decides the rendering.
    """

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        style: str = "%",
        validate: bool = True,
        *,
        timer: "LocalTime | UtcTime | None" = None,
        offset: Optional[str] = None,
        time_format: Optional[str] = None,
        placeholder: str = UNKNOWN_TIME,
    ):
        """Initialize the formatter.

        Args:
            fmt: Record format string
            datefmt: Ignored
            style: Format style, as for ``logging.Formatter``
            validate: Validate ``fmt`` against ``style``
            timer: Timer to use; built from ``offset``/``time_format`` if omitted
            offset: Offset string such as ``+08:00``
            time_format: ``rfc3339`` or a format description template
            placeholder: Text used when the timer fails
        """
        super().__init__(fmt, datefmt, style, validate)
        if timer is None:
            settings = TimerSettings(
                offset=offset or "+00:00",
                time_format=time_format or RFC3339_NAME,
            )
            timer = settings.build_timer()
        self.timer = timer
        self.placeholder = placeholder

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        """Render the record's creation time through the timer."""
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        buffer = io.StringIO()
        try:
            self.timer.format_instant(created, buffer)
        except FormattingError:
            return self.placeholder
        return buffer.getvalue()


def get_log_level() -> str:
    """Get the log level from environment variable with fallback."""
    return (os.getenv("LOGTIME_LOG_LEVEL", "INFO") or "INFO").upper()


def get_logging_config(settings: Optional[TimerSettings] = None) -> Dict[str, Any]:
    """Generate a logging configuration dictionary.

    Args:
        settings: Timer settings; read from the environment when omitted
    """
    log_level = get_log_level()
    settings = settings or TimerSettings.from_env()

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": "logtime.logging_config.TimerFormatter",
                "fmt": LOG_FORMAT,
                "offset": settings.offset,
                "time_format": settings.time_format,
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "logtime": {
                "handlers": ["default"],
                "level": log_level,
                "propagate": False,
            },
        },
        "root": {
            "level": log_level,
            "handlers": ["default"],
        },
    }


def configure_logging(settings: Optional[TimerSettings] = None) -> None:
    """Configure logging for the entire application.

    This should be called once at application startup, before any other
    logging configuration or logger creation. An invalid offset or template
    raises ``pydantic.ValidationError``.
    """
    settings = settings or TimerSettings.from_env()
    logging.config.dictConfig(get_logging_config(settings))

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured with offset {settings.offset} and format {settings.time_format}")
