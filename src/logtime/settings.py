"""Timer configuration.

Settings are validated when the model is built, so a bad offset or template
fails at start-up rather than on the first log record.

Configuration:
    - Offset: ``LOGTIME_TZ_OFFSET`` (default ``+00:00``), e.g. ``+08:00``
    - Format: ``LOGTIME_TIME_FORMAT`` (default ``rfc3339``), either
      ``rfc3339`` or a template such as ``[hour]:[minute]:[second]``
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import format_description as fd
from .clock import Clock
from .errors import InvalidFormatDescriptionError, InvalidOffsetError
from .offset import FixedOffset
from .timer import LocalTime
from .utils.env import get_env_str

logger = logging.getLogger(__name__)

RFC3339_NAME = "rfc3339"

OFFSET_ENV = "LOGTIME_TZ_OFFSET"
TIME_FORMAT_ENV = "LOGTIME_TIME_FORMAT"


class TimerSettings(BaseModel):
    """Offset and format for a :class:`~logtime.timer.LocalTime`."""

    offset: str = Field(default="+00:00")
    time_format: str = Field(default=RFC3339_NAME, min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("offset")
    @classmethod
    def validate_offset(cls, value: str) -> str:
        """Normalize the offset to ``+HH:MM[:SS]``."""
        try:
            return str(FixedOffset.parse(value))
        except InvalidOffsetError as exc:
            raise ValueError(exc.message) from exc

    @field_validator("time_format")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        """Check that a template compiles."""
        if value.lower() == RFC3339_NAME:
            return RFC3339_NAME
        try:
            fd.parse(value)
        except InvalidFormatDescriptionError as exc:
            raise ValueError(exc.message) from exc
        return value

    @classmethod
    def from_env(cls) -> "TimerSettings":
        """Build settings from ``LOGTIME_*`` environment variables."""
        settings = cls(
            offset=get_env_str(OFFSET_ENV, "+00:00"),
            time_format=get_env_str(TIME_FORMAT_ENV, RFC3339_NAME),
        )
        logger.debug(f"Timer settings from environment: {settings}")
        return settings

    @property
    def fixed_offset(self) -> FixedOffset:
        return FixedOffset.parse(self.offset)

    def description(self) -> fd.Formattable:
        """Return the compiled format description."""
        if self.time_format == RFC3339_NAME:
            return fd.RFC3339
        return fd.parse(self.time_format)

    def build_timer(self, clock: Optional[Clock] = None) -> LocalTime:
        """Create the timer described by these settings."""
        return LocalTime.with_timezone(self.description(), self.fixed_offset, clock=clock)
