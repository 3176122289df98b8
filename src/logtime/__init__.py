"""Fixed-offset timestamps for logging pipelines.

Provides the ``LocalTime`` timer, UTC offsets, format descriptions and clocks.
"""

from .clock import Clock, FixedClock, SystemClock
from .errors import (
    ErrorCode,
    FormattingError,
    InvalidFormatDescriptionError,
    InvalidOffsetError,
    LogTimeError,
)
from .format_description import RFC3339, CompiledDescription, Formattable, Rfc3339, parse
from .offset import FixedOffset
from .timer import FormatTime, LocalTime, UtcTime, Writer

__all__ = [
    # Timers
    "FormatTime",
    "LocalTime",
    "UtcTime",
    "Writer",
    # Offsets
    "FixedOffset",
    # Format descriptions
    "CompiledDescription",
    "Formattable",
    "RFC3339",
    "Rfc3339",
    "parse",
    # Clocks
    "Clock",
    "FixedClock",
    "SystemClock",
    # Errors
    "ErrorCode",
    "FormattingError",
    "InvalidFormatDescriptionError",
    "InvalidOffsetError",
    "LogTimeError",
]
