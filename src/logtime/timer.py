"""Timers that write the current time, shifted by a fixed offset, into a sink.

:class:`LocalTime` is the time source handed to a logging pipeline. It holds
an explicit UTC offset instead of asking the operating system for the local
timezone, which is unreliable on some platforms.

Usage:
    >>> import io
    >>> from logtime import LocalTime
    >>> timer = LocalTime.with_timezone(
    ...     "[year]-[month]-[day] [hour]:[minute]:[second].[subsecond digits:3]",
    ...     (8, 0, 0),
    ... )
    >>> buffer = io.StringIO()
    >>> timer.format_time(buffer)

Each call reads the clock once, renders the whole timestamp and then writes
it with a single ``write`` call. Nothing is retried and nothing is logged
here; failures surface as :class:`~logtime.errors.FormattingError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Protocol, Tuple, Union, runtime_checkable

from . import format_description as fd
from .clock import SYSTEM_CLOCK, Clock
from .errors import FormattingError, InvalidOffsetError
from .offset import FixedOffset

OffsetLike = Union[FixedOffset, Tuple[int, int, int], str]
DescriptionLike = Union[fd.Formattable, str]


@runtime_checkable
class Writer(Protocol):
    """A text sink, e.g. ``io.StringIO`` or a log record buffer."""

    def write(self, text: str) -> object:
        ...


@runtime_checkable
class FormatTime(Protocol):
    """The time-source contract expected by a logging pipeline."""

    def format_time(self, writer: Writer) -> None:
        ...


def _coerce_offset(offset: OffsetLike) -> FixedOffset:
    if isinstance(offset, FixedOffset):
        return offset
    if isinstance(offset, str):
        return FixedOffset.parse(offset)
    try:
        hours, minutes, seconds = offset
    except (TypeError, ValueError) as exc:
        raise InvalidOffsetError(
            f"Offset must be (hours, minutes, seconds), got {offset!r}",
            details={"offset": offset},
        ) from exc
    return FixedOffset.from_hms(hours, minutes, seconds)


def _to_zone(instant: datetime, tz: timezone) -> datetime:
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    try:
        return instant.astimezone(tz)
    except OverflowError as exc:
        raise FormattingError("Instant out of range at this offset", cause=exc) from exc


def _coerce_description(description: Optional[DescriptionLike]) -> fd.Formattable:
    if description is None:
        return fd.RFC3339
    if isinstance(description, str):
        return fd.parse(description)
    return description


def _render(description: fd.Formattable, dt: datetime) -> str:
    try:
        text = description.format(dt)
    except FormattingError:
        raise
    except Exception as exc:
        raise FormattingError("Failed to render timestamp", cause=exc) from exc
    if not isinstance(text, str):
        raise FormattingError(
            f"Format description returned {type(text).__name__}, expected str"
        )
    return text


def _write(writer: Writer, text: str) -> None:
    try:
        writer.write(text)
    except Exception as exc:
        raise FormattingError("Failed to write timestamp", cause=exc) from exc


@dataclass(frozen=True, slots=True)
class LocalTime:
    """Formats the current time at a fixed UTC offset.

    Instances are immutable and safe to share between threads; each call
    reads the clock independently and writes only to the caller's sink.
    The constructor accepts the same format and offset forms as
    :meth:`with_timezone` and validates them.
    """

    format: fd.Formattable = field(default=fd.RFC3339)
    offset: FixedOffset = field(default=FixedOffset.UTC)
    clock: Clock = field(default=SYSTEM_CLOCK, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "format", _coerce_description(self.format))
        object.__setattr__(self, "offset", _coerce_offset(self.offset))
        object.__setattr__(self, "clock", self.clock or SYSTEM_CLOCK)

    @classmethod
    def with_timezone(
        cls,
        format: DescriptionLike,
        tz_hms: OffsetLike,
        *,
        clock: Optional[Clock] = None,
    ) -> "LocalTime":
        """Build a timer from a format description and an explicit offset.

        Args:
            format: A compiled description, or a template string to compile
            tz_hms: ``(hours, minutes, seconds)`` such as ``(8, 0, 0)`` or
                ``(-2, -30, 0)``; a ``FixedOffset`` or ``"+08:00"`` also work
            clock: Clock to read, defaults to the system clock

        Raises:
            InvalidOffsetError: If the offset is out of range, has mixed signs
                or is not a three-part tuple
            InvalidFormatDescriptionError: If a template string does not compile
        """
        return cls(format, tz_hms, clock)

    @classmethod
    def new(cls, format: Optional[DescriptionLike] = None, *, clock: Optional[Clock] = None) -> "LocalTime":
        """Build a UTC timer; same as ``with_timezone(format, (0, 0, 0))``."""
        return cls.with_timezone(format, FixedOffset.UTC, clock=clock)

    @classmethod
    def default(cls, format: Optional[DescriptionLike] = None, *, clock: Optional[Clock] = None) -> "LocalTime":
        """UTC timer; RFC 3339 when no format is given."""
        return cls.new(format, clock=clock)

    @classmethod
    def rfc_3339(cls, tz_hms: OffsetLike = (0, 0, 0), *, clock: Optional[Clock] = None) -> "LocalTime":
        """Build an RFC 3339 timer at ``tz_hms``, UTC by default."""
        return cls.with_timezone(fd.RFC3339, tz_hms, clock=clock)

    def to_local(self, instant: datetime) -> datetime:
        """Shift ``instant`` to this timer's offset. Naive instants are UTC.

        Raises:
            FormattingError: If the shifted instant is outside the datetime range.
        """
        return _to_zone(instant, self.offset.to_tzinfo())

    def now(self) -> datetime:
        """Return the current instant at this timer's offset."""
        return self.to_local(self.clock.now())

    def format_instant(self, instant: datetime, writer: Writer) -> None:
        """Render ``instant`` at this timer's offset into ``writer``.

        Raises:
            FormattingError: If shifting, rendering or writing fails. Nothing
                is written unless rendering succeeds.
        """
        _write(writer, _render(self.format, self.to_local(instant)))

    def format_time(self, writer: Writer) -> None:
        """Write the current time into ``writer``.

        Raises:
            FormattingError: If rendering or writing fails.
        """
        self.format_instant(self.clock.now(), writer)

    def format_now(self) -> str:
        """Return the current time rendered as a string."""
        return _render(self.format, self.now())


@dataclass(frozen=True, slots=True)
class UtcTime:
    """Formats the current time in UTC."""

    format: fd.Formattable = field(default=fd.RFC3339)
    clock: Clock = field(default=SYSTEM_CLOCK, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "format", _coerce_description(self.format))
        object.__setattr__(self, "clock", self.clock or SYSTEM_CLOCK)

    @classmethod
    def new(cls, format: Optional[DescriptionLike] = None, *, clock: Optional[Clock] = None) -> "UtcTime":
        """Build a UTC timer; RFC 3339 when no format is given."""
        return cls(format, clock)

    @classmethod
    def rfc_3339(cls, *, clock: Optional[Clock] = None) -> "UtcTime":
        """Build an RFC 3339 UTC timer."""
        return cls.new(fd.RFC3339, clock=clock)

    def format_instant(self, instant: datetime, writer: Writer) -> None:
        """Render ``instant`` in UTC into ``writer``. Naive instants are UTC."""
        _write(writer, _render(self.format, _to_zone(instant, timezone.utc)))

    def format_time(self, writer: Writer) -> None:
        """Write the current UTC time into ``writer``."""
        self.format_instant(self.clock.now(), writer)
