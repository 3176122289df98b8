"""Fixed UTC offsets.

An offset is supplied explicitly as ``(hours, minutes, seconds)`` and stored
as a single signed number of seconds. Nothing here ever consults the
operating system's timezone.

Validation rules:
    - minutes and seconds are within -59..59
    - all non-zero components share the same sign
    - the total magnitude is strictly less than 24 hours
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta, timezone
from typing import ClassVar, Tuple

from .errors import InvalidOffsetError

SECONDS_PER_DAY = 24 * 3600

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})(?::?(\d{2}))?$")


@dataclass(frozen=True, slots=True)
class FixedOffset:
    """A signed displacement from UTC, immutable once constructed."""

    total_seconds: int

    UTC: ClassVar["FixedOffset"]

    def __post_init__(self) -> None:
        if isinstance(self.total_seconds, bool) or not isinstance(self.total_seconds, int):
            raise InvalidOffsetError(
                "Offset must be a whole number of seconds",
                details={"total_seconds": self.total_seconds},
            )
        if abs(self.total_seconds) >= SECONDS_PER_DAY:
            raise InvalidOffsetError(
                f"Offset of {self.total_seconds}s is not within ±24 hours",
                details={"total_seconds": self.total_seconds},
            )

    @classmethod
    def from_hms(cls, hours: int, minutes: int = 0, seconds: int = 0) -> "FixedOffset":
        """Build an offset from hour, minute and second components.

        Examples:
            >>> FixedOffset.from_hms(8, 0, 0).total_seconds
            28800
            >>> FixedOffset.from_hms(-2, -30, 0).total_seconds
            -9000

        Raises:
            InvalidOffsetError: If a component is out of range, components
                have mixed signs, or the total reaches 24 hours.
        """
        components = (hours, minutes, seconds)
        details = {"hours": hours, "minutes": minutes, "seconds": seconds}

        for value in components:
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidOffsetError("Offset components must be integers", details=details)
        if not -59 <= minutes <= 59:
            raise InvalidOffsetError(f"Offset minutes {minutes} not in -59..59", details=details)
        if not -59 <= seconds <= 59:
            raise InvalidOffsetError(f"Offset seconds {seconds} not in -59..59", details=details)

        signs = {value > 0 for value in components if value != 0}
        if len(signs) > 1:
            raise InvalidOffsetError(
                f"Offset components have mixed signs: {components}", details=details
            )

        total = hours * 3600 + minutes * 60 + seconds
        if abs(total) >= SECONDS_PER_DAY:
            raise InvalidOffsetError(
                f"Offset {components} is not within ±24 hours", details=details
            )
        return cls(total)

    @classmethod
    def from_seconds(cls, total_seconds: int) -> "FixedOffset":
        """Build an offset from a signed number of seconds."""
        return cls(total_seconds)

    @classmethod
    def parse(cls, text: str) -> "FixedOffset":
        """Parse ``Z``, ``UTC``, ``+HH:MM``, ``-HH:MM:SS`` or ``+HHMM``.

        Raises:
            InvalidOffsetError: If the string is not a recognised offset.
        """
        value = (text or "").strip()
        if value.upper() in ("Z", "UTC"):
            return cls.UTC

        match = _OFFSET_RE.match(value)
        if not match:
            raise InvalidOffsetError(f"Cannot parse offset '{text}'", details={"offset": text})

        sign = -1 if match.group(1) == "-" else 1
        hours = int(match.group(2))
        minutes = int(match.group(3))
        seconds = int(match.group(4) or 0)
        return cls.from_hms(sign * hours, sign * minutes, sign * seconds)

    @property
    def hours(self) -> int:
        return self.as_hms()[0]

    @property
    def minutes(self) -> int:
        return self.as_hms()[1]

    @property
    def seconds(self) -> int:
        return self.as_hms()[2]

    @property
    def is_utc(self) -> bool:
        return self.total_seconds == 0

    @property
    def is_negative(self) -> bool:
        return self.total_seconds < 0

    def as_hms(self) -> Tuple[int, int, int]:
        """Return the offset as sign-consistent ``(hours, minutes, seconds)``."""
        sign = -1 if self.total_seconds < 0 else 1
        hours, rest = divmod(abs(self.total_seconds), 3600)
        minutes, seconds = divmod(rest, 60)
        return sign * hours, sign * minutes, sign * seconds

    def to_tzinfo(self) -> timezone:
        """Return a ``datetime.timezone`` with this fixed offset."""
        if self.is_utc:
            return timezone.utc
        return timezone(timedelta(seconds=self.total_seconds))

    def __str__(self) -> str:
        sign = "-" if self.is_negative else "+"
        hours, minutes, seconds = (abs(value) for value in self.as_hms())
        text = f"{sign}{hours:02d}:{minutes:02d}"
        if seconds:
            text += f":{seconds:02d}"
        return text


FixedOffset.UTC = FixedOffset(0)
