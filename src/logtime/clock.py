"""Clock sources for the timers.

A clock returns the current instant as an aware UTC datetime. Timers take a
clock at construction so that tests can pin "now" to a known value.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Anything that can report the current UTC instant."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Reads the system wall clock in UTC; never touches the local timezone."""

    __slots__ = ()

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def __repr__(self) -> str:
        return "SystemClock()"


@dataclass(frozen=True, slots=True)
class FixedClock:
    """A clock stopped at ``instant``. Naive instants are taken as UTC."""

    instant: datetime

    def __post_init__(self) -> None:
        if self.instant.tzinfo is None:
            object.__setattr__(self, "instant", self.instant.replace(tzinfo=timezone.utc))

    def now(self) -> datetime:
        return self.instant.astimezone(timezone.utc)


SYSTEM_CLOCK = SystemClock()
