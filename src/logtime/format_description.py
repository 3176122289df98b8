"""Format descriptions: compiled timestamp templates.

A template mixes literal text with bracketed components, for example::

    "[year]-[month]-[day] [hour]:[minute]:[second].[subsecond digits:3]"

Each component may carry ``key:value`` modifiers separated by whitespace.
``[[`` produces a literal ``[``. Templates are compiled once with
:func:`parse` and the resulting :class:`CompiledDescription` is immutable,
so it can be shared between threads.

Month and weekday names are always English; there is no locale lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, Mapping, Protocol, Tuple, Union, runtime_checkable

from .errors import FormattingError, InvalidFormatDescriptionError

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_PADDING = ("zero", "space", "none")
_SIGN = ("automatic", "mandatory")

# component name -> {modifier: allowed values}; the first value is the default
COMPONENT_MODIFIERS: Dict[str, Dict[str, Tuple[str, ...]]] = {
    "year": {"padding": _PADDING, "repr": ("full", "last_two"), "sign": _SIGN},
    "month": {"padding": _PADDING, "repr": ("numerical", "long", "short")},
    "day": {"padding": _PADDING},
    "ordinal": {"padding": _PADDING},
    "weekday": {"repr": ("long", "short", "monday", "sunday"), "one_indexed": ("true", "false")},
    "hour": {"padding": _PADDING, "repr": ("24", "12")},
    "minute": {"padding": _PADDING},
    "second": {"padding": _PADDING},
    "period": {"case": ("upper", "lower")},
    "subsecond": {"digits": ("one_or_more", "1", "2", "3", "4", "5", "6", "7", "8", "9")},
    "offset_hour": {"sign": _SIGN, "padding": _PADDING},
    "offset_minute": {"padding": _PADDING},
    "offset_second": {"padding": _PADDING},
    "unix_timestamp": {"precision": ("second", "millisecond", "microsecond"), "sign": _SIGN},
}


@runtime_checkable
class Formattable(Protocol):
    """Anything that can render an aware datetime to text."""

    def format(self, dt: datetime) -> str:
        ...


def _pad(value: int, width: int, padding: str) -> str:
    if padding == "zero":
        return f"{value:0{width}d}"
    if padding == "space":
        return f"{value:>{width}d}"
    return str(value)


def _utc_offset_seconds(dt: datetime) -> int:
    offset = dt.utcoffset()
    if offset is None:
        raise FormattingError("Cannot render an offset component for a naive datetime")
    return int(offset.total_seconds())


def _render_year(dt: datetime, mods: Mapping[str, str]) -> str:
    if mods["repr"] == "last_two":
        text = _pad(dt.year % 100, 2, mods["padding"])
    else:
        text = _pad(dt.year, 4, mods["padding"])
    if mods["sign"] == "mandatory":
        text = "+" + text
    return text


def _render_month(dt: datetime, mods: Mapping[str, str]) -> str:
    if mods["repr"] == "long":
        return MONTH_NAMES[dt.month - 1]
    if mods["repr"] == "short":
        return MONTH_NAMES[dt.month - 1][:3]
    return _pad(dt.month, 2, mods["padding"])


def _render_weekday(dt: datetime, mods: Mapping[str, str]) -> str:
    repr_ = mods["repr"]
    if repr_ == "long":
        return WEEKDAY_NAMES[dt.weekday()]
    if repr_ == "short":
        return WEEKDAY_NAMES[dt.weekday()][:3]

    one_indexed = mods["one_indexed"] == "true"
    if repr_ == "monday":
        number = dt.weekday()
    else:
        number = dt.isoweekday() % 7
    return str(number + 1 if one_indexed else number)


def _render_hour(dt: datetime, mods: Mapping[str, str]) -> str:
    hour = dt.hour
    if mods["repr"] == "12":
        hour = hour % 12 or 12
    return _pad(hour, 2, mods["padding"])


def _render_period(dt: datetime, mods: Mapping[str, str]) -> str:
    period = "AM" if dt.hour < 12 else "PM"
    return period.lower() if mods["case"] == "lower" else period


def _render_subsecond(dt: datetime, mods: Mapping[str, str]) -> str:
    micros = f"{dt.microsecond:06d}"
    digits = mods["digits"]
    if digits == "one_or_more":
        return micros.rstrip("0") or "0"
    count = int(digits)
    if count <= 6:
        # truncate, never round
        return micros[:count]
    return micros + "0" * (count - 6)


def _render_offset_hour(dt: datetime, mods: Mapping[str, str]) -> str:
    total = _utc_offset_seconds(dt)
    text = _pad(abs(total) // 3600, 2, mods["padding"])
    if total < 0:
        return "-" + text
    if mods["sign"] == "mandatory":
        return "+" + text
    return text


def _render_offset_minute(dt: datetime, mods: Mapping[str, str]) -> str:
    total = abs(_utc_offset_seconds(dt))
    return _pad(total % 3600 // 60, 2, mods["padding"])


def _render_offset_second(dt: datetime, mods: Mapping[str, str]) -> str:
    total = abs(_utc_offset_seconds(dt))
    return _pad(total % 60, 2, mods["padding"])


def _render_unix_timestamp(dt: datetime, mods: Mapping[str, str]) -> str:
    if dt.utcoffset() is None:
        raise FormattingError("Cannot render a unix timestamp for a naive datetime")
    delta = dt - _EPOCH
    micros = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
    divisor = {"second": 1_000_000, "millisecond": 1_000, "microsecond": 1}[mods["precision"]]
    value = micros // divisor
    if value >= 0 and mods["sign"] == "mandatory":
        return f"+{value}"
    return str(value)


_RENDERERS: Dict[str, Callable[[datetime, Mapping[str, str]], str]] = {
    "year": _render_year,
    "month": _render_month,
    "day": lambda dt, mods: _pad(dt.day, 2, mods["padding"]),
    "ordinal": lambda dt, mods: _pad(dt.timetuple().tm_yday, 3, mods["padding"]),
    "weekday": _render_weekday,
    "hour": _render_hour,
    "minute": lambda dt, mods: _pad(dt.minute, 2, mods["padding"]),
    "second": lambda dt, mods: _pad(dt.second, 2, mods["padding"]),
    "period": _render_period,
    "subsecond": _render_subsecond,
    "offset_hour": _render_offset_hour,
    "offset_minute": _render_offset_minute,
    "offset_second": _render_offset_second,
    "unix_timestamp": _render_unix_timestamp,
}


@dataclass(frozen=True, slots=True)
class LiteralText:
    """Literal text copied verbatim into the output."""

    text: str

    def render(self, dt: datetime) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Component:
    """A single bracketed component with its resolved modifiers."""

    name: str
    modifiers: Tuple[Tuple[str, str], ...] = field(default=())

    def render(self, dt: datetime) -> str:
        return _RENDERERS[self.name](dt, dict(self.modifiers))


Item = Union[LiteralText, Component]


@dataclass(frozen=True, slots=True)
class CompiledDescription:
    """A parsed template; renders datetimes without re-parsing."""

    template: str
    items: Tuple[Item, ...]

    def format(self, dt: datetime) -> str:
        return "".join(item.render(dt) for item in self.items)

    def __str__(self) -> str:
        return self.template


class Rfc3339:
    """The well-known RFC 3339 format, e.g. ``2024-01-02T07:30:00.5+08:00``.

    The fractional second is omitted when zero and has trailing zeros
    trimmed. A UTC offset renders as ``Z``. Offsets with a non-zero seconds
    part cannot be expressed and fail to render.
    """

    __slots__ = ()

    def format(self, dt: datetime) -> str:
        offset = dt.utcoffset()
        if offset is None:
            raise FormattingError("RFC 3339 requires an aware datetime")
        total = int(offset.total_seconds())
        if total % 60:
            raise FormattingError(
                "RFC 3339 cannot represent an offset with seconds",
                details={"offset_seconds": total},
            )

        text = f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
        if dt.microsecond:
            text += "." + f"{dt.microsecond:06d}".rstrip("0")
        if total == 0:
            return text + "Z"
        sign = "-" if total < 0 else "+"
        hours, minutes = divmod(abs(total) // 60, 60)
        return f"{text}{sign}{hours:02d}:{minutes:02d}"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Rfc3339)

    def __hash__(self) -> int:
        return hash(Rfc3339)

    def __repr__(self) -> str:
        return "Rfc3339()"


def _parse_component(body: str, template: str, index: int) -> Component:
    tokens = body.split()
    if not tokens:
        raise InvalidFormatDescriptionError("Empty component", template, index)

    name, *modifier_tokens = tokens
    allowed = COMPONENT_MODIFIERS.get(name)
    if allowed is None:
        raise InvalidFormatDescriptionError(f"Unknown component '{name}'", template, index)

    modifiers = {key: values[0] for key, values in allowed.items()}
    for token in modifier_tokens:
        key, sep, value = token.partition(":")
        if not sep or not value:
            raise InvalidFormatDescriptionError(
                f"Modifier '{token}' must be written as key:value", template, index
            )
        if key not in allowed:
            raise InvalidFormatDescriptionError(
                f"Unknown modifier '{key}' for component '{name}'", template, index
            )
        if value not in allowed[key]:
            raise InvalidFormatDescriptionError(
                f"Invalid value '{value}' for modifier '{key}'", template, index
            )
        modifiers[key] = value

    return Component(name, tuple(sorted(modifiers.items())))


def parse(template: str) -> CompiledDescription:
    """Compile a template into a :class:`CompiledDescription`.

    Raises:
        InvalidFormatDescriptionError: On unknown components or modifiers,
            bad modifier values, or an unclosed bracket.
    """
    if not isinstance(template, str):
        raise InvalidFormatDescriptionError("Template must be a string", repr(template))

    items: list[Item] = []
    literal: list[str] = []
    index = 0
    length = len(template)

    while index < length:
        char = template[index]
        if char != "[":
            literal.append(char)
            index += 1
            continue

        if template.startswith("[[", index):
            literal.append("[")
            index += 2
            continue

        close = template.find("]", index + 1)
        if close == -1:
            raise InvalidFormatDescriptionError("Unclosed bracket", template, index)
        if literal:
            items.append(LiteralText("".join(literal)))
            literal = []
        items.append(_parse_component(template[index + 1 : close], template, index))
        index = close + 1

    if literal:
        items.append(LiteralText("".join(literal)))
    return CompiledDescription(template, tuple(items))


RFC3339 = Rfc3339()
