"""Dates as PDF stores them: strings of the form ``D:YYYYMMDDHHmmSSOHH'mm``."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from .errors import ParseError, PdfError, Utf8DecodeError
from .primitive import NoResolve, PdfString, debug_name, resolve
from .errors import UnexpectedPrimitive

_U8_MAX = 0xFF
_U16_MAX = 0xFFFF


class TimeRel(enum.Enum):
    """How local time relates to universal time."""

    EARLIER = "-"
    LATER = "+"
    UNIVERSAL = "Z"


@dataclass(frozen=True)
class Date:
    """A calendar date and time with a time-zone offset."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    rel: TimeRel
    tz_hour: int
    tz_minute: int

    def to_primitive(self) -> PdfString:
        """The PDF string for this date; raise PdfError if a field is out of range."""
        if (
            self.year > 9999
            or self.day > 99
            or self.hour > 23
            or self.minute >= 60
            or self.second >= 60
            or self.tz_hour >= 24
            or self.tz_minute >= 60
        ):
            raise PdfError("not a valid date")
        text = (
            f"D:{self.year:04}{self.month:02}{self.day:02}"
            f"{self.hour:02}{self.minute:02}{self.second:02}"
            f"{self.rel.value}{self.tz_hour:02}'{self.tz_minute:02}"
        )
        return PdfString(text.encode("ascii"))


def _parse_uint(text: bytes, limit: int) -> int | None:
    digits = text[1:] if text.startswith(b"+") else text
    if not digits or not digits.isdigit():
        return None
    value = int(digits)
    return value if value <= limit else None


def _parse_or(buffer: bytes, start: int, end: int, default: int, limit: int = _U8_MAX) -> int:
    if end > len(buffer):
        return default
    value = _parse_uint(buffer[start:end], limit)
    return default if value is None else value


def parse_date(value: Any, resolver: Any = None) -> Date:
    """Read a Date from a string primitive, following a reference if needed."""
    value = resolve(value, resolver if resolver is not None else NoResolve())
    if not isinstance(value, PdfString):
        raise UnexpectedPrimitive("String", debug_name(value))
    data = value.data
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        raise Utf8DecodeError("date is not valid UTF-8") from None
    if not data.startswith(b"D:"):
        raise PdfError("Failed parsing date")
    if len(data) < 6:
        raise PdfError("Missing obligatory year in date")
    year = _parse_uint(data[2:6], _U16_MAX)
    if year is None:
        raise ParseError(f"invalid year {data[2:6]!r}")

    split = next((i for i, b in enumerate(data) if b in b"+-Z"), None)
    if split is None:
        time, rel, zone = data, TimeRel.UNIVERSAL, b""
    else:
        time = data[:split]
        rel = TimeRel(chr(data[split]))
        zone = data[split + 1:]

    return Date(
        year=year,
        month=_parse_or(time, 6, 8, 1),
        day=_parse_or(time, 8, 10, 1),
        hour=_parse_or(time, 10, 12, 0),
        minute=_parse_or(time, 12, 14, 0),
        second=_parse_or(time, 14, 16, 0),
        rel=rel,
        tz_hour=_parse_or(zone, 0, 2, 0),
        tz_minute=_parse_or(zone, 3, 5, 0),
    )