"""The primitive values a PDF file is built from.

Primitives map onto Python values: ``None`` is null, ``bool`` a boolean,
``int`` an integer, ``float`` a real number, ``list`` an array, and
:class:`Name`, :class:`PdfString`, :class:`Dictionary`, :class:`PdfStream`
and :class:`PlainRef` the remaining kinds.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Iterator, MutableMapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from .errors import (
    KeyValueMismatch,
    MissingEntry,
    PdfError,
    UnexpectedPrimitive,
    Utf8DecodeError,
)

_REPLACEMENT = "\ufffd"


@dataclass(frozen=True)
class PlainRef:
    """A reference to an indirect object: object number and generation."""

    id: int
    gen: int


@dataclass
class ParseOptions:
    """Switches that make the reader tolerate certain damage."""

    allow_missing_endobj: bool = False
    allow_xref_error: bool = False


@dataclass
class NoResolve:
    """A resolver for data that lives outside any file; it resolves nothing."""

    options: ParseOptions = field(default_factory=ParseOptions)

    def resolve(self, ref: PlainRef) -> Any:
        raise PdfError(f"cannot resolve {ref.id} {ref.gen} R without a file")

    def stream_data(self, ref: PlainRef, file_range: range) -> bytes:
        raise PdfError(f"cannot read stream data of {ref.id} {ref.gen} R without a file")


class Name(str):
    """A PDF name, stored without its leading slash."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Name({str.__repr__(self)})"


def _utf16be_decode(data: bytes, strict: bool) -> str:
    if strict and len(data) % 2:
        raise Utf8DecodeError("odd number of bytes in UTF-16BE text")
    count = len(data) // 2
    units = struct.unpack(f">{count}H", data[: count * 2])

    def replacement() -> str:
        if strict:
            raise Utf8DecodeError("unpaired surrogate in UTF-16BE text")
        return _REPLACEMENT

    chars: list[str] = []
    pending: int | None = None
    for unit in units:
        if pending is not None:
            if 0xDC00 <= unit <= 0xDFFF:
                chars.append(chr(0x10000 + ((pending - 0xD800) << 10) + (unit - 0xDC00)))
                pending = None
                continue
            chars.append(replacement())
            pending = None
        if 0xD800 <= unit <= 0xDBFF:
            pending = unit
        elif 0xDC00 <= unit <= 0xDFFF:
            chars.append(replacement())
        else:
            chars.append(chr(unit))
    if pending is not None:
        chars.append(replacement())
    return "".join(chars)


def _quote_bytes(data: bytes) -> str:
    parts = ['"']
    for b in data:
        if b == 0x22:
            parts.append('\\"')
        elif 0x20 <= b <= 0x7E:
            parts.append(chr(b))
        elif b <= 7:
            parts.append(f"\\{b}")
        else:
            parts.append(f"\\x{b:02x}")
    parts.append('"')
    return "".join(parts)


@dataclass(frozen=True)
class PdfString:
    """A PDF string: raw bytes whose encoding is not known."""

    data: bytes = b""

    def __post_init__(self) -> None:
        data = self.data
        if isinstance(data, str):
            data = data.encode("utf-8")
        object.__setattr__(self, "data", bytes(data))

    def __bytes__(self) -> bytes:
        return self.data

    def to_string_lossy(self) -> str:
        """Decode as UTF-16BE (with BOM) or UTF-8, replacing bad sequences."""
        if self.data.startswith(b"\xfe\xff"):
            return _utf16be_decode(self.data[2:], strict=False)
        return self.data.decode("utf-8", errors="replace")

    def to_string(self) -> str:
        """Decode as UTF-16BE (with BOM) or UTF-8; raise on invalid data."""
        if self.data.startswith(b"\xfe\xff"):
            return _utf16be_decode(self.data[2:], strict=True)
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError:
            raise Utf8DecodeError("invalid UTF-8 text") from None

    def serialize(self) -> bytes:
        """Literal form in parentheses, or hexadecimal if any byte is non-ASCII."""
        if any(b >= 0x80 for b in self.data):
            return b"<" + self.data.hex().encode("ascii") + b">"
        escaped = (
            self.data.replace(b"\\", b"\\\\").replace(b"(", b"\\(").replace(b")", b"\\)")
        )
        return b"(" + escaped + b")"


def _coerce(value: Any) -> Any:
    return Name(value) if type(value) is str else value


class Dictionary(MutableMapping):
    """An ordered mapping from names to primitives."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Any = (), /, **kwargs: Any) -> None:
        self._entries: dict[Name, Any] = {}
        self.update(entries, **kwargs)

    def __getitem__(self, key: str) -> Any:
        return self._entries[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._entries[Name(key)] = _coerce(value)

    def __delitem__(self, key: str) -> None:
        del self._entries[key]

    def __iter__(self) -> Iterator[Name]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Dictionary({self._entries!r})"

    def __str__(self) -> str:
        return display(self)

    def require(self, typ: str, key: str) -> Any:
        """Remove and return the entry ``key``; raise MissingEntry if absent."""
        try:
            return self._entries.pop(key)
        except KeyError:
            raise MissingEntry(typ, key) from None

    def expect(self, typ: str, key: str, value: str, required: bool) -> None:
        """Check that ``key`` names ``value``, or is absent when not required."""
        if key in self._entries:
            found = as_name(self._entries[key])
            if found != value:
                raise KeyValueMismatch(key, value, found)
        elif required:
            raise MissingEntry(typ, key)

    def append(self, other: Dictionary) -> None:
        """Add every entry of ``other``, replacing entries with the same key."""
        self.update(other)

    def serialize(self) -> bytes:
        body = b"".join(
            b"/" + key.encode("utf-8") + b" " + serialize(val) + b"\n"
            for key, val in self._entries.items()
        )
        return b"<<\n" + body + b">>\n"


@dataclass
class PdfStream:
    """A stream: its dictionary plus data held in memory or located in a file."""

    info: Dictionary
    data: bytes | None = None
    ref: PlainRef | None = None
    file_range: range | None = None

    def __post_init__(self) -> None:
        if self.data is not None:
            self.data = bytes(self.data)
        elif self.ref is None or self.file_range is None:
            raise ValueError("a stream needs either data or a location in the file")

    def raw_data(self, resolver: Any) -> bytes:
        """The undecoded stream bytes, read through ``resolver`` if needed."""
        if self.data is not None:
            return self.data
        return resolver.stream_data(self.ref, self.file_range)

    def serialize(self) -> bytes:
        if self.data is None:
            raise PdfError("cannot serialize a stream whose data is still in the file")
        return self.info.serialize() + b"stream\n" + self.data + b"\nendstream\n"


def _format_number(n: float) -> str:
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "inf" if n > 0 else "-inf"
    if n.is_integer():
        return str(int(n))
    return format(Decimal(repr(n)), "f")


def debug_name(value: Any) -> str:
    """The name of the kind of primitive ``value`` is."""
    match value:
        case None:
            return "Null"
        case bool():
            return "Boolean"
        case int():
            return "Integer"
        case float():
            return "Number"
        case PdfString():
            return "String"
        case PdfStream():
            return "Stream"
        case Dictionary():
            return "Dictionary"
        case list():
            return "Array"
        case PlainRef():
            return "Reference"
        case str():
            return "Name"
    raise TypeError(f"not a PDF primitive: {value!r}")


def display(value: Any) -> str:
    """A short human-readable rendering of a primitive."""
    match value:
        case None:
            return "null"
        case bool():
            return "true" if value else "false"
        case int():
            return str(value)
        case float():
            return _format_number(value)
        case PdfString():
            return _quote_bytes(value.data)
        case PdfStream():
            return "stream"
        case Dictionary():
            inner = ", ".join(f"/{k}={display(v)}" for k, v in value.items())
            return f"<{inner}>"
        case list():
            return "[" + ", ".join(display(item) for item in value) + "]"
        case PlainRef():
            return f"@{value.id}"
        case str():
            return f"/{value}"
    raise TypeError(f"not a PDF primitive: {value!r}")


def serialize_name(name: str) -> bytes:
    """Write a name with its slash, escaping backslashes and parentheses."""
    out = ["/"]
    for ch in name:
        if ch in "\\()":
            out.append("\\")
        elif ch > "~":
            raise PdfError(f"name {name!r} is not ASCII")
        out.append(ch)
    return "".join(out).encode("ascii")


def serialize(value: Any) -> bytes:
    """The bytes that represent a primitive in a PDF file."""
    match value:
        case None:
            return b"null"
        case bool():
            return b"true" if value else b"false"
        case int():
            return str(value).encode("ascii")
        case float():
            return _format_number(value).encode("ascii")
        case PdfString() | PdfStream() | Dictionary():
            return value.serialize()
        case list():
            return b"[" + b" ".join(serialize(item) for item in value) + b"]"
        case PlainRef():
            return f"{value.id} {value.gen} R".encode("ascii")
        case str():
            return serialize_name(value)
    raise TypeError(f"not a PDF primitive: {value!r}")


def resolve(value: Any, resolver: Any) -> Any:
    """Follow ``value`` through ``resolver`` if it is a reference."""
    if isinstance(value, PlainRef):
        return resolver.resolve(value)
    return value


def _unexpected(expected: str, value: Any) -> UnexpectedPrimitive:
    return UnexpectedPrimitive(expected, debug_name(value))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def as_integer(value: Any) -> int:
    if _is_int(value):
        return value
    raise _unexpected("Integer", value)


def as_u8(value: Any) -> int:
    if _is_int(value):
        if 0 <= value < 256:
            return value
        raise PdfError("invalid integer")
    raise _unexpected("Integer", value)


def as_u32(value: Any) -> int:
    if _is_int(value):
        if value >= 0:
            return value
        raise PdfError("negative integer")
    raise _unexpected("Integer", value)


def as_usize(value: Any) -> int:
    if _is_int(value):
        if value >= 0:
            return value
        raise PdfError("negative integer")
    raise _unexpected("Integer", value)


def as_number(value: Any) -> float:
    if _is_int(value) or isinstance(value, float):
        return float(value)
    raise _unexpected("Number", value)


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise _unexpected("Boolean", value)


def as_name(value: Any) -> str:
    if isinstance(value, str):
        return value
    raise _unexpected("Name", value)


def as_string(value: Any) -> PdfString:
    if isinstance(value, PdfString):
        return value
    raise _unexpected("String", value)


def as_array(value: Any) -> list:
    if isinstance(value, list):
        return value
    raise _unexpected("Array", value)


def as_reference(value: Any) -> PlainRef:
    if isinstance(value, PlainRef):
        return value
    raise _unexpected("Reference", value)


def as_dictionary(value: Any) -> Dictionary:
    if isinstance(value, Dictionary):
        return value
    raise _unexpected("Dictionary", value)


def as_stream(value: Any) -> PdfStream:
    if isinstance(value, PdfStream):
        return value
    raise _unexpected("Stream", value)


def to_string_lossy(value: Any) -> str:
    return as_string(value).to_string_lossy()


def to_string(value: Any) -> str:
    return as_string(value).to_string()