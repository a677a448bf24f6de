"""Breaking PDF data into lexemes at whitespace and delimiters."""

from __future__ import annotations

import re
from collections.abc import Callable

from .errors import (
    NotFoundError,
    ParseError,
    PdfEOFError,
    PdfError,
    UnexpectedLexeme,
    Utf8DecodeError,
)
from .primitive import Name

_WHITESPACE = frozenset(b"\x00 \r\n\t")
_DELIMITERS = frozenset(b"()<>[]{}/%")
_INT_RE = re.compile(rb"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    rb"[+-]?(?:infinity|inf|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)


def is_whitespace(b: int) -> bool:
    """Whether byte ``b`` separates lexemes."""
    return b in _WHITESPACE


def _is_digits(data: bytes) -> bool:
    return all(0x30 <= b <= 0x39 for b in data)


def boundary(data: bytes, pos: int, condition: Callable[[int], bool]) -> int:
    """The first index from ``pos`` on whose byte fails ``condition``, else ``len(data)``."""
    return next(
        (i for i in range(pos, len(data)) if not condition(data[i])), len(data)
    )


def boundary_rev(data: bytes, pos: int, condition: Callable[[int], bool]) -> int:
    """The index after the last byte before ``pos`` that fails ``condition``, else 0."""
    return next(
        (i + 1 for i in range(pos - 1, -1, -1) if not condition(data[i])), 0
    )


class Substr:
    """A lexeme: a slice of the input together with its offset in the file."""

    __slots__ = ("data", "file_offset")

    def __init__(self, data: bytes | str, file_offset: int = 0) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.data = bytes(data)
        self.file_offset = file_offset

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Substr):
            return self.data == other.data
        if isinstance(other, (bytes, bytearray, str)):
            return self.equals(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"Substr({self.data!r}, file_offset={self.file_offset})"

    def to_string(self) -> str:
        """The lexeme as text, with invalid UTF-8 replaced."""
        return self.data.decode("utf-8", errors="replace")

    def to_name(self) -> Name:
        try:
            return Name(self.data.decode("utf-8"))
        except UnicodeDecodeError:
            raise Utf8DecodeError(f"name {self.data!r} is not valid UTF-8") from None

    def to_int(self) -> int:
        if not _INT_RE.fullmatch(self.data):
            raise ParseError(f"not an integer: {self.to_string()!r}")
        return int(self.data)

    def to_float(self) -> float:
        if not _FLOAT_RE.fullmatch(self.data):
            raise ParseError(f"not a number: {self.to_string()!r}")
        return float(self.data)

    def is_integer(self) -> bool:
        data = self.data
        if not data:
            return False
        if data[:1] == b"-":
            if len(data) < 2:
                return False
            data = data[1:]
        return _is_digits(data)

    def is_real_number(self) -> bool:
        return self.real_number() is not None

    def real_number(self) -> Substr | None:
        """The leading part of the lexeme that reads as a real number, if any."""
        data = self.data
        if not data:
            return None
        rest = data
        if rest[:1] == b"-":
            if len(rest) < 2:
                return None
            rest = rest[1:]
        dot = rest.find(b".")
        if dot != -1:
            if not _is_digits(rest[:dot]):
                return None
            rest = rest[dot + 1:]
        bad = next(
            (i for i, b in enumerate(rest) if not 0x30 <= b <= 0x39), None
        )
        if bad is None:
            return self
        if bad == 0:
            return None
        end = len(data) - len(rest) + bad
        return Substr(data[:end], self.file_offset)

    def as_str(self) -> str:
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(str(exc)) from None

    def equals(self, other: bytes | str) -> bool:
        if isinstance(other, str):
            other = other.encode("utf-8")
        return self.data == bytes(other)

    def reslice(self, start: int) -> Substr:
        return Substr(self.data[start:], self.file_offset + start)

    def file_range(self) -> range:
        return range(self.file_offset, self.file_offset + len(self.data))


class Lexer:
    """Walks through PDF data lexeme by lexeme, forwards and backwards."""

    def __init__(self, buf: bytes, file_offset: int = 0) -> None:
        self._buf = bytes(buf)
        self._pos = 0
        self.file_offset = file_offset

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def buf(self) -> bytes:
        return self._buf

    def next(self) -> Substr:
        """Return the next lexeme and move past it."""
        lexeme, pos = self._next_word()
        self._pos = pos
        return lexeme

    def next_stream(self) -> None:
        """Consume ``stream`` and the end-of-line marker that follows it."""
        pos = self._skip_whitespace(self._pos)
        if pos + 6 >= len(self._buf):
            raise PdfEOFError()
        b0 = self._buf[pos + 6]
        if b0 == 0x0A:
            self._pos = pos + 7
        elif b0 == 0x0D:
            if pos + 7 >= len(self._buf):
                raise PdfEOFError()
            if self._buf[pos + 7] != 0x0A:
                raise PdfError("invalid whitespace following 'stream'")
            self._pos = pos + 8
        else:
            raise PdfError("invalid whitespace")

    def back(self) -> Substr:
        """Return the previous lexeme and move to its first byte."""
        end_pos = boundary_rev(self._buf, self._pos, is_whitespace)
        start_pos = boundary_rev(self._buf, end_pos, lambda b: not is_whitespace(b))
        self._pos = start_pos
        return self.new_substr(start_pos, end_pos)

    def peek(self) -> Substr:
        """The next lexeme without moving; empty at the end of the input."""
        try:
            return self._next_word()[0]
        except PdfEOFError:
            return self.new_substr(self._pos, self._pos)

    def next_expect(self, expected: str) -> None:
        """Consume the next lexeme; raise UnexpectedLexeme unless it is ``expected``."""
        word = self.next()
        if not word.equals(expected):
            raise UnexpectedLexeme(self._pos, word.to_string(), expected)

    def next_int(self) -> int:
        return self.next().to_int()

    def _skip_whitespace(self, pos: int) -> int:
        pos = boundary(self._buf, pos, is_whitespace)
        if pos >= len(self._buf):
            raise PdfEOFError()
        return pos

    def _is_whitespace_at(self, pos: int) -> bool:
        return pos < len(self._buf) and self._buf[pos] in _WHITESPACE

    def _is_delimiter_at(self, pos: int) -> bool:
        return pos < len(self._buf) and self._buf[pos] in _DELIMITERS

    def _read_word_end(self, pos: int) -> int:
        while (
            pos < len(self._buf)
            and not self._is_whitespace_at(pos)
            and not self._is_delimiter_at(pos)
        ):
            pos += 1
        return pos

    def _next_word(self) -> tuple[Substr, int]:
        buf = self._buf
        if self._pos == len(buf):
            raise PdfEOFError()
        pos = self._skip_whitespace(self._pos)
        while pos < len(buf) and buf[pos] == ord("%"):
            pos += 1
            newline = buf.find(b"\n", pos)
            if newline != -1:
                pos = newline + 1
            pos = self._skip_whitespace(pos)

        start = pos
        if self._is_delimiter_at(pos):
            if buf[pos] == ord("/"):
                pos = self._read_word_end(pos + 1)
                return self.new_substr(start, pos), pos
            if buf[pos:pos + 2] in (b"<<", b">>"):
                pos += 1
            pos += 1
            return self.new_substr(start, pos), pos

        pos = self._read_word_end(pos)
        return self.new_substr(start, pos), pos

    def new_substr(self, start: int, end: int) -> Substr:
        """The lexeme between two positions; a reversed range is turned around."""
        if start > end:
            start, end = end + 1, start + 1
        return Substr(self._buf[start:end], self.file_offset + start)

    def set_pos(self, wanted_pos: int) -> Substr:
        """Move to ``wanted_pos`` (at most the end); return what lies between."""
        new_pos = min(wanted_pos, len(self._buf))
        start, end = sorted((self._pos, new_pos))
        self._pos = new_pos
        return self.new_substr(start, end)

    def set_pos_from_end(self, new_pos: int) -> Substr:
        return self.set_pos(max(len(self._buf) - new_pos - 1, 0))

    def offset_pos(self, offset: int) -> Substr:
        return self.set_pos(max(self._pos + offset, 0))

    def _incr_pos(self) -> bool:
        if self._pos >= len(self._buf) - 1:
            return False
        self._pos += 1
        return True

    def seek_newline(self) -> Substr:
        """Move to the start of the next line; return the skipped text."""
        if self._pos >= len(self._buf):
            raise PdfEOFError()
        start = self._pos
        while self._buf[self._pos] != 0x0A and self._incr_pos():
            pass
        self._incr_pos()
        return self.new_substr(start, self._pos)

    def seek_substr(self, substr: bytes | str) -> Substr | None:
        """Move past the next occurrence of ``substr``; return the text before it."""
        if isinstance(substr, str):
            substr = substr.encode("utf-8")
        start = self._pos
        matched = 0
        while True:
            if self._pos >= len(self._buf):
                return None
            if self._buf[self._pos] == substr[matched]:
                matched += 1
            else:
                matched = 0
            if matched == len(substr):
                break
            self._pos += 1
        self._pos += 1
        return self.new_substr(start, self._pos - len(substr))

    def seek_substr_back(self, substr: bytes | str) -> Substr:
        """Search backwards for ``substr``; move past it and return the text after it."""
        if isinstance(substr, str):
            substr = substr.encode("utf-8")
        end = self._pos
        start = self._buf.rfind(substr, 0, end)
        if start == -1:
            raise NotFoundError(substr.decode("utf-8", errors="replace"))
        self._pos = start + len(substr)
        return self.new_substr(self._pos, end)

    def read_n(self, n: int) -> Substr:
        """Read at most ``n`` bytes; the position never passes the last byte."""
        start = self._pos
        self._pos += n
        if self._pos >= len(self._buf):
            self._pos = max(len(self._buf) - 1, 0)
        if start < len(self._buf):
            return self.new_substr(start, self._pos)
        return self.new_substr(0, 0)

    def remaining(self) -> bytes:
        """The input from the current position to the end."""
        return self._buf[self._pos:]

    def ctx(self) -> str:
        """Text around the current position, for error messages."""
        lo = max(self._pos - 40, 0)
        hi = min(len(self._buf), self._pos + 40)
        return self._buf[lo:hi].decode("utf-8", errors="replace")