"""Lexers for the bodies of literal ``(...)`` and hexadecimal ``<...>`` strings."""

from __future__ import annotations

from collections.abc import Iterator

from .errors import HexDecodeError, PdfEOFError

_SIMPLE_ESCAPES = {
    ord("n"): ord("\n"),
    ord("r"): ord("\r"),
    ord("t"): ord("\t"),
    ord("b"): 0x08,
    ord("f"): 0x0C,
    ord("("): ord("("),
    ord(")"): ord(")"),
    ord("\\"): ord("\\"),
}
_HEX_WHITESPACE = b" \t\n\r\x0c"


class _ByteCursor:
    def __init__(self, buf: bytes) -> None:
        self._buf = bytes(buf)
        self._pos = 0

    @property
    def offset(self) -> int:
        """Number of bytes of the input consumed so far."""
        return self._pos

    def _read(self) -> int:
        if self._pos >= len(self._buf):
            raise PdfEOFError()
        self._pos += 1
        return self._buf[self._pos - 1]

    def _peek(self) -> int:
        if self._pos >= len(self._buf):
            raise PdfEOFError()
        return self._buf[self._pos]

    def _back(self) -> None:
        if self._pos == 0:
            raise PdfEOFError()
        self._pos -= 1


class StringLexer(_ByteCursor):
    """Decodes a literal string, starting just after its opening parenthesis.

    Iterating yields the decoded bytes as integers and stops at the closing
    parenthesis; ``offset`` then tells how much of the input was used.
    """

    def __init__(self, buf: bytes) -> None:
        super().__init__(buf)
        self._nested = 0

    def next_lexeme(self) -> int | None:
        """The next decoded byte, or None at the end of the string."""
        while True:
            c = self._read()
            if c == ord("\\"):
                c = self._read()
                if c in _SIMPLE_ESCAPES:
                    return _SIMPLE_ESCAPES[c]
                if c in (ord("\n"), ord("\r")):
                    partner = ord("\r") if c == ord("\n") else ord("\n")
                    try:
                        if self._peek() == partner:
                            self._read()
                    except PdfEOFError:
                        pass
                    continue
                self._back()
                code = 0
                for _ in range(3):
                    d = self._peek()
                    if not ord("0") <= d <= ord("7"):
                        break
                    self._read()
                    code = code * 8 + (d - ord("0"))
                return code & 0xFF
            if c == ord("("):
                self._nested += 1
                return c
            if c == ord(")"):
                self._nested -= 1
                return None if self._nested < 0 else c
            return c

    def __iter__(self) -> Iterator[int]:
        while (b := self.next_lexeme()) is not None:
            yield b


def _nibble(c: int) -> int | None:
    if ord("0") <= c <= ord("9"):
        return c - ord("0")
    if ord("A") <= c <= ord("F"):
        return c - ord("A") + 10
    if ord("a") <= c <= ord("f"):
        return c - ord("a") + 10
    return None


class HexStringLexer(_ByteCursor):
    """Decodes a hexadecimal string, starting just after its ``<``."""

    def _next_non_whitespace(self) -> int:
        b = self._read()
        while b in _HEX_WHITESPACE:
            b = self._read()
        return b

    def next_hex_byte(self) -> int | None:
        """The next decoded byte, or None at the closing ``>``."""
        c1 = self._next_non_whitespace()
        if c1 == ord(">"):
            return None
        high = _nibble(c1)
        if high is None:
            try:
                following = self._peek()
            except PdfEOFError:
                following = 0
            raise HexDecodeError(self._pos, bytes([c1, following]))
        c2 = self._next_non_whitespace()
        if c2 == ord(">"):
            self._back()
            low = 0
        else:
            low = _nibble(c2)
            if low is None:
                raise HexDecodeError(self._pos, bytes([c1, c2]))
        return (high << 4) | low

    def __iter__(self) -> Iterator[int]:
        while (b := self.next_hex_byte()) is not None:
            yield b