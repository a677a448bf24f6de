"""Exceptions raised while reading and writing PDF objects."""

from __future__ import annotations

from typing import Any


class PdfError(Exception):
    """Base class of every error raised by this package."""


class PdfEOFError(PdfError):
    """The input ended before the object being read was complete."""

    def __init__(self, message: str = "unexpected end of file") -> None:
        super().__init__(message)


class UnexpectedPrimitive(PdfError):
    """A primitive of one kind was found where another kind was required."""

    def __init__(self, expected: str, found: str) -> None:
        self.expected = expected
        self.found = found
        super().__init__(f"expected primitive {expected}, found {found}")


class MissingEntry(PdfError):
    """A required dictionary entry is absent."""

    def __init__(self, typ: str, field: str) -> None:
        self.typ = typ
        self.field = field
        super().__init__(f"missing entry {field} in {typ}")


class KeyValueMismatch(PdfError):
    """A dictionary entry holds a different name than the one expected."""

    def __init__(self, key: str, value: str, found: str) -> None:
        self.key = key
        self.value = value
        self.found = found
        super().__init__(f"expected /{key} to be /{value}, found /{found}")


class UnexpectedLexeme(PdfError):
    """The lexer produced a token that does not fit at this position."""

    def __init__(self, pos: int, lexeme: str, expected: str) -> None:
        self.pos = pos
        self.lexeme = lexeme
        self.expected = expected
        super().__init__(
            f"unexpected lexeme {lexeme!r} at {pos}, expected {expected}"
        )


class HexDecodeError(PdfError):
    """Two bytes that should form a hexadecimal digit pair do not."""

    def __init__(self, pos: int, found: bytes) -> None:
        self.pos = pos
        self.found = found
        super().__init__(f"invalid hex digits {found!r} at {pos}")


class UnknownType(PdfError):
    """A token that starts no known kind of object."""

    def __init__(self, pos: int, first_lexeme: str, rest: str) -> None:
        self.pos = pos
        self.first_lexeme = first_lexeme
        self.rest = rest
        super().__init__(
            f"unknown object type at {pos}: {first_lexeme} (followed by {rest})"
        )


class PrimitiveNotAllowed(PdfError):
    """The object found is not among the kinds the caller allows."""

    def __init__(self, allowed: Any, found: Any) -> None:
        self.allowed = allowed
        self.found = found
        super().__init__(f"primitive not allowed: allowed {allowed}, found {found}")


class MaxDepthError(PdfError):
    """Objects are nested deeper than the parser permits."""

    def __init__(self, message: str = "maximum nesting depth reached") -> None:
        super().__init__(message)


class NotFoundError(PdfError):
    """A searched-for word does not occur in the input."""

    def __init__(self, word: str) -> None:
        self.word = word
        super().__init__(f"word not found: {word}")


class UnspecifiedXRefEntry(PdfError):
    """The cross-reference table has no entry for an object number."""

    def __init__(self, id: int) -> None:
        self.id = id
        super().__init__(f"no cross-reference entry for object {id}")


class XRefStreamTypeError(PdfError):
    """A cross-reference stream entry has an unknown type field."""

    def __init__(self, found: int) -> None:
        self.found = found
        super().__init__(f"invalid cross-reference stream entry type {found}")


class Utf8DecodeError(PdfError):
    """Text could not be decoded in the encoding it claims."""

    def __init__(self, message: str = "invalid text encoding") -> None:
        super().__init__(message)


class ParseError(PdfError):
    """A token could not be converted to the value it should denote."""