"""Parsing PDF objects from bytes into primitives."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

from .errors import (
    HexDecodeError,
    MaxDepthError,
    MissingEntry,
    ParseError,
    PdfEOFError,
    PdfError,
    PrimitiveNotAllowed,
    UnexpectedLexeme,
    UnexpectedPrimitive,
    UnknownType,
    Utf8DecodeError,
)
from .lexer import Lexer, Substr
from .primitive import (
    Dictionary,
    Name,
    PdfStream,
    PdfString,
    PlainRef,
    as_usize,
    debug_name,
)
from .strings import HexStringLexer, StringLexer

logger = logging.getLogger(__name__)

MAX_DEPTH = 20

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_U64_MAX = 2**64 - 1


class ParseFlags(enum.IntFlag):
    """The kinds of primitive a caller is prepared to accept."""

    INTEGER = 1 << 0
    STREAM = 1 << 1
    DICT = 1 << 2
    NUMBER = 1 << 3
    NAME = 1 << 4
    ARRAY = 1 << 5
    STRING = 1 << 6
    BOOL = 1 << 7
    NULL = 1 << 8
    REF = 1 << 9
    ANY = (1 << 10) - 1


@dataclass
class Context:
    """The indirect object being parsed and the decoder for its strings."""

    decoder: Any
    id: PlainRef

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt ``data`` with the decoder, or return it unchanged if there is none."""
        if self.decoder is None:
            return data
        return bytes(self.decoder.decrypt(self.id, data))


def _check(flags: ParseFlags, allowed: ParseFlags) -> None:
    if not flags & allowed:
        raise PrimitiveNotAllowed(allowed, flags)


def _to_i32(lexeme: Substr) -> int:
    value = lexeme.to_int()
    if not _I32_MIN <= value <= _I32_MAX:
        raise ParseError(f"integer out of range: {lexeme.to_string()}")
    return value


def _to_object_number(lexeme: Substr) -> int:
    value = lexeme.to_int()
    if not 0 <= value <= _U64_MAX or lexeme.data[:1] == b"-":
        raise ParseError(f"invalid object or generation number: {lexeme.to_string()}")
    return value


def _nibble(c: int) -> int | None:
    if 0x30 <= c <= 0x39:
        return c - 0x30
    if 0x41 <= c <= 0x46:
        return c - 0x41 + 10
    if 0x61 <= c <= 0x66:
        return c - 0x61 + 10
    return None


def _decode_name(rest: bytes) -> Name:
    out = bytearray()
    while (idx := rest.find(b"#")) != -1:
        pair = rest[idx + 1:idx + 3]
        if len(pair) != 2:
            raise PdfEOFError()
        hi, lo = _nibble(pair[0]), _nibble(pair[1])
        if hi is None or lo is None:
            raise HexDecodeError(idx, bytes(pair))
        out += rest[:idx]
        out.append(hi << 4 | lo)
        rest = rest[idx + 3:]
    out += rest
    try:
        return Name(bytes(out).decode("utf-8"))
    except UnicodeDecodeError:
        raise Utf8DecodeError(f"name {bytes(out)!r} is not valid UTF-8") from None


def parse(data: bytes, resolver: Any, flags: ParseFlags = ParseFlags.ANY) -> Any:
    """Parse one primitive from ``data``; streams are not allowed here."""
    return parse_with_lexer(Lexer(data), resolver, flags)


def parse_with_lexer(lexer: Lexer, resolver: Any, flags: ParseFlags = ParseFlags.ANY) -> Any:
    """Parse one primitive at the lexer's position; streams are not allowed here."""
    return parse_with_lexer_ctx(lexer, resolver, None, flags, MAX_DEPTH)


def _parse_dictionary_object(
    lexer: Lexer, resolver: Any, ctx: Context | None, max_depth: int
) -> Dictionary:
    result = Dictionary()
    while True:
        token = lexer.next()
        if token.data.startswith(b"/"):
            key = token.reslice(1).to_name()
            result[key] = parse_with_lexer_ctx(lexer, resolver, ctx, ParseFlags.ANY, max_depth)
        elif token.equals(b">>"):
            return result
        else:
            raise UnexpectedLexeme(lexer.pos, token.to_string(), "/ or >>")


def _parse_stream_object(
    info: Dictionary, lexer: Lexer, resolver: Any, ctx: Context
) -> PdfStream:
    lexer.next_stream()

    length_entry = info.get("Length")
    match length_entry:
        case None:
            raise MissingEntry("<Stream>", "Length")
        case bool():
            raise UnexpectedPrimitive("unsigned Integer or Reference", debug_name(length_entry))
        case int() if length_entry >= 0:
            length = length_entry
        case PlainRef():
            length = as_usize(resolver.resolve(length_entry))
        case _:
            raise UnexpectedPrimitive("unsigned Integer or Reference", debug_name(length_entry))

    body = lexer.read_n(length)
    if len(body) != length:
        raise PdfEOFError()

    lexer.next_expect("endstream")
    return PdfStream(info=info, ref=ctx.id, file_range=body.file_range())


def parse_with_lexer_ctx(
    lexer: Lexer,
    resolver: Any,
    ctx: Context | None,
    flags: ParseFlags,
    max_depth: int,
) -> Any:
    """Parse one primitive; on failure the lexer is put back where it started."""
    pos = lexer.pos
    try:
        return _parse_primitive(lexer, resolver, ctx, flags, max_depth)
    except PdfError:
        lexer.set_pos(pos)
        raise


def _parse_primitive(
    lexer: Lexer,
    resolver: Any,
    ctx: Context | None,
    flags: ParseFlags,
    max_depth: int,
) -> Any:
    first = lexer.next()

    if first.equals(b"<<"):
        _check(flags, ParseFlags.DICT)
        if max_depth == 0:
            raise MaxDepthError()
        info = _parse_dictionary_object(lexer, resolver, ctx, max_depth - 1)
        if lexer.peek().equals(b"stream"):
            if ctx is None:
                raise PrimitiveNotAllowed(ParseFlags.STREAM, flags)
            return _parse_stream_object(info, lexer, resolver, ctx)
        return info

    if first.is_integer():
        _check(flags, ParseFlags.INTEGER | ParseFlags.REF)
        pos_bk = lexer.pos
        second = lexer.next()
        if second.is_integer():
            third = lexer.next()
            if third.equals(b"R"):
                _check(flags, ParseFlags.REF)
                return PlainRef(_to_object_number(first), _to_object_number(second))
        _check(flags, ParseFlags.INTEGER)
        lexer.set_pos(pos_bk)
        return _to_i32(first)

    number = first.real_number()
    if number is not None:
        _check(flags, ParseFlags.NUMBER)
        return number.to_float()

    if first.data.startswith(b"/"):
        _check(flags, ParseFlags.NAME)
        return _decode_name(first.data[1:])

    if first.equals(b"["):
        _check(flags, ParseFlags.ARRAY)
        if max_depth == 0:
            raise MaxDepthError()
        items = []
        while not lexer.peek().equals(b"]"):
            items.append(
                parse_with_lexer_ctx(lexer, resolver, ctx, ParseFlags.ANY, max_depth - 1)
            )
        lexer.next()
        return items

    if first.equals(b"(") or first.equals(b"<"):
        _check(flags, ParseFlags.STRING)
        string_lexer = (StringLexer if first.equals(b"(") else HexStringLexer)(lexer.remaining())
        data = bytes(iter(string_lexer))
        lexer.offset_pos(string_lexer.offset)
        if ctx is not None:
            data = ctx.decrypt(data)
        return PdfString(data)

    if first.equals(b"true"):
        _check(flags, ParseFlags.BOOL)
        return True
    if first.equals(b"false"):
        _check(flags, ParseFlags.BOOL)
        return False
    if first.equals(b"null"):
        _check(flags, ParseFlags.NULL)
        return None

    raise UnknownType(lexer.pos, first.to_string(), lexer.read_n(50).to_string())


def parse_stream(data: bytes, resolver: Any, ctx: Context) -> PdfStream:
    """Parse a stream whose dictionary may contain indirect references."""
    return _parse_stream_with_lexer(Lexer(data), resolver, ctx)


def _parse_stream_with_lexer(lexer: Lexer, resolver: Any, ctx: Context) -> PdfStream:
    first = lexer.next()
    if not first.equals(b"<<"):
        raise UnexpectedPrimitive("Stream", "something else")
    info = _parse_dictionary_object(lexer, resolver, None, MAX_DEPTH)
    if not lexer.peek().equals(b"stream"):
        raise UnexpectedPrimitive("Stream", "Dictionary")
    return _parse_stream_object(info, lexer, resolver, Context(None, ctx.id))


def _parse_object_header(lexer: Lexer) -> PlainRef:
    obj_nr = _to_object_number(lexer.next())
    gen_nr = _to_object_number(lexer.next())
    lexer.next_expect("obj")
    return PlainRef(obj_nr, gen_nr)


def parse_indirect_object(
    lexer: Lexer, resolver: Any, flags: ParseFlags = ParseFlags.ANY
) -> tuple[PlainRef, Any]:
    """Parse ``N G obj ... endobj``; return the reference and the object."""
    ref = _parse_object_header(lexer)
    obj = parse_with_lexer_ctx(lexer, resolver, Context(None, ref), flags, MAX_DEPTH)

    if resolver.options.allow_missing_endobj:
        pos = lexer.pos
        try:
            lexer.next_expect("endobj")
        except PdfError as exc:
            logger.warning("error parsing obj %d %d: %s", ref.id, ref.gen, exc)
            lexer.set_pos(pos)
    else:
        lexer.next_expect("endobj")

    return ref, obj


def parse_indirect_stream(lexer: Lexer, resolver: Any) -> tuple[PlainRef, PdfStream]:
    """Parse ``N G obj <<...>> stream ... endstream endobj``."""
    ref = _parse_object_header(lexer)
    stream = _parse_stream_with_lexer(lexer, resolver, Context(None, ref))
    lexer.next_expect("endobj")
    return ref, stream