"""Reading cross-reference tables, streams and the trailer that follows them."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .errors import ParseError, PdfError, UnexpectedLexeme, XRefStreamTypeError
from .lexer import Lexer, Substr
from .parser import ParseFlags, parse_indirect_stream, parse_with_lexer
from .primitive import Dictionary, as_dictionary
from .xref import XRefFree, XRefInfo, XRefRaw, XRefSection, XRefStream

logger = logging.getLogger(__name__)


def _unsigned(lexeme: Substr) -> int:
    value = lexeme.to_int()
    if value < 0 or lexeme.data[:1] == b"-":
        raise ParseError(f"expected an unsigned integer, found {lexeme.to_string()!r}")
    return value


def parse_xref_section_from_stream(
    first_id: int,
    num_entries: int,
    width: Sequence[int],
    data: bytes,
    resolver: Any,
) -> tuple[XRefSection, bytes]:
    """Decode one section of a cross-reference stream.

    Returns the section and the data that follows it.
    """
    if len(width) != 3:
        raise PdfError("invalid xref length array")
    w0, w1, w2 = width
    entry_len = w0 + w1 + w2
    if num_entries * entry_len > len(data):
        if resolver.options.allow_xref_error:
            logger.warning("not enough xref data. truncating.")
            num_entries = len(data) // entry_len
        else:
            raise PdfError("not enough xref data")

    pos = 0

    def read(n: int) -> int:
        nonlocal pos
        value = int.from_bytes(data[pos:pos + n], "big")
        pos += n
        return value

    section = XRefSection(first_id)
    for _ in range(num_entries):
        kind = 1 if w0 == 0 else read(w0)
        field1 = read(w1)
        field2 = read(w2)
        match kind:
            case 0:
                section.entries.append(XRefFree(field1, field2))
            case 1:
                section.entries.append(XRefRaw(field1, field2))
            case 2:
                section.entries.append(XRefStream(field1, field2))
            case _:
                raise XRefStreamTypeError(kind)
    return section, bytes(data[pos:])


def parse_xref_stream_and_trailer(
    lexer: Lexer, resolver: Any
) -> tuple[list[XRefSection], Dictionary]:
    """Read a cross-reference stream object and the trailer at the lexer's position."""
    _, stream = parse_indirect_stream(lexer, resolver)
    if lexer.next() == "trailer":
        trailer = as_dictionary(parse_with_lexer(lexer, resolver, ParseFlags.DICT))
    else:
        trailer = Dictionary(stream.info)

    info = XRefInfo.from_dictionary(Dictionary(stream.info))
    if stream.info.get("Filter") not in (None, []):
        raise PdfError("filtered cross-reference streams are not supported")
    data = stream.raw_data(resolver)

    if len(info.index) % 2 != 0:
        raise PdfError(
            f"xref stream has {len(info.index)} elements which is not an even number"
        )

    sections = []
    for first_id, num_objects in zip(info.index[::2], info.index[1::2]):
        section, data = parse_xref_section_from_stream(
            first_id, num_objects, info.w, data, resolver
        )
        sections.append(section)
    return sections, trailer


def parse_xref_table_and_trailer(
    lexer: Lexer, resolver: Any
) -> tuple[list[XRefSection], Dictionary]:
    """Read a classic table (after ``xref``) and the trailer that ends it."""
    sections = []
    while lexer.peek() != "trailer":
        start_id = _unsigned(lexer.next())
        num_ids = _unsigned(lexer.next())
        section = XRefSection(start_id)
        for i in range(num_ids):
            w1 = lexer.next()
            if w1 == "trailer":
                raise PdfError(
                    f"xref table declares {num_ids} entries, but only {i} follow."
                )
            w2 = lexer.next()
            w3 = lexer.next()
            if w3 == "f":
                section.add_free_entry(_unsigned(w1), _unsigned(w2))
            elif w3 == "n":
                section.add_inuse_entry(_unsigned(w1), _unsigned(w2))
            else:
                raise UnexpectedLexeme(lexer.pos, w3.to_string(), "f or n")
        sections.append(section)

    lexer.next_expect("trailer")
    trailer = as_dictionary(parse_with_lexer(lexer, resolver, ParseFlags.DICT))
    return sections, trailer


def read_xref_and_trailer_at(
    lexer: Lexer, resolver: Any
) -> tuple[list[XRefSection], Dictionary]:
    """Read whichever kind of cross-reference data starts at the lexer's position."""
    if lexer.next() == "xref":
        return parse_xref_table_and_trailer(lexer, resolver)
    lexer.back()
    return parse_xref_stream_and_trailer(lexer, resolver)