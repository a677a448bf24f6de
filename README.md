# pdfcore

Building blocks for reading and writing PDF data at the object level. The
package has no dependencies outside the standard library.

## Modules

- `pdfcore.primitive`: the object model. PDF primitives map onto Python
  values: `None` is null, `bool`, `int` and `float` are booleans, integers and
  real numbers, `list` is an array, and `Name`, `PdfString`, `Dictionary`,
  `PdfStream` and `PlainRef` cover names, strings, dictionaries, streams and
  indirect references. Checked accessors (`as_integer`, `as_u8`, `as_u32`,
  `as_usize`, `as_number`, `as_bool`, `as_name`, `as_string`, `as_array`,
  `as_reference`, `as_dictionary`, `as_stream`) raise `UnexpectedPrimitive`
  when a value is of the wrong kind. `serialize` writes any primitive as PDF
  syntax, `display` gives a short readable form, `debug_name` names the kind.
  `PdfString.to_string_lossy` and `to_string` decode UTF-16BE (with byte order
  mark) or UTF-8 text. `NoResolve` is a resolver for data outside any file;
  its `options` field is a `ParseOptions` with the switches
  `allow_missing_endobj` and `allow_xref_error`.
- `pdfcore.date`: `Date`, `TimeRel` and `parse_date` for date strings of the
  form `D:YYYYMMDDHHmmSSOHH'mm`; `Date.to_primitive` writes one back.
- `pdfcore.lexer`: `Lexer`, which walks a byte buffer lexeme by lexeme in
  either direction, and `Substr`, the lexemes it returns.
- `pdfcore.strings`: `StringLexer` and `HexStringLexer`, which decode the
  bodies of literal `(...)` and hexadecimal `<...>` strings.
- `pdfcore.parser`: `parse`, `parse_with_lexer`, `parse_with_lexer_ctx`,
  `parse_stream`, `parse_indirect_object` and `parse_indirect_stream`. The
  kinds of object accepted are chosen with `ParseFlags`; nesting is limited to
  `MAX_DEPTH` levels.
- `pdfcore.xref`: the entry types `XRefFree`, `XRefRaw`, `XRefStream`,
  `XRefPromised` and `XRefInvalid`, plus `XRefTable`, `XRefSection` and
  `XRefInfo`. `XRefTable.add_entries_from` merges a section by generation
  number and `XRefTable.write_stream` produces a cross-reference stream.
- `pdfcore.parse_xref`: `read_xref_and_trailer_at`, which reads a classic
  `xref` table or a cross-reference stream together with its trailer, and the
  functions it is built from.
- `pdfcore.path`: `PathBuilder`, which writes path construction and fill
  operators for content streams to a text stream, and `FillMode`.

Every failure raises a subclass of `pdfcore.errors.PdfError`.

## Installation

```
pip install .
```

## Examples

Parsing an object:

```python
from pdfcore.parser import parse, ParseFlags
from pdfcore.primitive import NoResolve, as_dictionary, as_name

page = as_dictionary(parse(b"<</Type/Page/Count 3>>", NoResolve(), ParseFlags.ANY))
print(as_name(page["Type"]))   # Page
print(page["Count"])           # 3
```

Parsing a date:

```python
from pdfcore.date import parse_date
from pdfcore.primitive import NoResolve, PdfString

date = parse_date(PdfString(b"D:199812231952-08'00"), NoResolve())
print(date.year, date.month, date.day)   # 1998 12 23
```

Reading a cross-reference table and its trailer:

```python
from pdfcore.lexer import Lexer
from pdfcore.parse_xref import read_xref_and_trailer_at
from pdfcore.primitive import NoResolve

data = b"xref\n0 1\n0000000000 65535 f \ntrailer\n<</Size 1>>"
sections, trailer = read_xref_and_trailer_at(Lexer(data), NoResolve())
print(sections[0].entries)   # [XRefFree(next_obj_nr=0, gen_nr=65535)]
print(trailer["Size"])       # 1
```

Writing a path:

```python
import io
from pdfcore.path import FillMode, PathBuilder

out = io.StringIO()
path = PathBuilder(out, (0, 0))
path.move((0, 0))
path.line((10, 0))
path.line((10, 10))
path.close()
path.fill(FillMode.EVEN_ODD)
print(out.getvalue())   # "0 0 m\n10 0 l\n10 10 l\nh\nf*\n"
```

## What the package does not do

It works on objects and cross-reference data, not on whole documents. There
is no function that opens a file, locates its cross-reference data, follows
the trailer to a catalog or reads pages. Stream filters are not decoded:
`PdfStream.raw_data` returns the bytes as stored, and cross-reference streams
with a `/Filter` are rejected. Decryption happens only through a decoder
object handed to `parser.Context`; the package supplies none. `NoResolve`
cannot follow references or read stream data from a file and raises
`PdfError` when asked to; a resolver with `resolve`, `stream_data` and
`options` must be provided for that.

## Running the tests

```
pip install .[test]
pytest
```