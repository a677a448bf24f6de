"""Low-level PDF objects, dates, lexing, parsing, cross-reference data and paths."""

__version__ = "0.1.0"

__all__ = [
    "date",
    "errors",
    "lexer",
    "parse_xref",
    "parser",
    "path",
    "primitive",
    "strings",
    "xref",
]