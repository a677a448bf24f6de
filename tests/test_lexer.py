import pytest

from pdfcore.errors import (
    NotFoundError,
    ParseError,
    PdfEOFError,
    PdfError,
    UnexpectedLexeme,
)
from pdfcore.lexer import Lexer, Substr, boundary, boundary_rev, is_whitespace
from pdfcore.primitive import Name


def not_ws(b):
    return not is_whitespace(b)


def test_boundary_rev():
    assert boundary_rev(b" hello", 3, not_ws) == 1
    assert boundary_rev(b" hello", 3, is_whitespace) == 3


def test_boundary():
    assert boundary(b" hello ", 3, not_ws) == 6
    assert boundary(b" hello ", 3, is_whitespace) == 3
    assert boundary(b"01234  7orld", 5, is_whitespace) == 7
    assert boundary(b"01234  7orld", 7, is_whitespace) == 7
    assert boundary(b"q\n", 1, is_whitespace) == 2


def test_substr_numbers():
    assert Substr("123", 0).is_real_number()
    assert Substr("123.", 0).is_real_number()
    assert Substr("123.45", 0).is_real_number()
    assert Substr(".45", 0).is_real_number()
    assert Substr("-.45", 0).is_real_number()
    assert not Substr("123.45", 0).is_integer()
    assert Substr("123", 0).is_integer()


@pytest.mark.parametrize("text", [b"", b"-", b"+5", b"1a"])
def test_not_integer(text):
    assert not Substr(text).is_integer()


def test_real_number_prefix():
    assert Substr(b"12a").real_number() == b"12"
    assert Substr(b"1.2.3").real_number() == b"1.2"
    assert Substr(b"abc").real_number() is None
    assert Substr(b"-").real_number() is None


def test_substr_conversions():
    assert Substr(b"-12").to_int() == -12
    assert Substr(b"1.5").to_float() == 1.5
    assert Substr(b".5").to_float() == 0.5
    name = Substr(b"Type").to_name()
    assert name == "Type" and isinstance(name, Name)
    assert Substr(b"a\xff").to_string() == "a\ufffd"
    assert Substr(b"TJ").as_str() == "TJ"


@pytest.mark.parametrize("text", [b"1.5", b"1_0", b" 1", b""])
def test_to_int_rejects(text):
    with pytest.raises(ParseError):
        Substr(text).to_int()


def test_to_float_rejects_garbage():
    with pytest.raises(ParseError):
        Substr(b"1x").to_float()


def test_reslice_and_file_range():
    s = Substr(b"/Name", 10)
    r = s.reslice(1)
    assert r == b"Name"
    assert r.file_range() == range(11, 15)


def test_tokens():
    lx = Lexer(b"<</Type /Page>> [1 2]")
    words = [lx.next().data for _ in range(8)]
    assert words == [b"<<", b"/Type", b"/Page", b">>", b"[", b"1", b"2", b"]"]
    with pytest.raises(PdfEOFError):
        lx.next()


def test_names_and_delimiters():
    lx = Lexer(b"/Name/Other/>>(abc)")
    assert lx.next() == b"/Name"
    assert lx.next() == b"/Other"
    assert lx.next() == b"/"
    assert lx.next() == b">>"
    assert lx.next() == b"("
    assert lx.next() == b"abc"


def test_comments_are_skipped():
    lx = Lexer(b"% comment\n  42 % tail\n true")
    assert lx.next() == "42"
    assert lx.next() == "true"


def test_back():
    lx = Lexer(b"abc def")
    lx.next()
    lx.next()
    assert lx.back() == b"def"
    assert lx.pos == 4


def test_peek_does_not_move():
    lx = Lexer(b"x  ")
    lx.next()
    assert lx.peek() == b""
    assert lx.pos == 1
    lx2 = Lexer(b"foo bar")
    assert lx2.peek() == b"foo"
    assert lx2.pos == 0


def test_next_expect():
    lx = Lexer(b"obj foo")
    lx.next_expect("obj")
    with pytest.raises(UnexpectedLexeme) as info:
        lx.next_expect("obj")
    assert info.value.lexeme == "foo"
    assert info.value.expected == "obj"


def test_next_int():
    assert Lexer(b"  17 0 R").next_int() == 17


def test_next_stream():
    lx = Lexer(b"<<>> stream\r\ndata")
    lx.next()
    lx.next()
    lx.next_stream()
    assert lx.remaining() == b"data"
    lx = Lexer(b"stream\ndata")
    lx.next_stream()
    assert lx.remaining() == b"data"


@pytest.mark.parametrize("data", [b"stream x", b"stream\rx"])
def test_next_stream_bad_whitespace(data):
    with pytest.raises(PdfError):
        Lexer(data).next_stream()


def test_file_offset():
    lx = Lexer(b"ab cd", file_offset=100)
    lx.next()
    assert lx.next().file_range() == range(103, 105)


def test_new_substr_reversed():
    lx = Lexer(b"0123456789")
    s = lx.new_substr(4, 1)
    assert s == b"234"
    assert s.file_range() == range(2, 5)


def test_set_pos():
    lx = Lexer(b"hello world")
    assert lx.set_pos(6) == b"hello "
    assert lx.set_pos(100) == b"world"
    assert lx.pos == 11
    assert lx.set_pos(2) == b"llo world"
    lx.set_pos_from_end(0)
    assert lx.pos == 10
    lx.set_pos(2)
    assert lx.offset_pos(3) == b"llo"
    assert lx.pos == 5


def test_seek_substr():
    lx = Lexer(b"1 0 obj <<>> endobj 2 0 obj")
    assert lx.seek_substr("endobj") == b"1 0 obj <<>> "
    assert lx.next() == b"2"
    assert lx.seek_substr(b"missing") is None
    assert lx.pos == len(lx.buf)


def test_seek_substr_back():
    data = b"abc startxref 123"
    lx = Lexer(data)
    lx.set_pos(len(data))
    assert lx.seek_substr_back(b"startxref") == b" 123"
    assert lx.next_int() == 123
    with pytest.raises(NotFoundError):
        Lexer(b"abc").seek_substr_back(b"xyz")


def test_seek_newline():
    lx = Lexer(b"line one\nline two")
    assert lx.seek_newline() == b"line one\n"
    assert lx.pos == 9


def test_read_n():
    lx = Lexer(b"abcdef")
    assert lx.read_n(3) == b"abc"
    assert lx.pos == 3
    assert lx.read_n(10) == b"de"
    assert lx.pos == 5


def test_ctx():
    lx = Lexer(b"x" * 100)
    lx.set_pos(50)
    assert lx.ctx() == "x" * 80
    assert Lexer(b"ab").ctx() == "ab"