import pytest

from pdfcore.date import Date, TimeRel, parse_date
from pdfcore.errors import PdfError, UnexpectedPrimitive, Utf8DecodeError
from pdfcore.primitive import NoResolve, PdfString, PlainRef


def _sample() -> Date:
    return Date(
        year=1998, month=12, day=23, hour=19, minute=52, second=0,
        rel=TimeRel.EARLIER, tz_hour=8, tz_minute=0,
    )


def test_date_from_source():
    d = parse_date(PdfString(b"D:199812231952-08'00"), NoResolve())
    assert d == _sample()


def test_to_primitive_format():
    assert _sample().to_primitive() == PdfString(b"D:19981223195200-08'00")


def test_round_trip():
    d = Date(2021, 3, 4, 5, 6, 7, TimeRel.LATER, 1, 30)
    assert parse_date(d.to_primitive()) == d


def test_round_trip_universal():
    d = Date(2000, 1, 1, 0, 0, 0, TimeRel.UNIVERSAL, 0, 0)
    assert parse_date(d.to_primitive(), NoResolve()) == d


def test_year_only_uses_defaults():
    d = parse_date(PdfString(b"D:2001"))
    assert d == Date(2001, 1, 1, 0, 0, 0, TimeRel.UNIVERSAL, 0, 0)


def test_missing_prefix():
    with pytest.raises(PdfError):
        parse_date(PdfString(b"19981223"))


def test_missing_year():
    with pytest.raises(PdfError):
        parse_date(PdfString(b"D:19"))


def test_not_a_string():
    with pytest.raises(UnexpectedPrimitive):
        parse_date(42)


def test_invalid_utf8():
    with pytest.raises(Utf8DecodeError):
        parse_date(PdfString(b"D:\xff\xfe"))


def test_reference_without_file():
    with pytest.raises(PdfError):
        parse_date(PlainRef(1, 0), NoResolve())


@pytest.mark.parametrize("field,value", [
    ("year", 10000), ("hour", 24), ("minute", 60), ("second", 60),
    ("tz_hour", 24), ("tz_minute", 60), ("day", 100),
])
def test_invalid_date_rejected(field, value):
    fields = dict(year=2000, month=1, day=1, hour=0, minute=0, second=0,
                  rel=TimeRel.UNIVERSAL, tz_hour=0, tz_minute=0)
    fields[field] = value
    with pytest.raises(PdfError):
        Date(**fields).to_primitive()