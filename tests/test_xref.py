import pytest

from pdfcore.errors import KeyValueMismatch, MissingEntry, PdfError, UnspecifiedXRefEntry
from pdfcore.primitive import Dictionary, Name
from pdfcore.xref import (
    XRefFree,
    XRefInfo,
    XRefInvalid,
    XRefPromised,
    XRefRaw,
    XRefSection,
    XRefStream,
    XRefTable,
    byte_len,
)


def test_new_table_layout():
    table = XRefTable(3)
    assert len(table) == 4
    assert table.get(0) == XRefInvalid()
    assert table.get(3) == XRefFree(0, 0xFFFF)


def test_get_out_of_range():
    table = XRefTable(1)
    with pytest.raises(UnspecifiedXRefEntry) as info:
        table.get(5)
    assert info.value.id == 5


def test_set_and_iter_in_use():
    table = XRefTable(4)
    table.set(1, XRefRaw(10, 0))
    table.set(2, XRefStream(7, 1))
    table.set(3, XRefPromised())
    assert list(table) == [1, 2]


def test_push_grows():
    table = XRefTable(0)
    table.push(XRefRaw(5, 0))
    assert len(table) == 2
    assert table.get(1) == XRefRaw(5, 0)


@pytest.mark.parametrize("n,expected", [(0, 1), (0xFF, 1), (0x100, 2)])
def test_byte_len(n, expected):
    assert byte_len(n) == expected


def test_max_field_widths():
    table = XRefTable(0)
    table.push(XRefRaw(500, 3))
    table.push(XRefStream(12, 40))
    table.push(XRefInvalid())
    assert table.max_field_widths() == (500, 0xFFFF)


def test_add_entries_higher_generation_wins():
    table = XRefTable(2)
    table.set(0, XRefRaw(10, 2))
    section = XRefSection(0)
    section.add_inuse_entry(99, 1)
    section.add_inuse_entry(50, 0)
    table.add_entries_from(section)
    assert table.get(0) == XRefRaw(10, 2)
    assert table.get(1) == XRefRaw(50, 0)


def test_add_entries_replaces_on_higher_generation():
    table = XRefTable(1)
    table.set(0, XRefFree(0, 0))
    section = XRefSection(0, [XRefRaw(30, 1)])
    table.add_entries_from(section)
    assert table.get(0) == XRefRaw(30, 1)


def test_add_entries_ignores_out_of_range():
    table = XRefTable(1)
    section = XRefSection(10, [XRefRaw(30, 1)])
    table.add_entries_from(section)
    assert len(table) == 2


def test_add_entries_promised_raises():
    table = XRefTable(1)
    table.set(0, XRefPromised())
    with pytest.raises(PdfError):
        table.add_entries_from(XRefSection(0, [XRefRaw(1, 0)]))


def test_section_numbered():
    section = XRefSection(4)
    section.add_free_entry(0, 1)
    section.add_inuse_entry(20, 0)
    assert list(section.numbered()) == [(4, XRefFree(0, 1)), (5, XRefRaw(20, 0))]


def test_write_stream_layout():
    table = XRefTable(0)
    table.push(XRefRaw(300, 0))
    table.push(XRefStream(2, 1))
    stream = table.write_stream(3)
    a, b = table.max_field_widths()
    widths = [1, byte_len(a), byte_len(b)]
    assert stream.data is not None
    assert len(stream.data) == 3 * sum(widths)
    info = XRefInfo.from_dictionary(stream.info)
    assert info.w == widths
    assert info.index == [0, 3]
    assert info.size == 3
    assert stream.info["Length"] == len(stream.data)


def test_write_stream_invalid_entry():
    table = XRefTable(1)
    with pytest.raises(PdfError):
        table.write_stream(2)


def test_info_round_trip():
    info = XRefInfo(size=5, index=[0, 5], prev=42, w=[1, 2, 1])
    assert XRefInfo.from_dictionary(info.to_dictionary()) == info


def test_info_default_index():
    d = Dictionary({"Type": Name("XRef"), "Size": 7, "W": [1, 2, 1]})
    info = XRefInfo.from_dictionary(d)
    assert info.index == [0, 7]
    assert info.prev is None


def test_info_requires_type():
    with pytest.raises(MissingEntry):
        XRefInfo.from_dictionary(Dictionary({"Size": 1}))


def test_info_wrong_type():
    with pytest.raises(KeyValueMismatch):
        XRefInfo.from_dictionary(Dictionary({"Type": Name("Page"), "Size": 1}))


def test_info_requires_size():
    with pytest.raises(MissingEntry):
        XRefInfo.from_dictionary(Dictionary({"Type": Name("XRef")}))


def test_table_str():
    table = XRefTable(1)
    text = str(table)
    assert text.splitlines() == ["   0: Invalid!", "   1: 0000000000 65535 f"]