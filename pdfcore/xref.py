"""The cross-reference table that maps object numbers to their locations."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .errors import MissingEntry, PdfError, UnspecifiedXRefEntry
from .primitive import (
    Dictionary,
    Name,
    PdfStream,
    as_array,
    as_integer,
    as_u32,
    as_usize,
)


@dataclass(frozen=True)
class XRefFree:
    """An object number that is not in use."""

    next_obj_nr: int
    gen_nr: int


@dataclass(frozen=True)
class XRefRaw:
    """An object in use, stored at a byte position of the file."""

    pos: int
    gen_nr: int


@dataclass(frozen=True)
class XRefStream:
    """An object in use, compressed inside an object stream."""

    stream_id: int
    index: int


@dataclass(frozen=True)
class XRefPromised:
    """An object number reserved for an object not yet written."""


@dataclass(frozen=True)
class XRefInvalid:
    """An entry that no cross-reference section has specified."""


XRef = XRefFree | XRefRaw | XRefStream | XRefPromised | XRefInvalid


def _gen_nr(entry: XRef) -> int:
    match entry:
        case XRefFree(gen_nr=gen) | XRefRaw(gen_nr=gen):
            return gen
        case XRefStream():
            return 0
    raise PdfError(f"entry {entry!r} has no generation number")


def byte_len(n: int) -> int:
    """Number of bytes needed to store ``n`` big-endian; at least one."""
    return max((n.bit_length() + 7) // 8, 1)


@dataclass
class XRefSection:
    """A run of consecutive entries as found in a PDF file."""

    first_id: int
    entries: list[XRef] = field(default_factory=list)

    def add_free_entry(self, next_obj_nr: int, gen_nr: int) -> None:
        self.entries.append(XRefFree(next_obj_nr, gen_nr))

    def add_inuse_entry(self, pos: int, gen_nr: int) -> None:
        self.entries.append(XRefRaw(pos, gen_nr))

    def numbered(self) -> Iterator[tuple[int, XRef]]:
        """Pairs of object number and entry."""
        for offset, entry in enumerate(self.entries):
            yield self.first_id + offset, entry


def _uint_list(value: object, convert) -> list[int]:
    items = value if isinstance(value, list) else [value]
    return [convert(item) for item in as_array(items)]


@dataclass
class XRefInfo:
    """The dictionary of a cross-reference stream."""

    size: int
    index: list[int]
    prev: int | None
    w: list[int]

    @classmethod
    def from_dictionary(cls, dictionary: Dictionary) -> XRefInfo:
        """Read the fields from a stream dictionary whose /Type must be /XRef."""
        dictionary.expect("XRefInfo", "Type", "XRef", True)
        if "Size" not in dictionary:
            raise MissingEntry("XRefInfo", "Size")
        size = as_u32(dictionary["Size"])
        index = (
            _uint_list(dictionary["Index"], as_u32)
            if "Index" in dictionary
            else [0, size]
        )
        prev_value = dictionary.get("Prev")
        prev = None if prev_value is None else as_integer(prev_value)
        w_value = dictionary.get("W")
        w = [] if w_value is None else _uint_list(w_value, as_usize)
        return cls(size=size, index=index, prev=prev, w=w)

    def to_dictionary(self) -> Dictionary:
        result = Dictionary()
        result["Type"] = Name("XRef")
        result["Size"] = self.size
        result["Index"] = list(self.index)
        if self.prev is not None:
            result["Prev"] = self.prev
        result["W"] = list(self.w)
        return result


class XRefTable:
    """Runtime lookup table of all objects of a file."""

    def __init__(self, num_objects: int) -> None:
        self._entries: list[XRef] = [XRefInvalid()] * num_objects
        self._entries.append(XRefFree(0, 0xFFFF))

    def __iter__(self) -> Iterator[int]:
        """Object numbers of the entries that are in use."""
        for i, entry in enumerate(self._entries):
            if isinstance(entry, (XRefRaw, XRefStream)):
                yield i

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, id: int) -> XRef:
        if not 0 <= id < len(self._entries):
            raise UnspecifiedXRefEntry(id)
        return self._entries[id]

    def set(self, id: int, entry: XRef) -> None:
        if not 0 <= id < len(self._entries):
            raise UnspecifiedXRefEntry(id)
        self._entries[id] = entry

    def push(self, entry: XRef) -> None:
        self._entries.append(entry)

    def max_field_widths(self) -> tuple[int, int]:
        """The largest values of the second and third stream fields."""
        max_a = max_b = 0
        for entry in self._entries:
            match entry:
                case XRefRaw(pos=a, gen_nr=b) | XRefFree(next_obj_nr=a, gen_nr=b):
                    pass
                case XRefStream(stream_id=a, index=b):
                    pass
                case _:
                    continue
            max_a = max(max_a, a)
            max_b = max(max_b, b)
        return max_a, max_b

    def add_entries_from(self, section: XRefSection) -> None:
        """Take entries from ``section`` unless ours have a higher generation."""
        for i, entry in section.numbered():
            if i >= len(self._entries):
                continue
            dst = self._entries[i]
            match dst:
                case XRefRaw(gen_nr=gen) | XRefFree(gen_nr=gen):
                    update = _gen_nr(entry) > gen
                case XRefStream() | XRefInvalid():
                    update = True
                case _:
                    raise PdfError(f"found {dst!r}")
            if update:
                self._entries[i] = entry

    def write_stream(self, size: int) -> PdfStream:
        """A cross-reference stream holding the first ``size`` entries."""
        max_a, max_b = self.max_field_widths()
        a_w, b_w = byte_len(max_a), byte_len(max_b)
        data = bytearray()
        for entry in self._entries[:size]:
            match entry:
                case XRefFree(next_obj_nr=a, gen_nr=b):
                    kind = 0
                case XRefRaw(pos=a, gen_nr=b):
                    kind = 1
                case XRefStream(stream_id=a, index=b):
                    kind = 2
                case _:
                    raise PdfError(f"invalid xref entry: {entry!r}")
            data.append(kind)
            data += a.to_bytes(a_w, "big")
            data += b.to_bytes(b_w, "big")
        info = XRefInfo(size=size, index=[0, size], prev=None, w=[1, a_w, b_w])
        dictionary = info.to_dictionary()
        dictionary["Length"] = len(data)
        return PdfStream(info=dictionary, data=bytes(data))

    def __str__(self) -> str:
        lines = []
        for i, entry in enumerate(self._entries):
            match entry:
                case XRefFree(next_obj_nr=n, gen_nr=g):
                    lines.append(f"{i:4}: {n:010} {g:05} f")
                case XRefRaw(pos=p, gen_nr=g):
                    lines.append(f"{i:4}: {p:010} {g:05} n")
                case XRefStream(stream_id=s, index=idx):
                    lines.append(f"{i:4}: in stream {s}, index {idx}")
                case XRefPromised():
                    lines.append(f"{i:4}: Promised?")
                case _:
                    lines.append(f"{i:4}: Invalid!")
        return "".join(line + "\n" for line in lines)