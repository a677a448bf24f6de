"""Writing path construction and painting operators of a content stream."""

from __future__ import annotations

import enum
import math
from collections.abc import Sequence
from decimal import Decimal
from typing import TextIO

Point = tuple[float, float]


class FillMode(enum.Enum):
    """The rule that decides which regions a fill paints."""

    NON_ZERO = "f"
    EVEN_ODD = "f*"


def _point(p: Sequence[float]) -> Point:
    x, y = p
    return (float(x), float(y))


def _fmt(n: float) -> str:
    if math.isnan(n) or math.isinf(n):
        raise ValueError(f"coordinate {n} cannot be written")
    if n.is_integer():
        return str(int(n))
    return format(Decimal(repr(n)), "f")


class PathBuilder:
    """Writes path operators to a text stream while tracking the current point."""

    def __init__(self, out: TextIO, start: Sequence[float]) -> None:
        self.out = out
        self.current: Point = _point(start)

    def _emit(self, *values: float, op: str) -> None:
        self.out.write(" ".join([*(_fmt(v) for v in values), op]) + "\n")

    def move(self, p: Sequence[float]) -> None:
        """Begin a new subpath at ``p`` without a connecting segment."""
        p = _point(p)
        self._emit(*p, op="m")
        self.current = p

    def line(self, p: Sequence[float]) -> None:
        """Append a straight segment from the current point to ``p``."""
        p = _point(p)
        self._emit(*p, op="l")
        self.current = p

    def quadratic(self, c: Sequence[float], p: Sequence[float]) -> None:
        """Append a quadratic Bézier curve to ``p``, written as a cubic one."""
        c, p = _point(c), _point(p)
        cur = self.current
        c1 = tuple(2.0 / 3.0 * a + 1.0 / 3.0 * b for a, b in zip(c, cur))
        c2 = tuple(2.0 / 3.0 * a + 1.0 / 3.0 * b for a, b in zip(c, p))
        self._emit(*c1, *c2, *p, op="c")
        self.current = p

    def cubic(self, c1: Sequence[float], c2: Sequence[float], p: Sequence[float]) -> None:
        """Append a cubic Bézier curve to ``p`` with control points ``c1`` and ``c2``."""
        c1, c2, p = _point(c1), _point(c2), _point(p)
        if c1 == self.current:
            self._emit(*c2, *p, op="v")
        elif c2 == self.current:
            self._emit(*c1, *p, op="y")
        else:
            self._emit(*c1, *c2, *p, op="c")
        self.current = p

    def close(self) -> None:
        """Close the current subpath."""
        self.out.write("h\n")

    def fill(self, mode: FillMode) -> None:
        """Fill the path with the given rule."""
        self.out.write(f"{mode.value}\n")