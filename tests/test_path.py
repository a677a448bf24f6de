import io

import pytest

from pdfcore.path import FillMode, PathBuilder


def _builder(start=(0, 0)):
    out = io.StringIO()
    return PathBuilder(out, start), out


def test_move_writes_operator_and_updates_point():
    b, out = _builder()
    b.move((10, 20))
    assert out.getvalue() == "10 20 m\n"
    assert b.current == (10.0, 20.0)


def test_line():
    b, out = _builder()
    b.line((1.5, 2))
    assert out.getvalue() == "1.5 2 l\n"
    assert b.current == (1.5, 2.0)


def test_cubic_first_control_at_current_uses_v():
    b, out = _builder((1, 1))
    b.cubic((1, 1), (2, 3), (4, 5))
    assert out.getvalue() == "2 3 4 5 v\n"
    assert b.current == (4.0, 5.0)


def test_cubic_second_control_at_current_uses_y():
    b, out = _builder((1, 1))
    b.cubic((2, 3), (1, 1), (4, 5))
    assert out.getvalue() == "2 3 4 5 y\n"


def test_cubic_general_uses_c():
    b, out = _builder((0, 0))
    b.cubic((1, 2), (3, 4), (5, 6))
    assert out.getvalue() == "1 2 3 4 5 6 c\n"
    assert b.current == (5.0, 6.0)


def test_cubic_compares_against_updated_point():
    b, out = _builder((0, 0))
    b.line((7, 8))
    b.cubic((7, 8), (1, 2), (3, 4))
    assert out.getvalue().splitlines()[-1] == "1 2 3 4 v"


def test_quadratic_degenerate_keeps_point():
    b, out = _builder((3, 3))
    b.quadratic((3, 3), (3, 3))
    assert out.getvalue() == "3 3 3 3 3 3 c\n"
    assert b.current == (3.0, 3.0)


def test_quadratic_converted_to_cubic():
    b, out = _builder((0, 0))
    b.quadratic((3, 6), (6, 0))
    parts = out.getvalue().split()
    assert parts[-1] == "c"
    values = [float(v) for v in parts[:-1]]
    assert values == pytest.approx([2, 4, 4, 4, 6, 0])
    assert b.current == (6.0, 0.0)


def test_close():
    b, out = _builder()
    b.close()
    assert out.getvalue() == "h\n"


@pytest.mark.parametrize("mode,text", [(FillMode.NON_ZERO, "f\n"), (FillMode.EVEN_ODD, "f*\n")])
def test_fill(mode, text):
    b, out = _builder()
    b.fill(mode)
    assert out.getvalue() == text


def test_close_does_not_move_point():
    b, _ = _builder()
    b.move((2, 3))
    b.close()
    assert b.current == (2.0, 3.0)