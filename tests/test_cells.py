import copy

import pytest

from vtemu.cells import Attribute, Cell, Renditions, Row


def test_default_sgr():
    assert Renditions(0).sgr() == "\033[0m"


def test_true_color_sgr():
    r = Renditions(0)
    r.set_foreground_color(Renditions.make_true_color(1, 2, 3))
    assert r.sgr() == "\033[0;38;2;1;2;3m"


def test_attributes_in_sgr():
    r = Renditions(0)
    r.set_rendition(1)
    r.set_rendition(4)
    r.set_rendition(31)
    out = r.sgr()
    assert out.startswith("\033[0;1;4")
    assert out.endswith(";31m")


def test_set_rendition_zero_resets():
    r = Renditions(0)
    r.set_rendition(7)
    r.set_rendition(33)
    r.set_rendition(44)
    r.set_rendition(0)
    assert r == Renditions(0)


def test_attribute_set_and_clear():
    r = Renditions(0)
    r.set_rendition(3)
    assert r.get_attribute(Attribute.ITALIC)
    r.set_rendition(23)
    assert not r.get_attribute(Attribute.ITALIC)
    r.set_attribute(Attribute.BLINK, True)
    r.clear_attributes()
    assert not r.get_attribute(Attribute.BLINK)


def test_default_color_codes():
    r = Renditions(0)
    r.set_rendition(35)
    r.set_rendition(45)
    assert r.foreground_color == 35 and r.background_color == 45
    r.set_rendition(39)
    r.set_rendition(49)
    assert r == Renditions(0)


def test_bright_colors_match_256_palette():
    a = Renditions(0)
    a.set_rendition(91)
    b = Renditions(0)
    b.set_foreground_color(9)
    assert a == b
    c = Renditions(0)
    c.set_rendition(102)
    d = Renditions(0)
    d.set_background_color(10)
    assert c == d


def test_palette_color_in_sgr():
    r = Renditions(0)
    r.set_background_color(200)
    assert r.sgr().endswith(";48;5;200m")


def test_true_color_detection():
    assert Renditions.is_true_color(Renditions.make_true_color(0, 0, 0))
    assert not Renditions.is_true_color(255)


def test_true_color_field_truncated():
    r = Renditions(0)
    r.set_foreground_color(Renditions.make_true_color(300, 0, 0))
    assert r.foreground_color < (1 << 25)
    assert Renditions.is_true_color(r.foreground_color)


def test_unknown_rendition_ignored():
    r = Renditions(0)
    r.set_rendition(2)
    r.set_rendition(60)
    assert r == Renditions(0)


def test_cell_append_and_grapheme():
    c = Cell(0)
    assert c.empty()
    assert c.print_grapheme() == " "
    c.append(ord("A"))
    assert c.print_grapheme() == "A"
    c.fallback = True
    assert c.print_grapheme() == "\u00a0A"


def test_cell_full():
    c = Cell(0)
    for _ in range(31):
        c.append("x")
    assert not c.full()
    c.append("x")
    assert c.full()
    wide = Cell(0)
    for _ in range(16):
        wide.append(0xE9)
    assert wide.full()


def test_debug_contents_empty():
    assert Cell(0).debug_contents() == "'_' ()"


def test_debug_contents_lists_bytes():
    c = Cell(0)
    c.append(ord("A"))
    assert c.debug_contents() == "'A' [0x41]"


def test_blank_and_contents_match():
    a, b = Cell(0), Cell(0)
    b.append(" ")
    assert a.is_blank() and b.is_blank()
    assert a.contents_match(b)
    b.clear()
    b.append("z")
    assert not a.contents_match(b)


def test_cell_reset_and_equality():
    c = Cell(0)
    c.append("q")
    c.wide = True
    c.wrap = True
    c.reset(0)
    assert c == Cell(0)
    assert c.width == 1


def test_compare_reports_differences(capsys):
    a, b = Cell(0), Cell(0)
    assert a.compare(b) is False
    b.append("x")
    assert a.compare(b) is True
    assert "Graphemes" in capsys.readouterr().err


def test_compare_ignores_fallback(capsys):
    a, b = Cell(0), Cell(0)
    b.fallback = True
    assert a.compare(b) is False
    assert "fallback" in capsys.readouterr().err


@pytest.mark.parametrize("ch, expected", [(ord("a"), True), (0x7F, False), (0xA0, True), (0x1F, False)])
def test_isprint_iso8859_1(ch, expected):
    assert Cell.isprint_iso8859_1(ch) is expected


def test_row_insert_cell():
    row = Row(5, 0)
    for i, cell in enumerate(row.cells):
        cell.append(chr(ord("a") + i))
    row.insert_cell(1, 0)
    assert len(row.cells) == 5
    assert "".join(c.print_grapheme() for c in row.cells) == "a bcd"


def test_row_delete_cell():
    row = Row(4, 0)
    for i, cell in enumerate(row.cells):
        cell.append(chr(ord("a") + i))
    row.delete_cell(0, 0)
    assert len(row.cells) == 4
    assert "".join(c.print_grapheme() for c in row.cells) == "bcd "


def test_row_reset_changes_generation():
    row = Row(3, 0)
    row.cells[0].append("x")
    before = row.gen
    row.reset(0)
    assert row.gen > before
    assert all(c.empty() for c in row.cells)


def test_row_equality_uses_generation():
    a, b = Row(3, 0), Row(3, 0)
    assert a.cells == b.cells
    assert not a == b
    assert copy.deepcopy(a) == a


def test_row_wrap_is_last_cell():
    row = Row(3, 0)
    row.wrap = True
    assert row.cells[-1].wrap
    assert row.wrap