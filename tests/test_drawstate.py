from vtemu.cells import Attribute, Renditions
from vtemu.drawstate import DrawState, MouseEncodingMode, MouseReportingMode


def test_initial_state():
    ds = DrawState(80, 24)
    assert (ds.width, ds.height) == (80, 24)
    assert (ds.cursor_row, ds.cursor_col) == (0, 0)
    assert ds.scrolling_region_bottom_row == 23
    assert ds.auto_wrap_mode and ds.cursor_visible
    assert ds.mouse_reporting_mode == MouseReportingMode.NONE
    assert ds.mouse_encoding_mode == MouseEncodingMode.DEFAULT


def test_default_tab_stops_every_eight_columns():
    ds = DrawState(80, 24)
    assert ds.get_next_tab(1) == 8
    assert ds.get_next_tab(2) == 16


def test_next_tab_none_to_the_right():
    ds = DrawState(80, 24)
    ds.move_col(79)
    assert ds.get_next_tab(1) == -1


def test_previous_tab_and_none_to_the_left():
    ds = DrawState(80, 24)
    ds.move_col(20)
    assert ds.get_next_tab(-1) == 16
    ds.move_col(5)
    assert ds.get_next_tab(-1) == 0


def test_set_and_clear_tab():
    ds = DrawState(80, 24)
    ds.move_col(3)
    ds.set_tab()
    ds.move_col(0)
    assert ds.get_next_tab(1) == 3
    ds.clear_tab(3)
    assert ds.get_next_tab(1) == 8


def test_move_col_implicit_sets_wrap_and_snaps():
    ds = DrawState(10, 5)
    ds.move_col(10, implicit=True)
    assert ds.next_print_will_wrap
    assert ds.cursor_col == 9


def test_move_col_explicit_clears_wrap():
    ds = DrawState(10, 5)
    ds.move_col(10, implicit=True)
    ds.move_col(20)
    assert ds.cursor_col == 9
    assert not ds.next_print_will_wrap


def test_move_row_relative_clamps():
    ds = DrawState(10, 5)
    ds.move_row(-5, True)
    assert ds.cursor_row == 0
    ds.move_row(100)
    assert ds.cursor_row == 4


def test_move_updates_combining_position():
    ds = DrawState(10, 5)
    ds.move_row(2)
    ds.move_col(3)
    assert (ds.combining_char_row, ds.combining_char_col) == (2, 3)


def test_scrolling_region_clamped():
    ds = DrawState(10, 5)
    ds.set_scrolling_region(-3, 100)
    assert (ds.scrolling_region_top_row, ds.scrolling_region_bottom_row) == (0, 4)
    ds.set_scrolling_region(3, 1)
    assert ds.scrolling_region_bottom_row == ds.scrolling_region_top_row == 3


def test_origin_mode_limits_cursor():
    ds = DrawState(10, 10)
    ds.set_scrolling_region(2, 5)
    ds.origin_mode = True
    assert (ds.limit_top(), ds.limit_bottom()) == (2, 5)
    ds.move_row(0)
    assert ds.cursor_row == 2
    ds.move_row(100)
    assert ds.cursor_row == 5


def test_save_and_restore_cursor():
    ds = DrawState(10, 5)
    ds.move_row(3)
    ds.move_col(4)
    ds.add_rendition(1)
    ds.save_cursor()
    ds.move_row(0)
    ds.move_col(0)
    ds.add_rendition(0)
    ds.auto_wrap_mode = False
    ds.restore_cursor()
    assert (ds.cursor_row, ds.cursor_col) == (3, 4)
    assert ds.renditions.get_attribute(Attribute.BOLD)
    assert ds.auto_wrap_mode


def test_saved_renditions_are_a_copy():
    ds = DrawState(10, 5)
    ds.save_cursor()
    ds.add_rendition(1)
    ds.restore_cursor()
    assert ds.renditions == Renditions(0)


def test_clear_saved_cursor():
    ds = DrawState(10, 5)
    ds.move_row(3)
    ds.save_cursor()
    ds.clear_saved_cursor()
    ds.restore_cursor()
    assert ds.cursor_row == 0


def test_restore_after_shrink_snaps():
    ds = DrawState(10, 10)
    ds.move_row(9)
    ds.move_col(9)
    ds.save_cursor()
    ds.resize(5, 5)
    ds.restore_cursor()
    assert (ds.cursor_row, ds.cursor_col) == (4, 4)


def test_resize_snaps_cursor_and_invalidates_combining():
    ds = DrawState(10, 10)
    ds.move_row(8)
    ds.move_col(8)
    ds.resize(5, 5)
    assert (ds.cursor_row, ds.cursor_col) == (4, 4)
    assert (ds.combining_char_row, ds.combining_char_col) == (-1, -1)
    assert ds.scrolling_region_bottom_row == 4


def test_resize_extends_default_tabs():
    ds = DrawState(10, 5)
    ds.resize(20, 5)
    ds.move_col(9)
    assert ds.get_next_tab(1) == 16


def test_resize_without_default_tabs():
    ds = DrawState(10, 5)
    ds.clear_default_tabs()
    ds.resize(20, 5)
    ds.move_col(9)
    assert ds.get_next_tab(1) == -1


def test_colors_delegate_to_renditions():
    ds = DrawState(10, 5)
    ds.add_rendition(42)
    assert ds.background_rendition == 42
    ds.set_foreground_color(1)
    assert ds.renditions.foreground_color == 31


def test_equality_ignores_tabs_but_not_cursor():
    a = DrawState(10, 5)
    b = DrawState(10, 5)
    b.clear_tab(8)
    assert a == b
    b.move_col(1)
    assert not a == b