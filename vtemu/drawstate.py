"""Cursor, tab stops, scrolling region and modes of the terminal."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field

from vtemu.cells import Renditions


class MouseReportingMode(enum.IntEnum):
    NONE = 0
    X10 = 9
    VT220 = 1000
    VT220_HILIGHT = 1001
    BTN_EVENT = 1002
    ANY_EVENT = 1003


class MouseEncodingMode(enum.IntEnum):
    DEFAULT = 0
    UTF8 = 1005
    SGR = 1006
    URXVT = 1015


@dataclass
class SavedCursor:
    """State stored by DECSC and restored by DECRC."""

    cursor_col: int = 0
    cursor_row: int = 0
    renditions: Renditions = field(default_factory=lambda: Renditions(0))
    auto_wrap_mode: bool = True
    origin_mode: bool = False


class DrawState:
    """Drawing state of the terminal apart from the cell contents."""

    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self._cursor_col = 0
        self._cursor_row = 0
        self._combining_char_col = 0
        self._combining_char_row = 0
        self._default_tabs = True
        self._tabs = [False] * width
        self._scrolling_region_top_row = 0
        self._scrolling_region_bottom_row = height - 1
        self._renditions = Renditions(0)
        self._save = SavedCursor()

        self.next_print_will_wrap = False
        self.origin_mode = False
        self.auto_wrap_mode = True
        self.insert_mode = False
        self.cursor_visible = True
        self.reverse_video = False
        self.bracketed_paste = False
        self.mouse_reporting_mode = MouseReportingMode.NONE
        self.mouse_focus_event = False
        self.mouse_alternate_scroll = False
        self.mouse_encoding_mode = MouseEncodingMode.DEFAULT
        self.application_mode_cursor_keys = False

        self._reinitialize_tabs(0)

    width = property(lambda self: self._width)
    height = property(lambda self: self._height)
    cursor_col = property(lambda self: self._cursor_col)
    cursor_row = property(lambda self: self._cursor_row)
    combining_char_col = property(lambda self: self._combining_char_col)
    combining_char_row = property(lambda self: self._combining_char_row)
    scrolling_region_top_row = property(lambda self: self._scrolling_region_top_row)
    scrolling_region_bottom_row = property(lambda self: self._scrolling_region_bottom_row)
    renditions = property(lambda self: self._renditions)

    @property
    def background_rendition(self) -> int:
        return self._renditions.background_color

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DrawState):
            return NotImplemented
        # Only fields that affect the display are compared.
        return (
            self._width == other._width
            and self._height == other._height
            and self._cursor_col == other._cursor_col
            and self._cursor_row == other._cursor_row
            and self.cursor_visible == other.cursor_visible
            and self.reverse_video == other.reverse_video
            and self._renditions == other._renditions
            and self.bracketed_paste == other.bracketed_paste
            and self.mouse_reporting_mode == other.mouse_reporting_mode
            and self.mouse_focus_event == other.mouse_focus_event
            and self.mouse_alternate_scroll == other.mouse_alternate_scroll
            and self.mouse_encoding_mode == other.mouse_encoding_mode
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"DrawState(width={self._width}, height={self._height}, "
            f"cursor=({self._cursor_row}, {self._cursor_col}))"
        )

    def _reinitialize_tabs(self, start: int) -> None:
        for i in range(start, len(self._tabs)):
            self._tabs[i] = i % 8 == 0

    def _new_grapheme(self) -> None:
        self._combining_char_col = self._cursor_col
        self._combining_char_row = self._cursor_row

    def _snap_cursor_to_border(self) -> None:
        self._cursor_row = min(max(self._cursor_row, self.limit_top()), self.limit_bottom())
        self._cursor_col = min(max(self._cursor_col, 0), self._width - 1)

    def move_row(self, n: int, relative: bool = False) -> None:
        if relative:
            self._cursor_row += n
        else:
            self._cursor_row = n + self.limit_top()
        self._snap_cursor_to_border()
        self._new_grapheme()
        self.next_print_will_wrap = False

    def move_col(self, n: int, relative: bool = False, implicit: bool = False) -> None:
        if implicit:
            self._new_grapheme()

        if relative:
            self._cursor_col += n
        else:
            self._cursor_col = n

        if implicit:
            self.next_print_will_wrap = self._cursor_col >= self._width

        self._snap_cursor_to_border()
        if not implicit:
            self._new_grapheme()
            self.next_print_will_wrap = False

    def set_tab(self) -> None:
        self._tabs[self._cursor_col] = True

    def clear_tab(self, col: int) -> None:
        self._tabs[col] = False

    def clear_default_tabs(self) -> None:
        """Stop resizes from adding default tab stops."""
        self._default_tabs = False

    def get_next_tab(self, count: int) -> int:
        """Column of the count-th tab stop right (or left, if negative) of the cursor.

        Returns -1 if there is none to the right, 0 if none to the left.
        """
        if count >= 0:
            for i in range(self._cursor_col + 1, self._width):
                if self._tabs[i]:
                    count -= 1
                    if count == 0:
                        return i
            return -1
        for i in range(self._cursor_col - 1, 0, -1):
            if self._tabs[i]:
                count += 1
                if count == 0:
                    return i
        return 0

    def set_scrolling_region(self, top: int, bottom: int) -> None:
        if self._height < 1:
            return
        top = max(top, 0)
        bottom = min(bottom, self._height - 1)
        if bottom < top:
            bottom = top
        self._scrolling_region_top_row = top
        self._scrolling_region_bottom_row = bottom

        if self.origin_mode:
            self._snap_cursor_to_border()
            self._new_grapheme()

    def limit_top(self) -> int:
        return self._scrolling_region_top_row if self.origin_mode else 0

    def limit_bottom(self) -> int:
        return self._scrolling_region_bottom_row if self.origin_mode else self._height - 1

    def set_foreground_color(self, num: int) -> None:
        self._renditions.set_foreground_color(num)

    def set_background_color(self, num: int) -> None:
        self._renditions.set_background_color(num)

    def add_rendition(self, num: int) -> None:
        self._renditions.set_rendition(num)

    def save_cursor(self) -> None:
        self._save = SavedCursor(
            cursor_col=self._cursor_col,
            cursor_row=self._cursor_row,
            renditions=dataclasses.replace(self._renditions),
            auto_wrap_mode=self.auto_wrap_mode,
            origin_mode=self.origin_mode,
        )

    def restore_cursor(self) -> None:
        save = self._save
        self._cursor_col = save.cursor_col
        self._cursor_row = save.cursor_row
        self._renditions = dataclasses.replace(save.renditions)
        self.auto_wrap_mode = save.auto_wrap_mode
        self.origin_mode = save.origin_mode
        self._snap_cursor_to_border()  # a resize may have happened in between
        self._new_grapheme()

    def clear_saved_cursor(self) -> None:
        self._save = SavedCursor()

    def resize(self, width: int, height: int) -> None:
        if self._width != width or self._height != height:
            # Any resize resets the whole scrolling region.
            self._scrolling_region_top_row = 0
            self._scrolling_region_bottom_row = height - 1

        if width < len(self._tabs):
            del self._tabs[width:]
        else:
            self._tabs.extend([False] * (width - len(self._tabs)))
        if self._default_tabs:
            self._reinitialize_tabs(self._width)

        self._width = width
        self._height = height
        self._snap_cursor_to_border()

        if self._combining_char_col >= width or self._combining_char_row >= height:
            self._combining_char_col = self._combining_char_row = -1