"""The terminal framebuffer: rows of cells plus the drawing state."""

from __future__ import annotations

import copy as _copy
import dataclasses

from vtemu.cells import Cell, Row
from vtemu.drawstate import DrawState


class Framebuffer:
    """Screen contents, titles, clipboard and bell count of a terminal.

    Rows are shared between framebuffers made with ``copy()`` and are
    copied on first write, so identical rows are often the same object.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid framebuffer size {width}x{height}")
        self.ds = DrawState(width, height)
        self.icon_name = ""
        self.window_title = ""
        self.clipboard = ""
        self.bell_count = 0
        self.title_initialized = False
        self._rows, self._owned = self._blank_rows(height)

    def __repr__(self) -> str:
        return f"Framebuffer(width={self.ds.width}, height={self.ds.height})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Framebuffer):
            return NotImplemented
        return (
            len(self._rows) == len(other._rows)
            and all(a is b for a, b in zip(self._rows, other._rows))
            and self.window_title == other.window_title
            and self.clipboard == other.clipboard
            and self.bell_count == other.bell_count
            and self.ds == other.ds
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def rows(self) -> tuple[Row, ...]:
        """The rows, top to bottom; treat them as read-only."""
        return tuple(self._rows)

    def _newrow(self) -> Row:
        return Row(self.ds.width, self.ds.background_rendition)

    def _blank_rows(self, count: int) -> tuple[list[Row], list[bool]]:
        row = self._newrow()
        return [row] * count, [count == 1] * count

    def _row_index(self, row: int) -> int:
        if row == -1:
            row = self.ds.cursor_row
        if not 0 <= row < len(self._rows):
            raise IndexError(f"row {row} out of range")
        return row

    @staticmethod
    def _col_index(cells: list[Cell], col: int) -> int:
        if not 0 <= col < len(cells):
            raise IndexError(f"column {col} out of range")
        return col

    def copy(self) -> Framebuffer:
        """Return a framebuffer that shares this one's rows until either writes."""
        other = Framebuffer.__new__(Framebuffer)
        other.ds = _copy.deepcopy(self.ds)
        other.icon_name = self.icon_name
        other.window_title = self.window_title
        other.clipboard = self.clipboard
        other.bell_count = self.bell_count
        other.title_initialized = self.title_initialized
        other._rows = list(self._rows)
        other._owned = [False] * len(self._rows)
        self._owned = [False] * len(self._rows)
        return other

    __copy__ = copy

    def scroll(self, n: int) -> None:
        """Scroll the scrolling region up by ``n`` lines (down if negative)."""
        top = self.ds.scrolling_region_top_row
        if n >= 0:
            self.delete_line(top, n)
        else:
            self.insert_line(top, -n)

    def move_rows_autoscroll(self, rows: int) -> None:
        ds = self.ds
        top = ds.scrolling_region_top_row
        bottom = ds.scrolling_region_bottom_row
        if ds.cursor_row < top or ds.cursor_row > bottom:
            ds.move_row(rows, True)
            return

        if ds.cursor_row + rows > bottom:
            n = ds.cursor_row + rows - bottom
            self.scroll(n)
            ds.move_row(-n, True)
        elif ds.cursor_row + rows < top:
            n = ds.cursor_row + rows - top
            self.scroll(n)
            ds.move_row(-n, True)

        ds.move_row(rows, True)

    def get_row(self, row: int = -1) -> Row:
        return self._rows[self._row_index(row)]

    def get_cell(self, row: int = -1, col: int = -1) -> Cell:
        cells = self.get_row(row).cells
        if col == -1:
            col = self.ds.cursor_col
        return cells[self._col_index(cells, col)]

    def get_mutable_row(self, row: int = -1) -> Row:
        """Return the row for writing, copying it first if it is shared."""
        index = self._row_index(row)
        if not self._owned[index]:
            self._rows[index] = _copy.deepcopy(self._rows[index])
            self._owned[index] = True
        return self._rows[index]

    def get_mutable_cell(self, row: int = -1, col: int = -1) -> Cell:
        if row == -1:
            row = self.ds.cursor_row
        if col == -1:
            col = self.ds.cursor_col
        self._row_index(row)
        cells = self.get_mutable_row(row).cells
        return cells[self._col_index(cells, col)]

    def get_combining_cell(self) -> Cell | None:
        """The cell a combining character attaches to, or None after a resize."""
        ds = self.ds
        col, row = ds.combining_char_col, ds.combining_char_row
        if col < 0 or row < 0 or col >= ds.width or row >= ds.height:
            return None
        return self.get_mutable_cell(row, col)

    def apply_renditions_to_cell(self, cell: Cell | None) -> None:
        if cell is None:
            cell = self.get_mutable_cell()
        cell.renditions = dataclasses.replace(self.ds.renditions)

    def insert_line(self, before_row: int, count: int) -> None:
        top = self.ds.scrolling_region_top_row
        bottom = self.ds.scrolling_region_bottom_row
        if before_row < top or before_row > bottom + 1:
            return
        scroll = min(bottom + 1 - before_row, count)
        if scroll <= 0:
            return

        start = bottom + 1 - scroll
        del self._rows[start:start + scroll]
        del self._owned[start:start + scroll]
        new_rows, new_owned = self._blank_rows(scroll)
        self._rows[before_row:before_row] = new_rows
        self._owned[before_row:before_row] = new_owned

    def delete_line(self, row: int, count: int) -> None:
        top = self.ds.scrolling_region_top_row
        bottom = self.ds.scrolling_region_bottom_row
        if row < top or row > bottom:
            return
        scroll = min(bottom + 1 - row, count)
        if scroll <= 0:
            return

        del self._rows[row:row + scroll]
        del self._owned[row:row + scroll]
        start = bottom + 1 - scroll
        new_rows, new_owned = self._blank_rows(scroll)
        self._rows[start:start] = new_rows
        self._owned[start:start] = new_owned

    def insert_cell(self, row: int, col: int) -> None:
        self.get_mutable_row(row).insert_cell(col, self.ds.background_rendition)

    def delete_cell(self, row: int, col: int) -> None:
        self.get_mutable_row(row).delete_cell(col, self.ds.background_rendition)

    def reset(self) -> None:
        """Full reset; the bell count is kept."""
        width, height = self.ds.width, self.ds.height
        self.ds = DrawState(width, height)
        self._rows, self._owned = self._blank_rows(height)
        self.window_title = ""
        self.clipboard = ""

    def soft_reset(self) -> None:
        ds = self.ds
        ds.insert_mode = False
        ds.origin_mode = False
        ds.cursor_visible = True
        ds.application_mode_cursor_keys = False
        ds.set_scrolling_region(0, ds.height - 1)
        ds.add_rendition(0)
        ds.clear_saved_cursor()

    def prefix_window_title(self, prefix: str) -> None:
        if self.icon_name == self.window_title:
            self.icon_name = prefix + self.icon_name
        self.window_title = prefix + self.window_title

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid framebuffer size {width}x{height}")
        old_height, old_width = self.ds.height, self.ds.width
        self.ds.resize(width, height)

        blank = self._newrow()
        if old_height != height:
            if height < len(self._rows):
                del self._rows[height:]
                del self._owned[height:]
            else:
                added = height - len(self._rows)
                self._rows.extend([blank] * added)
                self._owned.extend([added == 1] * added)
        if old_width == width:
            return

        background = self.ds.background_rendition
        for index, row in enumerate(self._rows):
            if row is blank:
                break
            new = _copy.deepcopy(row)
            new.wrap = False
            if width < len(new.cells):
                del new.cells[width:]
            else:
                new.cells.extend(Cell(background) for _ in range(width - len(new.cells)))
            self._rows[index] = new
            self._owned[index] = True

    def reset_cell(self, cell: Cell) -> None:
        cell.reset(self.ds.background_rendition)

    def reset_row(self, row: Row) -> None:
        row.reset(self.ds.background_rendition)

    def ring_bell(self) -> None:
        self.bell_count += 1