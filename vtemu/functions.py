"""Terminal functions run for CSI sequences, escape sequences and control characters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vtemu.cells import Renditions
from vtemu.dispatcher import FunctionType, register
from vtemu.drawstate import MouseEncodingMode, MouseReportingMode

if TYPE_CHECKING:
    from vtemu.dispatcher import Dispatcher
    from vtemu.framebuffer import Framebuffer

CSI = FunctionType.CSI
ESCAPE = FunctionType.ESCAPE
CONTROL = FunctionType.CONTROL

_MOUSE_REPORTING_PARAMS = (9, 1000, 1001, 1002, 1003)
_MOUSE_ENCODING_PARAMS = (1005, 1006, 1015)

_DEC_MODES = {
    1: "application_mode_cursor_keys",
    5: "reverse_video",
    7: "auto_wrap_mode",
    25: "cursor_visible",
    1004: "mouse_focus_event",
    1007: "mouse_alternate_scroll",
    2004: "bracketed_paste",
}

_ANSI_MODES = {4: "insert_mode"}


def _clearline(fb: Framebuffer, row: int, start: int, end: int) -> None:
    for col in range(start, end + 1):
        fb.reset_cell(fb.get_mutable_cell(row, col))


def _clear_screen(fb: Framebuffer) -> None:
    for y in range(fb.ds.height):
        fb.reset_row(fb.get_mutable_row(y))


@register(CSI, "K")
def csi_el(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Erase in line."""
    mode = dispatch.getparam(0, 0)
    if mode == 0:
        _clearline(fb, -1, fb.ds.cursor_col, fb.ds.width - 1)
    elif mode == 1:
        _clearline(fb, -1, 0, fb.ds.cursor_col)
    elif mode == 2:
        fb.reset_row(fb.get_mutable_row(-1))


@register(CSI, "J")
def csi_ed(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Erase in display."""
    mode = dispatch.getparam(0, 0)
    ds = fb.ds
    if mode == 0:
        _clearline(fb, -1, ds.cursor_col, ds.width - 1)
        for y in range(ds.cursor_row + 1, ds.height):
            fb.reset_row(fb.get_mutable_row(y))
    elif mode == 1:
        for y in range(ds.cursor_row):
            fb.reset_row(fb.get_mutable_row(y))
        _clearline(fb, -1, 0, ds.cursor_col)
    elif mode == 2:
        _clear_screen(fb)


@register(CSI, "A")
@register(CSI, "B")
@register(CSI, "C")
@register(CSI, "D")
@register(CSI, "H")
@register(CSI, "f")
def csi_cursormove(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Relative and absolute cursor movement."""
    num = dispatch.getparam(0, 1)
    final = dispatch.dispatch_chars[:1]
    ds = fb.ds
    if final == "A":
        ds.move_row(-num, True)
    elif final == "B":
        ds.move_row(num, True)
    elif final == "C":
        ds.move_col(num, True)
    elif final == "D":
        ds.move_col(-num, True)
    elif final in ("H", "f"):
        ds.move_row(dispatch.getparam(0, 1) - 1)
        ds.move_col(dispatch.getparam(1, 1) - 1)


@register(CSI, "c")
def csi_da(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Device attributes: report a plain vt220."""
    dispatch.terminal_to_host += "\033[?62c"


@register(CSI, ">c")
def csi_sda(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Secondary device attributes."""
    dispatch.terminal_to_host += "\033[>1;10;0c"


@register(ESCAPE, "#8")
def esc_decaln(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Screen alignment pattern: fill the screen with 'E'."""
    for y in range(fb.ds.height):
        for x in range(fb.ds.width):
            cell = fb.get_mutable_cell(y, x)
            fb.reset_cell(cell)
            cell.append("E")


@register(CONTROL, "\x0a")
@register(CONTROL, "\x84")
@register(CONTROL, "\x0b")
@register(CONTROL, "\x0c")
def ctrl_lf(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Line feed, index, vertical tab and form feed."""
    fb.move_rows_autoscroll(1)


@register(CONTROL, "\x0d")
def ctrl_cr(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Carriage return."""
    fb.ds.move_col(0)


@register(CONTROL, "\x08")
def ctrl_bs(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Backspace."""
    fb.ds.move_col(-1, True)


@register(CONTROL, "\x8d")
def ctrl_ri(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Reverse index."""
    fb.move_rows_autoscroll(-1)


@register(CONTROL, "\x85")
def ctrl_nel(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Next line."""
    fb.ds.move_col(0)
    fb.move_rows_autoscroll(1)


def _ht_n(fb: Framebuffer, count: int) -> None:
    col = fb.ds.get_next_tab(count)
    if col == -1:
        col = fb.ds.width - 1
    # A tab preserves, but does not set, the pending-wrap state.
    wrap_state = fb.ds.next_print_will_wrap
    fb.ds.move_col(col, False)
    fb.ds.next_print_will_wrap = wrap_state


@register(CONTROL, "\x09", clears_wrap_state=False)
def ctrl_ht(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Horizontal tab."""
    _ht_n(fb, 1)


@register(CSI, "I", clears_wrap_state=False)
@register(CSI, "Z", clears_wrap_state=False)
def csi_cxt(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Cursor forward (CHT) or backward (CBT) tabulation."""
    param = dispatch.getparam(0, 1)
    if dispatch.dispatch_chars[:1] == "Z":
        param = -param
    if param == 0:
        return
    _ht_n(fb, param)


@register(CONTROL, "\x88")
def ctrl_hts(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Set a tab stop at the cursor."""
    fb.ds.set_tab()


@register(CSI, "g", clears_wrap_state=False)
def csi_tbc(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Tabulation clear."""
    param = dispatch.getparam(0, 0)
    if param == 0:
        fb.ds.clear_tab(fb.ds.cursor_col)
    elif param == 3:
        fb.ds.clear_default_tabs()
        for x in range(fb.ds.width):
            fb.ds.clear_tab(x)


def _dec_mode(param: int, fb: Framebuffer) -> str | None:
    """Name of the DrawState flag for a DEC private mode, running its side effects."""
    ds = fb.ds
    if param == 3:
        # 80/132 columns: ignored, but the screen is cleared.
        ds.move_row(0)
        ds.move_col(0)
        _clear_screen(fb)
        return None
    if param == 6:
        ds.move_row(0)
        ds.move_col(0)
        return "origin_mode"
    return _DEC_MODES.get(param)


def _set_dec_modes(fb: Framebuffer, dispatch: Dispatcher, value: bool) -> None:
    for i in range(dispatch.param_count()):
        param = dispatch.getparam(i, 0)
        if param in _MOUSE_REPORTING_PARAMS:
            fb.ds.mouse_reporting_mode = (
                MouseReportingMode(param) if value else MouseReportingMode.NONE
            )
        elif param in _MOUSE_ENCODING_PARAMS:
            fb.ds.mouse_encoding_mode = (
                MouseEncodingMode(param) if value else MouseEncodingMode.DEFAULT
            )
        else:
            name = _dec_mode(param, fb)
            if name is not None:
                setattr(fb.ds, name, value)


@register(CSI, "?h", clears_wrap_state=False)
def csi_decsm(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Set DEC private modes."""
    _set_dec_modes(fb, dispatch, True)


@register(CSI, "?l", clears_wrap_state=False)
def csi_decrm(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Reset DEC private modes."""
    _set_dec_modes(fb, dispatch, False)


def _set_ansi_modes(fb: Framebuffer, dispatch: Dispatcher, value: bool) -> None:
    for i in range(dispatch.param_count()):
        name = _ANSI_MODES.get(dispatch.getparam(i, 0))
        if name is not None:
            setattr(fb.ds, name, value)


@register(CSI, "h")
def csi_sm(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Set ANSI modes."""
    _set_ansi_modes(fb, dispatch, True)


@register(CSI, "l")
def csi_rm(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Reset ANSI modes."""
    _set_ansi_modes(fb, dispatch, False)


@register(CSI, "r")
def csi_decstbm(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Set top and bottom margins."""
    top = dispatch.getparam(0, 1)
    bottom = dispatch.getparam(1, fb.ds.height)
    if bottom <= top or top > fb.ds.height or (top == 0 and bottom == 1):
        return  # invalid; xterm ignores it
    fb.ds.set_scrolling_region(top - 1, bottom - 1)
    fb.ds.move_row(0)
    fb.ds.move_col(0)


@register(CONTROL, "\x07")
def ctrl_bel(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Ring the bell."""
    fb.ring_bell()


@register(CSI, "m", clears_wrap_state=False)
def csi_sgr(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Select graphic rendition."""
    count = dispatch.param_count()
    i = 0
    while i < count:
        rendition = dispatch.getparam(i, 0)
        if rendition in (38, 48):
            # A 0 index in [34]8;5;Ps does not mean reset.
            if count - i >= 3 and dispatch.getparam(i + 1, -1) == 5:
                color = dispatch.getparam(i + 2, 0)
                if rendition == 38:
                    fb.ds.set_foreground_color(color)
                else:
                    fb.ds.set_background_color(color)
                i += 3
                continue
            if count - i >= 5 and dispatch.getparam(i + 1, -1) == 2:
                color = Renditions.make_true_color(
                    dispatch.getparam(i + 2, 0),
                    dispatch.getparam(i + 3, 0),
                    dispatch.getparam(i + 4, 0),
                )
                if rendition == 38:
                    fb.ds.set_foreground_color(color)
                else:
                    fb.ds.set_background_color(color)
                i += 5
                continue
        fb.ds.add_rendition(rendition)
        i += 1


@register(ESCAPE, "7")
def esc_decsc(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Save cursor."""
    fb.ds.save_cursor()


@register(ESCAPE, "8")
def esc_decrc(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Restore cursor."""
    fb.ds.restore_cursor()


@register(CSI, "n")
def csi_dsr(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Device status report."""
    param = dispatch.getparam(0, 0)
    if param == 5:
        dispatch.terminal_to_host += "\033[0n"
    elif param == 6:
        dispatch.terminal_to_host += f"\033[{fb.ds.cursor_row + 1};{fb.ds.cursor_col + 1}R"


@register(CSI, "L")
def csi_il(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Insert lines."""
    fb.insert_line(fb.ds.cursor_row, dispatch.getparam(0, 1))
    fb.ds.move_col(0)


@register(CSI, "M")
def csi_dl(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Delete lines."""
    fb.delete_line(fb.ds.cursor_row, dispatch.getparam(0, 1))
    fb.ds.move_col(0)


@register(CSI, "@")
def csi_ich(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Insert blank characters."""
    for _ in range(dispatch.getparam(0, 1)):
        fb.insert_cell(fb.ds.cursor_row, fb.ds.cursor_col)


@register(CSI, "P")
def csi_dch(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Delete characters."""
    for _ in range(dispatch.getparam(0, 1)):
        fb.delete_cell(fb.ds.cursor_row, fb.ds.cursor_col)


@register(CSI, "d")
def csi_vpa(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Line position absolute."""
    fb.ds.move_row(dispatch.getparam(0, 1) - 1)


@register(CSI, "G")
@register(CSI, "`")
def csi_hpa(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Character position absolute (CHA and HPA)."""
    fb.ds.move_col(dispatch.getparam(0, 1) - 1)


@register(CSI, "X")
def csi_ech(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Erase characters."""
    num = dispatch.getparam(0, 1)
    limit = min(fb.ds.cursor_col + num - 1, fb.ds.width - 1)
    _clearline(fb, -1, fb.ds.cursor_col, limit)


@register(ESCAPE, "c")
def esc_ris(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Reset to initial state."""
    fb.reset()


@register(CSI, "!p")
def csi_decstr(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Soft terminal reset."""
    fb.soft_reset()


@register(CSI, "S")
def csi_sd(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Scroll the region up by n lines."""
    fb.scroll(dispatch.getparam(0, 1))


@register(CSI, "T")
def csi_su(fb: Framebuffer, dispatch: Dispatcher) -> None:
    """Scroll the region down by n lines."""
    fb.scroll(-dispatch.getparam(0, 1))