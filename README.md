# vtemu

`vtemu` is an in-memory model of a VT100/xterm-style terminal screen. It
keeps the cell contents, colours and attributes, cursor position, scrolling
region, tab stops, window title, icon name, clipboard, bell count and the
terminal modes, and it carries out the control functions a host program
asks for: cursor movement, erasing, scrolling, inserting and deleting lines
and characters, SGR renditions, mode changes, tab handling, device reports
and resets.

It has no dependencies beyond the standard library and needs Python 3.10
or newer.

## Modules

- `vtemu.cells`: `Renditions` (colours and attributes, with `sgr()` to
  produce the matching escape sequence), `Attribute`, `Cell` and `Row`.
- `vtemu.drawstate`: `DrawState` (cursor, tab stops, scrolling region,
  saved cursor and modes), `SavedCursor`, `MouseReportingMode` and
  `MouseEncodingMode`.
- `vtemu.framebuffer`: `Framebuffer`, the rows of cells plus a `DrawState`.
  `copy()` returns a framebuffer that shares rows with the original until
  one of them writes to a row.
- `vtemu.dispatcher`: `Dispatcher` collects parameter and intermediate
  characters and runs the registered function for an escape sequence, CSI
  sequence or control character. `register` is the decorator that adds a
  function to the global `DispatchRegistry`; `FunctionType` selects the
  table. `osc_dispatch` handles OSC window-title, icon-name and
  `52;c;` clipboard strings.
- `vtemu.functions`: the control functions themselves. Importing this
  module registers them.
- `vtemu.actions`: action classes (`Print`, `Execute`, `Clear`, `Collect`,
  `Param`, `CSIDispatch`, `EscDispatch`, `OSCStart`, `OSCPut`, `OSCEnd`,
  `UserByte`, `Resize` and others) that describe one step of terminal input.
- `vtemu.userinput`: `UserInput` rewrites the user's `ESC O A`..`ESC O D`
  cursor keys to `ESC [ A`..`ESC [ D` when the host has not enabled
  application cursor-key mode.

## Example

```python
import vtemu.functions  # registers the control functions
from vtemu.actions import CSIDispatch, Execute, Param
from vtemu.dispatcher import Dispatcher, FunctionType
from vtemu.framebuffer import Framebuffer

fb = Framebuffer(80, 24)
dispatch = Dispatcher()

# CSI 5;10 H: move the cursor to row 5, column 10
for ch in "5;10":
    dispatch.newparamchar(Param(ord(ch), True))
dispatch.dispatch(FunctionType.CSI, CSIDispatch(ord("H"), True), fb)
print(fb.ds.cursor_row, fb.ds.cursor_col)   # 4 9

# Line feed
dispatch.dispatch(FunctionType.CONTROL, Execute(0x0A, True), fb)

# CSI 6 n: cursor position report
dispatch.clear()
dispatch.newparamchar(Param(ord("6"), True))
dispatch.dispatch(FunctionType.CSI, CSIDispatch(ord("n"), True), fb)
print(repr(dispatch.terminal_to_host))      # '\x1b[6;10R'
```

Renditions on their own:

```python
from vtemu.cells import Renditions

r = Renditions()
r.set_rendition(1)    # bold
r.set_rendition(31)   # red foreground
print(repr(r.sgr()))  # '\x1b[0;1;31m'
```

User keystrokes:

```python
from vtemu.userinput import UserInput

ui = UserInput()
keys = [ui.input(b, False) for b in b"\x1bOA"]
print(keys)           # ['\x1b', '', '[A']
```

## What it does not do

The package contains no UTF-8 decoder and no escape-sequence state machine
that turns a host byte stream into actions, and no emulator object that
ties a framebuffer, dispatcher and `UserInput` together. The action classes'
`act_on_terminal(emu)` methods call methods such as `print`, `execute`,
`csi_dispatch`, `esc_dispatch`, `osc_end` and `resize` on the object they
are given, and the package does not supply such an object; in particular
nothing here places printed characters into cells by display width. You
drive `Dispatcher` and `Framebuffer` directly, as in the example above.
Nothing is drawn to a real screen.