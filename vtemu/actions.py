"""Actions produced by the escape-sequence parser and applied to an emulator."""

from __future__ import annotations

from typing import Any


class Action:
    """A single step of parser output, optionally carrying the character seen."""

    name = "Action"
    ignore = False

    def __init__(self, ch: int = -1, char_present: bool = False) -> None:
        self.ch = ch
        self.char_present = char_present

    def act_on_terminal(self, emu: Any) -> None:
        """Apply this action to the emulator; the base action does nothing."""

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"{type(self).__name__}({fields})"


class Ignore(Action):
    name = "Ignore"
    ignore = True


class Print(Action):
    name = "Print"

    def act_on_terminal(self, emu: Any) -> None:
        emu.print(self)


class Execute(Action):
    name = "Execute"

    def act_on_terminal(self, emu: Any) -> None:
        emu.execute(self)


class Clear(Action):
    name = "Clear"

    def act_on_terminal(self, emu: Any) -> None:
        emu.dispatch.clear(self)


class Collect(Action):
    name = "Collect"

    def act_on_terminal(self, emu: Any) -> None:
        emu.dispatch.collect(self)


class Param(Action):
    name = "Param"

    def act_on_terminal(self, emu: Any) -> None:
        emu.dispatch.newparamchar(self)


class EscDispatch(Action):
    name = "Esc_Dispatch"

    def act_on_terminal(self, emu: Any) -> None:
        emu.esc_dispatch(self)


class CSIDispatch(Action):
    name = "CSI_Dispatch"

    def act_on_terminal(self, emu: Any) -> None:
        emu.csi_dispatch(self)


class Hook(Action):
    name = "Hook"


class Put(Action):
    name = "Put"


class Unhook(Action):
    name = "Unhook"


class OSCStart(Action):
    name = "OSC_Start"

    def act_on_terminal(self, emu: Any) -> None:
        emu.dispatch.osc_start(self)


class OSCPut(Action):
    name = "OSC_Put"

    def act_on_terminal(self, emu: Any) -> None:
        emu.dispatch.osc_put(self)


class OSCEnd(Action):
    name = "OSC_End"

    def act_on_terminal(self, emu: Any) -> None:
        emu.osc_end(self)


class UserByte(Action):
    """A keystroke byte from the user, outside the host state machine."""

    name = "UserByte"

    def __init__(self, c: int) -> None:
        super().__init__()
        self.c = c

    def act_on_terminal(self, emu: Any) -> None:
        emu.dispatch.terminal_to_host += emu.user.input(
            self.c, emu.fb.ds.application_mode_cursor_keys
        )


class Resize(Action):
    """A window resize event, outside the host state machine."""

    name = "Resize"

    def __init__(self, width: int, height: int) -> None:
        super().__init__()
        self.width = width
        self.height = height

    def act_on_terminal(self, emu: Any) -> None:
        emu.resize(self.width, self.height)