"""Translation of user keystrokes before they are sent to the host."""

from __future__ import annotations

import enum


class UserInputState(enum.Enum):
    GROUND = "ground"
    ESC = "esc"
    SS3 = "ss3"


_ESC = 0x1B
_CURSOR_KEYS = range(ord("A"), ord("D") + 1)


class UserInput:
    """Rewrites SS3 cursor keys to ANSI form when the host is not in application mode.

    The user's terminal is always in application mode. One byte of
    lookahead after ``ESC O`` decides whether the key was a cursor key.
    The 8-bit SS3 control is not handled.
    """

    def __init__(self) -> None:
        self.state = UserInputState.GROUND

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserInput):
            return NotImplemented
        return self.state == other.state

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"UserInput(state={self.state.name})"

    def input(self, byte: int, application_mode_cursor_keys: bool) -> str:
        """Consume one user byte and return what should be sent to the host."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"not a byte: {byte!r}")
        char = chr(byte)

        if self.state is UserInputState.GROUND:
            if byte == _ESC:
                self.state = UserInputState.ESC
            return char

        if self.state is UserInputState.ESC:
            if char == "O":  # ESC O is the 7-bit SS3
                self.state = UserInputState.SS3
                return ""
            self.state = UserInputState.GROUND
            return char

        self.state = UserInputState.GROUND
        if not application_mode_cursor_keys and byte in _CURSOR_KEYS:
            return "[" + char
        return "O" + char