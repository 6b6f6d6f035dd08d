"""Parameter collection and dispatch of control functions to the framebuffer."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from vtemu.actions import Action, Collect

if TYPE_CHECKING:
    from vtemu.framebuffer import Framebuffer

MAXIMUM_CLIPBOARD_SIZE = 16 * 1024
_MAX_PARAMS_LENGTH = 100
_MAX_DISPATCH_CHARS = 8
_MAX_TITLE_LENGTH = 256
_CLIPBOARD_PREFIX = "52;c;"


class FunctionType(enum.Enum):
    ESCAPE = "escape"
    CSI = "csi"
    CONTROL = "control"


@dataclass
class Function:
    """A terminal function and whether running it clears the pending wrap."""

    function: Callable[["Framebuffer", "Dispatcher"], None]
    clears_wrap_state: bool = True


@dataclass
class DispatchRegistry:
    """Tables of terminal functions keyed by their dispatch characters."""

    escape: dict[str, Function] = field(default_factory=dict)
    csi: dict[str, Function] = field(default_factory=dict)
    control: dict[str, Function] = field(default_factory=dict)

    def table(self, function_type: FunctionType) -> dict[str, Function]:
        return {
            FunctionType.ESCAPE: self.escape,
            FunctionType.CSI: self.csi,
            FunctionType.CONTROL: self.control,
        }[function_type]

    def add(
        self,
        function_type: FunctionType,
        dispatch_chars: str,
        function: Callable[["Framebuffer", "Dispatcher"], None],
        clears_wrap_state: bool = True,
    ) -> None:
        """Register a function; the first registration of a key wins."""
        self.table(function_type).setdefault(
            dispatch_chars, Function(function, clears_wrap_state)
        )


_global_registry = DispatchRegistry()


def get_global_dispatch_registry() -> DispatchRegistry:
    return _global_registry


def register(
    function_type: FunctionType, dispatch_chars: str, clears_wrap_state: bool = True
) -> Callable:
    """Decorator that registers a terminal function in the global registry."""

    def decorator(func: Callable[["Framebuffer", "Dispatcher"], None]):
        _global_registry.add(function_type, dispatch_chars, func, clears_wrap_state)
        return func

    return decorator


def _require_char(act: Action) -> int:
    if not act.char_present:
        raise ValueError(f"{act.name} action carries no character")
    return act.ch


class Dispatcher:
    """Collects parameters and intermediates and runs the matching function."""

    PARAM_MAX = 65535  # keeps hostile sequences from causing long loops

    def __init__(self, registry: DispatchRegistry | None = None) -> None:
        self.params = ""
        self.parsed_params: list[int] = []
        self.parsed = False
        self.dispatch_chars = ""
        self.osc_string = ""
        self.terminal_to_host = ""
        self._registry = registry if registry is not None else _global_registry

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dispatcher):
            return NotImplemented
        return (
            self.params == other.params
            and self.parsed_params == other.parsed_params
            and self.parsed == other.parsed
            and self.dispatch_chars == other.dispatch_chars
            and self.osc_string == other.osc_string
            and self.terminal_to_host == other.terminal_to_host
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f'[dispatch="{self.dispatch_chars}" params="{self.params}"]'[:63]

    def __repr__(self) -> str:
        return f"Dispatcher{self}"

    def _parse_params(self) -> None:
        if self.parsed:
            return
        self.parsed_params = [
            int(segment) if segment and int(segment) <= self.PARAM_MAX else -1
            for segment in self.params.split(";")
        ]
        self.parsed = True

    def getparam(self, n: int, default: int) -> int:
        """Parameter ``n``, or ``default`` if it is missing or less than 1."""
        self._parse_params()
        value = self.parsed_params[n] if n < len(self.parsed_params) else default
        return default if value < 1 else value

    def param_count(self) -> int:
        self._parse_params()
        return len(self.parsed_params)

    def newparamchar(self, act: Action) -> None:
        ch = _require_char(act)
        if not (ch == ord(";") or ord("0") <= ch <= ord("9")):
            raise ValueError(f"not a parameter character: {ch!r}")
        if len(self.params) < _MAX_PARAMS_LENGTH:
            self.params += chr(ch)
        self.parsed = False

    def collect(self, act: Action) -> None:
        ch = _require_char(act)
        if len(self.dispatch_chars) < _MAX_DISPATCH_CHARS and ch <= 255:
            self.dispatch_chars += chr(ch)

    def clear(self, act: Action | None = None) -> None:
        self.params = ""
        self.dispatch_chars = ""
        self.parsed = False

    def dispatch(self, function_type: FunctionType, act: Action, fb: Framebuffer) -> None:
        """Run the function selected by the collected characters and ``act``."""
        if function_type in (FunctionType.ESCAPE, FunctionType.CSI):
            self.collect(Collect(_require_char(act), True))

        if function_type is FunctionType.CONTROL:
            if not 0 <= act.ch <= 255:
                raise ValueError(f"control character out of range: {act.ch!r}")
            key = chr(act.ch)
        else:
            key = self.dispatch_chars

        entry = self._registry.table(function_type).get(key)
        if entry is None:
            fb.ds.next_print_will_wrap = False
            return
        if entry.clears_wrap_state:
            fb.ds.next_print_will_wrap = False
        entry.function(fb, self)

    def osc_put(self, act: Action) -> None:
        ch = _require_char(act)
        if len(self.osc_string) < MAXIMUM_CLIPBOARD_SIZE:
            self.osc_string += chr(ch)

    def osc_start(self, act: Action | None = None) -> None:
        self.osc_string = ""

    def osc_dispatch(self, act: Action | None, fb: Framebuffer) -> None:
        """Apply a finished OSC string: clipboard copy, icon name or window title."""
        osc = self.osc_string
        if osc.startswith(_CLIPBOARD_PREFIX):
            fb.clipboard = osc[len(_CLIPBOARD_PREFIX):]
            return
        if not osc:
            return

        cmd_num = -1
        offset = 0
        if osc[0] == ";":
            cmd_num = 0
            offset = 1
        elif len(osc) >= 2 and osc[1] == ";":
            cmd_num = ord(osc[0]) - ord("0")
            offset = 2

        set_icon = cmd_num in (0, 1)
        set_title = cmd_num in (0, 2)
        if set_icon or set_title:
            fb.title_initialized = True
            new_title = osc[offset:min(len(osc), _MAX_TITLE_LENGTH)]
            if set_icon:
                fb.icon_name = new_title
            if set_title:
                fb.window_title = new_title