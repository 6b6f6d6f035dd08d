"""Renditions, character cells and rows of the terminal framebuffer."""

from __future__ import annotations

import enum
import itertools
import sys
from dataclasses import dataclass

_TRUE_COLOR_MASK = 0x1000000
_COLOR_BITS = 0x1FFFFFF
_ATTRIBUTE_BITS = 0xFF
_UINT32 = 0xFFFFFFFF
_MAX_CELL_BYTES = 32

_gen_counter = itertools.count()


class Attribute(enum.IntEnum):
    BOLD = 0
    FAINT = 1
    ITALIC = 2
    UNDERLINED = 3
    BLINK = 4
    INVERSE = 5
    INVISIBLE = 6


@dataclass
class Renditions:
    """Colors and attributes applied to a cell."""

    background_color: int = 0
    foreground_color: int = 0
    attributes: int = 0

    @staticmethod
    def make_true_color(r: int, g: int, b: int) -> int:
        return (_TRUE_COLOR_MASK | (r << 16) | (g << 8) | b) & _UINT32

    @staticmethod
    def is_true_color(color: int) -> bool:
        return ((color & _UINT32) & _TRUE_COLOR_MASK) != 0

    def set_foreground_color(self, num: int) -> None:
        if 0 <= num <= 255:
            self.foreground_color = 30 + num
        elif self.is_true_color(num):
            self.foreground_color = (num & _UINT32) & _COLOR_BITS

    def set_background_color(self, num: int) -> None:
        if 0 <= num <= 255:
            self.background_color = 40 + num
        elif self.is_true_color(num):
            self.background_color = (num & _UINT32) & _COLOR_BITS

    def set_rendition(self, num: int) -> None:
        """Apply one SGR parameter (16-color set and attributes only)."""
        if num == 0:
            self.clear_attributes()
            self.foreground_color = self.background_color = 0
            return
        if num == 39:
            self.foreground_color = 0
            return
        if num == 49:
            self.background_color = 0
            return
        if 30 <= num <= 37:
            self.foreground_color = num
            return
        if 40 <= num <= 47:
            self.background_color = num
            return
        if 90 <= num <= 97:
            self.foreground_color = num - 90 + 38
            return
        if 100 <= num <= 107:
            self.background_color = num - 100 + 48
            return

        value = num < 9
        attr = {
            1: Attribute.BOLD, 22: Attribute.BOLD,
            3: Attribute.ITALIC, 23: Attribute.ITALIC,
            4: Attribute.UNDERLINED, 24: Attribute.UNDERLINED,
            5: Attribute.BLINK, 25: Attribute.BLINK,
            7: Attribute.INVERSE, 27: Attribute.INVERSE,
            8: Attribute.INVISIBLE, 28: Attribute.INVISIBLE,
        }.get(num)
        if attr is not None:
            self.set_attribute(attr, value)

    def set_attribute(self, attr: Attribute, value: bool) -> None:
        if value:
            self.attributes = (self.attributes | (1 << attr)) & _ATTRIBUTE_BITS
        else:
            self.attributes = self.attributes & ~(1 << attr) & _ATTRIBUTE_BITS

    def get_attribute(self, attr: Attribute) -> bool:
        return bool(self.attributes & (1 << attr))

    def clear_attributes(self) -> None:
        self.attributes = 0

    def sgr(self) -> str:
        """Return the SGR escape sequence that selects these renditions."""
        parts = ["\033[0"]
        for attr, code in (
            (Attribute.BOLD, ";1"),
            (Attribute.ITALIC, ";3"),
            (Attribute.UNDERLINED, ";4"),
            (Attribute.BLINK, ";5"),
            (Attribute.INVERSE, ";7"),
            (Attribute.INVISIBLE, ";8"),
        ):
            if self.get_attribute(attr):
                parts.append(code)

        fg = self.foreground_color
        if fg:
            if self.is_true_color(fg):
                parts.append(f";38;2;{(fg >> 16) & 0xFF};{(fg >> 8) & 0xFF};{fg & 0xFF}")
            elif fg > 37:
                parts.append(f";38;5;{fg - 30}")
            else:
                parts.append(f";{fg}")

        bg = self.background_color
        if bg:
            if self.is_true_color(bg):
                parts.append(f";48;2;{(bg >> 16) & 0xFF};{(bg >> 8) & 0xFF};{bg & 0xFF}")
            elif bg > 47:
                parts.append(f";48;5;{bg - 40}")
            else:
                parts.append(f";{bg}")

        parts.append("m")
        return "".join(parts)


class Cell:
    """One character cell: a grapheme plus its renditions and flags."""

    def __init__(self, background_color: int = 0) -> None:
        self.contents = ""
        self.renditions = Renditions(background_color)
        self.wide = False
        self.fallback = False
        self.wrap = False

    def reset(self, background_color: int) -> None:
        self.contents = ""
        self.renditions = Renditions(background_color)
        self.wide = False
        self.fallback = False
        self.wrap = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return (
            self.contents == other.contents
            and self.fallback == other.fallback
            and self.wide == other.wide
            and self.renditions == other.renditions
            and self.wrap == other.wrap
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Cell(contents={self.contents!r}, renditions={self.renditions!r}, "
            f"wide={self.wide}, fallback={self.fallback}, wrap={self.wrap})"
        )

    @property
    def width(self) -> int:
        return 2 if self.wide else 1

    def _encoded(self) -> bytes:
        return self.contents.encode("utf-8", "surrogatepass")

    def debug_contents(self) -> str:
        if not self.contents:
            return "'_' ()"
        codes = ", ".join(f"0x{b:02x}" for b in self._encoded())
        return f"'{self.print_grapheme()}' [{codes}]"

    def empty(self) -> bool:
        return not self.contents

    def full(self) -> bool:
        """True once the cell holds the maximum of combining characters."""
        return len(self._encoded()) >= _MAX_CELL_BYTES

    def clear(self) -> None:
        self.contents = ""

    def is_blank(self) -> bool:
        return self.contents in ("", " ", "\u00a0")

    def contents_match(self, other: Cell) -> bool:
        return (self.is_blank() and other.is_blank()) or self.contents == other.contents

    def compare(self, other: Cell) -> bool:
        """Report differences to stderr; return True if the cells differ visibly."""
        differs = False
        grapheme = self.print_grapheme()
        other_grapheme = other.print_grapheme()
        if grapheme != other_grapheme:
            differs = True
            print(f"Graphemes: '{grapheme}' vs. '{other_grapheme}'", file=sys.stderr)
        if not self.contents_match(other):
            print(
                f"Contents: {self.debug_contents()} ({len(self._encoded())}) vs. "
                f"{other.debug_contents()} ({len(other._encoded())})",
                file=sys.stderr,
            )
        if self.fallback != other.fallback:
            print(f"fallback: {int(self.fallback)} vs. {int(other.fallback)}", file=sys.stderr)
        if self.wide != other.wide:
            differs = True
            print(f"width: {int(self.wide)} vs. {int(other.wide)}", file=sys.stderr)
        if self.renditions != other.renditions:
            differs = True
            print("renditions differ", file=sys.stderr)
        if self.wrap != other.wrap:
            differs = True
            print(f"wrap: {int(self.wrap)} vs. {int(other.wrap)}", file=sys.stderr)
        return differs

    @staticmethod
    def isprint_iso8859_1(ch: int) -> bool:
        return 0xA0 <= ch <= 0xFF or 0x20 <= ch <= 0x7E

    def append(self, ch: int | str) -> None:
        """Add a character (code point or one-character string) to the cell."""
        self.contents += chr(ch) if isinstance(ch, int) else ch

    def print_grapheme(self) -> str:
        """Return the text that draws this cell."""
        if not self.contents:
            return " "
        prefix = "\u00a0" if self.fallback else ""
        return prefix + self.contents


class Row:
    """A row of cells with a generation number that identifies its version."""

    def __init__(self, width: int, background_color: int = 0) -> None:
        self.cells = [Cell(background_color) for _ in range(width)]
        self.gen = next(_gen_counter)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self.gen == other.gen and self.cells == other.cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        text = "".join(cell.print_grapheme() for cell in self.cells)
        return f"Row(gen={self.gen}, text={text!r})"

    @property
    def wrap(self) -> bool:
        return self.cells[-1].wrap

    @wrap.setter
    def wrap(self, value: bool) -> None:
        self.cells[-1].wrap = value

    def insert_cell(self, col: int, background_color: int) -> None:
        self.cells.insert(col, Cell(background_color))
        self.cells.pop()

    def delete_cell(self, col: int, background_color: int) -> None:
        self.cells.append(Cell(background_color))
        del self.cells[col]

    def reset(self, background_color: int) -> None:
        self.gen = next(_gen_counter)
        for cell in self.cells:
            cell.reset(background_color)