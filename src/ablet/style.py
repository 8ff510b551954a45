"""Style values for styled text.

A ``Style`` is an immutable value compared structurally, so that style
tables can be deduplicated with plain ``==``.  It knows how to encode itself
as an ANSI SGR sequence for the terminal.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace

__all__ = [
    "Color",
    "Rgb",
    "Attribute",
    "Style",
    "CURSOR_STYLE",
    "HIGHLIGHT_BACKGROUND",
    "SGR_RESET",
    "highlighted",
]

SGR_RESET = "\x1b[0m"


class Color(enum.Enum):
    """The 16 standard terminal colours; the value is the SGR foreground code."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37
    GREY = 90
    BRIGHT_RED = 91
    BRIGHT_GREEN = 92
    BRIGHT_YELLOW = 93
    BRIGHT_BLUE = 94
    BRIGHT_MAGENTA = 95
    BRIGHT_CYAN = 96
    BRIGHT_WHITE = 97

    def fg_code(self) -> str:
        return str(self.value)

    def bg_code(self) -> str:
        return str(self.value + 10)


@dataclass(frozen=True)
class Rgb:
    """A 24-bit colour."""

    r: int
    g: int
    b: int

    def fg_code(self) -> str:
        return f"38;2;{self.r};{self.g};{self.b}"

    def bg_code(self) -> str:
        return f"48;2;{self.r};{self.g};{self.b}"


class Attribute(enum.Enum):
    BOLD = 1
    DIM = 2
    ITALIC = 3
    UNDERLINE = 4
    REVERSE = 7


@dataclass(frozen=True)
class Style:
    """Foreground, background and attributes of a run of text.

    ``Style()`` is the default style: it leaves the terminal defaults alone.
    """

    fg: Color | Rgb | None = None
    bg: Color | Rgb | None = None
    attributes: frozenset[Attribute] = field(default_factory=frozenset)

    @property
    def is_default(self) -> bool:
        return self.fg is None and self.bg is None and not self.attributes

    def with_fg(self, color: Color | Rgb | None) -> Style:
        return replace(self, fg=color)

    def with_bg(self, color: Color | Rgb | None) -> Style:
        return replace(self, bg=color)

    def with_attributes(self, *attributes: Attribute) -> Style:
        return replace(self, attributes=self.attributes | frozenset(attributes))

    def bold(self) -> Style:
        return self.with_attributes(Attribute.BOLD)

    def italic(self) -> Style:
        return self.with_attributes(Attribute.ITALIC)

    def underline(self) -> Style:
        return self.with_attributes(Attribute.UNDERLINE)

    def reverse(self) -> Style:
        return self.with_attributes(Attribute.REVERSE)

    def sgr(self) -> str:
        """The SGR sequence selecting this style (empty for the default)."""
        if self.is_default:
            return ""
        codes = [str(a.value) for a in sorted(self.attributes, key=lambda a: a.value)]
        if self.fg is not None:
            codes.append(self.fg.fg_code())
        if self.bg is not None:
            codes.append(self.bg.bg_code())
        return f"\x1b[{';'.join(codes)}m"

    def apply(self, text: str) -> str:
        """Wrap *text* in this style, resetting afterwards."""
        prefix = self.sgr()
        if not prefix or not text:
            return text
        return f"{prefix}{text}{SGR_RESET}"


CURSOR_STYLE = Style().reverse()

HIGHLIGHT_BACKGROUND = Color.GREY


def highlighted(style: Style) -> Style:
    """The selection variant of *style*."""
    return style.with_bg(HIGHLIGHT_BACKGROUND)
