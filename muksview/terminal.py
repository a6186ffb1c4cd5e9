"""Terminal cell primitives: colours, styles, in-memory screens and width helpers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar, Protocol

from wcwidth import wcwidth


@dataclass(frozen=True)
class Color:
    """A terminal colour: 24-bit RGB, or the terminal's default colour."""

    value: int | None = None

    DEFAULT: ClassVar[Color]
    BLACK: ClassVar[Color]
    WHITE: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    YELLOW: ClassVar[Color]
    GRAY: ClassVar[Color]
    DIM_GRAY: ClassVar[Color]
    DARK_GREEN: ClassVar[Color]
    DARK_SLATE_GRAY: ClassVar[Color]

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> Color:
        """Build a colour from red, green and blue components (masked to 8 bits)."""
        return cls(((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF))

    @property
    def is_default(self) -> bool:
        return self.value is None

    def hex(self) -> int:
        """Return the colour as 0xRRGGBB, or -1 for the default colour."""
        return -1 if self.value is None else self.value


Color.DEFAULT = Color()
Color.BLACK = Color(0x000000)
Color.WHITE = Color(0xFFFFFF)
Color.RED = Color(0xFF0000)
Color.GREEN = Color(0x008000)
Color.YELLOW = Color(0xFFFF00)
Color.GRAY = Color(0x808080)
Color.DIM_GRAY = Color(0x696969)
Color.DARK_GREEN = Color(0x006400)
Color.DARK_SLATE_GRAY = Color(0x2F4F4F)


@dataclass(frozen=True)
class Style:
    """Immutable cell style. Every ``with_*`` method returns a new style."""

    fg: Color = field(default_factory=Color)
    bg: Color = field(default_factory=Color)
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    url: str = ""
    url_id: str = ""

    def with_fg(self, color: Color) -> Style:
        return replace(self, fg=color)

    def with_bg(self, color: Color) -> Style:
        return replace(self, bg=color)

    def with_bold(self, on: bool) -> Style:
        return replace(self, bold=on)

    def with_italic(self, on: bool) -> Style:
        return replace(self, italic=on)

    def with_underline(self, on: bool) -> Style:
        return replace(self, underline=on)

    def with_strikethrough(self, on: bool) -> Style:
        return replace(self, strikethrough=on)

    def with_hyperlink(self, url: str, url_id: str) -> Style:
        return replace(self, url=url, url_id=url_id)


_BLANK = (" ", Style())


class Surface(Protocol):
    """Anything that can be drawn on cell by cell."""

    def size(self) -> tuple[int, int]: ...

    def set_content(self, x: int, y: int, char: str, style: Style) -> None: ...

    def get_content(self, x: int, y: int) -> tuple[str, Style]: ...


class Screen:
    """A fixed-size in-memory grid of styled cells."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(width, 0)
        self.height = max(height, 0)
        self._cells = [[_BLANK] * self.width for _ in range(self.height)]

    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_content(self, x: int, y: int, char: str, style: Style) -> None:
        if self._inside(x, y):
            self._cells[y][x] = (char, style)

    def get_content(self, x: int, y: int) -> tuple[str, Style]:
        if self._inside(x, y):
            return self._cells[y][x]
        return _BLANK

    def fill(self, char: str, style: Style) -> None:
        for row in self._cells:
            row[:] = [(char, style)] * self.width

    def clear(self) -> None:
        self.fill(" ", Style())

    def row_text(self, y: int) -> str:
        """Return the characters of one row as a string."""
        if not 0 <= y < self.height:
            raise IndexError(f"row {y} outside screen of height {self.height}")
        return "".join(char for char, _ in self._cells[y])


@dataclass(eq=False)
class ProxyScreen:
    """A rectangular window onto a parent screen, clipping to its own bounds."""

    parent: Surface
    offset_x: int = 0
    offset_y: int = 0
    width: int = 0
    height: int = 0
    style: Style = field(default_factory=Style)

    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_content(self, x: int, y: int, char: str, style: Style) -> None:
        if self._inside(x, y):
            self.parent.set_content(x + self.offset_x, y + self.offset_y, char, style)

    def get_content(self, x: int, y: int) -> tuple[str, Style]:
        if self._inside(x, y):
            return self.parent.get_content(x + self.offset_x, y + self.offset_y)
        return _BLANK

    def fill(self, char: str, style: Style) -> None:
        for y in range(self.height):
            for x in range(self.width):
                self.set_content(x, y, char, style)

    def clear(self) -> None:
        self.fill(" ", self.style)


def rune_width(char: str) -> int:
    """Number of terminal cells a single character occupies."""
    return max(wcwidth(char), 0)


def string_width(text: str) -> int:
    """Number of terminal cells a string occupies."""
    return sum(rune_width(char) for char in text)


def truncate(text: str, width: int) -> str:
    """Cut ``text`` so that it fits in ``width`` cells."""
    if string_width(text) <= width:
        return text
    used = 0
    for index, char in enumerate(text):
        char_width = rune_width(char)
        if used + char_width > width:
            return text[:index]
        used += char_width
    return text


def write_line(screen: Surface, text: str, x: int, y: int, max_width: int, style: Style) -> None:
    """Write ``text`` left-aligned at (x, y), stopping once ``max_width`` cells are used."""
    offset = 0
    for char in text:
        char_width = rune_width(char)
        if char_width == 0:
            continue
        for local in range(char_width):
            screen.set_content(x + offset + local, y, char, style)
        offset += char_width
        if offset >= max_width:
            break