"""Strings that carry a terminal style for every character."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Sequence, overload

from .terminal import Color, Style, Surface, rune_width

StyleFunc = Callable[[Style], Style]


@dataclass(frozen=True)
class Cell:
    """One character together with its style."""

    char: str
    style: Style = field(default_factory=Style)

    def rune_width(self) -> int:
        return rune_width(self.char)

    def draw(self, screen: Surface, x: int, y: int) -> int:
        """Draw the cell at (x, y), filling every column it spans; return that width."""
        width = self.rune_width()
        for offset in range(width):
            screen.set_content(x + offset, y, self.char, self.style)
        return width


class TString:
    """A sequence of styled cells.

    Building operations return new strings; ``colorize`` and ``adjust_style``
    change the string in place.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable[Cell] = ()) -> None:
        self._cells: list[Cell] = list(cells)

    @classmethod
    def plain(cls, text: str) -> TString:
        return cls(Cell(char) for char in text)

    @classmethod
    def colored(cls, text: str, color: Color) -> TString:
        return cls.styled(text, Style().with_fg(color))

    @classmethod
    def styled(cls, text: str, style: Style) -> TString:
        return cls(Cell(char, style) for char in text)

    def __len__(self) -> int:
        return len(self._cells)

    def __bool__(self) -> bool:
        return bool(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    @overload
    def __getitem__(self, key: int) -> Cell: ...

    @overload
    def __getitem__(self, key: slice) -> TString: ...

    def __getitem__(self, key):
        if isinstance(key, slice):
            return TString(self._cells[key])
        return self._cells[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TString):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: TString) -> TString:
        if not isinstance(other, TString):
            return NotImplemented
        return TString(self._cells + other._cells)

    def __str__(self) -> str:
        return "".join(cell.char for cell in self._cells)

    def __repr__(self) -> str:
        return f"TString({str(self)!r})"

    def clone(self) -> TString:
        return TString(self._cells)

    def append(self, text: str) -> TString:
        return self + TString.plain(text)

    def append_color(self, text: str, color: Color) -> TString:
        return self + TString.colored(text, color)

    def append_style(self, text: str, style: Style) -> TString:
        return self + TString.styled(text, style)

    def append_tstring(self, *args: TString) -> TString:
        cells = list(self._cells)
        for other in args:
            cells.extend(other)
        return TString(cells)

    def prepend(self, text: str) -> TString:
        return TString.plain(text) + self

    def prepend_color(self, text: str, color: Color) -> TString:
        return TString.colored(text, color) + self

    def prepend_style(self, text: str, style: Style) -> TString:
        return TString.styled(text, style) + self

    def prepend_tstring(self, other: TString) -> TString:
        return other + self

    def trim_space(self) -> TString:
        return self.trim(str.isspace)

    def trim(self, predicate: Callable[[str], bool]) -> TString:
        return self.trim_left(predicate).trim_right(predicate)

    def trim_left(self, predicate: Callable[[str], bool]) -> TString:
        for index, cell in enumerate(self._cells):
            if not predicate(cell.char):
                return TString(self._cells[index:])
        return TString()

    def trim_right(self, predicate: Callable[[str], bool]) -> TString:
        for index in range(len(self._cells) - 1, -1, -1):
            if not predicate(self._cells[index].char):
                return TString(self._cells[: index + 1])
        return TString()

    def colorize(self, start: int, length: int, color: Color) -> None:
        self.adjust_style(start, length, lambda style: style.with_fg(color))

    def adjust_style(self, start: int, length: int, fn: StyleFunc) -> None:
        """Apply ``fn`` to the styles of ``length`` cells from ``start``, in place."""
        if length <= 0:
            return
        if start < 0 or start + length > len(self._cells):
            raise IndexError(
                f"range [{start}, {start + length}) outside string of length {len(self._cells)}"
            )
        for index in range(start, start + length):
            cell = self._cells[index]
            self._cells[index] = Cell(cell.char, fn(cell.style))

    def adjust_style_full(self, fn: StyleFunc) -> None:
        self.adjust_style(0, len(self._cells), fn)

    def draw(self, screen: Surface, x: int, y: int) -> None:
        for cell in self._cells:
            x += cell.draw(screen, x, y)

    def rune_width(self) -> int:
        return sum(cell.rune_width() for cell in self._cells)

    def truncate(self, width: int) -> TString:
        """Return the longest prefix that fits in ``width`` cells."""
        if self.rune_width() <= width:
            return self.clone()
        used = 0
        for index, cell in enumerate(self._cells):
            cell_width = cell.rune_width()
            if used + cell_width > width:
                return TString(self._cells[:index])
            used += cell_width
        return self.clone()

    def index(self, char: str, start: int = 0) -> int:
        """Position of the first ``char`` at or after ``start``, or -1."""
        for index in range(max(start, 0), len(self._cells)):
            if self._cells[index].char == char:
                return index
        return -1

    def count(self, char: str) -> int:
        return sum(1 for cell in self._cells if cell.char == char)

    def split(self, sep: str) -> list[TString]:
        parts: list[TString] = []
        current: list[Cell] = []
        for cell in self._cells:
            if cell.char == sep:
                parts.append(TString(current))
                current = []
            else:
                current.append(cell)
        parts.append(TString(current))
        return parts


def join(strings: Sequence[TString], separator: str) -> TString:
    """Concatenate ``strings`` with an unstyled ``separator`` between them."""
    if not strings:
        return TString()
    first, *rest = strings
    if not separator:
        return first.append_tstring(*rest)
    out = first.clone()
    for item in rest:
        out = out + item.prepend(separator)
    return out