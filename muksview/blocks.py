"""Block-level entities: quotes, code blocks, lists and spoilers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .entity import AdjustStyleFunc, AdjustStyleReason, ContainerEntity, DrawContext
from .terminal import Color, ProxyScreen, Style, Surface, write_line
from .text import TextEntity

BLOCK_QUOTE_CHAR = ">"
LIST_BULLET = "●"
SPOILER_COLOR = Color.YELLOW


def digits(num: int) -> int:
    """Number of decimal digits in a positive number; 0 for zero or negatives."""
    if num <= 0:
        return 0
    return int(math.floor(math.log10(num))) + 1


@dataclass(eq=False)
class BlockquoteEntity(ContainerEntity):
    """A quoted block, drawn with a ``>`` gutter."""

    tag: str = "blockquote"
    block: bool = True
    indent: int = 2

    def adjust_style(self, fn: AdjustStyleFunc, reason: AdjustStyleReason) -> BlockquoteEntity:
        # Only the quote's own style changes; children keep theirs.
        self.style = fn(self.style)
        return self

    def clone(self) -> BlockquoteEntity:
        return BlockquoteEntity(
            tag=self.tag,
            style=self.style,
            block=self.block,
            default_height=self.default_height,
            children=[child.clone() for child in self.children],
            indent=self.indent,
        )

    def draw(self, screen: Surface, ctx: DrawContext) -> None:
        super().draw(screen, ctx)
        for y in range(self.height):
            screen.set_content(0, y, BLOCK_QUOTE_CHAR, self.style)

    def plain_text(self) -> str:
        if not self.children:
            return ""
        parts: list[str] = []
        newlined = False
        for index, child in enumerate(self.children):
            if index != 0 and child.block and not newlined:
                parts.append("\n")
            newlined = False
            for row_index, row in enumerate(child.plain_text().split("\n")):
                if row_index != 0:
                    parts.append("\n")
                parts.append("> ")
                parts.append(row)
            if child.block:
                parts.append("\n")
                newlined = True
        return "".join(parts).strip()


@dataclass(eq=False)
class CodeBlockEntity(ContainerEntity):
    """A preformatted block drawn on a filled background."""

    tag: str = "pre"
    block: bool = True
    background: Style = field(default_factory=Style)

    def clone(self) -> CodeBlockEntity:
        return CodeBlockEntity(
            tag=self.tag,
            style=self.style,
            block=self.block,
            default_height=self.default_height,
            children=[child.clone() for child in self.children],
            indent=self.indent,
            background=self.background,
        )

    def draw(self, screen: Surface, ctx: DrawContext) -> None:
        screen.fill(" ", self.background)
        super().draw(screen, ctx)

    def adjust_style(self, fn: AdjustStyleFunc, reason: AdjustStyleReason) -> CodeBlockEntity:
        if reason is not AdjustStyleReason.NORMAL:
            super().adjust_style(fn, reason)
        return self


@dataclass(eq=False)
class ListEntity(ContainerEntity):
    """An ordered or unordered list; the indent leaves room for the markers."""

    tag: str = field(default="ul", init=False)
    block: bool = field(default=True, init=False)
    indent: int = field(default=2, init=False)
    ordered: bool = False
    start: int = 1

    def __post_init__(self) -> None:
        self.indent = 2
        if self.ordered:
            self.tag = "ol"
            self.indent += digits(self.start + len(self.children) - 1)

    def _number_prefix(self, number: int) -> str:
        return f"{number}. " + " " * (self.indent - 2 - digits(number))

    def adjust_style(self, fn: AdjustStyleFunc, reason: AdjustStyleReason) -> ListEntity:
        self.style = fn(self.style)
        super().adjust_style(fn, reason)
        return self

    def clone(self) -> ListEntity:
        return ListEntity(
            style=self.style,
            default_height=self.default_height,
            children=[child.clone() for child in self.children],
            ordered=self.ordered,
            start=self.start,
        )

    def draw(self, screen: Surface, ctx: DrawContext) -> None:
        width, _ = screen.size()
        proxy = ProxyScreen(screen, offset_x=self.indent, width=width - self.indent, style=self.style)
        for index, entity in enumerate(self.children):
            proxy.height = entity.height
            if self.ordered:
                line = self._number_prefix(self.start + index)
                write_line(screen, line, 0, proxy.offset_y, self.indent, self.style)
            else:
                screen.set_content(0, proxy.offset_y, LIST_BULLET, self.style)
            entity.draw(proxy, ctx)
            proxy.style = self.style
            proxy.offset_y += entity.height

    def plain_text(self) -> str:
        if not self.children:
            return ""
        indent = " " * self.indent
        parts: list[str] = []
        for index, child in enumerate(self.children):
            if self.ordered:
                parts.append(self._number_prefix(self.start + index))
            else:
                parts.append(LIST_BULLET + " ")
            for row_index, row in enumerate(child.plain_text().split("\n")):
                if row_index != 0:
                    parts.append("\n")
                    parts.append(indent)
                parts.append(row)
            parts.append("\n")
        return "".join(parts).strip()


def _hide(style: Style) -> Style:
    return style.with_fg(SPOILER_COLOR).with_bg(SPOILER_COLOR)


class SpoilerEntity:
    """Inline content shown masked unless its message is selected."""

    tag = "span"
    block = False

    def __init__(self, visible: ContainerEntity, reason: str = "") -> None:
        hidden = visible.clone()
        hidden.adjust_style(_hide, AdjustStyleReason.HIDE_SPOILER)
        if reason:
            reason_entity = TextEntity(text=f"({reason})")
            hidden.children = [reason_entity, *hidden.children]
            visible.children = [reason_entity, *visible.children]
        self.reason = reason
        self.hidden = hidden
        self.visible = visible

    @classmethod
    def _assemble(cls, reason: str, hidden: ContainerEntity, visible: ContainerEntity) -> SpoilerEntity:
        spoiler = cls.__new__(cls)
        spoiler.reason = reason
        spoiler.hidden = hidden
        spoiler.visible = visible
        return spoiler

    @property
    def height(self) -> int:
        return self.visible.height

    @property
    def start_x(self) -> int:
        return self.visible.start_x

    def clone(self) -> SpoilerEntity:
        return self._assemble(self.reason, self.hidden.clone(), self.visible.clone())

    def is_empty(self) -> bool:
        return self.visible.is_empty()

    def draw(self, screen: Surface, ctx: DrawContext) -> None:
        if ctx.is_selected:
            self.visible.draw(screen, ctx)
        else:
            self.hidden.draw(screen, ctx)

    def adjust_style(self, fn: AdjustStyleFunc, reason: AdjustStyleReason) -> SpoilerEntity:
        if reason is not AdjustStyleReason.HIDE_SPOILER:
            self.hidden.adjust_style(lambda style: _hide(fn(style)), reason)
            self.visible.adjust_style(fn, reason)
        return self

    def plain_text(self) -> str:
        if self.reason:
            return f"spoiler: {self.reason}"
        return "spoiler"

    def calculate_buffer(self, width: int, start_x: int, ctx: DrawContext) -> int:
        self.hidden.calculate_buffer(width, start_x, ctx)
        return self.visible.calculate_buffer(width, start_x, ctx)