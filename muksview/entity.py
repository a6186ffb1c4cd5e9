"""Base and container entities of the rendered HTML tree."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable

from .terminal import ProxyScreen, Style, Surface

AdjustStyleFunc = Callable[[Style], Style]


class AdjustStyleReason(enum.Enum):
    NORMAL = 0
    HIDE_SPOILER = 1


@dataclass(frozen=True)
class DrawContext:
    is_selected: bool = False
    bare_messages: bool = False


@dataclass(eq=False)
class BaseEntity:
    """A leaf entity carrying a tag and a style.

    Entities expose ``tag``, ``style``, ``block``, ``height`` and ``start_x``.
    """

    tag: str = ""
    style: Style = field(default_factory=Style)
    block: bool = False
    # Height used when there is no text and no children.
    default_height: int = 0
    height: int = field(default=0, init=False)
    start_x: int = field(default=0, init=False)
    prev_width: int = field(default=0, init=False, repr=False)

    def adjust_style(self, fn: AdjustStyleFunc, reason: AdjustStyleReason) -> BaseEntity:
        self.style = fn(self.style)
        return self

    def is_empty(self) -> bool:
        return False

    def clone(self) -> BaseEntity:
        return BaseEntity(
            tag=self.tag,
            style=self.style,
            block=self.block,
            default_height=self.default_height,
        )

    def plain_text(self) -> str:
        return ""

    def calculate_buffer(self, width: int, start_x: int, ctx: DrawContext) -> int:
        """Prepare for rendering; return the x position where the next entity starts."""
        self.height = self.default_height
        self.start_x = 0 if self.block else start_x
        return self.start_x

    def draw(self, screen: Surface, ctx: DrawContext) -> None:
        raise RuntimeError("draw() called on a bare BaseEntity")


@dataclass(eq=False)
class ContainerEntity(BaseEntity):
    """An entity holding child entities, optionally indented."""

    children: list = field(default_factory=list)
    indent: int = 0

    def is_empty(self) -> bool:
        return not self.children

    def plain_text(self) -> str:
        if not self.children:
            return ""
        parts: list[str] = []
        newlined = False
        for child in self.children:
            text = child.plain_text()
            if not text.startswith("\n") and child.block and not newlined:
                parts.append("\n")
            newlined = False
            parts.append(text)
            if child.block:
                if not text.endswith("\n"):
                    parts.append("\n")
                newlined = True
        return "".join(parts).strip()

    def adjust_style(self, fn: AdjustStyleFunc, reason: AdjustStyleReason) -> ContainerEntity:
        for child in self.children:
            child.adjust_style(fn, reason)
        self.style = fn(self.style)
        return self

    def clone(self) -> ContainerEntity:
        return ContainerEntity(
            tag=self.tag,
            style=self.style,
            block=self.block,
            default_height=self.default_height,
            children=[child.clone() for child in self.children],
            indent=self.indent,
        )

    def draw(self, screen: Surface, ctx: DrawContext) -> None:
        if not self.children:
            return
        width, _ = screen.size()
        proxy = ProxyScreen(
            screen, offset_x=self.indent, width=width - self.indent, style=self.style
        )
        prev_break = False
        for index, entity in enumerate(self.children):
            if index != 0 and entity.start_x == 0:
                proxy.offset_y += 1
            proxy.height = entity.height
            entity.draw(proxy, ctx)
            proxy.style = self.style
            proxy.offset_y += entity.height - 1
            is_break = isinstance(entity, BreakEntity)
            if prev_break and is_break:
                proxy.offset_y += 1
            prev_break = is_break

    def calculate_buffer(self, width: int, start_x: int, ctx: DrawContext) -> int:
        super().calculate_buffer(width, start_x, ctx)
        if self.children:
            self.height = 0
            child_start_x = self.start_x
            prev_break = False
            for entity in self.children:
                if entity.block or child_start_x == 0 or self.height == 0:
                    self.height += 1
                child_start_x = entity.calculate_buffer(width - self.indent, child_start_x, ctx)
                self.height += entity.height - 1
                is_break = isinstance(entity, BreakEntity)
                if prev_break and is_break:
                    self.height += 1
                prev_break = is_break
            if not self.block:
                return child_start_x
        return self.start_x


@dataclass(eq=False)
class BreakEntity(BaseEntity):
    """A line break; the layout work happens in containers."""

    tag: str = "br"
    block: bool = True

    def clone(self) -> BreakEntity:
        return BreakEntity()

    def plain_text(self) -> str:
        return "\n"

    def draw(self, screen: Surface, ctx: DrawContext) -> None:
        return None


HORIZONTAL_LINE_CHAR = "━"


@dataclass(eq=False)
class HorizontalLineEntity(BaseEntity):
    """A horizontal rule spanning the full width."""

    tag: str = "hr"
    block: bool = True
    default_height: int = 1

    def clone(self) -> HorizontalLineEntity:
        return HorizontalLineEntity()

    def plain_text(self) -> str:
        return HORIZONTAL_LINE_CHAR * 5

    def draw(self, screen: Surface, ctx: DrawContext) -> None:
        width, _ = screen.size()
        for x in range(width):
            screen.set_content(x, 0, HORIZONTAL_LINE_CHAR, self.style)