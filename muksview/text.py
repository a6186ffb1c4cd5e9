"""Plain text entities and the word-wrapping used to lay them out."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .entity import BaseEntity, DrawContext
from .terminal import Surface, string_width, truncate, write_line

# ASCII punctuation and ASCII whitespace, as used for line-break boundaries.
_PUNCT = r"[!-/:-@\[-`{-~]"
_SPACE = r"[\t\n\f\r ]"

_BOUNDARY_PATTERN = re.compile(rf"({_PUNCT}{_SPACE}*|{_SPACE}+)")
_BARE_BOUNDARY_PATTERN = re.compile(rf"({_SPACE}+)")
_SPACE_PATTERN = re.compile(rf"{_SPACE}+")


def trim(extract: str, full: str, bare: bool) -> tuple[str, bool]:
    """Shorten ``extract`` (a prefix of ``full``) to the last word boundary.

    Returns the new prefix and whether it ends at a word boundary.
    """
    if len(extract) == len(full):
        return extract, True
    spaces = _SPACE_PATTERN.match(full, len(extract))
    if spaces:
        extract = full[: spaces.end()]
    pattern = _BARE_BOUNDARY_PATTERN if bare else _BOUNDARY_PATTERN
    matches = list(pattern.finditer(extract))
    if matches:
        until = matches[-1].end()
        if until < len(extract):
            return extract[:until], True
    return extract, bool(extract) and extract[-1] == " "


@dataclass(eq=False)
class TextEntity(BaseEntity):
    """A run of text wrapped into lines at render time."""

    tag: str = "text"
    text: str = ""
    buffer: list[str] = field(default_factory=list, init=False, repr=False)

    def is_empty(self) -> bool:
        return not self.text

    def clone(self) -> TextEntity:
        return TextEntity(
            tag=self.tag,
            style=self.style,
            block=self.block,
            default_height=self.default_height,
            text=self.text,
        )

    def plain_text(self) -> str:
        return self.text

    def draw(self, screen: Surface, ctx: DrawContext) -> None:
        width, _ = screen.size()
        x = self.start_x
        for y, line in enumerate(self.buffer):
            write_line(screen, line, x, y, width, self.style)
            x = 0

    def calculate_buffer(self, width: int, start_x: int, ctx: DrawContext) -> int:
        super().calculate_buffer(width, start_x, ctx)
        if not self.text:
            return self.start_x
        self.height = 0
        self.prev_width = width
        lines: list[str] = []
        text = self.text
        text_start_x = self.start_x
        while True:
            extract = truncate(text, width - text_start_x)
            extract, word_wrapped = trim(extract, text, ctx.bare_messages)
            if not word_wrapped and text_start_x > 0:
                lines.append("")
                text_start_x = 0
                continue
            if not extract:
                # Nothing fits even on a fresh line; emit one character to make progress.
                extract = text[:1]
            lines.append(extract)
            text = text[len(extract):]
            if not text:
                self.buffer = lines
                self.height += len(lines)
                if self.block:
                    return 0
                return text_start_x + string_width(extract)
            text_start_x = 0