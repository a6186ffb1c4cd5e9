"""Message renderers: wrapped plain text, redacted placeholders and HTML trees."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from .entity import AdjustStyleReason, DrawContext
from .message import DisplayPreferences, UIMessage
from .terminal import Color, Style, Surface
from .tstring import TString

# ASCII punctuation and whitespace used to find line-break boundaries.
_PUNCT = r"[!-/:-@\[-`{-~]"
_SPACE = r"[\t\n\f\r ]"
_BOUNDARY_PATTERN = re.compile(rf"({_PUNCT}{_SPACE}*|{_SPACE}+)")
_BARE_BOUNDARY_PATTERN = re.compile(rf"({_SPACE}+)")
_SPACE_PATTERN = re.compile(rf"{_SPACE}+")

REDACTION_CHAR = "█"
REDACTION_MAX_WIDTH = 40
REDACTION_STYLE = Style().with_fg(Color.rgb(50, 0, 0))


def _match_boundary(bare: bool, extract: TString) -> TString:
    pattern = _BARE_BOUNDARY_PATTERN if bare else _BOUNDARY_PATTERN
    matches = list(pattern.finditer(str(extract)))
    if matches:
        until = matches[-1].end()
        if until < len(extract):
            return extract[:until]
    return extract


def calculate_buffer_with_text(
    prefs: DisplayPreferences, text: TString, width: int, msg: UIMessage
) -> list[TString]:
    """Split ``text`` into lines at most ``width`` cells wide, breaking at word boundaries."""
    if width < 2:
        return []

    if prefs.bare_message_view:
        prefix = TString.plain(msg.format_time())
        sender = msg.sender()
        if sender:
            prefix = prefix + TString.colored(f" <{sender}> ", msg.sender_color())
        else:
            prefix = prefix.append(" ")
        text = prefix + text

    buffer: list[TString] = []
    newlines = 0
    for line in text.split("\n"):
        if not line and newlines < 1:
            buffer.append(TString())
            newlines += 1
        else:
            newlines = 0
        while line:
            extract = line.truncate(width)
            if len(extract) < len(line):
                rest = str(line[len(extract):])
                spaces = _SPACE_PATTERN.match(rest)
                if spaces:
                    extract = line[: len(extract) + spaces.end()]
                extract = _match_boundary(prefs.bare_message_view, extract)
            if not extract:
                extract = line[:1]
            buffer.append(extract)
            line = line[len(extract):]
    return buffer


class ExpandedTextMessage:
    """Renders a styled string, wrapped to the available width."""

    def __init__(self, text: TString) -> None:
        self.text = text
        self.buffer: list[TString] = []

    def clone(self) -> ExpandedTextMessage:
        return ExpandedTextMessage(self.text.clone())

    def notification_content(self) -> str:
        return str(self.text)

    def plain_text(self) -> str:
        return str(self.text)

    def __str__(self) -> str:
        return f'ExpandedTextMessage(text="{self.text}")'

    def calculate_buffer(self, prefs: DisplayPreferences, width: int, msg: UIMessage) -> None:
        self.buffer = calculate_buffer_with_text(prefs, self.text, width, msg)

    def height(self) -> int:
        return len(self.buffer)

    def draw(self, screen: Surface, msg: Optional[UIMessage] = None) -> None:
        for y, line in enumerate(self.buffer):
            line.draw(screen, 0, y)


def new_service_message(text: str) -> UIMessage:
    """A message from the client itself, timestamped now."""
    return UIMessage(
        renderer=ExpandedTextMessage(TString.plain(text)),
        sender_id="*",
        sender_name="*",
        timestamp=datetime.now().astimezone(),
        is_service=True,
    )


def new_date_change_message(text: str) -> UIMessage:
    """A green service message timestamped at today's midnight."""
    midnight = datetime.now().astimezone().replace(hour=0, minute=0, second=0, microsecond=0)
    return UIMessage(
        renderer=ExpandedTextMessage(TString.colored(text, Color.GREEN)),
        sender_id="*",
        sender_name="*",
        timestamp=midnight,
        is_service=True,
    )


class RedactedMessage:
    """Renders a removed message as a single bar of block characters."""

    def clone(self) -> RedactedMessage:
        return RedactedMessage()

    def notification_content(self) -> str:
        return ""

    def plain_text(self) -> str:
        return "[redacted]"

    def __str__(self) -> str:
        return "RedactedMessage()"

    def calculate_buffer(self, prefs: DisplayPreferences, width: int, msg: UIMessage) -> None:
        return None

    def height(self) -> int:
        return 1

    def draw(self, screen: Surface, msg: Optional[UIMessage] = None) -> None:
        width, _ = screen.size()
        for x in range(min(width, REDACTION_MAX_WIDTH)):
            screen.set_content(x, 0, REDACTION_CHAR, REDACTION_STYLE)


class HTMLMessage:
    """Renders a parsed HTML entity tree."""

    def __init__(self, root) -> None:
        self.root = root
        self.text_color = Color.DEFAULT

    def clone(self) -> HTMLMessage:
        return HTMLMessage(self.root.clone())

    def notification_content(self) -> str:
        return self.root.plain_text()

    def plain_text(self) -> str:
        return self.root.plain_text()

    def __str__(self) -> str:
        return str(self.root)

    def calculate_buffer(self, prefs: DisplayPreferences, width: int, msg: UIMessage) -> None:
        if width < 2:
            return
        self.text_color = msg.text_color()
        ctx = DrawContext(is_selected=msg.is_selected, bare_messages=prefs.bare_message_view)
        self.root.calculate_buffer(width, 0, ctx)

    def height(self) -> int:
        return self.root.height

    def draw(self, screen, msg: UIMessage) -> None:
        if not self.text_color.is_default:
            color = self.text_color

            def tint(style: Style) -> Style:
                return style.with_fg(color) if style.fg.is_default else style

            self.root.adjust_style(tint, AdjustStyleReason.NORMAL)
        screen.clear()
        self.root.draw(screen, DrawContext(is_selected=msg.is_selected))