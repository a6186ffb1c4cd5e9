"""The displayable message model: sender, colours, reactions, replies and layout."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional, Protocol

from .terminal import Color, ProxyScreen, Style, Surface, string_width, truncate, write_line

TIME_FORMAT = "%H:%M:%S"
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
REPLY_BAR_CHAR = "▊"
REACTION_STYLE = Style().with_fg(Color.WHITE).with_bg(Color.DARK_GREEN)


class OutgoingState(enum.Enum):
    """Delivery state of a message the local user sent."""

    DEFAULT = ""
    LOCAL_ECHO = "local_echo"
    SEND_FAIL = "fail"


@dataclass
class DisplayPreferences:
    """User preferences that influence how messages are laid out."""

    bare_message_view: bool = False
    disable_images: bool = False
    disable_downloads: bool = False
    enable_inline_urls: bool = False
    disable_show_urls: bool = False


@dataclass
class ReactionItem:
    """One reaction key and how many times it was used."""

    key: str
    count: int = 1

    def __str__(self) -> str:
        return f"{self.count}×{self.key}"


class MessageRenderer(Protocol):
    def draw(self, screen: Surface, msg: "UIMessage") -> None: ...

    def notification_content(self) -> str: ...

    def plain_text(self) -> str: ...

    def calculate_buffer(self, prefs: DisplayPreferences, width: int, msg: "UIMessage") -> None: ...

    def height(self) -> int: ...

    def clone(self) -> "MessageRenderer": ...


def _default_name_color(_name: str) -> Color:
    return Color.DEFAULT


def unix_to_time(unix_ms: int) -> datetime:
    """Convert a millisecond Unix timestamp to local time; 0 means now."""
    if unix_ms == 0:
        return datetime.now().astimezone()
    return datetime.fromtimestamp(unix_ms / 1000).astimezone()


@dataclass(eq=False)
class UIMessage:
    """A message as shown in the timeline, drawn by its renderer."""

    renderer: MessageRenderer
    event_id: str = ""
    txn_id: str = ""
    type: str = ""
    sender_id: str = ""
    sender_name: str = ""
    default_sender_color: Color = field(default_factory=Color)
    timestamp: datetime = field(default_factory=lambda: datetime.now().astimezone())
    state: OutgoingState = OutgoingState.DEFAULT
    is_highlight: bool = False
    is_service: bool = False
    is_selected: bool = False
    edited: bool = False
    event: Any = None
    reply_to: Optional["UIMessage"] = None
    reactions: list[ReactionItem] = field(default_factory=list)
    # Colour for a display name, used for membership events.
    name_color: Callable[[str], Color] = _default_name_color

    def sender(self) -> str:
        """The text shown as the sender of this message."""
        if self.state is OutgoingState.LOCAL_ECHO:
            return "Sending..."
        if self.state is OutgoingState.SEND_FAIL:
            return "Error"
        if self.type == "m.emote":
            return ""
        return self.sender_name

    def notification_sender_name(self) -> str:
        return self.sender_name

    def notification_content(self) -> str:
        return self.renderer.notification_content()

    def _state_color(self) -> Color:
        if self.state is OutgoingState.LOCAL_ECHO:
            return Color.GRAY
        if self.state is OutgoingState.SEND_FAIL:
            return Color.RED
        return Color.DEFAULT

    def sender_color(self) -> Color:
        state_color = self._state_color()
        if not state_color.is_default:
            return state_color
        if self.type == "m.room.member":
            return self.name_color(self.sender_name)
        if self.is_service:
            return Color.GRAY
        return self.default_sender_color

    def text_color(self) -> Color:
        state_color = self._state_color()
        if not state_color.is_default:
            return state_color
        if self.is_service or self.type == "m.notice":
            return Color.GRAY
        if self.is_highlight:
            return Color.YELLOW
        if self.type == "m.room.member":
            return Color.GREEN
        return Color.DEFAULT

    def timestamp_color(self) -> Color:
        if self.is_service:
            return Color.GRAY
        return self._state_color()

    def reply_height(self) -> int:
        return 1 + self.reply_to.height() if self.reply_to is not None else 0

    def reaction_height(self) -> int:
        return 1 if self.reactions else 0

    def height(self) -> int:
        return self.reply_height() + self.renderer.height() + self.reaction_height()

    def format_time(self) -> str:
        return self.timestamp.strftime(TIME_FORMAT)

    def format_date(self) -> str:
        ts = self.timestamp
        return f"{_MONTHS[ts.month - 1]} {ts.day:2d}, {ts.year}"

    def same_date(self, other: UIMessage) -> bool:
        return self.timestamp.date() == other.timestamp.date()

    def message_id(self) -> str:
        return self.event_id or self.txn_id

    def add_reaction(self, key: str) -> None:
        for reaction in self.reactions:
            if reaction.key == key:
                reaction.count += 1
                break
        else:
            self.reactions.append(ReactionItem(key, 1))
        self.reactions.sort(key=lambda reaction: reaction.key)

    def draw_reactions(self, screen: Surface) -> None:
        if not self.reactions:
            return
        width, height = screen.size()
        row = ProxyScreen(screen, offset_x=0, offset_y=height - 1, width=width, height=1)
        x = 0
        for reaction in self.reactions:
            text = truncate(str(reaction), width - x)
            write_line(row, text, x, 0, width - x, REACTION_STYLE)
            x += string_width(text) + 1
            if x >= width:
                break

    def draw_reply(self, screen: Surface) -> Surface:
        """Draw the replied-to message; return the area left for this message."""
        if self.reply_to is None:
            return screen
        width, height = screen.size()
        reply_height = self.reply_to.height()
        write_line(screen, "In reply to", 1, 0, width - 1, Style().with_fg(Color.GREEN))
        write_line(
            screen, self.reply_to.sender_name, 13, 0, width - 13,
            Style().with_fg(self.reply_to.sender_color()),
        )
        for y in range(1 + reply_height):
            screen.set_content(0, y, REPLY_BAR_CHAR, Style())
        reply_screen = ProxyScreen(screen, offset_x=1, offset_y=1, width=width - 1, height=reply_height)
        self.reply_to.draw(reply_screen)
        return ProxyScreen(
            screen, offset_x=0, offset_y=reply_height + 1,
            width=width, height=height - reply_height - 1,
        )

    def draw(self, screen: Surface) -> None:
        area = self.draw_reply(screen)
        self.renderer.draw(area, self)
        self.draw_reactions(area)
        if self.is_selected:
            width, height = screen.size()
            for x in range(width):
                for y in range(height):
                    char, style = screen.get_content(x, y)
                    if style.bg.is_default:
                        screen.set_content(x, y, char, style.with_bg(Color.DARK_GREEN))

    def clone(self) -> UIMessage:
        """Copy this message without its reply and reactions."""
        duplicate = copy.copy(self)
        duplicate.reply_to = None
        duplicate.reactions = []
        duplicate.renderer = self.renderer.clone()
        return duplicate

    def calculate_buffer(self, preferences: DisplayPreferences, width: int) -> None:
        self.renderer.calculate_buffer(preferences, width, self)
        if self.reply_to is not None:
            self.reply_to.calculate_buffer(preferences, width - 1)

    def plain_text(self) -> str:
        return self.renderer.plain_text()