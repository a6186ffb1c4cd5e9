from datetime import datetime

import pytest

from muksview.message import (
    DisplayPreferences,
    OutgoingState,
    ReactionItem,
    UIMessage,
    unix_to_time,
)
from muksview.terminal import Color, Screen


class FakeRenderer:
    def __init__(self, lines=("hello",)):
        self.lines = list(lines)
        self.widths = []

    def draw(self, screen, msg):
        for y, line in enumerate(self.lines):
            for x, char in enumerate(line):
                screen.set_content(x, y, char, screen_style())

    def notification_content(self):
        return "notify:" + " ".join(self.lines)

    def plain_text(self):
        return "\n".join(self.lines)

    def calculate_buffer(self, prefs, width, msg):
        self.widths.append(width)

    def height(self):
        return len(self.lines)

    def clone(self):
        return FakeRenderer(self.lines)


def screen_style():
    from muksview.terminal import Style

    return Style()


def make(**kwargs):
    kwargs.setdefault("renderer", FakeRenderer())
    return UIMessage(**kwargs)


@pytest.mark.parametrize(
    "state,msgtype,expected",
    [
        (OutgoingState.LOCAL_ECHO, "m.text", "Sending..."),
        (OutgoingState.SEND_FAIL, "m.text", "Error"),
        (OutgoingState.DEFAULT, "m.emote", ""),
        (OutgoingState.DEFAULT, "m.text", "Alice"),
    ],
)
def test_sender(state, msgtype, expected):
    assert make(sender_name="Alice", state=state, type=msgtype).sender() == expected


def test_sender_color_rules():
    own = Color.rgb(1, 2, 3)
    assert make(state=OutgoingState.LOCAL_ECHO).sender_color() == Color.GRAY
    assert make(state=OutgoingState.SEND_FAIL).sender_color() == Color.RED
    member = make(type="m.room.member", sender_name="Bob", name_color=lambda n: Color.rgb(len(n), 0, 0))
    assert member.sender_color() == Color.rgb(3, 0, 0)
    assert make(is_service=True, default_sender_color=own).sender_color() == Color.GRAY
    assert make(default_sender_color=own).sender_color() == own


def test_text_color_rules():
    assert make(state=OutgoingState.SEND_FAIL, is_highlight=True).text_color() == Color.RED
    assert make(type="m.notice").text_color() == Color.GRAY
    assert make(is_highlight=True).text_color() == Color.YELLOW
    assert make(type="m.room.member").text_color() == Color.GREEN
    assert make().text_color().is_default


def test_timestamp_color():
    assert make(is_service=True).timestamp_color() == Color.GRAY
    assert make(state=OutgoingState.LOCAL_ECHO).timestamp_color() == Color.GRAY
    assert make().timestamp_color().is_default


def test_heights():
    reply = make(renderer=FakeRenderer(["a", "b"]))
    msg = make(renderer=FakeRenderer(["x", "y", "z"]), reply_to=reply)
    assert msg.reply_height() == 1 + reply.height()
    assert msg.reaction_height() == 0
    msg.add_reaction("+")
    assert msg.reaction_height() == 1
    assert msg.height() == msg.reply_height() + 3 + 1


def test_add_reaction_counts_and_sorts():
    msg = make()
    msg.add_reaction("b")
    msg.add_reaction("a")
    msg.add_reaction("b")
    assert [(r.key, r.count) for r in msg.reactions] == [("a", 1), ("b", 2)]


def test_reaction_item_str():
    assert str(ReactionItem("ok", 2)) == "2×ok"


def test_format_time_and_date():
    msg = make(timestamp=datetime(2020, 1, 2, 3, 4, 5))
    assert msg.format_time() == "03:04:05"
    assert msg.format_date() == "January  2, 2020"


def test_same_date():
    a = make(timestamp=datetime(2021, 5, 6, 1, 0, 0))
    b = make(timestamp=datetime(2021, 5, 6, 23, 0, 0))
    c = make(timestamp=datetime(2021, 5, 7, 1, 0, 0))
    assert a.same_date(b)
    assert not a.same_date(c)


def test_message_id_falls_back_to_txn():
    assert make(txn_id="txn1").message_id() == "txn1"
    assert make(txn_id="txn1", event_id="$ev").message_id() == "$ev"


def test_clone_drops_reply_and_reactions():
    msg = make(reply_to=make(), sender_name="Carol")
    msg.add_reaction("x")
    dup = msg.clone()
    assert dup.reply_to is None
    assert dup.reactions == []
    assert dup.renderer is not msg.renderer
    assert dup.sender_name == "Carol"
    assert msg.reactions[0].key == "x"


def test_calculate_buffer_narrows_reply():
    reply = make()
    msg = make(reply_to=reply)
    msg.calculate_buffer(DisplayPreferences(), 30)
    assert msg.renderer.widths == [30]
    assert reply.renderer.widths == [29]


def test_plain_and_notification_delegate():
    msg = make(renderer=FakeRenderer(["one", "two"]))
    assert msg.plain_text() == "one\ntwo"
    assert msg.notification_content() == "notify:one two"


def test_draw_reply_layout():
    screen = Screen(30, 5)
    reply = make(renderer=FakeRenderer(["quoted"]), sender_name="Dan")
    msg = make(renderer=FakeRenderer(["body"]), reply_to=reply)
    msg.draw(screen)
    assert screen.row_text(0)[1:12] == "In reply to"
    assert screen.row_text(0)[13:16] == "Dan"
    assert screen.row_text(1)[0] == "▊"
    assert screen.row_text(1)[1:7] == "quoted"
    assert screen.row_text(2).startswith("body")


def test_draw_reactions_on_last_row():
    screen = Screen(20, 2)
    msg = make()
    msg.add_reaction("y")
    msg.draw(screen)
    assert screen.row_text(1).startswith(str(ReactionItem("y", 1)))
    assert screen.row_text(0).startswith("hello")


def test_draw_selected_highlights_background():
    screen = Screen(10, 1)
    msg = make(is_selected=True)
    msg.draw(screen)
    assert all(screen.get_content(x, 0)[1].bg == Color.DARK_GREEN for x in range(10))


def test_unix_to_time():
    assert unix_to_time(1_600_000_000_000).timestamp() == 1_600_000_000
    before = datetime.now().astimezone()
    now = unix_to_time(0)
    assert abs((now - before).total_seconds()) < 5