import pytest

from muksview.terminal import (
    Color,
    ProxyScreen,
    Screen,
    Style,
    rune_width,
    string_width,
    truncate,
    write_line,
)


def test_default_color_hex():
    assert Color.DEFAULT.hex() == -1
    assert Color.DEFAULT.is_default


def test_rgb_round_trip_matches_named():
    assert Color.rgb(0xFF, 0x00, 0x00) == Color.RED
    assert Color.rgb(0xFF, 0x00, 0x00).hex() == Color.RED.hex()
    assert not Color.RED.is_default


def test_rgb_components_masked():
    assert Color.rgb(0x1FF, 0x100, 0x100) == Color.rgb(0xFF, 0, 0)


def test_style_builders_return_new_style():
    base = Style()
    bold = base.with_bold(True)
    assert bold.bold
    assert not base.bold
    styled = base.with_fg(Color.GREEN).with_bg(Color.GRAY).with_italic(True)
    assert styled.fg == Color.GREEN
    assert styled.bg == Color.GRAY
    assert styled.italic
    assert base.with_underline(True).underline
    assert base.with_strikethrough(True).strikethrough


def test_style_hyperlink():
    style = Style().with_hyperlink("https://example.com", "ev-0")
    assert style.url == "https://example.com"
    assert style.url_id == "ev-0"


def test_screen_set_and_get():
    screen = Screen(4, 2)
    style = Style().with_bold(True)
    screen.set_content(1, 1, "x", style)
    assert screen.get_content(1, 1) == ("x", style)
    assert screen.row_text(1) == " x  "
    assert screen.size() == (4, 2)


def test_screen_ignores_out_of_bounds():
    screen = Screen(2, 1)
    screen.set_content(5, 0, "x", Style())
    screen.set_content(-1, 0, "x", Style())
    assert screen.row_text(0) == "  "
    assert screen.get_content(9, 9) == (" ", Style())


def test_screen_row_out_of_range():
    with pytest.raises(IndexError):
        Screen(2, 1).row_text(3)


def test_screen_fill_and_clear():
    screen = Screen(3, 2)
    screen.fill("#", Style())
    assert screen.row_text(0) == "###"
    assert screen.row_text(1) == "###"
    screen.clear()
    assert screen.row_text(0) == "   "


def test_proxy_offsets_and_clips():
    screen = Screen(5, 3)
    proxy = ProxyScreen(screen, offset_x=1, offset_y=1, width=2, height=1)
    proxy.set_content(0, 0, "a", Style())
    proxy.set_content(1, 0, "b", Style())
    proxy.set_content(2, 0, "c", Style())
    proxy.set_content(0, 1, "d", Style())
    assert screen.row_text(1) == " ab  "
    assert screen.row_text(2) == "     "
    assert proxy.get_content(0, 0)[0] == "a"
    assert proxy.size() == (2, 1)


def test_proxy_fill_and_clear_use_own_area():
    screen = Screen(4, 2)
    marked = Style().with_bg(Color.DARK_GREEN)
    proxy = ProxyScreen(screen, offset_x=2, width=2, height=2, style=marked)
    proxy.fill("*", Style())
    assert screen.row_text(0) == "  **"
    proxy.clear()
    assert screen.row_text(0) == "    "
    assert screen.get_content(2, 0)[1] == marked


def test_rune_widths():
    assert rune_width("a") == 1
    assert rune_width("あ") == 2
    assert rune_width("\u0301") == 0
    assert string_width("aあ") == rune_width("a") + rune_width("あ")


def test_truncate():
    assert truncate("hello", 10) == "hello"
    assert truncate("hello", 3) == "hel"
    assert truncate("ああ", 3) == "あ"
    assert string_width(truncate("あいう", 5)) <= 5


def test_write_line_stops_at_max_width():
    screen = Screen(6, 1)
    style = Style().with_bold(True)
    write_line(screen, "abcdef", 1, 0, 3, style)
    assert screen.row_text(0) == " abc  "
    assert screen.get_content(1, 0) == ("a", style)


def test_write_line_wide_chars_fill_both_cells():
    screen = Screen(4, 1)
    write_line(screen, "あ", 0, 0, 4, Style())
    assert screen.get_content(0, 0)[0] == "あ"
    assert screen.get_content(1, 0)[0] == "あ"
    assert screen.get_content(2, 0)[0] == " "