import pytest

from muksview.terminal import Color, Screen, Style
from muksview.tstring import Cell, TString, join


def test_plain_round_trip():
    text = TString.plain("héllo")
    assert str(text) == "héllo"
    assert len(text) == 5
    assert all(cell.style == Style() for cell in text)


def test_colored_and_styled_cells():
    red = TString.colored("ab", Color.RED)
    assert all(cell.style.fg == Color.RED for cell in red)
    style = Style().with_bold(True)
    bold = TString.styled("xy", style)
    assert [cell.style for cell in bold] == [style, style]


def test_append_returns_new_string():
    base = TString.plain("ab")
    longer = base.append_color("cd", Color.GREEN)
    assert str(longer) == "abcd"
    assert str(base) == "ab"
    assert longer[2].style.fg == Color.GREEN
    assert longer[0].style == Style()
    assert str(base.append("!")) == "ab!"


def test_append_style_and_tstring():
    style = Style().with_italic(True)
    result = TString.plain("a").append_style("b", style)
    assert result[1].style == style
    joined = TString.plain("a").append_tstring(TString.plain("b"), TString.plain("c"))
    assert str(joined) == "abc"


def test_prepend_variants():
    assert str(TString.plain("b").prepend("a")) == "ab"
    colored = TString.plain("b").prepend_color("a", Color.RED)
    assert colored[0].style.fg == Color.RED
    assert colored[1].style.fg == Color.DEFAULT
    style = Style().with_underline(True)
    assert TString.plain("b").prepend_style("a", style)[0].style == style
    assert str(TString.plain("b").prepend_tstring(TString.plain("a"))) == "ab"


def test_trim_space():
    assert str(TString.plain("  hi \t").trim_space()) == "hi"
    assert str(TString.plain("   ").trim_space()) == ""


def test_trim_left_and_right_with_predicate():
    text = TString.plain("xxabxx")
    is_x = lambda char: char == "x"
    assert str(text.trim_left(is_x)) == "abxx"
    assert str(text.trim_right(is_x)) == "xxab"
    assert str(text.trim(is_x)) == "ab"


def test_colorize_changes_in_place():
    text = TString.plain("abcdef")
    text.colorize(1, 2, Color.RED)
    assert [cell.style.fg for cell in text] == [
        Color.DEFAULT, Color.RED, Color.RED, Color.DEFAULT, Color.DEFAULT, Color.DEFAULT
    ]
    assert str(text) == "abcdef"


def test_colorize_out_of_range_raises():
    with pytest.raises(IndexError):
        TString.plain("abc").colorize(2, 5, Color.RED)


def test_adjust_style_full():
    text = TString.plain("abc")
    text.adjust_style_full(lambda style: style.with_bold(True))
    assert all(cell.style.bold for cell in text)


def test_clone_is_independent():
    text = TString.plain("abc")
    copy = text.clone()
    copy.colorize(0, 3, Color.RED)
    assert text[0].style.fg == Color.DEFAULT
    assert text == TString.plain("abc")


def test_truncate_wide_characters():
    text = TString.plain("日本語")
    assert text.rune_width() == 6
    assert str(text.truncate(5)) == "日本"
    assert str(text.truncate(6)) == "日本語"
    assert text.truncate(5).rune_width() <= 5


def test_index_and_count():
    text = TString.plain("a,b,c")
    assert text.index(",") == 1
    assert text.index(",", 2) == 3
    assert text.index("x") == -1
    assert text.count(",") == 2


def test_split_keeps_empty_parts_and_styles():
    text = TString.colored("a\n\nb", Color.RED)
    parts = text.split("\n")
    assert [str(part) for part in parts] == ["a", "", "b"]
    assert parts[2][0].style.fg == Color.RED
    assert len(parts) == text.count("\n") + 1


def test_join_inverts_split():
    text = TString.plain("one\ntwo\nthree")
    assert join(text.split("\n"), "\n") == text


def test_join_edge_cases():
    assert len(join([], ", ")) == 0
    assert str(join([TString.plain("a"), TString.plain("b")], "")) == "ab"
    assert str(join([TString.plain("a"), TString.plain("b")], ", ")) == "a, b"


def test_cell_draw_spans_wide_columns():
    screen = Screen(4, 1)
    width = Cell("日").draw(screen, 0, 0)
    assert width == 2
    assert screen.row_text(0) == "日日  "


def test_tstring_draw():
    screen = Screen(5, 1)
    TString.colored("hi", Color.GREEN).draw(screen, 1, 0)
    assert screen.row_text(0) == " hi  "
    assert screen.get_content(1, 0)[1].fg == Color.GREEN