# muksview

Layout and drawing of chat messages on a grid of terminal character cells.

muksview provides:

- `muksview.terminal`: `Color` and the immutable cell `Style`, an in-memory
  `Screen`, a clipping `ProxyScreen` window onto another screen, and
  display-width helpers (`rune_width`, `string_width`, `truncate`,
  `write_line`).
- `muksview.tstring`: `TString`, a string in which every character (`Cell`)
  carries its own style, with appending, prepending, splitting, trimming,
  truncation to a display width and in-place colourising; `join` concatenates
  several of them with a separator.
- `muksview.entity`, `muksview.text`, `muksview.blocks`: a tree of rich-text
  entities (`ContainerEntity`, `TextEntity`, `BreakEntity`,
  `HorizontalLineEntity`, `BlockquoteEntity`, `CodeBlockEntity`,
  `ListEntity`, `SpoilerEntity`). Each entity can word-wrap itself to a width
  (`calculate_buffer`), report its `height`, produce `plain_text()`, have its
  style adjusted recursively (`adjust_style`) and draw itself on a screen.
  Spoilers are drawn masked unless the `DrawContext` says the message is
  selected.
- `muksview.colors`: `parse_color` for `#rgb`, `#rrggbb` and CSS colour names.
- `muksview.message`: `UIMessage`, with sender text and colours that depend on
  delivery state (`OutgoingState`), reactions (`ReactionItem`), an optional
  replied-to message, time and date formatting, and drawing; plus
  `DisplayPreferences` and `unix_to_time`.
- `muksview.renderers`: the renderers a `UIMessage` draws with:
  `ExpandedTextMessage` (a `TString` wrapped at word boundaries by
  `calculate_buffer_with_text`), `HTMLMessage` (an entity tree) and
  `RedactedMessage` (a bar of block characters). `new_service_message` and
  `new_date_change_message` build client-side messages.

## Installing

    pip install .

## Example

Building and drawing an entity tree:

    from muksview.entity import ContainerEntity, DrawContext
    from muksview.terminal import Color, Screen
    from muksview.text import TextEntity

    world = TextEntity(text="world")
    world.adjust_style(lambda style: style.with_fg(Color.GREEN).with_bold(True), None)
    root = ContainerEntity(tag="p", children=[TextEntity(text="hello "), world])

    print(root.plain_text())          # hello world

    root.calculate_buffer(40, 0, DrawContext())
    screen = Screen(40, root.height)
    root.draw(screen, DrawContext())
    print(screen.row_text(0).rstrip())  # hello world

Laying out a service message:

    from muksview.message import DisplayPreferences
    from muksview.renderers import new_service_message
    from muksview.terminal import Screen

    msg = new_service_message("Connected to the server")
    msg.calculate_buffer(DisplayPreferences(), 12)
    screen = Screen(12, msg.height())
    msg.draw(screen)
    for y in range(msg.height()):
        print(screen.row_text(y).rstrip())

## What it does not do

muksview does not read message HTML: entity trees are built by the caller
from the entity classes. It has no syntax highlighting of code blocks, no
network client, no storage and no interactive screen; drawing goes to the
in-memory `Screen`, whose rows the caller reads back with `row_text`.

## Running the tests

    pip install ".[test]"
    pytest