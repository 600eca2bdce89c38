# stkit

Building blocks of a simple X terminal as a plain Python library. It needs
nothing outside the standard library.

## What is inside

- `stkit.sixel` decodes DEC sixel graphics. You feed the body of a sixel
  sequence to `SixelParser.parse()` in chunks. If data arrives after an ESC,
  `parse()` raises `SixelError`. `finalize()` crops the image to the drawn
  area, rounded up to whole character cells. It then returns four bytes per
  pixel: bits 16-23, 8-15 and 0-7 of the palette colour, followed by a zero
  byte. The image of palette indices stays available as `parser.image`, a
  `SixelImage`. `set_default_color()` and `default_palette()` give the
  standard sixel colour table. `ParseState` names the states of the parser.
- `stkit.hls` provides `hls_to_rgb(hue, lum, sat)`. It converts a sixel HLS
  colour (blue at 0 degrees, red at 120, green at 240) to a packed RGB value.
- `stkit.boxdraw` covers the box-drawing, block, shade and braille glyphs.
  - `is_boxdraw()` tells whether a codepoint is drawn from geometry rather
    than from a font.
  - `boxdraw_index()` returns the 16-bit shape code of a codepoint.
  - `box_shapes()` turns a shape code and a cell into the `Rect`s that draw
    it.
  - `shade_color()` blends foreground and background colours for the shade
    blocks.
- `stkit.args` parses short options in the traditional style: `-abc`,
  `-fvalue`, `-f value`, and `--` to end the options. `parse_args(argv,
  takes_value)` returns a `ParsedArgs`, which holds the program name, the
  options in order and the operands. It raises `UsageError` when an option
  is missing its value.
- `stkit.urls` finds URLs in screen lines.
  - `find_url()` looks for the last `http://` or `https://` URL before a
    position, scanning upwards and wrapping around.
  - `find_first_url()` looks for the first URL on a row, scanning upwards.
  - Both return a `UrlMatch` or `None`.
  - `trim_url()` and `find_last_any()` are the helpers behind them.
- `stkit.config` holds the terminal settings.
  - `Config` is a dataclass with the default settings.
  - `default_colornames()` returns the default colour table.
  - `parse_resource_database()` reads X resource text into a dict.
  - `load_resources()` applies the matching `st.*` / `St.*` entries to a
    `Config`, or entries under another name and class if given, and returns
    the names of the resources it applied. `ResourceType` gives the type of
    each resource.
- `stkit.keys` holds the key table (`KEYS` of `Key` entries) and keysym
  values (`KEYSYMS`).
  - `find_key()` returns the string a key sends for a keysym, modifier state
    and keypad/cursor/Num Lock modes, or `None`.
  - `match_mask()` tests one table mask against a modifier state.
  - `Modifier` holds the X11 modifier bits.
- `stkit.actions` holds helper actions that start other programs.
  - `iso14755()` asks a picker command (dmenu by default) for a hex
    codepoint and returns its UTF-8 bytes. `parse_codepoint()` parses the
    answer.
  - `open_copied()` opens the copied text with an opener program.
  - `external_pipe()` pipes the screen to a command. `screen_text()` renders
    the rows that are piped.
  - `plumb()` runs a plumb command on a selection in a directory.
  - `process_cwd()` reads a process's working directory from `/proc`.

## Examples

```python
from stkit.sixel import SixelParser

parser = SixelParser(fgcolor=0xFFFFFF, bgcolor=0, use_private_register=True,
                     cell_width=8, cell_height=16)
parser.parse(b"#1;2;100;0;0~~~~")
pixels = parser.finalize()          # 4 bytes per pixel
width, height = parser.image.width, parser.image.height
```

```python
from stkit.keys import find_key, Modifier

sequence = find_key(0xFF52, Modifier.CONTROL, appkeypad=False,
                    appcursor=False, numlock=False)
print(repr(sequence))               # '\x1b[1;5A'
```

## What it does not do

The package has no terminal emulator of its own. It does not open a window,
run a pseudo-terminal or a shell, parse the terminal's escape sequences,
render fonts, or handle X events and the clipboard. It offers no command to
run. The modules are pieces a program of that kind can use.

## Tests

```
pip install -e .[test]
pytest
```