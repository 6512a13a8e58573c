# fdfview

A wireframe viewer for `.fdf` height maps. A map is a plain text file in
which each line is a row of integer heights. Values are separated by spaces
and may carry one leading `+` or `-`. Every row must hold the same number of
values as the first one, and the first row must hold at least one. The
viewer draws the grid as an isometric wireframe in a 1920x1080 window and
colours each segment by the height of its starting point.

## Installation

```
pip install .
```

The viewer window uses pygame, which is installed as a dependency.

To run the test suite:

```
pip install ".[test]"
pytest
```

## Usage

```
fdfview maps/42.fdf
```

The program takes exactly one argument, and that argument must end in
`.fdf`.

- With no argument or more than one, it prints `Argument error` and exits
  with status 0.
- With a file name that does not end in `.fdf`, it prints `Format error`
  and exits with status 0.
- If the map cannot be read or is not a well-formed grid, it prints
  `Map error` and exits with status 1.

On start it prints a short summary of the controls. When the window closes
it prints `window closing`.

### Controls

Keys act when they are released.

| Key                 | Action                                                |
|---------------------|-------------------------------------------------------|
| Arrow keys          | Move the map by 30 pixels                             |
| `=` / `-`           | Zoom in and out (zooming out stops at a small scale)  |
| Numpad `+` / `-`    | Raise or flatten the relief                           |
| Numpad 6 / 4        | Turn around the horizontal axis (between 30° and 150°) |
| Numpad 2 / 8        | Tilt (between -70° and 70°)                           |
| Numpad `/`          | Reset to the centred isometric view                   |
| Numpad `*`          | Switch to the flat view                               |
| Escape              | Quit                                                  |

You can also quit by closing the window.

### Height colours

| Height           | Colour       |
|------------------|--------------|
| -25 and below    | dark red     |
| -24 to -15       | red          |
| -14 to -5        | orange       |
| -4 to 4          | light yellow |
| 5 to 14          | yellow-green |
| 15 to 24         | green        |
| 25 and above     | dark green   |

## Library use

The building blocks can be imported on their own.

- `fdfview.mapfile.load_map(path)` reads a map file and returns its grid of
  heights as a list of rows. `parse_lines(lines)` does the same for lines
  already in memory, and `count_values(line)` counts the values on one
  line. All of them raise `MapError` on malformed input.
- `fdfview.view.View` holds the camera state: offsets `inc_x` and `inc_y`,
  `scale`, `scale_z` (relief) and the angles `angle_x` and `angle_y` in
  degrees. `View.from_map(columns, rows)` builds the centred isometric
  view. Its methods `translate`, `zoom`, `relief`, `rotate` and
  `change_view` take key codes from the `Key` enum. `initial_scale` gives
  the largest scale that fits a map on screen.
- `fdfview.render.draw(view, grid, put_pixel)` projects the grid and draws
  it through any `put_pixel(x, y, color)` callback.
  - `project(view, x, y, z)` gives the screen position of one grid point.
  - `trace_line(put_pixel, x0, y0, x1, y1, color)` draws one segment and
    skips points off the 1920x1080 screen.
  - `line_points(x0, y0, x1, y1)` yields the pixels of a segment.
  - `height_color(z)` gives the colour used for a height.
- `fdfview.app.Viewer(grid, display)` connects a grid, a view and a window
  on a `Display`, and redraws after each handled key. `check_arguments`
  checks a command line. `main(argv=None)` is the `fdfview` command.
- `fdfview.display.Display` and `fdfview.display.Window` form a small,
  event-driven window layer that is held in memory.
  - `Display` provides `new_window`, `destroy_window`, `post`, `loop`,
    `loop_hook`, `loop_end` and `screen_size`.
  - `Window` provides `pixel_put`, `get_pixel`, `put_image`, `string_put`,
    `clear`, `mouse_move` and `mouse_pos`.
  - Windows take event hooks through `hook`, `key_hook`, `mouse_hook` and
    `expose_hook`. Events are `Event` values typed by `EventType`.
- `fdfview.image.Image(width, height, big_endian=False)` is a 32-bit
  framebuffer with `put_pixel` and `get_pixel`. `mask_shifts` and
  `color_value` convert `0xRRGGBB` colours for shallower visuals.
- `fdfview.xpm.xpm_file_to_image(path)` and `fdfview.xpm.xpm_to_image(lines)`
  load XPM pictures into images. They raise `XpmError` on bad data.
- `fdfview.colors.lookup_color(name)` resolves X11 colour names, ignoring
  case. `"none"` gives -1.

## Limitations

- `Display` and `Window` do not open anything on screen. They keep pixels,
  hooks and the event queue in memory. Only the `fdfview` command shows a
  real window, through pygame.
- `Window.string_put` records the text, its position and its colour in
  `Window.texts`. It does not render glyphs into the pixel buffer.
- There is no font selection, no cursor hiding, no full-screen mode and no
  key auto-repeat control.
- `Display.loop` without a loop hook returns as soon as the event queue is
  empty, since nothing else can add events.