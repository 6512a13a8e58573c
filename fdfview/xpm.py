"""Reading XPM pixmaps into images."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator

from fdfview.colors import lookup_color
from fdfview.image import Image

_TRANSPARENT = 0xFF000000
_NAME_LIMIT = 63
_WORD_SPLIT = re.compile(r"[ \t]+")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read as an image."""


def split_words(text: str) -> list[str]:
    """Split text into words separated by spaces and tabs."""
    return [word for word in _WORD_SPLIT.split(text) if word]


def find_outside_quotes(text: str, needle: str) -> int:
    """Return the index of needle outside double-quoted runs, or -1."""
    quoted = False
    for pos, char in enumerate(text[: len(text) - len(needle) + 1]):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, pos):
            return pos
    return -1


def strip_comments(text: str) -> str:
    """Blank out /* */ and // comments found outside quotes, keeping offsets."""
    while (begin := find_outside_quotes(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        stop = len(text) if end == -1 else end + 2
        text = text[:begin] + " " * (stop - begin) + text[stop:]
    while (begin := find_outside_quotes(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        stop = len(text) if end == -1 else end + 1
        text = text[:begin] + " " * (stop - begin) + text[stop:]
    return text


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings."""
    pos = 0
    while (start := text.find('"', pos)) != -1:
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def _atoi(word: str) -> int:
    match = _INT_PREFIX.match(word)
    return int(match.group(1)) if match else 0


def _hex_value(text: str) -> int:
    match = _HEX_PREFIX.match(text)
    if not match:
        return 0
    value = int(match.group(2), 16)
    return -value if match.group(1) == "-" else value


def text_rgb(name: str, end: str | None) -> int:
    """Return the colour for an XPM colour word and the word after it.

    "#RRGGBB" is read as hexadecimal. Otherwise the two words are joined and
    looked up by name; "none" gives -1 and unknown names give 0.
    """
    if name.startswith("#"):
        return _hex_value(name[1:])
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _read_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"bad XPM header: {line!r}")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise XpmError(f"bad XPM header: {line!r}")
    return width, height, ncolors, cpp


def _read_color(line: str, cpp: int) -> tuple[str, int]:
    words = split_words(line[cpp:])
    try:
        index = words.index("c") + 1
    except ValueError:
        raise XpmError(f"colour definition without 'c' key: {line!r}") from None
    if index >= len(words):
        raise XpmError(f"colour definition without a value: {line!r}")
    end = words[index + 1] if index + 1 < len(words) else None
    return line[:cpp], text_rgb(words[index], end)


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from XPM strings: header, colour definitions, pixel rows."""
    rows = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(rows)
        except StopIteration:
            raise XpmError(f"XPM data ends before the {what}") from None

    width, height, ncolors, cpp = _read_header(next_line("header"))
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        key, color = _read_color(next_line("colour definitions"), cpp)
        if cpp <= 2:
            palette[key] = color
        else:
            palette.setdefault(key, color)

    image = Image(width, height)
    for y in range(height):
        row = next_line("pixel rows")
        for x in range(width):
            color = palette.get(row[cpp * x:cpp * (x + 1)], 0)
            image.put_pixel(x, y, _TRANSPARENT if color == -1 else color)
    return image


def xpm_file_to_image(path: str | Path) -> Image:
    """Read an XPM file into an image."""
    text = Path(path).read_text(encoding="latin-1")
    return parse_xpm(quoted_lines(strip_comments(text)))


def xpm_to_image(xpm_data: Iterable[str]) -> Image:
    """Build an image from in-memory XPM strings."""
    return parse_xpm(xpm_data)