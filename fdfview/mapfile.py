"""Reading height maps: lines of whitespace-separated integers."""

from __future__ import annotations

import re
from os import PathLike
from typing import Iterable

_SEPARATORS = " \n"
_SIGNS = "+-"
_DIGITS = "0123456789"
_ATOI = re.compile(r"[\t\n\v\f\r ]*([+-]?)([0-9]*)")


class MapError(ValueError):
    """Raised when a map cannot be read or is not a well-formed grid."""


def count_values(line: str) -> int:
    """Return how many integers a map line holds.

    Values are separated by spaces or newlines and may carry one leading
    sign. Any other character, or a sign not followed by a digit, raises
    MapError.
    """
    count = 0
    pos = 0
    length = len(line)
    while pos < length:
        while pos < length and line[pos] in _SEPARATORS:
            pos += 1
        if pos < length and line[pos] in _SIGNS:
            pos += 1
        if pos < length and line[pos] in _DIGITS:
            while pos < length and line[pos] in _DIGITS:
                pos += 1
            count += 1
        if pos < length and (line[pos] not in _SEPARATORS or line[pos - 1] in _SIGNS):
            raise MapError(f"invalid character at column {pos} in map line {line!r}")
    return count


def _atoi(token: str) -> int:
    match = _ATOI.match(token)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def _row_values(line: str, columns: int) -> list[int]:
    tokens = [token for token in line.split(" ") if token][:columns]
    values = [_atoi(token) for token in tokens]
    return values + [0] * (columns - len(values))


def parse_lines(lines: Iterable[str]) -> list[list[int]]:
    """Turn map lines into a grid of heights, one list per line.

    The first line fixes the number of columns; it must hold at least one
    value and every other line must hold the same number.
    """
    lines = list(lines)
    if not lines:
        raise MapError("the map is empty")
    columns = count_values(lines[0])
    if columns <= 0:
        raise MapError("the first map line holds no values")
    grid: list[list[int]] = []
    for number, line in enumerate(lines, start=1):
        found = count_values(line)
        if found != columns:
            raise MapError(
                f"line {number} holds {found} values, expected {columns}"
            )
        grid.append(_row_values(line, columns))
    return grid


def load_map(path: str | PathLike[str]) -> list[list[int]]:
    """Read a map file into a grid of heights."""
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            lines = list(handle)
    except OSError as error:
        raise MapError(f"cannot read map {path!s}: {error}") from error
    return parse_lines(lines)