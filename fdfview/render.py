"""Projecting a height grid and drawing it as a wire frame."""

from __future__ import annotations

import math
from typing import Callable, Iterator, Sequence

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080

_PI = 3.14159

PutPixel = Callable[[int, int, int], object]


def height_color(z: int) -> int:
    """Return the 0xRRGGBB colour used for a point of height z.

    Deep points are dark red, then red, orange, light yellow around zero,
    yellow-green, green and dark green for the highest.
    """
    if z <= -25:
        return 0x8B0000
    if z <= -15:
        return 0xFF0000
    if z <= -5:
        return 0xFF8000
    if z < 5:
        return 0xFFFFE0
    if z < 15:
        return 0xADFF2F
    if z < 25:
        return 0x00FF00
    return 0x006400


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def line_points(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    """Yield the points of a line from (x0, y0) to (x1, y1), both ends included.

    A line whose ends coincide yields nothing.
    """
    step_x = _sign(x1 - x0)
    step_y = _sign(y1 - y0)
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    if dx == 0 and dy == 0:
        return
    if dx >= dy:
        error = -dx
        y = y0
        for x in range(x0, x1 + step_x, step_x):
            yield x, y
            error += 2 * dy
            if error >= 0:
                y += step_y
                error -= 2 * dx
    else:
        error = -dy
        x = x0
        for y in range(y0, y1 + step_y, step_y):
            yield x, y
            error += 2 * dx
            if error >= 0:
                x += step_x
                error -= 2 * dy


def trace_line(
    put_pixel: PutPixel, x0: int, y0: int, x1: int, y1: int, color: int
) -> tuple[int, int]:
    """Draw a line, skipping points off the screen, and return the pen position.

    For a purely horizontal or vertical line the pen rests one step past the
    end; otherwise it stays at the start point.
    """
    for x, y in line_points(x0, y0, x1, y1):
        if 0 <= x <= SCREEN_WIDTH and 0 <= y <= SCREEN_HEIGHT:
            put_pixel(x, y, color)
    if y0 == y1 and x0 != x1:
        return x1 + _sign(x1 - x0), y0
    if x0 == x1 and y0 != y1:
        return x0, y1 + _sign(y1 - y0)
    return x0, y0


def project(view, x: int, y: int, z: int) -> tuple[int, int]:
    """Project grid column x and row y (counted from 1) at height z to the screen.

    The view supplies scale, scale_z, angle_x, angle_y (degrees), inc_x and inc_y.
    """
    lift = int(z * view.scale_z)
    scale = view.scale
    screen_x = (x * scale - y * scale) * math.cos(_PI * view.angle_x / 180) + view.inc_x
    screen_y = (
        (x * scale + y * scale) * math.sin(_PI * view.angle_y / 180) - lift + view.inc_y
    )
    return int(screen_x), int(screen_y)


def draw(view, grid: Sequence[Sequence[int]], put_pixel: PutPixel) -> None:
    """Draw the grid as lines joining each point to its right and lower neighbours."""
    rows = len(grid)
    if rows == 0:
        return
    columns = len(grid[0])
    for y in range(1, rows + 1):
        row = grid[y - 1]
        for x in range(1, columns + 1):
            height = row[x - 1]
            color = height_color(height)
            pen = project(view, x, y, height)
            if x < columns:
                end = project(view, x + 1, y, row[x])
                pen = trace_line(put_pixel, *pen, *end, color)
            if y < rows:
                end = project(view, x, y + 1, grid[y][x - 1])
                trace_line(put_pixel, *pen, *end, color)