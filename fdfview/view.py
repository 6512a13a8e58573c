"""Viewing parameters of a wire-frame map and the keys that change them."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import IntEnum

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080
ISO_ANGLE = 26.57
TOP_VIEW_INC_Y = 500

_COS_20 = 0.9397
_STEP = 30
_ZOOM_STEP = 2
_ROTATE_STEP = 5


class Key(IntEnum):
    """Key symbols the viewer reacts to."""

    ESCAPE = 65307
    LEFT = 65361
    UP = 65362
    RIGHT = 65363
    DOWN = 65364
    ZOOM_IN = 61
    ZOOM_OUT = 45
    RELIEF_UP = 65451
    RELIEF_DOWN = 65453
    KP_4 = 65430
    KP_8 = 65431
    KP_6 = 65432
    KP_2 = 65433
    TOP_VIEW = 65450
    ISO_VIEW = 65455


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def initial_scale(columns: int, rows: int) -> int:
    """Return the largest scale that keeps the map inside the screen, at least 1."""
    if columns <= 0 or rows <= 0:
        raise ValueError(f"map size must be positive, got {columns}x{rows}")
    scale = 1
    while (scale + 1) * columns < SCREEN_WIDTH and (scale + 1) * rows < SCREEN_HEIGHT // 2:
        scale += 1
    return scale


def _centre_x(columns: int, rows: int, scale: int) -> int:
    width = (columns * scale - rows * scale) * _COS_20 - (20 - rows * scale) * _COS_20
    return int((SCREEN_WIDTH - width) / 2)


def _centre_y(columns: int, rows: int, scale: int) -> int:
    divisor = 3 if rows > columns else 2
    return _trunc_div(SCREEN_HEIGHT - rows * scale, divisor)


@dataclass
class View:
    """Offsets, scales and angles (degrees) used to project the map."""

    inc_x: int
    inc_y: int
    scale: int
    scale_z: float
    angle_x: float
    angle_y: float

    @classmethod
    def from_map(cls, columns: int, rows: int) -> "View":
        """Return the isometric view that centres a map of the given size."""
        scale = initial_scale(columns, rows)
        return cls(
            inc_x=_centre_x(columns, rows, scale),
            inc_y=_centre_y(columns, rows, scale),
            scale=scale,
            scale_z=float(scale),
            angle_x=ISO_ANGLE,
            angle_y=ISO_ANGLE,
        )

    def _assign(self, other: "View") -> None:
        for field in fields(self):
            setattr(self, field.name, getattr(other, field.name))

    def translate(self, keycode: int) -> None:
        """Move the map with the arrow keys."""
        if keycode == Key.UP:
            self.inc_y += _STEP
        elif keycode == Key.DOWN:
            self.inc_y -= _STEP
        elif keycode == Key.LEFT:
            self.inc_x += _STEP
        elif keycode == Key.RIGHT:
            self.inc_x -= _STEP

    def zoom(self, keycode: int) -> None:
        """Zoom in or out; the scale never drops below 3."""
        if keycode == Key.ZOOM_IN:
            self.scale += _ZOOM_STEP
            if self.scale_z <= self.scale:
                self.scale_z += _ZOOM_STEP
        elif keycode == Key.ZOOM_OUT and self.scale >= 5:
            self.scale -= _ZOOM_STEP
            if self.scale_z >= self.scale:
                self.scale_z -= _ZOOM_STEP

    def relief(self, keycode: int) -> None:
        """Raise or flatten the relief, in fine steps near zero."""
        step = 2.5 if self.scale_z < -0.5 or self.scale_z > 0.5 else 0.5
        if keycode == Key.RELIEF_UP:
            self.scale_z += step
        elif keycode == Key.RELIEF_DOWN:
            self.scale_z -= step

    def rotate(self, keycode: int) -> None:
        """Turn the map with the numeric keypad, within fixed limits."""
        if keycode == Key.KP_6 and self.angle_x < 150:
            self.angle_x += _ROTATE_STEP
        elif keycode == Key.KP_2:
            if self.angle_y < 70:
                self.angle_y += _ROTATE_STEP
                self.inc_y -= self.scale
        elif keycode == Key.KP_4 and self.angle_x > 30:
            self.angle_x -= _ROTATE_STEP
        elif keycode == Key.KP_8:
            if self.angle_y > -70:
                self.angle_y -= _ROTATE_STEP
                self.inc_y += self.scale

    def change_view(self, keycode: int, columns: int, rows: int) -> None:
        """Reset to the isometric view for ISO_VIEW, to the flat view otherwise."""
        if keycode == Key.ISO_VIEW:
            self._assign(View.from_map(columns, rows))
            return
        scale = initial_scale(columns, rows)
        self.scale = scale
        self.angle_x = 0.0
        self.angle_y = 0.0
        self.inc_x = _centre_x(columns, rows, scale)
        self.inc_y = TOP_VIEW_INC_Y
        self.scale_z = float(scale)