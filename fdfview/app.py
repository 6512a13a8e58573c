"""The map viewer: command-line entry point and key handling."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

import pygame

from fdfview.display import Display, Event, EventType, Window
from fdfview.mapfile import MapError, load_map
from fdfview.render import draw
from fdfview.view import SCREEN_HEIGHT, SCREEN_WIDTH, Key, View

TITLE = "FDF"
INSTRUCTIONS = (
    "Use the arrow keys to move, + and - to zoom, the + and - keys"
    " on the numpad to change the relief, the 8, 2, 6, and 4"
    " keys on the numpad to rotate, / and * to change the view."
)

_TRANSLATE_KEYS = frozenset({Key.UP, Key.DOWN, Key.LEFT, Key.RIGHT})
_ZOOM_KEYS = frozenset({Key.ZOOM_IN, Key.ZOOM_OUT})
_RELIEF_KEYS = frozenset({Key.RELIEF_UP, Key.RELIEF_DOWN})
_ROTATE_KEYS = frozenset({Key.KP_2, Key.KP_4, Key.KP_6, Key.KP_8})
_VIEW_KEYS = frozenset({Key.TOP_VIEW, Key.ISO_VIEW})


class UsageError(Exception):
    """Raised when the command line does not name one .fdf file."""


def check_arguments(argv: Sequence[str]) -> str:
    """Return the map path from the arguments, which must be one .fdf file."""
    if len(argv) != 1:
        raise UsageError("Argument error")
    path = argv[0]
    if not path.endswith(".fdf"):
        raise UsageError("Format error")
    return path


class Viewer:
    """Shows a height grid in a window and reacts to the viewer's keys."""

    def __init__(self, grid: Sequence[Sequence[int]], display: Display) -> None:
        if not grid or not grid[0]:
            raise ValueError("the grid holds no points")
        self.grid = grid
        self.display = display
        self.rows = len(grid)
        self.columns = len(grid[0])
        self.closed = False
        self.redraws = 0
        self.window: Window = display.new_window(SCREEN_WIDTH, SCREEN_HEIGHT, TITLE)
        self.window.key_hook(self.handle_key)
        self.window.hook(EventType.DESTROY_NOTIFY, 0, self.close)
        self.view = View.from_map(self.columns, self.rows)
        self.redraw()

    def redraw(self) -> None:
        """Clear the window and draw the map with the current view."""
        self.window.clear()
        draw(self.view, self.grid, self.window.pixel_put)
        self.redraws += 1

    def handle_key(self, keycode: int) -> None:
        """Apply a key to the view and redraw; Escape closes the viewer."""
        if keycode == Key.ESCAPE:
            self.close()
            return
        if keycode in _TRANSLATE_KEYS:
            self.view.translate(keycode)
        elif keycode in _ZOOM_KEYS:
            self.view.zoom(keycode)
        elif keycode in _RELIEF_KEYS:
            self.view.relief(keycode)
        elif keycode in _ROTATE_KEYS:
            self.view.rotate(keycode)
        elif keycode in _VIEW_KEYS:
            self.view.change_view(keycode, self.columns, self.rows)
        else:
            return
        self.redraw()

    def close(self) -> None:
        """Close the window and stop the event loop."""
        print("window closing")
        if not self.closed:
            self.closed = True
            if any(window is self.window for window in self.display.windows):
                self.display.destroy_window(self.window)
        self.display.loop_end()


def _pygame_keymap() -> dict[int, int]:
    return {
        pygame.K_ESCAPE: Key.ESCAPE,
        pygame.K_UP: Key.UP,
        pygame.K_DOWN: Key.DOWN,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_EQUALS: Key.ZOOM_IN,
        pygame.K_MINUS: Key.ZOOM_OUT,
        pygame.K_KP_PLUS: Key.RELIEF_UP,
        pygame.K_KP_MINUS: Key.RELIEF_DOWN,
        pygame.K_KP4: Key.KP_4,
        pygame.K_KP8: Key.KP_8,
        pygame.K_KP6: Key.KP_6,
        pygame.K_KP2: Key.KP_2,
        pygame.K_KP_MULTIPLY: Key.TOP_VIEW,
        pygame.K_KP_DIVIDE: Key.ISO_VIEW,
    }


def _present(screen: "pygame.Surface", viewer: Viewer) -> None:
    def put(x: int, y: int, color: int) -> None:
        screen.set_at((x, y), ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF))

    screen.fill((0, 0, 0))
    screen.lock()
    try:
        draw(viewer.view, viewer.grid, put)
    finally:
        screen.unlock()
    pygame.display.flip()


def _run(grid: Sequence[Sequence[int]]) -> int:
    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        except pygame.error:
            print("Window error")
            return 1
        pygame.display.set_caption(TITLE)
        display = Display(SCREEN_WIDTH, SCREEN_HEIGHT)
        viewer = Viewer(grid, display)
        print(INSTRUCTIONS)
        keymap = _pygame_keymap()
        clock = pygame.time.Clock()
        shown = -1

        def step() -> None:
            nonlocal shown
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    display.post(
                        Event(EventType.CLIENT_MESSAGE, viewer.window, delete_request=True)
                    )
                elif event.type == pygame.KEYUP and event.key in keymap:
                    display.post(
                        Event(EventType.KEY_RELEASE, viewer.window, key=keymap[event.key])
                    )
            if not viewer.closed and viewer.redraws != shown:
                _present(screen, viewer)
                shown = viewer.redraws
            clock.tick(60)

        display.loop_hook(step)
        display.loop()
        return 0
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the viewer on the map file named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        path = check_arguments(args)
    except UsageError as error:
        print(error)
        return 0
    try:
        grid = load_map(path)
    except MapError:
        print("Map error")
        return 1
    return _run(grid)


if __name__ == "__main__":
    sys.exit(main())