"""An in-memory windowing display: windows, drawing, event hooks and the event loop."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

from fdfview.image import Image, color_value, mask_shifts

KEY_PRESS_MASK = 1 << 0
KEY_RELEASE_MASK = 1 << 1
BUTTON_PRESS_MASK = 1 << 2
BUTTON_RELEASE_MASK = 1 << 3
ENTER_WINDOW_MASK = 1 << 4
LEAVE_WINDOW_MASK = 1 << 5
POINTER_MOTION_MASK = 1 << 6
EXPOSURE_MASK = 1 << 15
STRUCTURE_NOTIFY_MASK = 1 << 17


class EventType(IntEnum):
    """Event numbers as used by the X protocol."""

    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    ENTER_NOTIFY = 7
    LEAVE_NOTIFY = 8
    FOCUS_IN = 9
    FOCUS_OUT = 10
    KEYMAP_NOTIFY = 11
    EXPOSE = 12
    GRAPHICS_EXPOSE = 13
    NO_EXPOSE = 14
    VISIBILITY_NOTIFY = 15
    CREATE_NOTIFY = 16
    DESTROY_NOTIFY = 17
    UNMAP_NOTIFY = 18
    MAP_NOTIFY = 19
    MAP_REQUEST = 20
    REPARENT_NOTIFY = 21
    CONFIGURE_NOTIFY = 22
    CONFIGURE_REQUEST = 23
    GRAVITY_NOTIFY = 24
    RESIZE_REQUEST = 25
    CIRCULATE_NOTIFY = 26
    CIRCULATE_REQUEST = 27
    PROPERTY_NOTIFY = 28
    SELECTION_CLEAR = 29
    SELECTION_REQUEST = 30
    SELECTION_NOTIFY = 31
    COLORMAP_NOTIFY = 32
    CLIENT_MESSAGE = 33
    MAPPING_NOTIFY = 34
    GENERIC_EVENT = 35


MAX_EVENT = 36
"""One past the highest event number a hook can be attached to."""

_DEFAULT_DEPTH = 24
_DEFAULT_MASKS = (0xFF0000, 0x00FF00, 0x0000FF)


@dataclass(frozen=True)
class Event:
    """An event addressed to a window.

    ``key`` is the key symbol for key events, ``button``, ``x`` and ``y`` the
    pointer data, ``count`` the number of expose events still to follow, and
    ``delete_request`` marks a client message asking to close the window.
    """

    type: int
    window: Optional["Window"] = None
    key: int = 0
    button: int = 0
    x: int = 0
    y: int = 0
    count: int = 0
    delete_request: bool = False


@dataclass
class _Hook:
    mask: int
    func: Optional[Callable[..., object]]


class Window:
    """A fixed-size window with a pixel buffer and per-event hooks."""

    def __init__(self, width: int, height: int, title: str) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"window size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.title = title
        self.depth = _DEFAULT_DEPTH
        self.shifts = mask_shifts(*_DEFAULT_MASKS)
        self._pixels = [0] * (width * height)
        self._texts: list[tuple[int, int, int, str]] = []
        self._hooks: dict[int, _Hook] = {}
        self._pointer = (0, 0)

    @property
    def _pixel_mask(self) -> int:
        return (1 << min(self.depth, 32)) - 1

    @property
    def texts(self) -> tuple[tuple[int, int, int, str], ...]:
        """Strings drawn since the last clear, as (x, y, colour, text)."""
        return tuple(self._texts)

    def hook(self, event_type: int, mask: int, func: Optional[Callable[..., object]]) -> None:
        """Attach func to an event type, selecting the given event mask."""
        if not 0 <= event_type < MAX_EVENT:
            raise ValueError(f"event type out of range: {event_type}")
        self._hooks[int(event_type)] = _Hook(mask, func)

    def key_hook(self, func: Optional[Callable[[int], object]]) -> None:
        """Call func(key) when a key is released."""
        self.hook(EventType.KEY_RELEASE, KEY_RELEASE_MASK, func)

    def mouse_hook(self, func: Optional[Callable[[int, int, int], object]]) -> None:
        """Call func(button, x, y) when a mouse button is pressed."""
        self.hook(EventType.BUTTON_PRESS, BUTTON_PRESS_MASK, func)

    def expose_hook(self, func: Optional[Callable[[], object]]) -> None:
        """Call func() when the window needs to be redrawn."""
        self.hook(EventType.EXPOSE, EXPOSURE_MASK, func)

    def event_mask(self) -> int:
        """Return the union of the masks of all attached hooks."""
        mask = 0
        for hook in self._hooks.values():
            mask |= hook.mask
        return mask

    def _func(self, event_type: int) -> Optional[Callable[..., object]]:
        hook = self._hooks.get(event_type)
        return hook.func if hook else None

    def dispatch(self, event: Event) -> bool:
        """Run the hooks matching event; return True if any hook was called."""
        called = False
        if event.type in (
            EventType.MOTION_NOTIFY,
            EventType.BUTTON_PRESS,
            EventType.BUTTON_RELEASE,
        ):
            self._pointer = (event.x, event.y)
        if event.type == EventType.CLIENT_MESSAGE and event.delete_request:
            on_destroy = self._func(EventType.DESTROY_NOTIFY)
            if on_destroy is not None:
                on_destroy()
                called = True
        if 0 <= event.type < MAX_EVENT:
            func = self._func(event.type)
            if func is not None:
                called = self._call(func, event) or called
        return called

    @staticmethod
    def _call(func: Callable[..., object], event: Event) -> bool:
        kind = event.type
        if kind < EventType.KEY_PRESS:
            return False
        if kind in (EventType.KEY_PRESS, EventType.KEY_RELEASE):
            func(event.key)
        elif kind in (EventType.BUTTON_PRESS, EventType.BUTTON_RELEASE):
            func(event.button, event.x, event.y)
        elif kind == EventType.MOTION_NOTIFY:
            func(event.x, event.y)
        elif kind == EventType.EXPOSE:
            if event.count:
                return False
            func()
        else:
            func()
        return True

    def clear(self) -> None:
        """Fill the window with the background colour and forget drawn text."""
        self._pixels = [0] * (self.width * self.height)
        self._texts.clear()

    def pixel_put(self, x: int, y: int, color: int) -> None:
        """Draw one pixel; points outside the window are clipped."""
        if 0 <= x < self.width and 0 <= y < self.height:
            value = color_value(color, self.depth, self.shifts)
            self._pixels[y * self.width + x] = value & self._pixel_mask

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel value at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} window")
        return self._pixels[y * self.width + x]

    def string_put(self, x: int, y: int, color: int, text: str) -> None:
        """Draw text with its baseline starting at (x, y)."""
        value = color_value(color, self.depth, self.shifts) & self._pixel_mask
        self._texts.append((x, y, value, text))

    def put_image(self, image: Image, x: int, y: int) -> None:
        """Copy an image into the window with its top-left corner at (x, y)."""
        mask = self._pixel_mask
        columns = range(max(0, -x), min(image.width, self.width - x))
        for iy in range(max(0, -y), min(image.height, self.height - y)):
            row = (y + iy) * self.width + x
            for ix in columns:
                self._pixels[row + ix] = image.get_pixel(ix, iy) & mask

    def mouse_move(self, x: int, y: int) -> None:
        """Move the pointer to (x, y) relative to the window."""
        self._pointer = (x, y)

    def mouse_pos(self) -> tuple[int, int]:
        """Return the pointer position relative to the window."""
        return self._pointer

    def __repr__(self) -> str:
        return f"Window(width={self.width}, height={self.height}, title={self.title!r})"


class Display:
    """A screen holding windows, an event queue and an optional loop hook."""

    def __init__(self, screen_width: int, screen_height: int) -> None:
        if screen_width <= 0 or screen_height <= 0:
            raise ValueError(
                f"screen size must be positive, got {screen_width}x{screen_height}"
            )
        self._size = (screen_width, screen_height)
        self.depth = _DEFAULT_DEPTH
        self.shifts = mask_shifts(*_DEFAULT_MASKS)
        self._windows: list[Window] = []
        self._queue: deque[Event] = deque()
        self._loop_func: Optional[Callable[[], object]] = None
        self._end_loop = False

    @property
    def windows(self) -> tuple[Window, ...]:
        """Open windows, the most recently created first."""
        return tuple(self._windows)

    def new_window(self, width: int, height: int, title: str) -> Window:
        """Open a window; its first expose event is queued."""
        window = Window(width, height, title)
        window.depth = self.depth
        window.shifts = self.shifts
        self._windows.insert(0, window)
        self.post(Event(EventType.EXPOSE, window))
        return window

    def destroy_window(self, window: Window) -> None:
        """Close a window; events still queued for it are dropped."""
        for index, open_window in enumerate(self._windows):
            if open_window is window:
                del self._windows[index]
                return
        raise ValueError(f"{window!r} is not open on this display")

    def loop_hook(self, func: Optional[Callable[[], object]]) -> None:
        """Call func() each time the pending events have been handled."""
        self._loop_func = func

    def post(self, event: Event) -> None:
        """Queue an event for the loop."""
        self._queue.append(event)

    def loop(self) -> None:
        """Dispatch events until no window is left or loop_end is called.

        Without a loop hook the loop also stops once the queue is empty,
        since nothing else can add events to it.
        """
        while self._windows and not self._end_loop:
            while not self._end_loop and (self._loop_func is None or self._queue):
                if not self._queue:
                    return
                event = self._queue.popleft()
                target = event.window
                if target is not None and any(w is target for w in self._windows):
                    target.dispatch(event)
            if self._loop_func is not None and not self._end_loop:
                self._loop_func()

    def loop_end(self) -> None:
        """Make the loop stop after the current step."""
        self._end_loop = True

    def screen_size(self) -> tuple[int, int]:
        """Return the screen size as (width, height)."""
        return self._size