import pytest

from fdfview.display import (
    BUTTON_PRESS_MASK,
    EXPOSURE_MASK,
    KEY_RELEASE_MASK,
    POINTER_MOTION_MASK,
    Display,
    Event,
    EventType,
)
from fdfview.image import Image, mask_shifts

WIN1_SX = 242
WIN1_SY = 242
IM1_SX = 42
IM1_SY = 42


def _color_map(x, y, w, h):
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


def test_pixel_put_round_trip_color_map():
    display = Display(1920, 1080)
    win = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    for y in range(0, WIN1_SY, 17):
        for x in range(0, WIN1_SX, 13):
            win.pixel_put(x, y, _color_map(x, y, WIN1_SX, WIN1_SY))
    assert win.get_pixel(0, 0) == 0xFF0000
    assert win.get_pixel(13, 17) == _color_map(13, 17, WIN1_SX, WIN1_SY)
    assert win.get_pixel(1, 1) == 0


def test_pixel_put_outside_is_clipped():
    win = Display(100, 100).new_window(10, 10, "w")
    win.pixel_put(-1, 3, 0xFFFFFF)
    win.pixel_put(10, 3, 0xFFFFFF)
    assert all(win.get_pixel(x, 3) == 0 for x in range(10))
    with pytest.raises(IndexError):
        win.get_pixel(10, 0)


def test_clear_resets_pixels_and_text():
    win = Display(100, 100).new_window(WIN1_SX, WIN1_SY, "Title1")
    win.pixel_put(5, 5, 0x123456)
    win.string_put(5, WIN1_SY // 2, 0xFF99FF, "String output")
    assert win.texts == ((5, 121, 0xFF99FF, "String output"),)
    win.clear()
    assert win.get_pixel(5, 5) == 0
    assert win.texts == ()


def test_put_image_places_and_clips():
    win = Display(500, 500).new_window(WIN1_SX, WIN1_SY, "Title1")
    image = Image(IM1_SX, IM1_SY)
    for y in range(IM1_SY):
        for x in range(IM1_SX):
            image.put_pixel(x, y, _color_map(x, y, IM1_SX, IM1_SY))
    win.put_image(image, 20, 20)
    assert win.get_pixel(20, 20) == image.get_pixel(0, 0)
    assert win.get_pixel(61, 61) == image.get_pixel(41, 41)
    assert win.get_pixel(19, 19) == 0
    win.put_image(image, 230, 230)
    assert win.get_pixel(241, 241) == image.get_pixel(11, 11)


def test_put_image_drops_alpha_byte():
    win = Display(50, 50).new_window(4, 4, "w")
    image = Image(2, 2)
    image.put_pixel(0, 0, 0xFF000000)
    image.put_pixel(1, 0, 0x00ABCDEF)
    win.put_image(image, 0, 0)
    assert win.get_pixel(0, 0) == 0
    assert win.get_pixel(1, 0) == 0xABCDEF


def test_shallow_depth_converts_colors():
    display = Display(100, 100)
    display.depth = 16
    display.shifts = mask_shifts(0xF800, 0x07E0, 0x001F)
    win = display.new_window(4, 4, "w")
    win.pixel_put(1, 1, 0xFFFFFF)
    win.pixel_put(2, 2, 0xFF0000)
    assert win.get_pixel(1, 1) == 0xFFFF
    assert win.get_pixel(2, 2) == 0xF800


def test_event_mask_from_hooks():
    win = Display(100, 100).new_window(10, 10, "w")
    assert win.event_mask() == 0
    win.key_hook(lambda key: None)
    win.mouse_hook(lambda b, x, y: None)
    assert win.event_mask() == 6
    win.expose_hook(lambda: None)
    win.hook(EventType.MOTION_NOTIFY, POINTER_MOTION_MASK, lambda x, y: None)
    assert win.event_mask() == KEY_RELEASE_MASK | BUTTON_PRESS_MASK | EXPOSURE_MASK | 64
    assert EXPOSURE_MASK == 32768


def test_hook_rejects_bad_event_type():
    win = Display(100, 100).new_window(10, 10, "w")
    with pytest.raises(ValueError):
        win.hook(36, 0, lambda: None)
    with pytest.raises(ValueError):
        win.hook(-1, 0, lambda: None)


def test_dispatch_argument_shapes():
    win = Display(100, 100).new_window(10, 10, "w")
    calls = []
    win.hook(EventType.KEY_PRESS, 1, lambda key: calls.append(("press", key)))
    win.key_hook(lambda key: calls.append(("release", key)))
    win.mouse_hook(lambda b, x, y: calls.append(("button", b, x, y)))
    win.hook(EventType.MOTION_NOTIFY, POINTER_MOTION_MASK, lambda x, y: calls.append(("move", x, y)))
    win.hook(EventType.ENTER_NOTIFY, 16, lambda: calls.append("enter"))
    assert win.dispatch(Event(EventType.KEY_PRESS, win, key=97))
    assert win.dispatch(Event(EventType.KEY_RELEASE, win, key=0xFF1B))
    assert win.dispatch(Event(EventType.BUTTON_PRESS, win, button=1, x=3, y=4))
    assert win.dispatch(Event(EventType.MOTION_NOTIFY, win, x=7, y=8))
    assert win.dispatch(Event(EventType.ENTER_NOTIFY, win))
    assert calls == [
        ("press", 97),
        ("release", 0xFF1B),
        ("button", 1, 3, 4),
        ("move", 7, 8),
        "enter",
    ]


def test_dispatch_without_hook_or_undefined_type():
    win = Display(100, 100).new_window(10, 10, "w")
    calls = []
    win.hook(0, 0, lambda: calls.append("zero"))
    assert win.dispatch(Event(0, win)) is False
    assert win.dispatch(Event(EventType.KEY_RELEASE, win, key=1)) is False
    assert calls == []


def test_expose_only_on_last_of_series():
    win = Display(100, 100).new_window(10, 10, "w")
    calls = []
    win.expose_hook(lambda: calls.append("expose"))
    assert win.dispatch(Event(EventType.EXPOSE, win, count=2)) is False
    assert win.dispatch(Event(EventType.EXPOSE, win, count=0)) is True
    assert calls == ["expose"]


def test_delete_request_calls_destroy_hook():
    display = Display(100, 100)
    win = display.new_window(10, 10, "w")
    calls = []
    win.hook(EventType.DESTROY_NOTIFY, 0, lambda: calls.append("closed"))
    assert win.dispatch(Event(EventType.CLIENT_MESSAGE, win, delete_request=True))
    assert win.dispatch(Event(EventType.CLIENT_MESSAGE, win)) is False
    assert calls == ["closed"]


def test_mouse_position_tracking():
    win = Display(100, 100).new_window(50, 50, "w")
    win.mouse_move(10, 20)
    assert win.mouse_pos() == (10, 20)
    win.dispatch(Event(EventType.MOTION_NOTIFY, win, x=3, y=4))
    assert win.mouse_pos() == (3, 4)


def test_loop_runs_first_expose_and_escape_destroys():
    display = Display(1920, 1080)
    win3 = display.new_window(WIN1_SX, WIN1_SY, "Title3")
    calls = []

    def key_win3(key):
        calls.append(key)
        if key == 0xFF1B:
            display.destroy_window(win3)

    win3.expose_hook(lambda: calls.append("expose"))
    win3.key_hook(key_win3)
    display.post(Event(EventType.KEY_RELEASE, win3, key=65))
    display.post(Event(EventType.KEY_RELEASE, win3, key=0xFF1B))
    display.post(Event(EventType.KEY_RELEASE, win3, key=66))
    display.loop()
    assert calls == ["expose", 65, 0xFF1B]
    assert display.windows == ()


def test_windows_newest_first_and_destroy_unknown():
    display = Display(100, 100)
    first = display.new_window(10, 10, "win1")
    second = display.new_window(20, 20, "win2")
    assert display.windows == (second, first)
    display.destroy_window(first)
    assert display.windows == (second,)
    with pytest.raises(ValueError):
        display.destroy_window(first)


def test_mouse_hook_recreates_window():
    display = Display(1920, 1080)
    state = {"win1": display.new_window(300, 300, "win1")}
    win2 = display.new_window(600, 600, "win2")
    events = []

    def gere_mouse(button, x, y):
        events.append((button, x, y))
        display.destroy_window(state["win1"])
        state["win1"] = display.new_window(123, 45, "new win")
        state["win1"].mouse_hook(gere_mouse)

    state["win1"].mouse_hook(gere_mouse)
    win2.mouse_hook(gere_mouse)
    old = state["win1"]
    display.post(Event(EventType.BUTTON_PRESS, old, button=1, x=5, y=6))
    display.loop()
    assert events == [(1, 5, 6)]
    assert old not in display.windows
    assert len(display.windows) == 2
    assert display.windows[0].title == "new win"
    assert display.windows[0].event_mask() == BUTTON_PRESS_MASK


def test_loop_hook_and_loop_end():
    display = Display(100, 100)
    win = display.new_window(10, 10, "w")
    ticks = []

    def tick():
        ticks.append(len(ticks))
        if len(ticks) == 3:
            display.loop_end()

    display.loop_hook(tick)
    display.loop()
    assert ticks == [0, 1, 2]
    # The loop stopped on request, not because its window went away.
    assert display.windows == (win,)
    display.loop()
    assert ticks == [0, 1, 2]
    assert display.windows == (win,)


def test_loop_hook_runs_after_pending_events():
    display = Display(100, 100)
    win = display.new_window(10, 10, "w")
    order = []
    win.key_hook(lambda key: order.append(key))

    def tick():
        order.append("tick")
        display.loop_end()

    display.loop_hook(tick)
    display.post(Event(EventType.KEY_RELEASE, win, key=1))
    display.post(Event(EventType.KEY_RELEASE, win, key=2))
    display.loop()
    assert order == [1, 2, "tick"]


def test_loop_without_windows_returns_immediately():
    display = Display(100, 100)
    ticks = []
    display.loop_hook(lambda: ticks.append(1))
    display.loop()
    assert ticks == []


def test_screen_size_and_bad_sizes():
    assert Display(1920, 1080).screen_size() == (1920, 1080)
    with pytest.raises(ValueError):
        Display(0, 10)
    with pytest.raises(ValueError):
        Display(10, 10).new_window(0, 5, "w")