import pytest

from fdfview.app import UsageError, Viewer, check_arguments, main
from fdfview.display import Display, Event, EventType
from fdfview.render import height_color, project
from fdfview.view import Key, View


GRID = [[0, 0, 0], [0, 10, 0], [0, 0, 0]]


@pytest.fixture
def viewer():
    return Viewer(GRID, Display(1920, 1080))


def test_check_arguments_accepts_fdf():
    assert check_arguments(["maps/42.fdf"]) == "maps/42.fdf"


@pytest.mark.parametrize("argv", [[], ["a.fdf", "b.fdf"]])
def test_check_arguments_count(argv):
    with pytest.raises(UsageError, match="Argument error"):
        check_arguments(argv)


@pytest.mark.parametrize("name", ["map.txt", "map.fdfx", "mapfdf", "map.fd"])
def test_check_arguments_format(name):
    with pytest.raises(UsageError, match="Format error"):
        check_arguments([name])


def test_main_reports_argument_error(capsys):
    assert main([]) == 0
    assert "Argument error" in capsys.readouterr().out


def test_main_reports_format_error(capsys):
    assert main(["map.txt"]) == 0
    assert "Format error" in capsys.readouterr().out


def test_main_reports_missing_map(tmp_path, capsys):
    assert main([str(tmp_path / "missing.fdf")]) == 1
    assert "Map error" in capsys.readouterr().out


def test_main_reports_bad_map(tmp_path, capsys):
    path = tmp_path / "bad.fdf"
    path.write_text("1 2 3\n1 2\n")
    assert main([str(path)]) == 1
    assert "Map error" in capsys.readouterr().out


def test_viewer_opens_window(viewer):
    assert viewer.display.windows == (viewer.window,)
    assert viewer.window.title == "FDF"
    assert (viewer.window.width, viewer.window.height) == (1920, 1080)
    assert viewer.view == View.from_map(3, 3)
    assert viewer.redraws == 1


def test_viewer_draws_first_point(viewer):
    x, y = project(viewer.view, 1, 1, 0)
    assert viewer.window.get_pixel(x, y) == height_color(0)


def test_viewer_rejects_empty_grid():
    with pytest.raises(ValueError):
        Viewer([], Display(1920, 1080))


def test_handle_key_translates_and_redraws(viewer):
    before = viewer.view.inc_y
    viewer.handle_key(Key.UP)
    assert viewer.view.inc_y == before + 30
    assert viewer.redraws == 2


def test_handle_key_ignores_unknown(viewer):
    viewer.handle_key(97)
    assert viewer.redraws == 1
    assert viewer.view == View.from_map(3, 3)


def test_handle_key_change_view(viewer):
    viewer.handle_key(Key.TOP_VIEW)
    assert viewer.view.angle_x == 0.0
    assert viewer.view.inc_y == 500
    viewer.handle_key(Key.ISO_VIEW)
    assert viewer.view == View.from_map(3, 3)


def test_key_events_through_loop(viewer):
    display = viewer.display
    display.post(Event(EventType.KEY_RELEASE, viewer.window, key=Key.ZOOM_IN))
    display.loop()
    assert viewer.view.scale == View.from_map(3, 3).scale + 2


def test_escape_closes(viewer, capsys):
    display = viewer.display
    display.post(Event(EventType.KEY_RELEASE, viewer.window, key=Key.ESCAPE))
    display.loop()
    assert display.windows == ()
    assert viewer.closed
    assert "window closing" in capsys.readouterr().out


def test_delete_request_closes(viewer):
    display = viewer.display
    display.post(Event(EventType.CLIENT_MESSAGE, viewer.window, delete_request=True))
    display.loop()
    assert display.windows == ()
    assert viewer.closed